"""Clock widget face: time, date, lunar date and a weekend countdown."""

from __future__ import annotations

from datetime import datetime, tzinfo

from deskday.lunar import LunarConversionError, lunar_label
from deskday.models import ClockFace

_COUNTDOWN = {
    1: "Just one more day until the weekend! 🎯",
    2: "Two more days until the weekend! 💪",
    3: "Three days until the weekend! 🚀",
    4: "Four days until the weekend! 🌈",
}


def weekend_message(now: datetime) -> str:
    weekday = now.weekday()  # Monday = 0
    if weekday == 4:
        return "🎉 Weekend is here!"
    if weekday >= 5:
        return "Enjoy your weekend! 🌟"
    days_left = 4 - weekday
    return _COUNTDOWN.get(days_left, f"{days_left} days until the weekend! 🌟")


def clock_face(now: datetime, tz: tzinfo | None = None) -> ClockFace:
    if tz is not None:
        now = now.astimezone(tz) if now.tzinfo else now.replace(tzinfo=tz)
    try:
        lunar = f"农历 {lunar_label(now.date())}"
    except LunarConversionError:
        lunar = ""
    return ClockFace(
        time=now.strftime("%H:%M:%S"),
        date=f"{now.strftime('%A, %B')} {now.day}, {now.year}",
        lunar=lunar,
        weekend_message=weekend_message(now),
    )
