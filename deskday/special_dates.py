"""Recurring personal dates (birthdays, anniversaries) and their reminders."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any

from deskday.models import SPECIAL_DATE_TYPES, SpecialDate, UpcomingSpecialDate
from deskday.rules import days_until, local_day, solar_date
from deskday.store import SPECIAL_DATES_KEY, MemoryStore, load_json_list, save_json

logger = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────


def validate_special_date(data: dict[str, Any]) -> list[str]:
    """Validate special date input and return list of errors (empty if valid)."""
    errors = []
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Missing required field: name")
    month = data.get("month")
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        errors.append("month must be integer 1-12")
    day = data.get("day")
    if not isinstance(day, int) or isinstance(day, bool) or not 1 <= day <= 31:
        errors.append("day must be integer 1-31")
    if data.get("type") not in SPECIAL_DATE_TYPES:
        errors.append(f"Invalid type: {data.get('type')}")
    return errors


# ── Persistence & CRUD ────────────────────────────────────────


def load_special_dates(store: MemoryStore) -> list[SpecialDate]:
    """Load stored special dates, silently dropping malformed records."""
    dates = []
    for raw in load_json_list(store, SPECIAL_DATES_KEY):
        if not isinstance(raw, dict) or validate_special_date(raw):
            logger.debug("Dropping malformed special date: %r", raw)
            continue
        dates.append(SpecialDate.from_dict(raw))
    return dates


def save_special_dates(store: MemoryStore, dates: list[SpecialDate]) -> None:
    save_json(store, SPECIAL_DATES_KEY, [d.to_dict() for d in dates])


def add_special_date(
    store: MemoryStore, dates: list[SpecialDate], data: dict[str, Any]
) -> tuple[SpecialDate | None, list[str]]:
    errors = validate_special_date(data)
    if errors:
        return None, errors
    sd = SpecialDate.from_dict({**data, "name": data["name"].strip()})
    dates.append(sd)
    save_special_dates(store, dates)
    return sd, []


def update_special_date(
    store: MemoryStore, dates: list[SpecialDate], index: int, updates: dict[str, Any]
) -> tuple[SpecialDate | None, list[str]]:
    if not 0 <= index < len(dates):
        return None, [f"Special date not found: {index}"]
    data = dates[index].to_dict()
    data.update(updates)
    errors = validate_special_date(data)
    if errors:
        return None, errors
    sd = SpecialDate.from_dict({**data, "name": data["name"].strip()})
    dates[index] = sd
    save_special_dates(store, dates)
    return sd, []


def delete_special_date(store: MemoryStore, dates: list[SpecialDate], index: int) -> bool:
    if not 0 <= index < len(dates):
        return False
    dates.pop(index)
    save_special_dates(store, dates)
    return True


# ── Lookup ────────────────────────────────────────────────────


def upcoming_within(
    dates: list[SpecialDate], from_instant: datetime, window_days: int, tz: tzinfo
) -> list[UpcomingSpecialDate]:
    """Special dates occurring within *window_days* of today, nearest first.

    This year's occurrence counts when it is today or later and inside the
    window; otherwise next year's occurrence is tried. Entries with nothing
    inside the window are left out.
    """
    year = local_day(from_instant, tz).year
    upcoming = []
    for sd in dates:
        for y in (year, year + 1):
            try:
                when = solar_date(y, sd.month, sd.day)
            except (ValueError, OverflowError):
                continue
            diff = days_until(when, from_instant, tz)
            if 0 <= diff <= window_days:
                upcoming.append(UpcomingSpecialDate(name=sd.name, type=sd.type, days_until=diff, date=when))
                break
    upcoming.sort(key=lambda u: u.days_until)
    return upcoming


def nearest_special_date(
    dates: list[SpecialDate], from_instant: datetime, window_days: int, tz: tzinfo
) -> UpcomingSpecialDate | None:
    upcoming = upcoming_within(dates, from_instant, window_days, tz)
    return upcoming[0] if upcoming else None


def special_date_message(upcoming: UpcomingSpecialDate) -> str:
    kind = "Birthday" if upcoming.type == "birthday" else "Anniversary"
    if upcoming.days_until == 0:
        return f"{upcoming.name}'s {kind} is Today! 🎉"
    unit = "day" if upcoming.days_until == 1 else "days"
    return f"{upcoming.name}'s {kind} is in {upcoming.days_until} {unit}!"
