"""Chinese lunar calendar conversion, backed by lunar_python.

The library is treated as a correct oracle. This module only shapes its
results into Deskday types and turns its failures into one exception type
that callers are expected to catch.
"""

from __future__ import annotations

from datetime import date

from lunar_python import Lunar, Solar

from deskday.models import LunarDate


class LunarConversionError(ValueError):
    """Raised for out-of-range or non-existent lunar dates."""


def from_solar(d: date) -> LunarDate:
    """Convert a Gregorian date to its lunar date and display labels."""
    try:
        lunar = Solar.fromYmd(d.year, d.month, d.day).getLunar()
        return LunarDate(
            year=lunar.getYear(),
            month=lunar.getMonth(),
            day=lunar.getDay(),
            month_label=lunar.getMonthInChinese(),
            day_label=lunar.getDayInChinese(),
            gan_zhi_year=lunar.getYearInGanZhi(),
        )
    except Exception as e:
        raise LunarConversionError(f"Cannot convert {d.isoformat()} to lunar: {e}") from e


def from_lunar(year: int, month: int, day: int) -> date:
    """Convert lunar (year, month, day) to a Gregorian date.

    A negative month selects the leap month. The result must round-trip to
    the requested month/day, so short months never silently spill into the
    next month.
    """
    try:
        solar = Lunar.fromYmd(year, month, day).getSolar()
        result = date(solar.getYear(), solar.getMonth(), solar.getDay())
        back = solar.getLunar()
    except Exception as e:
        raise LunarConversionError(f"Invalid lunar date {year}-{month}-{day}: {e}") from e
    if back.getMonth() != month or back.getDay() != day:
        raise LunarConversionError(f"Lunar date {year}-{month}-{day} does not exist")
    return result


def lunar_label(d: date) -> str:
    """Short label shown under the clock, e.g. 三月初五."""
    ld = from_solar(d)
    return f"{ld.month_label}月{ld.day_label}"


def calendar_label(d: date) -> str:
    """Label for a calendar day detail, e.g. 甲辰年 三月初五."""
    ld = from_solar(d)
    return f"{ld.gan_zhi_year}年 {ld.month_label}月{ld.day_label}"
