"""Occurrence search over a holiday catalog.

Two questions drive the dashboard: which holidays fall on a given calendar
day (calendar grid), and which enabled holiday comes next (countdown).
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, tzinfo

from deskday.holidays import HolidayCatalog
from deskday.lunar import LunarConversionError, calendar_label
from deskday.models import CalendarDay, Occurrence, Rule
from deskday.rules import days_until, is_sentinel, local_day, resolve


def matches_on(catalog: HolidayCatalog, day: date) -> list[Rule]:
    """Enabled rules whose occurrence in day.year has day's month and day."""
    matched = []
    for rule in catalog.enabled_rules():
        resolved = resolve(rule, day.year)
        if is_sentinel(resolved):
            continue
        if resolved.month == day.month and resolved.day == day.day:
            matched.append(rule)
    return matched


def next_occurrence(catalog: HolidayCatalog, from_instant: datetime, tz: tzinfo) -> Occurrence | None:
    """Nearest enabled holiday on or after the local day of *from_instant*.

    Each rule is resolved for this year and next year. Ties keep the rule
    seen first in catalog order.
    """
    year = local_day(from_instant, tz).year
    best: Occurrence | None = None
    for rule in catalog.enabled_rules():
        for y in (year, year + 1):
            resolved = resolve(rule, y)
            if is_sentinel(resolved):
                continue
            diff = days_until(resolved, from_instant, tz)
            if diff < 0:
                continue
            if best is None or diff < best.days_until:
                best = Occurrence(rule=rule, date=resolved, days_until=diff)
    return best


def countdown_message(occurrence: Occurrence) -> str:
    if occurrence.days_until == 0:
        return "Today! 🎉"
    unit = "day" if occurrence.days_until == 1 else "days"
    short_name = occurrence.rule.name.split(" ")[0]
    return f"{occurrence.days_until} {unit} until {short_name}"


def month_calendar(
    catalog: HolidayCatalog, year: int, month: int, today: date | None = None
) -> list[list[CalendarDay | None]]:
    """Sunday-first weeks of a month; days outside the month are None."""
    weeks = []
    for week in calendar.Calendar(firstweekday=6).monthdayscalendar(year, month):
        row: list[CalendarDay | None] = []
        for n in week:
            if n == 0:
                row.append(None)
                continue
            d = date(year, month, n)
            try:
                label = calendar_label(d)
            except LunarConversionError:
                label = ""
            row.append(CalendarDay(
                date=d,
                holidays=matches_on(catalog, d),
                lunar_label=label,
                is_today=d == today,
            ))
        weeks.append(row)
    return weeks
