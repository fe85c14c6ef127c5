"""Holiday rule resolution: rule + year -> concrete calendar date.

Every rule kind has one pure resolver. Resolution never raises: a rule that
does not occur in a given year resolves to INVALID_DATE, and a lunar rule
whose conversion fails resolves to FAR_FUTURE. Both are sentinels; callers
check ``is_sentinel`` before treating a result as an occurrence.
"""

from __future__ import annotations

import logging
from calendar import monthrange
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable

from deskday.lunar import LunarConversionError, from_lunar
from deskday.models import (
    CATEGORY_CUSTOM,
    KIND_EASTER,
    KIND_FIXED,
    KIND_LAST_WEEKDAY,
    KIND_LUNAR,
    KIND_NTH_WEEKDAY,
    KIND_QUADRENNIAL,
    Rule,
)

logger = logging.getLogger(__name__)

INVALID_DATE = date(1970, 1, 1)
FAR_FUTURE = date(9999, 1, 1)


def is_sentinel(d: date) -> bool:
    return d <= INVALID_DATE or d >= FAR_FUTURE


# ── Solar arithmetic ──────────────────────────────────────────


def solar_date(year: int, month: int, day: int) -> date:
    """Build a date, rolling day overflow into the next month (Feb 29 -> Mar 1)."""
    return date(year, month, 1) + timedelta(days=day - 1)


def nth_weekday(year: int, month: int, weekday: int, nth: int) -> date:
    """The nth given weekday (Monday = 0) of a month."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday() + 7) % 7
    return first + timedelta(days=offset + 7 * (nth - 1))


def last_weekday(year: int, month: int, weekday: int) -> date:
    """The last given weekday of a month, walking back from month end."""
    d = date(year, month, monthrange(year, month)[1])
    while d.weekday() != weekday:
        d -= timedelta(days=1)
    return d


def easter(year: int) -> date:
    """Easter Sunday by Gauss's congruences. Approximate in edge centuries."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return date(year, month, day)


# ── Lunar helpers ─────────────────────────────────────────────


def is_valid_lunar_date(year: int, month: int, day: int) -> bool:
    try:
        solar = from_lunar(year, month, day)
    except LunarConversionError:
        return False
    return 0 < solar.year < 9999


def next_valid_lunar_date(year: int, month: int, day: int) -> tuple[int, int, int]:
    """Probe day, day-1, day+1; fall back to the input triple.

    Lunar months are 29 or 30 days long, so a rule for day 30 has no exact
    match in short months.
    """
    for candidate in (day, day - 1, day + 1):
        if is_valid_lunar_date(year, month, candidate):
            return year, month, candidate
    return year, month, day


# ── Resolvers ─────────────────────────────────────────────────


def _resolve_fixed(rule: Rule, year: int) -> date:
    return solar_date(year, rule.month, rule.day)


def _resolve_nth_weekday(rule: Rule, year: int) -> date:
    return nth_weekday(year, rule.month, rule.weekday or 0, rule.nth or 1)


def _resolve_last_weekday(rule: Rule, year: int) -> date:
    return last_weekday(year, rule.month, rule.weekday or 0)


def _resolve_quadrennial(rule: Rule, year: int) -> date:
    if (year - 1) % 4 == 0:
        return date(year, rule.month, rule.day)
    return INVALID_DATE


def _resolve_easter(rule: Rule, year: int) -> date:
    return easter(year)


def _resolve_lunar(rule: Rule, year: int) -> date:
    month, day = rule.month, rule.day
    if rule.category == CATEGORY_CUSTOM:
        _, month, day = next_valid_lunar_date(year, month, day)
    try:
        return from_lunar(year, month, day)
    except LunarConversionError as e:
        logger.debug("Lunar rule %r unresolved for %d: %s", rule.name, year, e)
        return FAR_FUTURE


RESOLVERS: dict[str, Callable[[Rule, int], date]] = {
    KIND_FIXED: _resolve_fixed,
    KIND_NTH_WEEKDAY: _resolve_nth_weekday,
    KIND_LAST_WEEKDAY: _resolve_last_weekday,
    KIND_QUADRENNIAL: _resolve_quadrennial,
    KIND_EASTER: _resolve_easter,
    KIND_LUNAR: _resolve_lunar,
}


def resolve(rule: Rule, year: int) -> date:
    """Resolve *rule* to its concrete date in *year*."""
    resolver = RESOLVERS.get(rule.kind)
    if resolver is None:
        logger.debug("Unknown rule kind %r for %r", rule.kind, rule.name)
        return INVALID_DATE
    try:
        return resolver(rule, year)
    except (ValueError, OverflowError):
        return INVALID_DATE


# ── Timezone normalization ────────────────────────────────────


def local_day(instant: datetime, tz: tzinfo) -> date:
    """Calendar day of *instant* in *tz*; naive instants are taken as local to *tz*."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=tz)
    return instant.astimezone(tz).date()


def days_until(target: date, from_instant: datetime, tz: tzinfo) -> int:
    """Whole days from the local day of *from_instant* to *target*."""
    return (target - local_day(from_instant, tz)).days
