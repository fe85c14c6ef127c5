"""Tests for deskday/occurrences.py: matching, next occurrence, calendar grid."""

from datetime import date, datetime, timedelta, timezone

import pytest

from deskday.holidays import BUILTIN_HOLIDAYS
from deskday.lunar import from_lunar
from deskday.models import Occurrence, Rule
from deskday.occurrences import countdown_message, matches_on, month_calendar, next_occurrence
from deskday.rules import is_valid_lunar_date


def _names(rules):
    return [r.name for r in rules]


# ── matches_on ────────────────────────────────────────────────


def test_matches_labor_day(catalog):
    assert _names(matches_on(catalog, date(2024, 9, 2))) == ["Labor Day"]


def test_matches_lunar_new_year(catalog):
    assert "春节" in _names(matches_on(catalog, date(2024, 2, 10)))


def test_new_years_day_does_not_pull_in_off_cycle_inauguration(catalog):
    assert _names(matches_on(catalog, date(2024, 1, 1))) == ["New Year's Day"]
    assert _names(matches_on(catalog, date(2024, 12, 31))) == []


def test_inauguration_in_cycle_year(catalog):
    assert "Inauguration Day" in _names(matches_on(catalog, date(2025, 1, 20)))
    assert "Inauguration Day" not in _names(matches_on(catalog, date(2024, 1, 20)))


def test_matches_on_is_idempotent(catalog):
    day = date(2024, 10, 1)
    assert matches_on(catalog, day) == matches_on(catalog, day)


def test_matches_custom_rule(catalog):
    catalog.add_custom({"name": "Pi Day", "month": 3, "day": 14})
    assert _names(matches_on(catalog, date(2030, 3, 14))) == ["Pi Day"]


# ── next_occurrence ───────────────────────────────────────────


def test_next_occurrence_labor_day(catalog, tz):
    occ = next_occurrence(catalog, datetime(2024, 8, 30, 12, 0, tzinfo=tz), tz)
    assert occ.rule.name == "Labor Day"
    assert occ.date == date(2024, 9, 2)
    assert occ.days_until == 3


def test_next_occurrence_today_counts(catalog, tz):
    occ = next_occurrence(catalog, datetime(2024, 9, 2, 9, 0, tzinfo=tz), tz)
    assert occ.rule.name == "Labor Day"
    assert occ.days_until == 0
    assert countdown_message(occ) == "Today! 🎉"


def test_next_occurrence_uses_zone_day(catalog, tz):
    # 03:00 UTC Sep 2 is the evening of Sep 1 in Los Angeles
    occ = next_occurrence(catalog, datetime(2024, 9, 2, 3, 0, tzinfo=timezone.utc), tz)
    assert occ.rule.name == "Labor Day"
    assert occ.days_until == 1


def test_next_occurrence_rolls_into_next_year(catalog, tz):
    occ = next_occurrence(catalog, datetime(2024, 12, 26, 8, 0, tzinfo=tz), tz)
    assert occ.rule.name == "New Year's Day"
    assert occ.date == date(2025, 1, 1)
    assert occ.days_until == 6


def test_disabled_rule_excluded_until_reenabled(catalog, tz):
    now = datetime(2024, 8, 30, 12, 0, tzinfo=tz)
    catalog.set_builtin_enabled("Labor Day", False)
    occ = next_occurrence(catalog, now, tz)
    assert occ.rule.name == "教师节"
    assert occ.days_until == 11
    assert matches_on(catalog, date(2024, 9, 2)) == []

    catalog.set_builtin_enabled("Labor Day", True)
    assert next_occurrence(catalog, now, tz).rule.name == "Labor Day"
    assert _names(matches_on(catalog, date(2024, 9, 2))) == ["Labor Day"]


def test_next_occurrence_none_when_catalog_empty(catalog, tz):
    for rule in BUILTIN_HOLIDAYS:
        catalog.set_builtin_enabled(rule.name, False)
    assert next_occurrence(catalog, datetime(2024, 1, 1, tzinfo=tz), tz) is None


def test_next_occurrence_tie_keeps_catalog_order(catalog, tz):
    for rule in BUILTIN_HOLIDAYS:
        catalog.set_builtin_enabled(rule.name, False)
    catalog.add_custom({"name": "First", "month": 6, "day": 1})
    catalog.add_custom({"name": "Second", "month": 6, "day": 1})
    occ = next_occurrence(catalog, datetime(2024, 5, 1, tzinfo=tz), tz)
    assert occ.rule.name == "First"


def test_next_occurrence_counts_down_without_going_negative(catalog, tz):
    start = datetime(2024, 1, 1, 12, 0, tzinfo=tz)
    prev = None
    for offset in range(400):
        occ = next_occurrence(catalog, start + timedelta(days=offset), tz)
        assert occ is not None
        assert occ.days_until >= 0
        if prev is not None and prev > 0:
            assert occ.days_until == prev - 1
        prev = occ.days_until


def test_custom_lunar_day_30_falls_back_in_short_month(catalog, tz):
    year = next(y for y in range(2000, 2041) if not is_valid_lunar_date(y, 5, 30))
    rule, errors = catalog.add_custom({"name": "Lunar 5/30", "month": 5, "day": 30, "isLunar": True})
    assert errors == []
    assert rule.resolve(year) == from_lunar(year, 5, 29)
    # Searching across that year never raises
    next_occurrence(catalog, datetime(year, 1, 1, tzinfo=tz), tz)


# ── countdown_message ─────────────────────────────────────────


@pytest.mark.parametrize("days,expected", [
    (0, "Today! 🎉"),
    (1, "1 day until Martin"),
    (12, "12 days until Martin"),
])
def test_countdown_message(days, expected):
    rule = Rule(name="Martin Luther King Jr. Day", month=1, day=15)
    assert countdown_message(Occurrence(rule=rule, date=date(2024, 1, 15), days_until=days)) == expected


# ── month_calendar ────────────────────────────────────────────


def test_month_calendar_september_2024(catalog):
    weeks = month_calendar(catalog, 2024, 9, today=date(2024, 9, 2))
    assert len(weeks) == 5
    assert all(len(w) == 7 for w in weeks)
    # Sep 1 2024 is a Sunday
    assert weeks[0][0].date == date(2024, 9, 1)
    labor = weeks[0][1]
    assert labor.is_today is True
    assert _names(labor.holidays) == ["Labor Day"]
    assert labor.lunar_label
    assert weeks[4][0].date == date(2024, 9, 29)
    assert weeks[4][2:] == [None] * 5


def test_month_calendar_pads_leading_days(catalog):
    # Oct 1 2024 is a Tuesday
    weeks = month_calendar(catalog, 2024, 10)
    assert weeks[0][:2] == [None, None]
    assert weeks[0][2].date == date(2024, 10, 1)
    assert "国庆节" in _names(weeks[0][2].holidays)
    assert not any(d.is_today for w in weeks for d in w if d)


def test_month_calendar_exact_four_weeks(catalog):
    # Feb 2026 starts on a Sunday and has 28 days
    weeks = month_calendar(catalog, 2026, 2)
    assert len(weeks) == 4
    assert all(d is not None for w in weeks for d in w)


def test_month_calendar_last_representable_month(catalog):
    weeks = month_calendar(catalog, 9999, 12)
    days = [d for w in weeks for d in w if d]
    assert all(len(w) == 7 for w in weeks)
    assert len(days) == 31
    assert days[-1].date == date(9999, 12, 31)
    assert weeks[-1][-1] is None or weeks[-1][-1].date == date(9999, 12, 31)
