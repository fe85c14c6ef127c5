"""Typed dataclasses for the Deskday data model.

Persisted models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


# ── Rule tags ─────────────────────────────────────────────────

CATEGORY_US = "us"
CATEGORY_CHINESE = "chinese"
CATEGORY_CUSTOM = "custom"

KIND_FIXED = "fixed"
KIND_NTH_WEEKDAY = "nth_weekday"
KIND_LAST_WEEKDAY = "last_weekday"
KIND_QUADRENNIAL = "quadrennial"
KIND_EASTER = "easter"
KIND_LUNAR = "lunar"

SPECIAL_DATE_TYPES = ("birthday", "anniversary")


# ── Holiday rules ─────────────────────────────────────────────


@dataclass
class Rule:
    """A holiday or custom date definition.

    ``kind`` selects the resolution strategy in ``deskday.rules``; ``weekday``
    (Monday = 0) and ``nth`` only matter for the floating kinds. For lunar
    rules ``month``/``day`` are lunar month/day.
    """

    name: str
    month: int
    day: int
    is_fixed: bool = True
    is_lunar: bool = False
    category: str = CATEGORY_CUSTOM
    kind: str = KIND_FIXED
    weekday: int | None = None
    nth: int | None = None

    def resolve(self, year: int) -> date:
        from deskday.rules import resolve

        return resolve(self, year)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Rule:
        """Rebuild a custom rule from its stored data fields."""
        is_lunar = bool(d.get("isLunar", d.get("is_lunar", False)))
        return cls(
            name=str(d.get("name", "")),
            month=int(d.get("month", 1)),
            day=int(d.get("day", 1)),
            is_fixed=bool(d.get("isFixed", d.get("is_fixed", True))),
            is_lunar=is_lunar,
            category=CATEGORY_CUSTOM,
            kind=KIND_LUNAR if is_lunar else KIND_FIXED,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "month": self.month,
            "day": self.day,
            "isFixed": self.is_fixed,
            "isLunar": self.is_lunar,
        }

    def to_public_dict(self) -> dict[str, Any]:
        d = self.to_dict()
        d["category"] = self.category
        d["kind"] = self.kind
        return d


# ── Special dates ─────────────────────────────────────────────


@dataclass
class SpecialDate:
    name: str = ""
    month: int = 1
    day: int = 1
    type: str = "birthday"  # birthday, anniversary

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SpecialDate:
        return cls(
            name=str(d.get("name", "")),
            month=int(d.get("month", 1)),
            day=int(d.get("day", 1)),
            type=str(d.get("type", "birthday")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "month": self.month, "day": self.day, "type": self.type}


@dataclass
class UpcomingSpecialDate:
    name: str
    type: str
    days_until: int
    date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "daysUntil": self.days_until,
            "date": self.date.isoformat(),
        }


# ── Today plan ────────────────────────────────────────────────


@dataclass
class PlanItem:
    id: str = ""
    text: str = ""
    completed: bool = False
    must_do: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PlanItem:
        return cls(
            id=str(d.get("id", "")),
            text=str(d.get("text", "")),
            completed=bool(d.get("completed", False)),
            must_do=bool(d.get("mustDo", d.get("must_do", False))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "mustDo": self.must_do,
        }


# ── Lunar calendar ────────────────────────────────────────────


@dataclass
class LunarDate:
    year: int
    month: int  # negative for a leap month
    day: int
    month_label: str = ""
    day_label: str = ""
    gan_zhi_year: str = ""

    @property
    def is_leap_month(self) -> bool:
        return self.month < 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "monthLabel": self.month_label,
            "dayLabel": self.day_label,
            "ganZhiYear": self.gan_zhi_year,
            "isLeapMonth": self.is_leap_month,
        }


# ── Search results ────────────────────────────────────────────


@dataclass
class Occurrence:
    rule: Rule
    date: date
    days_until: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "holiday": self.rule.to_public_dict(),
            "date": self.date.isoformat(),
            "daysUntil": self.days_until,
        }


@dataclass
class CalendarDay:
    date: date
    holidays: list[Rule] = field(default_factory=list)
    lunar_label: str = ""
    is_today: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "holidays": [r.to_public_dict() for r in self.holidays],
            "lunarLabel": self.lunar_label,
            "isToday": self.is_today,
        }


@dataclass
class ClockFace:
    time: str = ""
    date: str = ""
    lunar: str = ""
    weekend_message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "date": self.date,
            "lunar": self.lunar,
            "weekendMessage": self.weekend_message,
        }


# ── Settings ──────────────────────────────────────────────────


@dataclass
class PomodoroSettings:
    work_minutes: int = 45
    work_seconds: int = 0
    break_minutes: int = 5
    break_seconds: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PomodoroSettings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            work_minutes=int(d.get("work_minutes", 45)),
            work_seconds=int(d.get("work_seconds", 0)),
            break_minutes=int(d.get("break_minutes", 5)),
            break_seconds=int(d.get("break_seconds", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "work_minutes": self.work_minutes,
            "work_seconds": self.work_seconds,
            "break_minutes": self.break_minutes,
            "break_seconds": self.break_seconds,
        }


@dataclass
class WaterSettings:
    random_interval: bool = True
    min_minutes: int = 30
    max_minutes: int = 70
    custom_interval: int = 30
    interval_unit: str = "minutes"  # minutes, seconds

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WaterSettings:
        if not d or not isinstance(d, dict):
            return cls()
        unit = str(d.get("interval_unit", "minutes")).lower()
        return cls(
            random_interval=bool(d.get("random_interval", True)),
            min_minutes=int(d.get("min_minutes", 30)),
            max_minutes=int(d.get("max_minutes", 70)),
            custom_interval=int(d.get("custom_interval", 30)),
            interval_unit=unit if unit in {"minutes", "seconds"} else "minutes",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "random_interval": self.random_interval,
            "min_minutes": self.min_minutes,
            "max_minutes": self.max_minutes,
            "custom_interval": self.custom_interval,
            "interval_unit": self.interval_unit,
        }


DEFAULT_TIMEZONE = "America/Los_Angeles"


@dataclass
class Settings:
    timezone: str = DEFAULT_TIMEZONE
    refresh_seconds: int = 3600
    special_date_window_days: int = 7
    pomodoro: PomodoroSettings = field(default_factory=PomodoroSettings)
    water: WaterSettings = field(default_factory=WaterSettings)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            timezone=str(d.get("timezone", DEFAULT_TIMEZONE)),
            refresh_seconds=int(d.get("refresh_seconds", 3600)),
            special_date_window_days=int(d.get("special_date_window_days", 7)),
            pomodoro=PomodoroSettings.from_dict(d.get("pomodoro") or {}),
            water=WaterSettings.from_dict(d.get("water") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timezone": self.timezone,
            "refresh_seconds": self.refresh_seconds,
            "special_date_window_days": self.special_date_window_days,
            "pomodoro": self.pomodoro.to_dict(),
            "water": self.water.to_dict(),
        }
