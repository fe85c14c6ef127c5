"""Built-in holiday sets and the user-editable holiday catalog."""

from __future__ import annotations

import logging
from typing import Any

from deskday.models import (
    CATEGORY_CHINESE,
    CATEGORY_US,
    KIND_EASTER,
    KIND_FIXED,
    KIND_LAST_WEEKDAY,
    KIND_LUNAR,
    KIND_NTH_WEEKDAY,
    KIND_QUADRENNIAL,
    Rule,
)
from deskday.store import (
    CUSTOM_HOLIDAYS_KEY,
    DISABLED_HOLIDAYS_KEY,
    MemoryStore,
    load_json_list,
    save_json,
)

logger = logging.getLogger(__name__)

MON, THU = 0, 3


# ── Built-in sets ─────────────────────────────────────────────


def _us(name: str, month: int, day: int, kind: str = KIND_FIXED, **kw: Any) -> Rule:
    return Rule(name=name, month=month, day=day, is_fixed=kind == KIND_FIXED,
                category=CATEGORY_US, kind=kind, **kw)


def _cn(name: str, month: int, day: int, lunar: bool = False) -> Rule:
    return Rule(name=name, month=month, day=day, is_fixed=True, is_lunar=lunar,
                category=CATEGORY_CHINESE, kind=KIND_LUNAR if lunar else KIND_FIXED)


US_HOLIDAYS: tuple[Rule, ...] = (
    _us("New Year's Day", 1, 1),
    _us("Martin Luther King Jr. Day", 1, 15, KIND_NTH_WEEKDAY, weekday=MON, nth=3),
    _us("Inauguration Day", 1, 20, KIND_QUADRENNIAL),
    _us("Presidents' Day", 2, 15, KIND_NTH_WEEKDAY, weekday=MON, nth=3),
    _us("Easter Sunday", 3, 31, KIND_EASTER),
    _us("Memorial Day", 5, 31, KIND_LAST_WEEKDAY, weekday=MON),
    _us("Juneteenth", 6, 19),
    _us("Independence Day", 7, 4),
    _us("Labor Day", 9, 1, KIND_NTH_WEEKDAY, weekday=MON, nth=1),
    _us("Columbus Day", 10, 8, KIND_NTH_WEEKDAY, weekday=MON, nth=2),
    _us("Veterans Day", 11, 11),
    _us("Thanksgiving Day", 11, 24, KIND_NTH_WEEKDAY, weekday=THU, nth=4),
    _us("Christmas Day", 12, 25),
    _us("Halloween", 10, 31),
)

CHINESE_HOLIDAYS: tuple[Rule, ...] = (
    _cn("春节", 1, 1, lunar=True),
    _cn("清明节", 4, 5),
    _cn("国际劳动妇女节", 3, 8),
    _cn("植树节", 3, 12),
    _cn("国际劳动节", 5, 1),
    _cn("中国青年节", 5, 4),
    _cn("端午节", 5, 5, lunar=True),
    _cn("儿童节", 6, 1),
    _cn("教师节", 9, 10),
    _cn("中秋节", 8, 15, lunar=True),
    _cn("国庆节", 10, 1),
)

BUILTIN_HOLIDAYS: tuple[Rule, ...] = US_HOLIDAYS + CHINESE_HOLIDAYS
BUILTIN_NAMES = frozenset(r.name for r in BUILTIN_HOLIDAYS)

_DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


# ── Validation ────────────────────────────────────────────────


def validate_rule(data: dict[str, Any]) -> list[str]:
    """Validate custom holiday input and return list of errors (empty if valid)."""
    errors = []
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Missing required field: name")

    month = data.get("month")
    day = data.get("day")
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        errors.append("month must be integer 1-12")
        month = None
    if not isinstance(day, int) or isinstance(day, bool):
        errors.append("day must be an integer")
    elif data.get("isLunar"):
        if not 1 <= day <= 30:
            errors.append("Lunar day must be between 1 and 30")
    elif month is not None and not 1 <= day <= _DAYS_IN_MONTH[month - 1]:
        errors.append(f"day must be 1-{_DAYS_IN_MONTH[month - 1]} for month {month}")

    for flag in ("isFixed", "isLunar"):
        if flag in data and not isinstance(data[flag], bool):
            errors.append(f"{flag} must be boolean")
    return errors


# ── Catalog ───────────────────────────────────────────────────


class HolidayCatalog:
    """Built-in rules plus persisted custom rules, minus disabled built-ins.

    Every mutation is written to the store immediately. Store failures are
    swallowed by the store helpers; the in-memory catalog keeps the change.
    """

    def __init__(self, store: MemoryStore | None = None) -> None:
        self.store = store if store is not None else MemoryStore()
        self.builtins: tuple[Rule, ...] = BUILTIN_HOLIDAYS
        self.custom: list[Rule] = []
        self.disabled: list[str] = []
        self.reload()

    def reload(self) -> None:
        """Rebuild custom rules and the disabled set from the store."""
        self.custom = []
        for raw in load_json_list(self.store, CUSTOM_HOLIDAYS_KEY):
            if not isinstance(raw, dict) or validate_rule(raw):
                logger.debug("Dropping malformed custom holiday: %r", raw)
                continue
            self.custom.append(Rule.from_dict(raw))
        self.disabled = [
            n for n in load_json_list(self.store, DISABLED_HOLIDAYS_KEY) if isinstance(n, str)
        ]

    def _save_custom(self) -> None:
        save_json(self.store, CUSTOM_HOLIDAYS_KEY, [r.to_dict() for r in self.custom])

    def _save_disabled(self) -> None:
        save_json(self.store, DISABLED_HOLIDAYS_KEY, self.disabled)

    # ── Queries ───────────────────────────────────────────────

    def is_enabled(self, name: str) -> bool:
        return name not in self.disabled

    def merged_rules_for_display(self) -> list[Rule]:
        """US, then Chinese, then custom; deduplicated by name, first wins.

        A custom rule named like a built-in is hidden by the built-in.
        """
        seen: set[str] = set()
        merged = []
        candidates = [r for r in self.builtins if r.name not in self.disabled] + self.custom
        for rule in candidates:
            if rule.name in seen:
                continue
            seen.add(rule.name)
            merged.append(rule)
        return merged

    def enabled_rules(self) -> list[Rule]:
        return self.merged_rules_for_display()

    def find_custom(self, name: str) -> Rule | None:
        for r in self.custom:
            if r.name == name:
                return r
        return None

    # ── Mutations ─────────────────────────────────────────────

    def add_custom(self, data: dict[str, Any]) -> tuple[Rule | None, list[str]]:
        """Validate and add a custom rule. Returns (rule, errors)."""
        errors = validate_rule(data)
        if errors:
            return None, errors
        name = data["name"].strip()
        if self.find_custom(name):
            return None, [f"Custom holiday already exists: {name}"]
        if name in BUILTIN_NAMES:
            logger.warning("Custom holiday %r is hidden by the built-in of the same name", name)

        rule = Rule.from_dict({**data, "name": name})
        self.custom.append(rule)
        self._save_custom()
        return rule, []

    def remove_custom(self, name: str) -> bool:
        for i, r in enumerate(self.custom):
            if r.name == name:
                self.custom.pop(i)
                self._save_custom()
                return True
        return False

    def edit_custom(self, name: str, updates: dict[str, Any]) -> tuple[Rule | None, list[str]]:
        """Update a custom rule's fields; the name is immutable."""
        rule = self.find_custom(name)
        if rule is None:
            return None, [f"Custom holiday not found: {name}"]
        if "name" in updates and updates["name"] != name:
            return None, ["Holiday name cannot be changed"]

        data = rule.to_dict()
        data.update({k: v for k, v in updates.items() if k != "name"})
        errors = validate_rule(data)
        if errors:
            return None, errors

        updated = Rule.from_dict(data)
        for i, r in enumerate(self.custom):
            if r.name == name:
                self.custom[i] = updated
                break
        self._save_custom()
        return updated, []

    def set_builtin_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a built-in rule. False for unknown names."""
        if name not in BUILTIN_NAMES:
            return False
        if enabled:
            self.disabled = [n for n in self.disabled if n != name]
        elif name not in self.disabled:
            self.disabled.append(name)
        self._save_disabled()
        return True
