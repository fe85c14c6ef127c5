"""Tests for deskday/holidays.py: built-in sets, validation, catalog CRUD."""

import json
import logging

from deskday.holidays import (
    BUILTIN_HOLIDAYS,
    CHINESE_HOLIDAYS,
    US_HOLIDAYS,
    HolidayCatalog,
    validate_rule,
)
from deskday.models import CATEGORY_CUSTOM, KIND_LUNAR, Rule
from deskday.store import CUSTOM_HOLIDAYS_KEY, DISABLED_HOLIDAYS_KEY, MemoryStore


def _names(rules):
    return [r.name for r in rules]


def test_builtin_sets():
    assert len(US_HOLIDAYS) == 14
    assert len(CHINESE_HOLIDAYS) == 11
    assert len({r.name for r in BUILTIN_HOLIDAYS}) == len(BUILTIN_HOLIDAYS)


def test_validate_rule_valid():
    assert validate_rule({"name": "Pi Day", "month": 3, "day": 14, "isFixed": True, "isLunar": False}) == []
    assert validate_rule({"name": "Leap", "month": 2, "day": 29}) == []
    assert validate_rule({"name": "Lunar end", "month": 5, "day": 30, "isLunar": True}) == []


def test_validate_rule_missing_name():
    errors = validate_rule({"name": "  ", "month": 3, "day": 14})
    assert any("name" in e for e in errors)


def test_validate_rule_bad_month():
    errors = validate_rule({"name": "X", "month": 13, "day": 1})
    assert any("month" in e for e in errors)


def test_validate_rule_day_out_of_month():
    assert validate_rule({"name": "X", "month": 2, "day": 30})
    assert validate_rule({"name": "X", "month": 4, "day": 31})
    assert validate_rule({"name": "X", "month": 5, "day": 31, "isLunar": True})


def test_validate_rule_flags_must_be_bool():
    errors = validate_rule({"name": "X", "month": 1, "day": 1, "isLunar": "yes"})
    assert any("isLunar" in e for e in errors)


def test_merged_order_us_then_chinese(catalog):
    merged = catalog.merged_rules_for_display()
    assert _names(merged) == _names(BUILTIN_HOLIDAYS)
    assert merged[0].name == "New Year's Day"
    assert merged[len(US_HOLIDAYS)].name == "春节"


def test_add_custom_persists(catalog, store):
    rule, errors = catalog.add_custom({"name": " Pi Day ", "month": 3, "day": 14, "isFixed": True, "isLunar": False})
    assert errors == []
    assert rule.name == "Pi Day"
    assert rule.category == CATEGORY_CUSTOM
    assert catalog.merged_rules_for_display()[-1].name == "Pi Day"
    stored = json.loads(store.get(CUSTOM_HOLIDAYS_KEY))
    assert stored == [{"name": "Pi Day", "month": 3, "day": 14, "isFixed": True, "isLunar": False}]


def test_add_custom_lunar(catalog):
    rule, errors = catalog.add_custom({"name": "Mom lunar", "month": 8, "day": 15, "isLunar": True})
    assert errors == []
    assert rule.kind == KIND_LUNAR


def test_add_custom_duplicate(catalog):
    catalog.add_custom({"name": "Pi Day", "month": 3, "day": 14})
    _, errors = catalog.add_custom({"name": "Pi Day", "month": 3, "day": 15})
    assert any("already exists" in e for e in errors)
    assert len(catalog.custom) == 1


def test_add_custom_invalid_not_added(catalog, store):
    rule, errors = catalog.add_custom({"name": "Bad", "month": 2, "day": 30})
    assert rule is None
    assert errors
    assert catalog.custom == []
    assert store.get(CUSTOM_HOLIDAYS_KEY) is None


def test_custom_named_like_builtin_is_hidden(catalog, caplog):
    with caplog.at_level(logging.WARNING, logger="deskday.holidays"):
        rule, errors = catalog.add_custom({"name": "Halloween", "month": 10, "day": 30})
    assert errors == []
    assert "hidden" in caplog.text
    halloween = [r for r in catalog.merged_rules_for_display() if r.name == "Halloween"]
    assert len(halloween) == 1
    assert halloween[0].category != CATEGORY_CUSTOM
    assert catalog.find_custom("Halloween") is rule


def test_remove_custom(catalog, store):
    catalog.add_custom({"name": "Pi Day", "month": 3, "day": 14})
    assert catalog.remove_custom("Pi Day") is True
    assert catalog.remove_custom("Pi Day") is False
    assert json.loads(store.get(CUSTOM_HOLIDAYS_KEY)) == []


def test_edit_custom(catalog):
    catalog.add_custom({"name": "Pi Day", "month": 3, "day": 14})
    rule, errors = catalog.edit_custom("Pi Day", {"day": 15})
    assert errors == []
    assert rule.day == 15
    assert catalog.find_custom("Pi Day").day == 15


def test_edit_custom_name_is_immutable(catalog):
    catalog.add_custom({"name": "Pi Day", "month": 3, "day": 14})
    rule, errors = catalog.edit_custom("Pi Day", {"name": "Tau Day"})
    assert rule is None
    assert errors
    assert catalog.find_custom("Pi Day") is not None


def test_edit_custom_validates(catalog):
    catalog.add_custom({"name": "Pi Day", "month": 3, "day": 14})
    _, errors = catalog.edit_custom("Pi Day", {"month": 2, "day": 31})
    assert errors
    assert catalog.find_custom("Pi Day").month == 3


def test_edit_custom_not_found(catalog):
    _, errors = catalog.edit_custom("Nope", {"day": 1})
    assert any("not found" in e for e in errors)


def test_set_builtin_enabled(catalog, store):
    assert catalog.set_builtin_enabled("Labor Day", False) is True
    assert "Labor Day" not in _names(catalog.merged_rules_for_display())
    assert json.loads(store.get(DISABLED_HOLIDAYS_KEY)) == ["Labor Day"]

    assert catalog.set_builtin_enabled("Labor Day", True) is True
    assert "Labor Day" in _names(catalog.merged_rules_for_display())
    assert json.loads(store.get(DISABLED_HOLIDAYS_KEY)) == []


def test_set_builtin_enabled_unknown(catalog):
    assert catalog.set_builtin_enabled("Festivus", False) is False
    assert catalog.disabled == []


def test_reload_drops_malformed_records():
    records = [
        {"name": "ok", "month": 1, "day": 2, "isFixed": True, "isLunar": False},
        {"name": ""},
        "garbage",
        {"name": "bad", "month": 2, "day": 30},
    ]
    store = MemoryStore({
        CUSTOM_HOLIDAYS_KEY: json.dumps(records),
        DISABLED_HOLIDAYS_KEY: json.dumps(["Halloween", 5]),
    })
    catalog = HolidayCatalog(store)
    assert _names(catalog.custom) == ["ok"]
    assert catalog.disabled == ["Halloween"]


def test_corrupt_store_value_gives_empty_catalog():
    store = MemoryStore({CUSTOM_HOLIDAYS_KEY: "{not json", DISABLED_HOLIDAYS_KEY: '"x"'})
    catalog = HolidayCatalog(store)
    assert catalog.custom == []
    assert catalog.disabled == []


def test_custom_rules_survive_reconstruction(catalog, store):
    solar, _ = catalog.add_custom({"name": "Pi Day", "month": 3, "day": 14, "isFixed": True, "isLunar": False})
    lunar, _ = catalog.add_custom({"name": "Mom lunar", "month": 8, "day": 15, "isFixed": True, "isLunar": True})

    rebuilt = HolidayCatalog(store)
    assert rebuilt.custom == [solar, lunar]
    for year in (2024, 2025, 2026):
        assert rebuilt.find_custom("Pi Day").resolve(year) == solar.resolve(year)
        assert rebuilt.find_custom("Mom lunar").resolve(year) == lunar.resolve(year)


def test_rule_from_dict_round_trip():
    data = {"name": "Mom lunar", "month": 8, "day": 15, "isFixed": True, "isLunar": True}
    assert Rule.from_dict(data).to_dict() == data
