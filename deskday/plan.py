"""Today-plan task list and the free-text note widget."""

from __future__ import annotations

import logging
import time

from deskday.models import PlanItem
from deskday.store import NOTE_KEY, PLAN_ITEMS_KEY, MemoryStore, load_json_list, save_json

logger = logging.getLogger(__name__)


# ── Plan items ────────────────────────────────────────────────


def load_plan_items(store: MemoryStore) -> list[PlanItem]:
    items = []
    for raw in load_json_list(store, PLAN_ITEMS_KEY):
        if not isinstance(raw, dict) or not raw.get("id") or not isinstance(raw.get("text"), str):
            logger.debug("Dropping malformed plan item: %r", raw)
            continue
        items.append(PlanItem.from_dict(raw))
    return items


def save_plan_items(store: MemoryStore, items: list[PlanItem]) -> None:
    save_json(store, PLAN_ITEMS_KEY, [i.to_dict() for i in items])


def find_item(items: list[PlanItem], item_id: str) -> PlanItem | None:
    for item in items:
        if item.id == item_id:
            return item
    return None


def _new_id(items: list[PlanItem]) -> str:
    stamp = time.time_ns() // 1_000_000
    while find_item(items, str(stamp)):
        stamp += 1
    return str(stamp)


def add_item(store: MemoryStore, items: list[PlanItem], text: str) -> PlanItem | None:
    """Append a new item; blank text is ignored."""
    text = (text or "").strip()
    if not text:
        return None
    item = PlanItem(id=_new_id(items), text=text)
    items.append(item)
    save_plan_items(store, items)
    return item


def toggle_completed(store: MemoryStore, items: list[PlanItem], item_id: str) -> PlanItem | None:
    item = find_item(items, item_id)
    if item is None:
        return None
    item.completed = not item.completed
    save_plan_items(store, items)
    return item


def toggle_must_do(store: MemoryStore, items: list[PlanItem], item_id: str) -> PlanItem | None:
    item = find_item(items, item_id)
    if item is None:
        return None
    item.must_do = not item.must_do
    save_plan_items(store, items)
    return item


def delete_item(store: MemoryStore, items: list[PlanItem], item_id: str) -> bool:
    for i, item in enumerate(items):
        if item.id == item_id:
            items.pop(i)
            save_plan_items(store, items)
            return True
    return False


def sorted_items(items: list[PlanItem]) -> list[PlanItem]:
    """Must-do items first; insertion order otherwise."""
    return sorted(items, key=lambda i: not i.must_do)


# ── Note ──────────────────────────────────────────────────────


def load_note(store: MemoryStore) -> str:
    try:
        return store.get(NOTE_KEY) or ""
    except Exception as e:
        logger.warning("Store read failed for %s: %s", NOTE_KEY, e)
        return ""


def save_note(store: MemoryStore, text: str) -> None:
    """Store the note as plain text; an empty note removes the key."""
    try:
        if text:
            store.set(NOTE_KEY, text)
        else:
            store.remove(NOTE_KEY)
    except Exception as e:
        logger.warning("Store write failed for %s: %s", NOTE_KEY, e)
