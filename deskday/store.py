"""String key-value store backing every persisted widget.

Values are opaque JSON strings. The store is a best-effort cache, not a
source of truth: read failures yield nothing and write failures are logged
and swallowed so a broken disk never takes a widget down.
"""

from __future__ import annotations

import fcntl
import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from deskday.fileio import read_json, write_json_atomic
from deskday.workspace import store_path

logger = logging.getLogger(__name__)

CUSTOM_HOLIDAYS_KEY = "customHolidays"
DISABLED_HOLIDAYS_KEY = "disabledDefaultHolidays"
SPECIAL_DATES_KEY = "user-special-dates"
NOTE_KEY = "meals-text"
PLAN_ITEMS_KEY = "today-plan-tasks"


class MemoryStore:
    """In-process store; also the base for the file-backed one."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStore(MemoryStore):
    """All keys in one JSON document (store.json), rewritten atomically.

    Reads go back to the file and writes re-read it under a lock before
    merging their key, so the TUI and the API can share one workspace.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.path = store_path(root)
        self.lock_path = self.path.with_name(".store.lock")
        super().__init__()
        self._data = self._read()

    def _read(self) -> dict[str, str]:
        try:
            raw = read_json(self.path)
        except (OSError, ValueError) as e:
            logger.warning("Could not read store %s: %s", self.path, e)
            return dict(self._data)
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    @contextmanager
    def _locked(self) -> Iterator[None]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.lock_path, "a", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def get(self, key: str) -> str | None:
        self._data = self._read()
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            with self._locked():
                self._data = self._read()
                super().set(key, value)
                write_json_atomic(self.path, dict(self._data))
        except OSError as e:
            logger.warning("Could not write store %s: %s", self.path, e)

    def remove(self, key: str) -> None:
        try:
            with self._locked():
                self._data = self._read()
                super().remove(key)
                write_json_atomic(self.path, dict(self._data))
        except OSError as e:
            logger.warning("Could not write store %s: %s", self.path, e)


# ── JSON helpers ──────────────────────────────────────────────


def load_json(store: MemoryStore, key: str, default: Any = None) -> Any:
    """Decode a stored value, returning *default* when missing or unreadable."""
    try:
        raw = store.get(key)
    except Exception as e:
        logger.warning("Store read failed for %s: %s", key, e)
        return default
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.debug("Discarding malformed value for %s", key)
        return default


def load_json_list(store: MemoryStore, key: str) -> list[Any]:
    value = load_json(store, key, [])
    return value if isinstance(value, list) else []


def save_json(store: MemoryStore, key: str, value: Any) -> None:
    """Encode and store a value; failures are logged, never raised."""
    try:
        store.set(key, json.dumps(value, ensure_ascii=False))
    except Exception as e:
        logger.warning("Store write failed for %s: %s", key, e)
