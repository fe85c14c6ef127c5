"""Workspace root, settings, timezone, path helpers for Deskday."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from deskday.fileio import read_yaml, write_yaml_atomic
from deskday.models import DEFAULT_TIMEZONE, Settings


def workspace_root() -> Path:
    """Get the workspace root directory (holds settings.yaml and store.json)."""
    return Path(
        os.environ.get("DESKDAY_ROOT", str(Path.home() / "deskday"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.yaml"


def store_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "store.json"


def hooks_config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "hooks.yaml"


# ── Settings ──────────────────────────────────────────────────

def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml, defaulting every missing key."""
    try:
        return Settings.from_dict(read_yaml(settings_path(root)))
    except (OSError, ValueError, TypeError):
        return Settings()


def save_settings(settings: Settings, root: Path | None = None) -> None:
    write_yaml_atomic(settings_path(root), settings.to_dict())


def get_timezone(root: Path | None = None) -> ZoneInfo:
    """The single fixed zone every "days until" is normalized to."""
    name = load_settings(root).timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


def now_local(root: Path | None = None) -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone(root))


def today_local(root: Path | None = None) -> date:
    return now_local(root).date()
