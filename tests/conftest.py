"""Shared test fixtures for Deskday tests."""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import yaml

from deskday.holidays import HolidayCatalog
from deskday.store import MemoryStore

LA = ZoneInfo("America/Los_Angeles")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a settings file."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    settings = {
        "timezone": "America/Los_Angeles",
        "refresh_seconds": 3600,
        "special_date_window_days": 7,
        "pomodoro": {"work_minutes": 25, "break_minutes": 5},
        "water": {"random_interval": False, "custom_interval": 20},
    }
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    os.environ["DESKDAY_ROOT"] = str(root)
    yield root
    if "DESKDAY_ROOT" in os.environ:
        del os.environ["DESKDAY_ROOT"]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def catalog(store: MemoryStore) -> HolidayCatalog:
    return HolidayCatalog(store)


@pytest.fixture
def tz() -> ZoneInfo:
    return LA
