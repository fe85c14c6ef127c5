"""Hydration reminder: glass counter plus a randomised reminder schedule."""

from __future__ import annotations

import random
from datetime import datetime, timedelta

from deskday.models import WaterSettings


class WaterReminder:
    def __init__(
        self,
        settings: WaterSettings | None = None,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or WaterSettings()
        self.rng = rng or random.Random()
        self.count = 0
        self.showing = False
        self.next_due = (now or datetime.now()) + timedelta(seconds=self.next_interval_seconds())

    def next_interval_seconds(self) -> int:
        s = self.settings
        if s.random_interval:
            lo, hi = sorted((s.min_minutes, s.max_minutes))
            return self.rng.randint(lo, hi) * 60
        unit = 60 if s.interval_unit == "minutes" else 1
        return max(1, s.custom_interval) * unit

    def increment(self) -> int:
        self.count += 1
        return self.count

    def decrement(self) -> int:
        self.count = max(0, self.count - 1)
        return self.count

    def check(self, now: datetime) -> bool:
        """True exactly once when a reminder becomes due."""
        if self.showing or now < self.next_due:
            return False
        self.showing = True
        return True

    def dismiss(self, now: datetime) -> datetime:
        self.showing = False
        self.next_due = now + timedelta(seconds=self.next_interval_seconds())
        return self.next_due

    def configure(self, settings: WaterSettings, now: datetime) -> None:
        """Swap the interval settings and reschedule from *now*."""
        self.settings = settings
        self.dismiss(now)
