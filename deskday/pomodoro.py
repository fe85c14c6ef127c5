"""Pomodoro timer state machine.

The timer owns no clock of its own: the front-end calls ``tick()`` once per
second while the widget is mounted. ``tick()`` returns an event name when a
phase ends so the caller can fire notification hooks.
"""

from __future__ import annotations

from datetime import date

from deskday.models import PomodoroSettings

WORK_COMPLETE = "work_complete"
BREAK_COMPLETE = "break_complete"


def format_time(seconds: int) -> str:
    """MM:SS, minutes unbounded."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class Pomodoro:
    def __init__(self, settings: PomodoroSettings | None = None, today: date | None = None) -> None:
        self.settings = settings or PomodoroSettings()
        self.is_running = False
        self.is_break = False
        self.completed_sessions = 0
        self.last_reset_date = today or date.today()
        self.time_left = self.work_total

    @property
    def work_total(self) -> int:
        return self.settings.work_minutes * 60 + self.settings.work_seconds

    @property
    def break_total(self) -> int:
        return self.settings.break_minutes * 60 + self.settings.break_seconds

    @property
    def phase(self) -> str:
        return "break" if self.is_break else "work"

    def toggle(self) -> bool:
        self.is_running = not self.is_running
        return self.is_running

    def reset(self) -> None:
        self.is_running = False
        self.is_break = False
        self.time_left = self.work_total

    def configure(
        self,
        work_minutes: int | None = None,
        work_seconds: int | None = None,
        break_minutes: int | None = None,
        break_seconds: int | None = None,
    ) -> PomodoroSettings:
        """Apply new durations (minutes >= 0, seconds 0-59) and reset to work.

        Arguments left as None keep their current value.
        """
        current = self.settings
        self.settings = PomodoroSettings(
            work_minutes=max(0, current.work_minutes if work_minutes is None else work_minutes),
            work_seconds=min(59, max(0, current.work_seconds if work_seconds is None else work_seconds)),
            break_minutes=max(0, current.break_minutes if break_minutes is None else break_minutes),
            break_seconds=min(59, max(0, current.break_seconds if break_seconds is None else break_seconds)),
        )
        self.reset()
        return self.settings

    def roll_day(self, today: date) -> bool:
        """Reset the completed-session counter on a new day."""
        if today == self.last_reset_date:
            return False
        self.completed_sessions = 0
        self.last_reset_date = today
        return True

    def tick(self) -> str | None:
        """Advance one second. Returns an event name when a phase ends."""
        if not self.is_running:
            return None
        if self.time_left > 0:
            self.time_left -= 1
        if self.time_left > 0:
            return None

        self.is_running = False
        if self.is_break:
            self.is_break = False
            self.time_left = self.work_total
            return BREAK_COMPLETE
        self.is_break = True
        self.time_left = self.break_total
        self.completed_sessions += 1
        return WORK_COMPLETE
