#!/usr/bin/env python3
"""Deskday TUI: clock, holiday countdown, pomodoro, water, plan and notes."""

from __future__ import annotations

import calendar
import re
import sys
from datetime import date, timedelta
from typing import Any

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import (
    Button,
    Checkbox,
    Footer,
    Header,
    Input,
    Label,
    Static,
    TextArea,
)

from deskday import (
    workspace_root,
    load_settings,
    get_timezone,
    now_local,
    FileStore,
    HolidayCatalog,
    next_occurrence,
    countdown_message,
    month_calendar,
    matches_on,
    calendar_label,
    LunarConversionError,
    clock_face,
    load_special_dates,
    add_special_date,
    delete_special_date,
    nearest_special_date,
    special_date_message,
    Pomodoro,
    format_time,
    WaterReminder,
    load_plan_items,
    add_item,
    toggle_completed,
    toggle_must_do,
    delete_item,
    sorted_items,
    load_note,
    save_note,
    run_hooks,
)
from deskday.pomodoro import WORK_COMPLETE


# ── Input parsing ──────────────────────────────────────────────

_ENTRY_RE = re.compile(r"^\s*(?P<name>[^;]+?)\s*;\s*(?P<month>\d{1,2})\s*/\s*(?P<day>\d{1,2})\s*(?:;\s*(?P<flag>\w+)\s*)?$")


def parse_entry(text: str) -> dict[str, Any] | None:
    """Parse ``Name; M/D[; flag]`` into name/month/day/flag, or None."""
    m = _ENTRY_RE.match(text or "")
    if not m:
        return None
    return {
        "name": m.group("name"),
        "month": int(m.group("month")),
        "day": int(m.group("day")),
        "flag": (m.group("flag") or "").lower(),
    }


def shift_month(day: date, delta: int) -> date:
    """First of the month *delta* months away; *day* itself when out of range."""
    month = day.month - 1 + delta
    try:
        return date(day.year + month // 12, month % 12 + 1, 1)
    except ValueError:
        return day


def shift_year(day: date, delta: int) -> date:
    """Same month and day *delta* years away, clamped to the month's length."""
    year = day.year + delta
    if not date.min.year <= year <= date.max.year:
        return day
    return date(year, day.month, min(day.day, calendar.monthrange(year, day.month)[1]))


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#main-layout {
    height: 1fr;
}

#left-pane, #middle-pane, #right-pane {
    width: 1fr;
    min-width: 30;
    padding: 0 1;
}

#left-pane, #middle-pane {
    border-right: tall $primary-background-darken-2;
}

.panel {
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
    border: round $primary-background-darken-2;
}

.section-title {
    text-style: bold;
    color: $text;
    padding: 0 1;
}

.big {
    text-style: bold;
    content-align: center middle;
    width: 1fr;
}

.muted {
    color: $text-muted;
}

.button-row {
    height: auto;
}

.button-row Button {
    min-width: 8;
    margin: 0 1 0 0;
}

.plan-row {
    height: auto;
}

.plan-row Checkbox {
    width: 1fr;
}

.plan-row Button {
    min-width: 5;
}

.plan-done Checkbox {
    text-style: strike;
    opacity: 50%;
}

.must-do Checkbox {
    color: $warning;
}

#water-alert {
    color: $warning;
    text-style: bold;
}

#notes-area {
    height: 1fr;
    min-height: 6;
}

.modal-body {
    width: 80;
    height: auto;
    max-height: 90%;
    padding: 1 2;
    background: $panel;
    border: thick $primary-background-darken-2;
}

CalendarScreen, HolidaysScreen, SpecialDatesScreen {
    align: center middle;
}

#calendar-grid {
    height: auto;
    padding: 1 0;
}

#calendar-detail {
    height: auto;
    min-height: 3;
}
"""


# ── Dashboard panels ───────────────────────────────────────────


class ClockPanel(Vertical):
    """Time, date, lunar date, weekend countdown and the nearest special date."""

    def compose(self) -> ComposeResult:
        yield Static(id="clock-time", classes="big")
        yield Static(id="clock-date")
        yield Static(id="clock-lunar", classes="muted")
        yield Static(id="clock-weekend")
        yield Static(id="clock-special")

    def on_mount(self) -> None:
        self._announced: date | None = None
        self._tick()
        self.refresh_special()
        settings = load_settings()
        self._timers: list[Timer] = [
            self.set_interval(1, self._tick),
            self.set_interval(settings.refresh_seconds, self.refresh_special),
        ]

    def on_unmount(self) -> None:
        for timer in self._timers:
            timer.stop()

    def _tick(self) -> None:
        face = clock_face(now_local())
        self.query_one("#clock-time", Static).update(face.time)
        self.query_one("#clock-date", Static).update(face.date)
        self.query_one("#clock-lunar", Static).update(face.lunar)
        self.query_one("#clock-weekend", Static).update(face.weekend_message)

    def refresh_special(self) -> None:
        app: DeskdayApp = self.app  # type: ignore[assignment]
        settings = load_settings()
        now = now_local()
        upcoming = nearest_special_date(
            load_special_dates(app.store), now, settings.special_date_window_days, get_timezone()
        )
        widget = self.query_one("#clock-special", Static)
        if upcoming is None:
            widget.update("")
            return
        widget.update(special_date_message(upcoming))
        if upcoming.days_until == 0 and self._announced != now.date():
            self._announced = now.date()
            app.fire_hook("on_special_date", upcoming.to_dict())


class CountdownPanel(Vertical):
    """Next enabled holiday; refreshed hourly and after catalog edits."""

    def compose(self) -> ComposeResult:
        yield Label("Next holiday", classes="section-title")
        yield Static(id="countdown-name", classes="big")
        yield Static(id="countdown-message")
        with Horizontal(classes="button-row"):
            yield Button("Calendar", id="open-calendar")
            yield Button("Holidays", id="open-holidays")
            yield Button("Special dates", id="open-special")

    def on_mount(self) -> None:
        self._announced: date | None = None
        self.refresh_countdown()
        self._timer = self.set_interval(load_settings().refresh_seconds, self.refresh_countdown)

    def on_unmount(self) -> None:
        self._timer.stop()

    def refresh_countdown(self) -> None:
        app: DeskdayApp = self.app  # type: ignore[assignment]
        app.catalog.reload()
        now = now_local()
        occ = next_occurrence(app.catalog, now, get_timezone())
        if occ is None:
            self.query_one("#countdown-name", Static).update("No upcoming holidays")
            self.query_one("#countdown-message", Static).update("")
            return
        self.query_one("#countdown-name", Static).update(occ.rule.name)
        self.query_one("#countdown-message", Static).update(
            f"{countdown_message(occ)}  ({occ.date.isoformat()})"
        )
        if occ.days_until == 0 and self._announced != now.date():
            self._announced = now.date()
            app.fire_hook("on_holiday_today", occ.to_dict())


class PomodoroPanel(Vertical):
    def compose(self) -> ComposeResult:
        yield Label("Pomodoro", classes="section-title")
        yield Static(id="pomodoro-phase", classes="muted")
        yield Static(id="pomodoro-time", classes="big")
        yield Static(id="pomodoro-sessions", classes="muted")
        with Horizontal(classes="button-row"):
            yield Button("Start", id="pomodoro-toggle", variant="primary")
            yield Button("Reset", id="pomodoro-reset")

    def on_mount(self) -> None:
        self.timer_state = Pomodoro(load_settings().pomodoro, today=now_local().date())
        self._redraw()
        self._timer = self.set_interval(1, self._tick)

    def on_unmount(self) -> None:
        self._timer.stop()

    def _tick(self) -> None:
        self.timer_state.roll_day(now_local().date())
        event = self.timer_state.tick()
        if event is not None:
            app: DeskdayApp = self.app  # type: ignore[assignment]
            if event == WORK_COMPLETE:
                self.notify("Work session complete. Time for a break!", title="Pomodoro")
            else:
                self.notify("Break is over. Back to work!", title="Pomodoro")
            app.fire_hook(f"on_{event}", {"completedSessions": self.timer_state.completed_sessions})
        self._redraw()

    def _redraw(self) -> None:
        p = self.timer_state
        self.query_one("#pomodoro-phase", Static).update("Break" if p.is_break else "Focus")
        self.query_one("#pomodoro-time", Static).update(format_time(p.time_left))
        self.query_one("#pomodoro-sessions", Static).update(f"Sessions today: {p.completed_sessions}")
        self.query_one("#pomodoro-toggle", Button).label = "Pause" if p.is_running else "Start"

    @on(Button.Pressed, "#pomodoro-toggle")
    def _on_toggle(self) -> None:
        self.timer_state.toggle()
        self._redraw()

    @on(Button.Pressed, "#pomodoro-reset")
    def _on_reset(self) -> None:
        self.timer_state.reset()
        self._redraw()


class WaterPanel(Vertical):
    def compose(self) -> ComposeResult:
        yield Label("Water", classes="section-title")
        yield Static(id="water-count", classes="big")
        yield Static(id="water-alert")
        with Horizontal(classes="button-row"):
            yield Button("-", id="water-dec")
            yield Button("+", id="water-inc", variant="primary")
            yield Button("Done", id="water-dismiss")

    def on_mount(self) -> None:
        self.reminder = WaterReminder(load_settings().water, now=now_local())
        self._redraw()
        self._timer = self.set_interval(1, self._check)

    def on_unmount(self) -> None:
        self._timer.stop()

    def _check(self) -> None:
        if self.reminder.check(now_local()):
            app: DeskdayApp = self.app  # type: ignore[assignment]
            self.notify("Time to drink some water!", title="Water")
            app.fire_hook("on_water_reminder", {"glasses": self.reminder.count})
            self._redraw()

    def _redraw(self) -> None:
        glasses = "glass" if self.reminder.count == 1 else "glasses"
        self.query_one("#water-count", Static).update(f"{self.reminder.count} {glasses}")
        self.query_one("#water-alert", Static).update(
            "Time to drink some water!" if self.reminder.showing else ""
        )

    @on(Button.Pressed, "#water-inc")
    def _on_inc(self) -> None:
        self.reminder.increment()
        if self.reminder.showing:
            self.reminder.dismiss(now_local())
        self._redraw()

    @on(Button.Pressed, "#water-dec")
    def _on_dec(self) -> None:
        self.reminder.decrement()
        self._redraw()

    @on(Button.Pressed, "#water-dismiss")
    def _on_dismiss(self) -> None:
        self.reminder.dismiss(now_local())
        self._redraw()


class PlanRow(Horizontal):
    """One plan item: checkbox + must-do toggle + delete."""

    def __init__(self, item_id: str, text: str, completed: bool, must_do: bool) -> None:
        classes = "plan-row"
        if completed:
            classes += " plan-done"
        if must_do:
            classes += " must-do"
        super().__init__(classes=classes)
        self.item_id = item_id
        self.item_text = text
        self.item_completed = completed
        self.item_must_do = must_do

    def compose(self) -> ComposeResult:
        yield Checkbox(self.item_text, value=self.item_completed, id=f"plan-done-{self.item_id}")
        yield Button("★" if self.item_must_do else "☆", id=f"plan-must-{self.item_id}")
        yield Button("✕", id=f"plan-del-{self.item_id}")


class PlanPanel(Vertical):
    def compose(self) -> ComposeResult:
        yield Label("Today's plan", classes="section-title")
        yield Input(placeholder="Add a task and press Enter", id="plan-input")
        yield Vertical(id="plan-list")

    async def on_mount(self) -> None:
        app: DeskdayApp = self.app  # type: ignore[assignment]
        self.items = load_plan_items(app.store)
        await self._rebuild()

    async def _rebuild(self) -> None:
        plan_list = self.query_one("#plan-list", Vertical)
        await plan_list.remove_children()
        await plan_list.mount_all(
            PlanRow(item.id, item.text, item.completed, item.must_do)
            for item in sorted_items(self.items)
        )

    @on(Input.Submitted, "#plan-input")
    async def _on_add(self, event: Input.Submitted) -> None:
        app: DeskdayApp = self.app  # type: ignore[assignment]
        if add_item(app.store, self.items, event.value) is not None:
            event.input.value = ""
            await self._rebuild()

    @on(Checkbox.Changed)
    def _on_done(self, event: Checkbox.Changed) -> None:
        item_id = (event.checkbox.id or "").removeprefix("plan-done-")
        app: DeskdayApp = self.app  # type: ignore[assignment]
        item = next((i for i in self.items if i.id == item_id), None)
        if item is None or item.completed == event.value:
            return
        toggle_completed(app.store, self.items, item_id)
        parent = event.checkbox.parent
        if isinstance(parent, PlanRow):
            parent.set_class(event.value, "plan-done")

    @on(Button.Pressed)
    async def _on_row_button(self, event: Button.Pressed) -> None:
        app: DeskdayApp = self.app  # type: ignore[assignment]
        button_id = event.button.id or ""
        if button_id.startswith("plan-must-"):
            toggle_must_do(app.store, self.items, button_id.removeprefix("plan-must-"))
        elif button_id.startswith("plan-del-"):
            delete_item(app.store, self.items, button_id.removeprefix("plan-del-"))
        else:
            return
        event.stop()
        await self._rebuild()


class NotesPanel(Vertical):
    def compose(self) -> ComposeResult:
        yield Label("Notes", classes="section-title")
        yield TextArea(id="notes-area")

    def on_mount(self) -> None:
        app: DeskdayApp = self.app  # type: ignore[assignment]
        self.query_one("#notes-area", TextArea).load_text(load_note(app.store))

    @on(TextArea.Changed, "#notes-area")
    def _on_change(self, event: TextArea.Changed) -> None:
        app: DeskdayApp = self.app  # type: ignore[assignment]
        save_note(app.store, event.text_area.text)


# ── Modal screens ──────────────────────────────────────────────


class CalendarScreen(ModalScreen[None]):
    """Month grid with holiday markers; arrows move the selected day."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("left", "move(-1)", "Prev day", show=False),
        Binding("right", "move(1)", "Next day", show=False),
        Binding("up", "move(-7)", "Prev week", show=False),
        Binding("down", "move(7)", "Next week", show=False),
        Binding("[", "shift_month(-1)", "Prev month"),
        Binding("]", "shift_month(1)", "Next month"),
        Binding("{", "shift_year(-1)", "Prev year"),
        Binding("}", "shift_year(1)", "Next year"),
        Binding("t", "today", "Today"),
    ]

    def __init__(self, catalog: HolidayCatalog, today: date) -> None:
        super().__init__()
        self.catalog = catalog
        self.today = today
        self.selected = today

    def compose(self) -> ComposeResult:
        with Vertical(classes="modal-body"):
            yield Label(id="calendar-title", classes="section-title")
            yield Static(id="calendar-grid")
            yield Static(id="calendar-detail")
            yield Static("←/→/↑/↓ day · [ ] month · { } year · t today · esc close", classes="muted")

    def on_mount(self) -> None:
        self._redraw()

    def _redraw(self) -> None:
        year, month = self.selected.year, self.selected.month
        self.query_one("#calendar-title", Label).update(self.selected.strftime("%B %Y"))

        lines = [" Sun  Mon  Tue  Wed  Thu  Fri  Sat"]
        for week in month_calendar(self.catalog, year, month, today=self.today):
            cells = []
            for day in week:
                if day is None:
                    cells.append("     ")
                    continue
                mark = "*" if day.holidays else " "
                cell = f" {day.date.day:>2}{mark} "
                if day.date == self.selected:
                    cell = f"[reverse]{cell}[/reverse]"
                elif day.is_today:
                    cell = f"[bold underline]{cell}[/bold underline]"
                elif day.holidays:
                    cell = f"[red]{cell}[/red]"
                cells.append(cell)
            lines.append("".join(cells))
        self.query_one("#calendar-grid", Static).update("\n".join(lines))

        try:
            lunar = calendar_label(self.selected)
        except LunarConversionError:
            lunar = ""
        names = [r.name for r in matches_on(self.catalog, self.selected)]
        detail = [f"{self.selected.isoformat()}  {lunar}".rstrip()]
        detail.extend(f"  • {n}" for n in names)
        self.query_one("#calendar-detail", Static).update("\n".join(detail))

    def action_move(self, days: int) -> None:
        try:
            self.selected += timedelta(days=days)
        except OverflowError:
            return
        self._redraw()

    def action_shift_month(self, delta: int) -> None:
        self.selected = shift_month(self.selected, delta)
        self._redraw()

    def action_shift_year(self, delta: int) -> None:
        self.selected = shift_year(self.selected, delta)
        self._redraw()

    def action_today(self) -> None:
        self.selected = self.today
        self._redraw()

    def action_close(self) -> None:
        self.dismiss(None)


class HolidaysScreen(ModalScreen[bool]):
    """Toggle built-in holidays and manage custom ones."""

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, catalog: HolidayCatalog) -> None:
        super().__init__()
        self.catalog = catalog
        self.changed = False

    def compose(self) -> ComposeResult:
        with VerticalScroll(classes="modal-body"):
            yield Label("Built-in holidays", classes="section-title")
            for i, rule in enumerate(self.catalog.builtins):
                yield Checkbox(rule.name, value=self.catalog.is_enabled(rule.name), id=f"builtin-{i}")
            yield Label("Custom holidays", classes="section-title")
            yield Vertical(id="custom-list")
            yield Input(placeholder="Name; M/D[; lunar] then Enter", id="custom-input")

    async def on_mount(self) -> None:
        await self._rebuild_custom()

    async def _rebuild_custom(self) -> None:
        custom_list = self.query_one("#custom-list", Vertical)
        await custom_list.remove_children()
        await custom_list.mount_all(
            Horizontal(
                Label(f"{rule.name}  {rule.month}/{rule.day} ({'lunar' if rule.is_lunar else 'solar'})"),
                Button("✕", id=f"custom-del-{i}"),
                classes="plan-row",
            )
            for i, rule in enumerate(self.catalog.custom)
        )

    @on(Checkbox.Changed)
    def _on_builtin(self, event: Checkbox.Changed) -> None:
        index = int((event.checkbox.id or "").removeprefix("builtin-"))
        self.catalog.set_builtin_enabled(self.catalog.builtins[index].name, event.value)
        self.changed = True

    @on(Input.Submitted, "#custom-input")
    async def _on_add(self, event: Input.Submitted) -> None:
        entry = parse_entry(event.value)
        if entry is None:
            self.notify("Use the form: Name; M/D[; lunar]", severity="warning")
            return
        is_lunar = entry.pop("flag") == "lunar"
        _, errors = self.catalog.add_custom({**entry, "isFixed": True, "isLunar": is_lunar})
        if errors:
            self.notify("; ".join(errors), title="Invalid holiday", severity="warning")
            return
        event.input.value = ""
        self.changed = True
        await self._rebuild_custom()

    @on(Button.Pressed)
    async def _on_delete(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("custom-del-"):
            return
        index = int(button_id.removeprefix("custom-del-"))
        if index < len(self.catalog.custom):
            self.catalog.remove_custom(self.catalog.custom[index].name)
            self.changed = True
        await self._rebuild_custom()

    def action_close(self) -> None:
        self.dismiss(self.changed)


class SpecialDatesScreen(ModalScreen[bool]):
    """Birthdays and anniversaries."""

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, store: FileStore) -> None:
        super().__init__()
        self.store = store
        self.dates = load_special_dates(store)
        self.changed = False

    def compose(self) -> ComposeResult:
        with VerticalScroll(classes="modal-body"):
            yield Label("Special dates", classes="section-title")
            yield Vertical(id="special-list")
            yield Input(placeholder="Name; M/D; birthday|anniversary then Enter", id="special-input")

    async def on_mount(self) -> None:
        await self._rebuild()

    async def _rebuild(self) -> None:
        special_list = self.query_one("#special-list", Vertical)
        await special_list.remove_children()
        await special_list.mount_all(
            Horizontal(
                Label(f"{sd.name}  {sd.month}/{sd.day} ({sd.type})"),
                Button("✕", id=f"special-del-{i}"),
                classes="plan-row",
            )
            for i, sd in enumerate(self.dates)
        )

    @on(Input.Submitted, "#special-input")
    async def _on_add(self, event: Input.Submitted) -> None:
        entry = parse_entry(event.value)
        if entry is None:
            self.notify("Use the form: Name; M/D; birthday", severity="warning")
            return
        entry["type"] = entry.pop("flag") or "birthday"
        _, errors = add_special_date(self.store, self.dates, entry)
        if errors:
            self.notify("; ".join(errors), title="Invalid date", severity="warning")
            return
        event.input.value = ""
        self.changed = True
        await self._rebuild()

    @on(Button.Pressed)
    async def _on_delete(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("special-del-"):
            return
        if delete_special_date(self.store, self.dates, int(button_id.removeprefix("special-del-"))):
            self.changed = True
        await self._rebuild()

    def action_close(self) -> None:
        self.dismiss(self.changed)


# ── Main app ───────────────────────────────────────────────────


class DeskdayApp(App):
    """Deskday: personal dashboard."""

    TITLE = "Deskday"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("c", "open_calendar", "Calendar"),
        Binding("h", "open_holidays", "Holidays"),
        Binding("b", "open_special", "Special dates"),
        Binding("p", "toggle_pomodoro", "Start/Pause"),
        Binding("w", "drink", "Drink"),
        Binding("escape", "blur_focus", "Back"),
        Binding("q", "quit", "Quit"),
    ]

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action == "blur_focus":
            return True if self.focused is not None else None
        if action in {"toggle_pomodoro", "drink"} and isinstance(self.focused, (Input, TextArea)):
            return None
        return True

    def __init__(self) -> None:
        super().__init__()
        self.store = FileStore()
        self.catalog = HolidayCatalog(self.store)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(
            VerticalScroll(
                ClockPanel(classes="panel"),
                CountdownPanel(classes="panel", id="countdown"),
                id="left-pane",
                can_focus=False,
            ),
            VerticalScroll(
                PomodoroPanel(classes="panel", id="pomodoro"),
                WaterPanel(classes="panel", id="water"),
                id="middle-pane",
                can_focus=False,
            ),
            Vertical(
                PlanPanel(classes="panel"),
                NotesPanel(classes="panel"),
                id="right-pane",
            ),
            id="main-layout",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = str(workspace_root())

    @work(thread=True)
    def fire_hook(self, hook_point: str, context: dict[str, Any]) -> None:
        """Run configured hooks off the UI thread; report failures."""
        results = run_hooks(hook_point, context)
        failed = [r for r in results if r.get("exit_code") != 0]
        if failed:
            self.call_from_thread(
                self.notify,
                f"{len(failed)} hook(s) failed for {hook_point}",
                title="Hooks",
                severity="warning",
            )

    # ── Actions ────────────────────────────────────────────────

    def _after_catalog_change(self, changed: bool | None) -> None:
        if changed:
            self.query_one("#countdown", CountdownPanel).refresh_countdown()

    def _after_special_change(self, changed: bool | None) -> None:
        if changed:
            self.query_one(ClockPanel).refresh_special()

    def action_open_calendar(self) -> None:
        self.catalog.reload()
        self.push_screen(CalendarScreen(self.catalog, now_local().date()))

    def action_open_holidays(self) -> None:
        self.catalog.reload()
        self.push_screen(HolidaysScreen(self.catalog), self._after_catalog_change)

    def action_open_special(self) -> None:
        self.push_screen(SpecialDatesScreen(self.store), self._after_special_change)

    @on(Button.Pressed, "#open-calendar")
    def _on_open_calendar(self) -> None:
        self.action_open_calendar()

    @on(Button.Pressed, "#open-holidays")
    def _on_open_holidays(self) -> None:
        self.action_open_holidays()

    @on(Button.Pressed, "#open-special")
    def _on_open_special(self) -> None:
        self.action_open_special()

    def action_toggle_pomodoro(self) -> None:
        self.query_one("#pomodoro", PomodoroPanel)._on_toggle()

    def action_drink(self) -> None:
        self.query_one("#water", WaterPanel)._on_inc()

    def action_blur_focus(self) -> None:
        self.set_focus(None)
        self.refresh_bindings()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Set DESKDAY_ROOT or create the directory first.")
        sys.exit(1)

    app = DeskdayApp()
    app.run()


if __name__ == "__main__":
    main()
