"""Deskday core library: holiday engine, special dates and widget state.

Public API re-exports for convenient imports:
    from deskday import HolidayCatalog, next_occurrence, get_timezone, ...
"""

# Workspace & settings
from deskday.workspace import (
    workspace_root,
    settings_path,
    store_path,
    hooks_config_path,
    load_settings,
    save_settings,
    get_timezone,
    now_local,
    today_local,
)

# File I/O
from deskday.fileio import (
    read_text,
    read_json,
    read_yaml,
    write_json_atomic,
    write_yaml_atomic,
)

# Key-value store
from deskday.store import (
    MemoryStore,
    FileStore,
    load_json,
    load_json_list,
    save_json,
)

# Models
from deskday.models import (
    Rule,
    SpecialDate,
    UpcomingSpecialDate,
    PlanItem,
    LunarDate,
    Occurrence,
    CalendarDay,
    ClockFace,
    PomodoroSettings,
    WaterSettings,
    Settings,
)

# Lunar calendar
from deskday.lunar import (
    LunarConversionError,
    from_solar,
    from_lunar,
    lunar_label,
    calendar_label,
)

# Date rules
from deskday.rules import (
    INVALID_DATE,
    FAR_FUTURE,
    is_sentinel,
    resolve,
    nth_weekday,
    last_weekday,
    easter,
    is_valid_lunar_date,
    next_valid_lunar_date,
    local_day,
    days_until,
)

# Holiday catalog & search
from deskday.holidays import (
    US_HOLIDAYS,
    CHINESE_HOLIDAYS,
    BUILTIN_HOLIDAYS,
    HolidayCatalog,
    validate_rule,
)
from deskday.occurrences import (
    matches_on,
    next_occurrence,
    countdown_message,
    month_calendar,
)

# Special dates
from deskday.special_dates import (
    validate_special_date,
    load_special_dates,
    add_special_date,
    update_special_date,
    delete_special_date,
    upcoming_within,
    nearest_special_date,
    special_date_message,
)

# Widgets
from deskday.clock import clock_face, weekend_message
from deskday.pomodoro import Pomodoro, format_time
from deskday.water import WaterReminder
from deskday.plan import (
    load_plan_items,
    add_item,
    toggle_completed,
    toggle_must_do,
    delete_item,
    sorted_items,
    load_note,
    save_note,
)

# Hooks
from deskday.hooks import (
    load_hooks_config,
    run_hooks,
)
