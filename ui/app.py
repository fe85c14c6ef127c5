from __future__ import annotations

import os
import secrets
from datetime import date
from typing import Any

from deskday import (
    workspace_root as _workspace_root,
    get_timezone as _get_timezone,
    now_local,
    load_settings,
    FileStore,
    HolidayCatalog,
    next_occurrence,
    countdown_message,
    month_calendar,
    clock_face,
    load_special_dates,
    add_special_date,
    update_special_date,
    delete_special_date,
    upcoming_within,
    special_date_message,
    load_plan_items,
    add_item,
    toggle_completed,
    toggle_must_do,
    delete_item,
    sorted_items,
    load_note,
    save_note,
)

from fastapi import FastAPI, Depends, HTTPException, status
from fastapi import Body
from fastapi.security import HTTPBasic, HTTPBasicCredentials


app = FastAPI(title="Deskday API", version="0.1.0")

security = HTTPBasic(auto_error=False)


# ── Auth ──────────────────────────────────────────────────────

def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("DESKDAY_USERNAME", "")
    expected_password = os.environ.get("DESKDAY_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


def _store() -> FileStore:
    return FileStore(_workspace_root())


def _catalog() -> HolidayCatalog:
    return HolidayCatalog(_store())


def _bad_request(errors: list[str]) -> HTTPException:
    return HTTPException(status_code=400, detail="; ".join(errors))


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


# ── Clock ─────────────────────────────────────────────────────

@app.get("/api/clock")
def api_clock(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = _workspace_root()
    return clock_face(now_local(root)).to_dict()


@app.get("/api/settings")
def api_settings(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return load_settings(_workspace_root()).to_dict()


# ── Holidays ──────────────────────────────────────────────────

@app.get("/api/holidays")
def api_list_holidays(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Merged catalog for display plus every built-in with its enabled flag."""
    catalog = _catalog()
    return {
        "holidays": [r.to_public_dict() for r in catalog.merged_rules_for_display()],
        "builtins": [
            {**r.to_public_dict(), "enabled": catalog.is_enabled(r.name)}
            for r in catalog.builtins
        ],
        "custom": [r.to_dict() for r in catalog.custom],
    }


@app.get("/api/holidays/next")
def api_next_holiday(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = _workspace_root()
    occ = next_occurrence(HolidayCatalog(FileStore(root)), now_local(root), _get_timezone(root))
    if occ is None:
        return {"next": None, "message": ""}
    return {"next": occ.to_dict(), "message": countdown_message(occ)}


@app.get("/api/holidays/calendar")
def api_holiday_calendar(
    year: int | None = None,
    month: int | None = None,
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Month grid (Sunday first) with holidays and lunar labels per day."""
    root = _workspace_root()
    today = now_local(root).date()
    year = year or today.year
    month = month or today.month
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail=f"Invalid month: {month}")
    if not date.min.year <= year <= date.max.year:
        raise HTTPException(status_code=400, detail=f"Invalid year: {year}")

    weeks = month_calendar(HolidayCatalog(FileStore(root)), year, month, today=today)
    return {
        "year": year,
        "month": month,
        "weeks": [[d.to_dict() if d else None for d in week] for week in weeks],
    }


@app.post("/api/holidays/custom")
def api_add_custom_holiday(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    rule, errors = _catalog().add_custom(payload)
    if errors:
        raise _bad_request(errors)
    return {"ok": True, "holiday": rule.to_public_dict()}


@app.put("/api/holidays/custom/{name}")
def api_edit_custom_holiday(name: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    catalog = _catalog()
    if catalog.find_custom(name) is None:
        raise HTTPException(status_code=404, detail=f"Custom holiday not found: {name}")
    rule, errors = catalog.edit_custom(name, payload)
    if errors:
        raise _bad_request(errors)
    return {"ok": True, "holiday": rule.to_public_dict()}


@app.delete("/api/holidays/custom/{name}")
def api_delete_custom_holiday(name: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    if not _catalog().remove_custom(name):
        raise HTTPException(status_code=404, detail=f"Custom holiday not found: {name}")
    return {"ok": True, "name": name}


@app.put("/api/holidays/builtin/{name}")
def api_toggle_builtin(name: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Enable or disable a built-in holiday: {"enabled": bool}."""
    enabled = payload.get("enabled")
    if not isinstance(enabled, bool):
        raise HTTPException(status_code=400, detail="enabled must be a boolean")
    if not _catalog().set_builtin_enabled(name, enabled):
        raise HTTPException(status_code=404, detail=f"Built-in holiday not found: {name}")
    return {"ok": True, "name": name, "enabled": enabled}


# ── Special dates ─────────────────────────────────────────────

@app.get("/api/special-dates")
def api_list_special_dates(username: str = Depends(get_current_user)) -> dict[str, Any]:
    dates = load_special_dates(_store())
    return {"dates": [{"index": i, **d.to_dict()} for i, d in enumerate(dates)]}


@app.get("/api/special-dates/upcoming")
def api_upcoming_special_dates(
    window_days: int | None = None,
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    root = _workspace_root()
    if window_days is None:
        window_days = load_settings(root).special_date_window_days
    upcoming = upcoming_within(
        load_special_dates(FileStore(root)), now_local(root), window_days, _get_timezone(root)
    )
    return {
        "upcoming": [u.to_dict() for u in upcoming],
        "message": special_date_message(upcoming[0]) if upcoming else "",
    }


@app.post("/api/special-dates")
def api_add_special_date(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    store = _store()
    dates = load_special_dates(store)
    sd, errors = add_special_date(store, dates, payload)
    if errors:
        raise _bad_request(errors)
    return {"ok": True, "index": len(dates) - 1, "date": sd.to_dict()}


@app.put("/api/special-dates/{index}")
def api_update_special_date(index: int, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    store = _store()
    dates = load_special_dates(store)
    if not 0 <= index < len(dates):
        raise HTTPException(status_code=404, detail=f"Special date not found: {index}")
    sd, errors = update_special_date(store, dates, index, payload)
    if errors:
        raise _bad_request(errors)
    return {"ok": True, "index": index, "date": sd.to_dict()}


@app.delete("/api/special-dates/{index}")
def api_delete_special_date(index: int, username: str = Depends(get_current_user)) -> dict[str, Any]:
    store = _store()
    if not delete_special_date(store, load_special_dates(store), index):
        raise HTTPException(status_code=404, detail=f"Special date not found: {index}")
    return {"ok": True, "index": index}


# ── Today plan & note ─────────────────────────────────────────

@app.get("/api/plan")
def api_list_plan(username: str = Depends(get_current_user)) -> dict[str, Any]:
    items = sorted_items(load_plan_items(_store()))
    return {"items": [i.to_dict() for i in items]}


@app.post("/api/plan")
def api_add_plan_item(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    store = _store()
    item = add_item(store, load_plan_items(store), str(payload.get("text", "")))
    if item is None:
        raise HTTPException(status_code=400, detail="text is required")
    return {"ok": True, "item": item.to_dict()}


@app.post("/api/plan/{item_id}/toggle")
def api_toggle_plan_item(
    item_id: str,
    payload: dict[str, Any] = Body(default={}),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Flip ``completed`` (default) or ``mustDo`` with {"field": "mustDo"}."""
    store = _store()
    items = load_plan_items(store)
    field_name = payload.get("field", "completed")
    if field_name == "mustDo":
        item = toggle_must_do(store, items, item_id)
    elif field_name == "completed":
        item = toggle_completed(store, items, item_id)
    else:
        raise HTTPException(status_code=400, detail=f"Unknown field: {field_name}")
    if item is None:
        raise HTTPException(status_code=404, detail=f"Plan item not found: {item_id}")
    return {"ok": True, "item": item.to_dict()}


@app.delete("/api/plan/{item_id}")
def api_delete_plan_item(item_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    store = _store()
    if not delete_item(store, load_plan_items(store), item_id):
        raise HTTPException(status_code=404, detail=f"Plan item not found: {item_id}")
    return {"ok": True, "id": item_id}


@app.get("/api/note")
def api_get_note(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return {"text": load_note(_store())}


@app.put("/api/note")
def api_put_note(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    text = payload.get("text", "")
    if not isinstance(text, str):
        raise HTTPException(status_code=400, detail="text must be a string")
    save_note(_store(), text)
    return {"ok": True}
