"""Tests for ui/app.py: HTTP API over a temporary workspace."""

import pytest
from fastapi.testclient import TestClient

from ui.app import app


@pytest.fixture
def client(workspace):
    return TestClient(app)


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": "true"}


def test_list_holidays(client):
    data = client.get("/api/holidays").json()
    assert len(data["holidays"]) == 25
    assert data["holidays"][0]["name"] == "New Year's Day"
    assert all(b["enabled"] for b in data["builtins"])
    assert data["custom"] == []


def test_custom_holiday_crud(client):
    r = client.post("/api/holidays/custom", json={"name": "Pi Day", "month": 3, "day": 14})
    assert r.status_code == 200
    assert r.json()["holiday"]["category"] == "custom"

    names = [h["name"] for h in client.get("/api/holidays").json()["holidays"]]
    assert names[-1] == "Pi Day"

    r = client.put("/api/holidays/custom/Pi Day", json={"day": 15})
    assert r.status_code == 200
    assert r.json()["holiday"]["day"] == 15

    assert client.delete("/api/holidays/custom/Pi Day").status_code == 200
    assert client.delete("/api/holidays/custom/Pi Day").status_code == 404


def test_custom_holiday_validation(client):
    r = client.post("/api/holidays/custom", json={"name": "Bad", "month": 2, "day": 30})
    assert r.status_code == 400
    client.post("/api/holidays/custom", json={"name": "Pi Day", "month": 3, "day": 14})
    r = client.post("/api/holidays/custom", json={"name": "Pi Day", "month": 3, "day": 14})
    assert r.status_code == 400
    assert "already exists" in r.json()["detail"]
    assert client.put("/api/holidays/custom/Nope", json={"day": 1}).status_code == 404


def test_toggle_builtin(client):
    r = client.put("/api/holidays/builtin/Labor Day", json={"enabled": False})
    assert r.status_code == 200
    data = client.get("/api/holidays").json()
    assert "Labor Day" not in [h["name"] for h in data["holidays"]]
    assert [b["enabled"] for b in data["builtins"] if b["name"] == "Labor Day"] == [False]

    assert client.put("/api/holidays/builtin/Festivus", json={"enabled": False}).status_code == 404
    assert client.put("/api/holidays/builtin/Labor Day", json={"enabled": "no"}).status_code == 400


def test_next_holiday(client):
    data = client.get("/api/holidays/next").json()
    assert data["next"]["daysUntil"] >= 0
    assert data["message"]


def test_calendar(client):
    data = client.get("/api/holidays/calendar", params={"year": 2024, "month": 9}).json()
    assert data["year"] == 2024
    labor = data["weeks"][0][1]
    assert labor["date"] == "2024-09-02"
    assert [h["name"] for h in labor["holidays"]] == ["Labor Day"]
    assert client.get("/api/holidays/calendar", params={"month": 13}).status_code == 400


def test_calendar_last_representable_month(client):
    resp = client.get("/api/holidays/calendar", params={"year": 9999, "month": 12})
    assert resp.status_code == 200
    days = [d for w in resp.json()["weeks"] for d in w if d]
    assert days[-1]["date"] == "9999-12-31"


def test_special_dates(client):
    r = client.post("/api/special-dates", json={"name": "Mom", "month": 5, "day": 12, "type": "birthday"})
    assert r.status_code == 200
    assert r.json()["index"] == 0
    assert client.post("/api/special-dates", json={"name": "X", "month": 5, "day": 12, "type": "party"}).status_code == 400

    r = client.put("/api/special-dates/0", json={"day": 13})
    assert r.json()["date"]["day"] == 13
    assert client.put("/api/special-dates/9", json={"day": 1}).status_code == 404

    dates = client.get("/api/special-dates").json()["dates"]
    assert dates == [{"index": 0, "name": "Mom", "month": 5, "day": 13, "type": "birthday"}]

    upcoming = client.get("/api/special-dates/upcoming", params={"window_days": 366}).json()
    assert upcoming["upcoming"][0]["name"] == "Mom"
    assert upcoming["message"].startswith("Mom's Birthday")

    assert client.delete("/api/special-dates/0").status_code == 200
    assert client.delete("/api/special-dates/0").status_code == 404


def test_plan_items(client):
    assert client.post("/api/plan", json={"text": "  "}).status_code == 400
    item = client.post("/api/plan", json={"text": "Gym"}).json()["item"]

    r = client.post(f"/api/plan/{item['id']}/toggle", json={})
    assert r.json()["item"]["completed"] is True
    r = client.post(f"/api/plan/{item['id']}/toggle", json={"field": "mustDo"})
    assert r.json()["item"]["mustDo"] is True
    assert client.post(f"/api/plan/{item['id']}/toggle", json={"field": "x"}).status_code == 400
    assert client.post("/api/plan/missing/toggle", json={}).status_code == 404

    assert client.get("/api/plan").json()["items"][0]["text"] == "Gym"
    assert client.delete(f"/api/plan/{item['id']}").status_code == 200
    assert client.get("/api/plan").json()["items"] == []


def test_note(client):
    assert client.get("/api/note").json() == {"text": ""}
    assert client.put("/api/note", json={"text": "soup"}).status_code == 200
    assert client.get("/api/note").json() == {"text": "soup"}
    assert client.put("/api/note", json={"text": 5}).status_code == 400


def test_clock_and_settings(client):
    face = client.get("/api/clock").json()
    assert set(face) == {"time", "date", "lunar", "weekendMessage"}
    assert client.get("/api/settings").json()["pomodoro"]["work_minutes"] == 25


def test_basic_auth(client, monkeypatch):
    monkeypatch.setenv("DESKDAY_USERNAME", "me")
    monkeypatch.setenv("DESKDAY_PASSWORD", "secret")
    assert client.get("/api/note").status_code == 401
    assert client.get("/api/note", auth=("me", "wrong")).status_code == 401
    assert client.get("/api/note", auth=("me", "secret")).status_code == 200
    assert client.get("/healthz").status_code == 200
