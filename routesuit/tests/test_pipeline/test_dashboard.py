"""Tests for the FastAPI endpoints."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from routesuit import dashboard
from routesuit.models.forecast import ForecastSnapshot
from routesuit.storage import forecast_repo, notification_repo
from routesuit.storage.database import open_db


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "api.db"
    monkeypatch.setattr(dashboard, "DB_PATH", path)
    monkeypatch.setattr(dashboard, "CONFIG_PATH", tmp_path / "missing.yaml")
    return path


@pytest.fixture
def client(db_path: Path) -> TestClient:
    return TestClient(dashboard.app)


class TestRecommendations:
    def test_no_forecast(self, client: TestClient):
        resp = client.get("/api/recommendations")
        assert resp.status_code == 404

    def test_stale_forecast(self, client: TestClient, db_path: Path):
        snapshot = ForecastSnapshot(
            longitude=14.2048,
            latitude=57.781,
            created_time="",
            reference_time="",
            fetched_at="2020-01-01T00:00:00+00:00",
            points=[],
        )
        with open_db(db_path) as conn:
            forecast_repo.save_forecast(conn, snapshot)

        resp = client.get("/api/recommendations")
        assert resp.status_code == 200
        data = resp.json()
        assert data["morning"] is None
        assert data["evening"] is None
        assert data["stale"] is True
        assert data["fetched_at"] == "2020-01-01T00:00:00+00:00"


class TestNotifications:
    def test_recent(self, client: TestClient, db_path: Path):
        with open_db(db_path) as conn:
            notification_repo.log_notification(conn, "2026-02-10", "sent", "Weather update")

        resp = client.get("/api/notifications", params={"limit": 5})
        assert resp.status_code == 200
        rows = resp.json()
        assert len(rows) == 1
        assert rows[0]["title"] == "Weather update"


class TestConfig:
    def test_get(self, client: TestClient):
        data = client.get("/api/config").json()
        assert data["config"]["morning"] == {"start_hour": 7, "end_hour": 9}
        assert data["overrides"] == {}
        assert data["warnings"] == []

    def test_update(self, client: TestClient):
        resp = client.post(
            "/api/config",
            json={"values": {"morning.start_hour": 6, "precipitation.amount_threshold": 1.0}},
        )
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "updated",
            "changed": ["morning.start_hour", "precipitation.amount_threshold"],
        }

        data = client.get("/api/config").json()
        assert data["config"]["morning"]["start_hour"] == 6
        assert data["overrides"] == {
            "morning.start_hour": 6,
            "precipitation.amount_threshold": 1.0,
        }

    def test_update_warns_on_inverted_window(self, client: TestClient):
        client.post("/api/config", json={"values": {"evening.end_hour": 15}})
        warnings = client.get("/api/config").json()["warnings"]
        assert len(warnings) == 1
        assert warnings[0].startswith("evening window")

    def test_no_change(self, client: TestClient):
        resp = client.post("/api/config", json={"values": {}})
        assert resp.json()["status"] == "no_change"

    def test_unknown_key(self, client: TestClient):
        resp = client.post("/api/config", json={"values": {"temperature.tropical": 30}})
        assert resp.status_code == 404

    def test_invalid_value(self, client: TestClient):
        resp = client.post("/api/config", json={"values": {"notification.days": [0, 8]}})
        assert resp.status_code == 400
        assert client.get("/api/config").json()["overrides"] == {}

    def test_rejected_update_stores_nothing(self, client: TestClient):
        resp = client.post(
            "/api/config",
            json={"values": {"morning.start_hour": 6, "morning.end_hour": 99}},
        )
        assert resp.status_code == 400
        data = client.get("/api/config").json()
        assert data["overrides"] == {}
        assert data["config"]["morning"]["start_hour"] == 7

    def test_unknown_key_after_valid_key_stores_nothing(self, client: TestClient):
        resp = client.post(
            "/api/config",
            json={"values": {"temperature.hot": 25, "temperature.tropical": 30}},
        )
        assert resp.status_code == 404
        assert client.get("/api/config").json()["overrides"] == {}

    def test_list_element_key(self, client: TestClient):
        resp = client.post("/api/config", json={"values": {"notification.days.0": 3}})
        assert resp.status_code == 404

    def test_reset(self, client: TestClient):
        client.post("/api/config", json={"values": {"temperature.hot": 25}})
        resp = client.post("/api/config/reset")
        assert resp.json() == {"status": "reset", "removed": 1}
        assert client.get("/api/config").json()["overrides"] == {}
