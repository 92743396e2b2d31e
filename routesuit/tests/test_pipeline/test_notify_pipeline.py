"""Tests for the notify pipeline with a mocked SMHI client and fixed clock."""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from routesuit.config.schema import AppConfig
from routesuit.ingest.smhi_client import SmhiClient
from routesuit.models.notification import NotifyStatus
from routesuit.pipeline.notify_pipeline import NotifyPipeline, client_from_config
from routesuit.storage import forecast_repo, notification_repo
from routesuit.storage.database import open_db
from routesuit.tests.helpers import local


@pytest.fixture
def mock_smhi(smhi_forecast: dict) -> MagicMock:
    client = MagicMock(spec=SmhiClient)
    client.get_forecast.return_value = smhi_forecast
    return client


def _pipeline(
    tmp_path: Path, client: MagicMock, now: datetime, config: AppConfig | None = None
) -> NotifyPipeline:
    return NotifyPipeline(
        config or AppConfig(),
        db_path=str(tmp_path / "test.db"),
        client=client,
        clock=lambda: now,
    )


class TestNotifyPipeline:
    def test_evening_only_after_morning(self, tmp_path: Path, mock_smhi: MagicMock):
        # Tuesday evening: morning window is over, evening rolls to Wednesday
        result = _pipeline(tmp_path, mock_smhi, local(2026, 2, 10, 20)).run()

        assert result.status == NotifyStatus.SENT
        assert result.local_date == "2026-02-10"
        assert result.title == "🌧️ Bring rain clothes today!"
        assert result.body == "From work: 7.5°C - rain clothes needed"
        recs = result.recommendations
        assert recs is not None
        assert recs.morning is None
        assert recs.evening is not None
        assert recs.evening.day_label == "Tomorrow"
        assert recs.evening.precipitation_probability_pct == 80.0
        assert recs.evening.precipitation_amount_mm == 1.2

    def test_morning_rain_for_later(self, tmp_path: Path, mock_smhi: MagicMock):
        result = _pipeline(tmp_path, mock_smhi, local(2026, 2, 11, 7, 30)).run()

        assert result.status == NotifyStatus.SENT
        assert result.body == (
            "To work: 6.0°C - bring rain gear for later\n"
            "From work: 7.5°C - rain clothes needed"
        )
        # the 07:00 point has passed, only 08:00 counts
        morning = result.recommendations.morning
        assert morning.temperature_c == 6.0
        assert morning.rain_for_later is True
        assert morning.day_label == "Today"

    def test_skips_before_notification_time(self, tmp_path: Path, mock_smhi: MagicMock):
        result = _pipeline(tmp_path, mock_smhi, local(2026, 2, 11, 7, 29)).run()

        assert result.status == NotifyStatus.SKIPPED
        assert result.reason == "before notification time 07:30"
        mock_smhi.get_forecast.assert_not_called()

    def test_configured_notification_time(self, tmp_path: Path, mock_smhi: MagicMock):
        config = AppConfig(notification={"hour": 6, "minute": 0})
        result = _pipeline(tmp_path, mock_smhi, local(2026, 2, 11, 6), config).run()

        assert result.status == NotifyStatus.SENT
        assert result.recommendations.morning.temperature_c == 5.0

    def test_force_ignores_notification_time(self, tmp_path: Path, mock_smhi: MagicMock):
        result = _pipeline(tmp_path, mock_smhi, local(2026, 2, 11, 5)).run(force=True)
        assert result.status == NotifyStatus.SENT

    def test_persists_forecast_and_log(self, tmp_path: Path, mock_smhi: MagicMock):
        _pipeline(tmp_path, mock_smhi, local(2026, 2, 11, 7, 30)).run()

        with open_db(tmp_path / "test.db") as conn:
            snapshot = forecast_repo.get_latest_forecast(conn)
            rows = notification_repo.get_recent_notifications(conn)
            snapshots = conn.execute("SELECT COUNT(*) FROM config_snapshots").fetchone()[0]
        assert snapshot is not None
        assert len(snapshot.points) == 8
        assert len(rows) == 1
        assert rows[0]["status"] == "sent"
        assert rows[0]["config_hash"]
        assert snapshots == 1

    def test_skips_non_notification_day(self, tmp_path: Path, mock_smhi: MagicMock):
        # 2026-02-14 is a Saturday
        result = _pipeline(tmp_path, mock_smhi, local(2026, 2, 14, 7, 30)).run()

        assert result.status == NotifyStatus.SKIPPED
        assert result.reason == "Saturday is not a notification day"
        mock_smhi.get_forecast.assert_not_called()

    def test_configured_weekend_day(self, tmp_path: Path, mock_smhi: MagicMock):
        config = AppConfig(notification={"days": [6]})
        result = _pipeline(tmp_path, mock_smhi, local(2026, 2, 14, 7, 30), config).run()
        assert result.status == NotifyStatus.SENT

    def test_skips_already_notified(self, tmp_path: Path, mock_smhi: MagicMock):
        now = local(2026, 2, 11, 7, 30)
        assert _pipeline(tmp_path, mock_smhi, now).run().status == NotifyStatus.SENT

        second = _pipeline(tmp_path, mock_smhi, now).run()
        assert second.status == NotifyStatus.SKIPPED
        assert second.reason == "already notified today"
        assert mock_smhi.get_forecast.call_count == 1

    def test_force_overrides_skip(self, tmp_path: Path, mock_smhi: MagicMock):
        now = local(2026, 2, 14, 7, 30)
        result = _pipeline(tmp_path, mock_smhi, now).run(force=True)
        assert result.status == NotifyStatus.SENT
        assert _pipeline(tmp_path, mock_smhi, now).run(force=True).status == NotifyStatus.SENT

    def test_fetch_failure(self, tmp_path: Path):
        client = MagicMock(spec=SmhiClient)
        client.get_forecast.side_effect = httpx.ConnectError("unreachable")

        result = _pipeline(tmp_path, client, local(2026, 2, 11, 7, 30)).run()

        assert result.status == NotifyStatus.FAILED
        assert result.reason == "forecast fetch failed"
        with open_db(tmp_path / "test.db") as conn:
            rows = notification_repo.get_recent_notifications(conn)
            assert notification_repo.was_notified_on(conn, "2026-02-11") is False
        assert rows[0]["status"] == "failed"

    def test_local_date_uses_config_timezone(self, tmp_path: Path, mock_smhi: MagicMock):
        # 23:30 UTC on Tuesday is already Wednesday in Stockholm
        now = datetime.fromisoformat("2026-02-10T23:30:00+00:00")
        result = _pipeline(tmp_path, mock_smhi, now).run(force=True)
        assert result.status == NotifyStatus.SENT
        assert result.local_date == "2026-02-11"


class TestClientFromConfig:
    def test_uses_forecast_api_settings(self):
        config = AppConfig(
            forecast_api={"base_url": "https://example.com/api/", "max_retries": 5}
        )
        client = client_from_config(config)
        assert client.base_url == "https://example.com/api"
        assert client.max_retries == 5
