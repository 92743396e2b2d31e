"""Notify pipeline: one fetch, analyze and notify cycle."""

import logging
from collections.abc import Callable
from datetime import datetime

from routesuit.config.schema import AppConfig
from routesuit.ingest.forecast_fetcher import ForecastFetcher
from routesuit.ingest.smhi_client import SmhiClient
from routesuit.models.common import utc_now
from routesuit.models.notification import NotifyResult, NotifyStatus
from routesuit.recommend.analyzer import to_local
from routesuit.recommend.orchestrator import analyze_commutes
from routesuit.reporting.formatters import (
    format_notification_body,
    format_notification_title,
)
from routesuit.storage import config_repo, forecast_repo, notification_repo
from routesuit.storage.database import open_db

logger = logging.getLogger(__name__)


def client_from_config(config: AppConfig) -> SmhiClient:
    api = config.forecast_api
    return SmhiClient(
        base_url=api.base_url,
        connect_timeout=api.connect_timeout_seconds,
        read_timeout=api.read_timeout_seconds,
        max_retries=api.max_retries,
        retry_base_delay=api.retry_base_delay_seconds,
    )


class NotifyPipeline:
    def __init__(
        self,
        config: AppConfig,
        db_path: str = "data/routesuit.db",
        client: SmhiClient | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.db_path = db_path
        self.client = client or client_from_config(config)
        self.clock = clock

    def run(self, force: bool = False) -> NotifyResult:
        """Execute one notification cycle.

        Skips days not in ``notification.days``, runs before the configured
        notification time, and days already notified unless ``force`` is set. Fetch failures are recorded and reported as
        a FAILED result rather than raised.
        """
        now = self.clock()
        local_now = to_local(now, self.config.tz)
        local_date = local_now.date().isoformat()

        with open_db(self.db_path) as conn:
            c_hash = config_repo.snapshot_config(conn, self.config)

            if not force:
                reason = self._skip_reason(local_now)
                if reason is None and notification_repo.was_notified_on(conn, local_date):
                    reason = "already notified today"
                if reason is not None:
                    logger.info("Skipping notification for %s: %s", local_date, reason)
                    notification_repo.log_notification(
                        conn, local_date, NotifyStatus.SKIPPED,
                        config_hash=c_hash, error_message=reason,
                    )
                    return NotifyResult(NotifyStatus.SKIPPED, local_date, reason=reason)

            snapshot = ForecastFetcher(self.client).fetch(self.config.location)
            if snapshot is None:
                reason = "forecast fetch failed"
                notification_repo.log_notification(
                    conn, local_date, NotifyStatus.FAILED,
                    config_hash=c_hash, error_message=reason,
                )
                return NotifyResult(NotifyStatus.FAILED, local_date, reason=reason)
            forecast_repo.save_forecast(conn, snapshot)

            recs = analyze_commutes(snapshot.points, self.config, now)
            title = format_notification_title(recs)
            body = format_notification_body(recs)
            notification_repo.log_notification(
                conn, local_date, NotifyStatus.SENT, title, body, config_hash=c_hash,
            )
            logger.info("Notification for %s: %s", local_date, title)
            return NotifyResult(
                NotifyStatus.SENT, local_date, title, body, recommendations=recs
            )

    def _skip_reason(self, local_now: datetime) -> str | None:
        notification = self.config.notification
        if local_now.isoweekday() not in notification.days:
            return f"{local_now:%A} is not a notification day"
        if (local_now.hour, local_now.minute) < (notification.hour, notification.minute):
            return f"before notification time {notification.hour:02d}:{notification.minute:02d}"
        return None
