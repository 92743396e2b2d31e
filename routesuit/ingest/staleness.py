"""Staleness checks for fetched forecasts."""

from datetime import datetime

from routesuit.models.common import parse_timestamp, utc_now


def forecast_age_hours(fetched_at_iso: str, now: datetime | None = None) -> float:
    """Age of a fetched forecast in hours; inf when the timestamp is unreadable."""
    if now is None:
        now = utc_now()
    fetched = parse_timestamp(fetched_at_iso)
    if fetched is None:
        return float("inf")
    return (now - fetched).total_seconds() / 3600


def is_forecast_stale(
    fetched_at_iso: str, max_age_hours: float, now: datetime | None = None
) -> bool:
    return forecast_age_hours(fetched_at_iso, now) > max_age_hours
