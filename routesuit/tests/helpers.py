"""Builders for forecast points at local Stockholm times."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from routesuit.models.forecast import ForecastPoint

TZ = ZoneInfo("Europe/Stockholm")


def local(year: int, month: int, day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=TZ)


def point(
    when: datetime,
    temp: float | None = 10.0,
    prob: float | None = 0.0,
    amount: float | None = 0.0,
) -> ForecastPoint:
    return ForecastPoint(
        time=when.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
        temperature_c=temp,
        precipitation_probability_pct=prob,
        precipitation_amount_mm=amount,
    )
