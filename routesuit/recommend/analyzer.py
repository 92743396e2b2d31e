"""Single commute window analysis."""

import logging
from collections import defaultdict
from datetime import UTC, date, datetime
from statistics import fmean
from zoneinfo import ZoneInfo

from routesuit.config.schema import AppConfig
from routesuit.models.common import parse_timestamp
from routesuit.models.forecast import ForecastPoint
from routesuit.models.recommendation import Recommendation
from routesuit.recommend.classifier import classify
from routesuit.recommend.labels import day_label

logger = logging.getLogger(__name__)


def to_local(now: datetime, tz: ZoneInfo) -> datetime:
    """Localize an instant; naive datetimes are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(tz)


def analyze_commute(
    forecast: list[ForecastPoint],
    start_hour: int,
    end_hour: int,
    commute_label: str,
    config: AppConfig,
    now: datetime,
) -> Recommendation | None:
    """Recommend clothing and rain gear for the next occurrence of a window.

    Only points strictly after ``now`` whose local hour is in
    [start_hour, end_hour) count, and only those on the earliest local date
    among them. Temperature is averaged over present values; precipitation
    probability and amount take the maximum with absent values as 0.

    Returns None when no future point falls in the window or when none of
    the selected points has a temperature.
    """
    tz = config.tz
    local_now = to_local(now, tz)

    by_date: dict[date, list[ForecastPoint]] = defaultdict(list)
    for point in forecast:
        instant = parse_timestamp(point.time)
        if instant is None:
            logger.debug("Skipping forecast point with bad timestamp %r", point.time)
            continue
        local = instant.astimezone(tz)
        if start_hour <= local.hour < end_hour and local > local_now:
            by_date[local.date()].append(point)

    if not by_date:
        return None

    commute_date = min(by_date)
    points = by_date[commute_date]

    temperatures = [p.temperature_c for p in points if p.temperature_c is not None]
    if not temperatures:
        logger.debug("No temperature data for %s on %s", commute_label, commute_date)
        return None

    avg_temperature = fmean(temperatures)
    max_probability = max(p.precipitation_probability_pct or 0.0 for p in points)
    max_amount = max(p.precipitation_amount_mm or 0.0 for p in points)

    precip = config.precipitation
    needs_rain_gear = (
        max_probability > precip.probability_threshold
        or max_amount > precip.amount_threshold
    )

    return Recommendation(
        needs_rain_gear=needs_rain_gear,
        clothing_level=classify(avg_temperature, config),
        temperature_c=avg_temperature,
        precipitation_probability_pct=max_probability,
        precipitation_amount_mm=max_amount,
        commute_label=commute_label,
        forecast_date=commute_date,
        day_label=day_label(commute_date, local_now.date()),
        rain_for_later=False,
    )
