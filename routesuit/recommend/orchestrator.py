"""Morning and evening commute recommendations with the rain-for-later rule."""

import dataclasses
from datetime import datetime

from routesuit.config.schema import AppConfig
from routesuit.models.common import utc_now
from routesuit.models.forecast import ForecastPoint
from routesuit.models.recommendation import CommuteRecommendations, Recommendation
from routesuit.recommend.analyzer import analyze_commute, to_local
from routesuit.recommend.labels import commute_label


def analyze_commutes(
    forecast: list[ForecastPoint],
    config: AppConfig,
    now: datetime | None = None,
) -> CommuteRecommendations:
    """Analyze both commute windows for the given forecast.

    The morning window is skipped once its end hour has been reached today.
    The evening window is always analyzed; past occurrences roll over to the
    next day through the future-only filter.
    """
    if now is None:
        now = utc_now()
    current_hour = to_local(now, config.tz).hour

    morning = None
    if current_hour < config.morning.end_hour:
        morning = analyze_commute(
            forecast,
            config.morning.start_hour,
            config.morning.end_hour,
            commute_label("Morning", config.morning),
            config,
            now,
        )

    evening = analyze_commute(
        forecast,
        config.evening.start_hour,
        config.evening.end_hour,
        commute_label("Evening", config.evening),
        config,
        now,
    )

    return CommuteRecommendations(
        morning=apply_rain_for_later(morning, evening),
        evening=evening,
    )


def apply_rain_for_later(
    morning: Recommendation | None, evening: Recommendation | None
) -> Recommendation | None:
    """Flag a dry morning commute to bring rain gear for a wet evening.

    The adjusted copy carries the evening's precipitation figures. A morning
    that already needs rain gear is returned unchanged.
    """
    if morning is None or evening is None:
        return morning
    if not evening.needs_rain_gear or morning.needs_rain_gear:
        return morning
    return dataclasses.replace(
        morning,
        needs_rain_gear=True,
        rain_for_later=True,
        precipitation_probability_pct=evening.precipitation_probability_pct,
        precipitation_amount_mm=evening.precipitation_amount_mm,
    )
