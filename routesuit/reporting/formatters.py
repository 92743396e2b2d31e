"""Output formatters for commute recommendations."""

import json

from routesuit.config.schema import AppConfig
from routesuit.models.recommendation import CommuteRecommendations, Recommendation
from routesuit.reporting.messages import recommendation_message

NO_DATA_TEXT = "No commute data available for the upcoming forecast."


def format_notification_title(recs: CommuteRecommendations) -> str:
    if recs.needs_rain_gear:
        return "🌧️ Bring rain clothes today!"
    return "Weather update"


def format_notification_body(recs: CommuteRecommendations) -> str:
    """Short push-notification body, one line per commute."""
    lines = []
    if recs.morning is not None:
        line = f"To work: {recs.morning.temperature_c:.1f}°C"
        if recs.morning.needs_rain_gear:
            if recs.morning.rain_for_later:
                line += " - bring rain gear for later"
            else:
                line += " - rain clothes needed"
        lines.append(line)
    if recs.evening is not None:
        line = f"From work: {recs.evening.temperature_c:.1f}°C"
        if recs.evening.needs_rain_gear:
            line += " - rain clothes needed"
        lines.append(line)
    if not lines:
        return NO_DATA_TEXT
    return "\n".join(lines)


def _format_card(rec: Recommendation, config: AppConfig) -> list[str]:
    return [
        f"{rec.commute_label} | {rec.day_label}",
        f"Temperature: {rec.temperature_c:.1f}°C",
        recommendation_message(rec, config),
    ]


def format_recommendations_text(recs: CommuteRecommendations, config: AppConfig) -> str:
    """Plain text, one block per commute."""
    if recs.is_empty:
        return NO_DATA_TEXT
    blocks = []
    for rec in (recs.morning, recs.evening):
        if rec is not None:
            blocks.append("\n".join(_format_card(rec, config)))
    return "\n\n".join(blocks)


def recommendation_to_dict(rec: Recommendation | None, config: AppConfig) -> dict | None:
    if rec is None:
        return None
    return {
        "commute_label": rec.commute_label,
        "forecast_date": rec.forecast_date.isoformat(),
        "day_label": rec.day_label,
        "clothing_level": int(rec.clothing_level),
        "temperature_c": round(rec.temperature_c, 2),
        "precipitation_probability_pct": rec.precipitation_probability_pct,
        "precipitation_amount_mm": rec.precipitation_amount_mm,
        "needs_rain_gear": rec.needs_rain_gear,
        "rain_for_later": rec.rain_for_later,
        "message": recommendation_message(rec, config),
    }


def recommendations_to_dict(recs: CommuteRecommendations, config: AppConfig) -> dict:
    return {
        "morning": recommendation_to_dict(recs.morning, config),
        "evening": recommendation_to_dict(recs.evening, config),
    }


def format_recommendations_json(recs: CommuteRecommendations, config: AppConfig) -> str:
    """JSON for programmatic consumption."""
    return json.dumps(recommendations_to_dict(recs, config), indent=2, ensure_ascii=False)
