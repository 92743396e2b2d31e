"""User-facing recommendation messages."""

from routesuit.config.schema import AppConfig
from routesuit.models.recommendation import Recommendation
from routesuit.recommend.classifier import message_for


def recommendation_message(rec: Recommendation, config: AppConfig) -> str:
    """Clothing message followed by a rain line.

    For an ordinary rain recommendation the probability and amount are each
    shown only when they individually exceed their threshold. A
    rain-for-later recommendation always cites both (evening) figures.
    """
    lines = [message_for(rec.clothing_level, config)]
    probability = int(rec.precipitation_probability_pct)
    amount = rec.precipitation_amount_mm

    if not rec.needs_rain_gear:
        lines.append("☀️ No rain expected")
    elif rec.rain_for_later:
        lines.append(
            "🌧️ Bring rain clothes for later! "
            f"Rain expected on your way home ({probability}% chance, {amount:.1f} mm)"
        )
    else:
        parts = ["🌧️ Bring rain clothes!"]
        if rec.precipitation_probability_pct > config.precipitation.probability_threshold:
            parts.append(f"Precipitation probability: {probability}%")
        if amount > config.precipitation.amount_threshold:
            parts.append(f"Expected precipitation: {amount:.1f} mm")
        lines.append(" ".join(parts))
    return "\n".join(lines)
