"""Temperature to clothing level classification."""

from routesuit.config.schema import AppConfig
from routesuit.models.recommendation import ClothingLevel


def classify(temperature_c: float, config: AppConfig) -> ClothingLevel:
    """Map a temperature to a clothing level using a strict > cascade.

    Each threshold is an exclusive lower bound for its level, so a
    temperature exactly on a threshold falls into the next colder level.
    """
    for level, threshold in zip(ClothingLevel, config.temperature.ordered()):
        if temperature_c > threshold:
            return level
    return ClothingLevel.LEVEL_7


def message_for(level: ClothingLevel, config: AppConfig) -> str:
    return config.clothing_messages.for_level(int(level))
