"""Commute recommendation models."""

from dataclasses import dataclass
from datetime import date
from enum import IntEnum


class ClothingLevel(IntEnum):
    LEVEL_1 = 1  # warmest weather, lightest clothing
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4
    LEVEL_5 = 5
    LEVEL_6 = 6
    LEVEL_7 = 7  # coldest weather, heaviest clothing


@dataclass(frozen=True)
class Recommendation:
    needs_rain_gear: bool
    clothing_level: ClothingLevel
    temperature_c: float
    precipitation_probability_pct: float
    precipitation_amount_mm: float
    commute_label: str
    forecast_date: date
    day_label: str  # "Today", "Tomorrow" or e.g. "Monday, Oct 20"
    rain_for_later: bool = False


@dataclass(frozen=True)
class CommuteRecommendations:
    morning: Recommendation | None
    evening: Recommendation | None

    @property
    def needs_rain_gear(self) -> bool:
        return any(r is not None and r.needs_rain_gear for r in (self.morning, self.evening))

    @property
    def is_empty(self) -> bool:
        return self.morning is None and self.evening is None
