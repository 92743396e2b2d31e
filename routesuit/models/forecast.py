"""Forecast data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ForecastPoint:
    time: str  # ISO-8601 instant as supplied by the provider
    temperature_c: float | None = None
    precipitation_probability_pct: float | None = None
    precipitation_amount_mm: float | None = None


@dataclass(frozen=True)
class ForecastSnapshot:
    longitude: float
    latitude: float
    created_time: str
    reference_time: str
    fetched_at: str
    points: list[ForecastPoint] = field(default_factory=list)
