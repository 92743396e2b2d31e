"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class Language(StrEnum):
    ENGLISH = "en"
    SWEDISH = "sv"


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    longitude: float = Field(default=14.2048, ge=-180.0, le=180.0)
    latitude: float = Field(default=57.781, ge=-90.0, le=90.0)


class CommuteWindow(BaseModel):
    """Hour-of-day range [start_hour, end_hour) in local time."""

    model_config = {"extra": "forbid", "frozen": True}

    start_hour: int = Field(ge=0, le=23)
    end_hour: int = Field(ge=0, le=23)


class TemperatureThresholds(BaseModel):
    """Exclusive lower bounds (°C) for clothing levels 1-6, warmest first.

    Anything at or below ``very_cold`` is level 7.
    """

    model_config = {"extra": "forbid", "frozen": True}

    hot: float = 20.0
    warm: float = 15.0
    mild: float = 10.0
    cool: float = 5.0
    cold: float = 0.0
    very_cold: float = -5.0

    def ordered(self) -> tuple[float, ...]:
        return (self.hot, self.warm, self.mild, self.cool, self.cold, self.very_cold)


class PrecipitationThresholds(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    probability_threshold: float = Field(default=50.0, ge=0.0, le=100.0)  # percent
    amount_threshold: float = Field(default=0.5, ge=0.0)  # millimeters


class ClothingMessages(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    level_1: str = Field(default="Shorts and t-shirt", min_length=1)
    level_2: str = Field(default="T-shirt with a light jacket", min_length=1)
    level_3: str = Field(default="Long sleeves and a light jacket", min_length=1)
    level_4: str = Field(default="Sweater and jacket", min_length=1)
    level_5: str = Field(default="Heavy jacket and layers", min_length=1)
    level_6: str = Field(default="Winter coat and warm layers essential", min_length=1)
    level_7: str = Field(default="Heavy winter gear required", min_length=1)

    def for_level(self, level: int) -> str:
        return getattr(self, f"level_{level}")


class NotificationConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    days: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5])  # ISO weekdays
    hour: int = Field(default=7, ge=0, le=23)
    minute: int = Field(default=30, ge=0, le=59)

    @field_validator("days")
    @classmethod
    def _check_days(cls, v: list[int]) -> list[int]:
        for day in v:
            if not 1 <= day <= 7:
                raise ValueError(f"notification day must be 1-7 (ISO weekday), got {day}")
        return sorted(set(v))


class ForecastApiConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    base_url: str = "https://opendata-download-metfcst.smhi.se/api"
    connect_timeout_seconds: float = Field(default=10.0, gt=0.0)
    read_timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay_seconds: float = Field(default=2.0, ge=0.0)


class OpsConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    stale_data_threshold_hours: float = Field(default=1.0, gt=0.0)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    location: LocationConfig = LocationConfig()
    morning: CommuteWindow = CommuteWindow(start_hour=7, end_hour=9)
    evening: CommuteWindow = CommuteWindow(start_hour=16, end_hour=19)
    temperature: TemperatureThresholds = TemperatureThresholds()
    precipitation: PrecipitationThresholds = PrecipitationThresholds()
    clothing_messages: ClothingMessages = ClothingMessages()
    timezone: str = "Europe/Stockholm"
    language: Language = Language.ENGLISH
    notification: NotificationConfig = NotificationConfig()
    forecast_api: ForecastApiConfig = ForecastApiConfig()
    ops: OpsConfig = OpsConfig()

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown IANA timezone: {v!r}") from e
        return v

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def validate_thresholds(config: AppConfig) -> list[str]:
    """Return human-readable problems with window and threshold ordering.

    The recommendation engine accepts any values; this is for the edit
    boundary (CLI, API) to warn about levels that can never be reached.
    """
    problems: list[str] = []
    for name, window in (("morning", config.morning), ("evening", config.evening)):
        if window.start_hour >= window.end_hour:
            problems.append(
                f"{name} window start_hour ({window.start_hour}) "
                f"is not before end_hour ({window.end_hour})"
            )

    names = ("hot", "warm", "mild", "cool", "cold", "very_cold")
    values = config.temperature.ordered()
    for i in range(len(values) - 1):
        if values[i] <= values[i + 1]:
            problems.append(
                f"temperature.{names[i]} ({values[i]}) must be greater than "
                f"temperature.{names[i + 1]} ({values[i + 1]})"
            )
    return problems
