"""Forecast fetcher: retrieves SMHI forecasts and normalizes them to ForecastPoints."""

import logging

from routesuit.config.schema import LocationConfig
from routesuit.ingest.smhi_client import SmhiClient
from routesuit.models.common import utc_now_iso
from routesuit.models.forecast import ForecastPoint, ForecastSnapshot

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, client: SmhiClient):
        self.client = client
        self._cache: dict[tuple[float, float], ForecastSnapshot] = {}

    def fetch(self, location: LocationConfig) -> ForecastSnapshot | None:
        """Fetch the forecast for a location.

        Uses an in-memory cache to avoid duplicate requests within a run.
        """
        cache_key = (round(location.longitude, 4), round(location.latitude, 3))
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            raw = self.client.get_forecast(location.longitude, location.latitude)
        except Exception:
            logger.exception(
                "Failed to fetch forecast for lon=%.4f lat=%.3f",
                location.longitude, location.latitude,
            )
            return None

        snapshot = parse_forecast(raw, location.longitude, location.latitude)
        logger.info(
            "Fetched %d forecast points (reference time %s)",
            len(snapshot.points), snapshot.reference_time,
        )
        self._cache[cache_key] = snapshot
        return snapshot

    def clear_cache(self) -> None:
        self._cache.clear()


def parse_forecast(raw: dict, longitude: float, latitude: float) -> ForecastSnapshot:
    """Normalize an SMHI response; missing measurements become None."""
    points = []
    for entry in raw.get("timeSeries", []):
        data = entry.get("data") or {}
        points.append(
            ForecastPoint(
                time=entry.get("time", ""),
                temperature_c=_optional_float(data.get("air_temperature")),
                precipitation_probability_pct=_optional_float(
                    data.get("probability_of_precipitation")
                ),
                precipitation_amount_mm=_optional_float(
                    data.get("precipitation_amount_mean")
                ),
            )
        )
    return ForecastSnapshot(
        longitude=longitude,
        latitude=latitude,
        created_time=raw.get("createdTime", ""),
        reference_time=raw.get("referenceTime", ""),
        fetched_at=utc_now_iso(),
        points=points,
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
