"""SMHI point forecast API client with retry and rate limit handling."""

import logging
import time

import httpx

logger = logging.getLogger(__name__)

SMHI_BASE_URL = "https://opendata-download-metfcst.smhi.se/api"
DEFAULT_USER_AGENT = "routesuit/0.1.0"


class SmhiClient:
    def __init__(
        self,
        base_url: str = SMHI_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 2.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def forecast_url(self, longitude: float, latitude: float) -> str:
        return (
            f"{self.base_url}/category/snow1g/version/1/geotype/point/"
            f"lon/{longitude:.4f}/lat/{latitude:.3f}/data.json"
        )

    def get_forecast(self, longitude: float, latitude: float) -> dict:
        """Fetch the hourly point forecast for a coordinate.

        Retries on 503/429 and transport errors with exponential backoff.
        """
        url = self.forecast_url(longitude, latitude)
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        last_error: Exception | None = None
        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(url, headers=headers, timeout=self.timeout)
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "SMHI %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        url, resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return resp.json()
            except httpx.RequestError as e:
                last_error = e
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "SMHI request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise

        assert last_error is not None
        raise last_error
