"""AirNow air quality provider.

## API Documentation Summary
Source: https://docs.airnowapi.org/CurrentObservationsByLatLon/docs

## Endpoint
- URL: https://www.airnowapi.org/aq/observation/latLong/current
- Params: format=application/json, latitude, longitude, distance (miles), API_KEY

## Response Format
```json
[
  {
    "DateObserved": "2024-06-15 ",
    "HourObserved": 14,
    "ParameterName": "PM2.5",
    "AQI": 42,
    "Category": {"Number": 1, "Name": "Good"}
  }
]
```

The most recent observation wins, preferring PM2.5 over other pollutants.
"No data" is never an error: it yields the unavailable sentinel (AQI -1).
Transport failures raise; callers convert them with `reading_for_error()`.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from venue_decision.models.location import Coordinates
from venue_decision.models.weather import AirQualityReading
from venue_decision.providers.base import HTTPProvider, ProviderError, RateLimitError

logger = logging.getLogger(__name__)


PREFERRED_PARAMETER = "PM2.5"


def _observed_at(observation: dict[str, Any]) -> tuple[date, int]:
    """Sort key for an observation: (date, hour)."""
    try:
        observed = date.fromisoformat(str(observation.get("DateObserved", "")).strip())
    except ValueError:
        observed = date.min
    hour = observation.get("HourObserved")
    return (observed, hour if isinstance(hour, int) else -1)


def select_observation(observations: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Pick the most recent observation, preferring PM2.5."""
    if not observations:
        return None
    ordered = sorted(observations, key=_observed_at, reverse=True)
    for observation in ordered:
        if observation.get("ParameterName") == PREFERRED_PARAMETER:
            return observation
    return ordered[0]


def reading_for_error(error: Exception) -> AirQualityReading:
    """Convert a failed air quality fetch into the unavailable sentinel."""
    if isinstance(error, RateLimitError):
        return AirQualityReading.unavailable("Rate limit exceeded")
    if isinstance(error, httpx.TimeoutException):
        return AirQualityReading.unavailable("Connection timeout")
    if isinstance(error, httpx.NetworkError):
        return AirQualityReading.unavailable("Network error")
    return AirQualityReading.unavailable("Unavailable")


class AirNowProvider(HTTPProvider):
    """AirNow current observations provider.

    Example:
        ```python
        async with AirNowProvider(api_key="your-api-key") as provider:
            reading = await provider.get_reading(
                Coordinates(latitude=43.07625, longitude=-89.40006)
            )
        ```
    """

    name = "airnow"
    base_url = "https://www.airnowapi.org/aq/observation/latLong/current"

    def __init__(
        self,
        api_key: str | None,
        distance_miles: int = 25,
        user_agent: str | None = None,
        timeout: float = 8.0,
        max_attempts: int = 3,
    ):
        """Initialize AirNow provider.

        Args:
            api_key: AirNow API key; without one every reading is unavailable
            distance_miles: Search radius around the point
            user_agent: Optional User-Agent string
            timeout: Request timeout in seconds
            max_attempts: Attempts per request on timeouts/network errors
        """
        super().__init__(user_agent=user_agent, timeout=timeout, max_attempts=max_attempts)
        self.api_key = api_key
        self.distance_miles = distance_miles

    async def get_reading(self, coordinates: Coordinates) -> AirQualityReading:
        """Get the current AQI for a location.

        Raises:
            ProviderError: On error responses
            httpx.HTTPError: On transport failures after retries
        """
        if not self.api_key:
            logger.warning("No AirNow API key provided. Skipping AQI fetch.")
            return AirQualityReading.unavailable("Unavailable (No API key)")

        params = {
            "format": "application/json",
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "distance": self.distance_miles,
            "API_KEY": self.api_key,
        }
        data = self._parse_json(await self._fetch(self.base_url, params=params))
        return self._translate_response(data)

    def _translate_response(self, response_data: Any) -> AirQualityReading:
        if not isinstance(response_data, list):
            raise ProviderError(
                "Unexpected AirNow response shape",
                provider=self.name,
            )

        observations = [entry for entry in response_data if isinstance(entry, dict)]
        if len(observations) < len(response_data):
            logger.warning(
                f"Skipping {len(response_data) - len(observations)} malformed AirNow observations"
            )

        observation = select_observation(observations)
        if observation is None:
            logger.warning("No AQI data available for the specified location.")
            return AirQualityReading.unavailable("No Data Available")

        aqi = observation.get("AQI")
        if not isinstance(aqi, int) or isinstance(aqi, bool) or aqi < 0:
            return AirQualityReading.unavailable("No Data Available")

        category = observation.get("Category")
        if isinstance(category, dict):
            name = category.get("Name")
        else:
            name = category
        return AirQualityReading(aqi=aqi, category=name if isinstance(name, str) else "")
