"""OpenWeatherMap current-conditions provider.

## API Documentation Summary
Source: https://openweathermap.org/current

## Endpoint
- URL: https://api.openweathermap.org/data/2.5/weather
- Params: lat, lon, appid, units=imperial

## Authentication
- API key required (`appid` query parameter)

## Response Format
```json
{
  "weather": [{"main": "Clouds", "description": "broken clouds", "icon": "04d"}],
  "main": {"temp": 72.3, "humidity": 60},
  "wind": {"speed": 8.05, "gust": 12.3},
  "clouds": {"all": 75},
  "dt": 1718467200,
  "name": "Madison"
}
```

## Variable Translation (OpenWeatherMap imperial -> Canonical)
| OWM Field | Canonical Field | Notes |
|-----------|-----------------|-------|
| main.temp | temperature | °F with units=imperial |
| wind.speed | wind_speed_text | mph, rendered as "N mph" |
| wind.gust | wind_gust_text | Often absent |
| weather[0].description | short_forecast | Title-cased |
| weather[0].main | condition_main | e.g. Rain, Drizzle, Thunderstorm |
| weather[0].icon | icon | Icon code |
| clouds.all | cloud_cover_percent | 0-100 |
| main.humidity | humidity_percent | 0-100 |
| dt | start_time | Floored to the hour; window is one hour |

There is no forecast prose or precipitation probability, so rain chance is
estimated from cloud cover and humidity.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from venue_decision.models.location import Coordinates
from venue_decision.models.weather import ForecastPeriod, ForecastSnapshot
from venue_decision.providers.base import (
    AuthenticationError,
    ProviderError,
    WeatherProvider,
)


CURRENT_PERIOD_NAME = "Current Conditions"


def _unix_to_datetime(timestamp: int | float | None) -> datetime:
    """Convert Unix timestamp to datetime, defaulting to now."""
    if timestamp is None:
        return datetime.now(timezone.utc)
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def _format_mph(value: float | None) -> str | None:
    if value is None:
        return None
    return f"{value:g} mph"


class OpenWeatherProvider(WeatherProvider):
    """OpenWeatherMap current weather provider.

    Example:
        ```python
        async with OpenWeatherProvider(api_key="your-api-key") as provider:
            snapshot = await provider.get_snapshot(
                Coordinates(latitude=43.07625, longitude=-89.40006)
            )
        ```
    """

    name = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5"
    resolution_strategy = "current_reading"

    def __init__(
        self,
        api_key: str | None,
        user_agent: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 3,
    ):
        """Initialize OpenWeatherMap provider.

        Args:
            api_key: OpenWeatherMap API key
            user_agent: Optional User-Agent string
            timeout: Request timeout in seconds
            max_attempts: Attempts per request on timeouts/network errors
        """
        super().__init__(user_agent=user_agent, timeout=timeout, max_attempts=max_attempts)
        self.api_key = api_key

    async def get_snapshot(self, coordinates: Coordinates) -> ForecastSnapshot:
        """Get the current reading for a location.

        Raises:
            AuthenticationError: If the API key is missing or rejected
            ProviderError: If the request fails
        """
        if not self.api_key:
            raise AuthenticationError(
                "API key required for OpenWeatherMap",
                provider=self.name,
            )

        params = {
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
            "appid": self.api_key,
            "units": "imperial",
        }

        try:
            response = await self._fetch(f"{self.base_url}/weather", params=params)
        except ProviderError as e:
            if e.status_code == 401:
                raise AuthenticationError(
                    "Invalid API key",
                    provider=self.name,
                    status_code=401,
                ) from e
            raise

        return self._translate_response(self._parse_json(response), coordinates)

    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
    ) -> ForecastSnapshot:
        """Translate an OpenWeatherMap response to canonical format.

        See module docstring for detailed field mapping.
        """
        main = response_data.get("main") or {}
        temperature = main.get("temp")
        if temperature is None:
            raise ProviderError(
                "Response is missing main.temp",
                provider=self.name,
            )

        weather = (response_data.get("weather") or [{}])[0]
        wind = response_data.get("wind") or {}
        clouds = response_data.get("clouds") or {}

        observed = _unix_to_datetime(response_data.get("dt"))
        hour_start = observed.replace(minute=0, second=0, microsecond=0)

        current = ForecastPeriod(
            name=CURRENT_PERIOD_NAME,
            start_time=hour_start,
            end_time=hour_start + timedelta(hours=1),
            temperature=temperature,
            wind_speed_text=_format_mph(wind.get("speed")) or "",
            wind_gust_text=_format_mph(wind.get("gust")),
            short_forecast=(weather.get("description") or "").title(),
            icon=weather.get("icon"),
            cloud_cover_percent=clouds.get("all"),
            humidity_percent=main.get("humidity"),
            condition_main=weather.get("main"),
        )

        return ForecastSnapshot(
            provider=self.name,
            current=current,
            generated_at=observed,
        )
