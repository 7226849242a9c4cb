"""National Weather Service provider.

## API Documentation Summary
Source: https://www.weather.gov/documentation/services-web-api

## Endpoints
- Points: https://api.weather.gov/points/{lat},{lon}
- Forecast: properties.forecast from the points response (12-hour periods)
- Hourly forecast: properties.forecastHourly from the points response
- Alerts: https://api.weather.gov/alerts/active?point={lat},{lon}

## Authentication
- No API key required
- MUST include a User-Agent header identifying the application and a contact

## Response Format (forecast)
```json
{
  "properties": {
    "periods": [
      {
        "number": 1,
        "name": "This Afternoon",
        "startTime": "2024-06-15T13:00:00-05:00",
        "endTime": "2024-06-15T18:00:00-05:00",
        "temperature": 72,
        "temperatureUnit": "F",
        "windSpeed": "10 to 15 mph",
        "windGust": "25 mph",
        "icon": "https://api.weather.gov/icons/land/day/tsra,40",
        "shortForecast": "Chance Showers And Thunderstorms",
        "detailedForecast": "... Chance of precipitation is 40%.",
        "probabilityOfPrecipitation": {"unitCode": "wmoUnit:percent", "value": 40}
      }
    ]
  }
}
```

## Variable Translation (NWS -> Canonical)
| NWS Field | Canonical Field | Notes |
|-----------|-----------------|-------|
| name | name | Empty for hourly periods; labelled with start hour |
| startTime / endTime | start_time / end_time | ISO 8601 with offset |
| temperature | temperature | Converted to °F when temperatureUnit is C |
| windSpeed | wind_speed_text | Prose, normalized later |
| windGust | wind_gust_text | Often absent |
| shortForecast | short_forecast | Direct mapping |
| detailedForecast | detailed_forecast | Empty for hourly periods |
| icon | icon | URL |
| probabilityOfPrecipitation.value | reported_precipitation_percent | May be null |

Alerts and the hourly forecast are best-effort: if either fetch fails the
snapshot is returned without them.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from venue_decision.models.location import Coordinates
from venue_decision.models.weather import (
    AlertSet,
    ForecastPeriod,
    ForecastSnapshot,
    WeatherAlert,
)
from venue_decision.providers.base import ProviderError, WeatherProvider

logger = logging.getLogger(__name__)


def _celsius_to_fahrenheit(value: float) -> float:
    return value * 9 / 5 + 32


def _hour_label(start: datetime) -> str:
    """Label an unnamed hourly period by its start hour, e.g. '3 PM'."""
    return start.strftime("%I %p").lstrip("0")


def _parse_period(entry: dict[str, Any]) -> ForecastPeriod | None:
    """Parse one NWS period, returning None for malformed entries."""
    try:
        start = datetime.fromisoformat(entry["startTime"])
        end = datetime.fromisoformat(entry["endTime"])
        temperature = float(entry["temperature"])
    except (KeyError, TypeError, ValueError):
        return None

    if entry.get("temperatureUnit") == "C":
        temperature = _celsius_to_fahrenheit(temperature)

    precipitation = (entry.get("probabilityOfPrecipitation") or {}).get("value")

    try:
        return ForecastPeriod(
            name=entry.get("name") or _hour_label(start),
            start_time=start,
            end_time=end,
            temperature=temperature,
            wind_speed_text=entry.get("windSpeed") or "",
            wind_gust_text=entry.get("windGust"),
            short_forecast=entry.get("shortForecast") or "",
            detailed_forecast=entry.get("detailedForecast") or "",
            icon=entry.get("icon"),
            reported_precipitation_percent=precipitation,
        )
    except ValueError:
        return None


def parse_periods(response_data: dict[str, Any]) -> list[ForecastPeriod]:
    """Parse `properties.periods`, keeping provider order and skipping bad entries."""
    periods: list[ForecastPeriod] = []
    for entry in response_data.get("properties", {}).get("periods", []):
        period = _parse_period(entry) if isinstance(entry, dict) else None
        if period is None:
            logger.debug(f"Skipping malformed NWS period: {entry!r:.80}")
            continue
        periods.append(period)
    return periods


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def parse_alerts(response_data: Any) -> AlertSet:
    """Parse an active-alerts GeoJSON collection.

    Features without a named event are skipped.

    Raises:
        ProviderError: If the payload is not a feature collection
    """
    if not isinstance(response_data, dict):
        raise ProviderError("Unexpected NWS alerts response shape", provider="nws")
    features = response_data.get("features") or []
    if not isinstance(features, list):
        raise ProviderError("Unexpected NWS alerts response shape", provider="nws")

    alerts: list[WeatherAlert] = []
    for feature in features:
        properties = feature.get("properties") if isinstance(feature, dict) else None
        if not isinstance(properties, dict):
            continue
        event = _text(properties.get("event"))
        if not event:
            continue
        alerts.append(
            WeatherAlert(
                event=event,
                headline=_text(properties.get("headline")),
                severity=_text(properties.get("severity")),
            )
        )
    return AlertSet(alerts=alerts)


class NWSProvider(WeatherProvider):
    """National Weather Service forecast provider.

    Example:
        ```python
        async with NWSProvider(user_agent="my-app (ops@example.org)") as provider:
            snapshot = await provider.get_snapshot(
                Coordinates(latitude=43.07625, longitude=-89.40006)
            )
        ```
    """

    name = "nws"
    base_url = "https://api.weather.gov"
    resolution_strategy = "interval"

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float = 10.0,
        alerts_timeout: float = 8.0,
        include_hourly: bool = True,
        max_attempts: int = 3,
    ):
        """Initialize NWS provider.

        Args:
            user_agent: User-Agent string (REQUIRED by NWS).
                       Should include app name and contact info.
            timeout: Request timeout in seconds
            alerts_timeout: Timeout for the alerts request
            include_hourly: Also fetch the hourly forecast
            max_attempts: Attempts per request on timeouts/network errors
        """
        super().__init__(user_agent=user_agent, timeout=timeout, max_attempts=max_attempts)
        self.alerts_timeout = alerts_timeout
        self.include_hourly = include_hourly

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/geo+json",
        }

    @staticmethod
    def _point(coordinates: Coordinates) -> str:
        # NWS redirects requests with more than 4 decimal places
        return f"{round(coordinates.latitude, 4)},{round(coordinates.longitude, 4)}"

    async def get_snapshot(self, coordinates: Coordinates) -> ForecastSnapshot:
        """Get standard and hourly forecast periods plus active alerts.

        Raises:
            ProviderError: If the points or forecast request fails
        """
        point = self._point(coordinates)
        points = self._parse_json(await self._fetch(f"{self.base_url}/points/{point}"))
        properties = points.get("properties", {})

        forecast_url = properties.get("forecast")
        forecast_zone = properties.get("forecastZone")
        if not forecast_url or not forecast_zone:
            raise ProviderError(
                "forecastUrl or forecastZone is undefined.",
                provider=self.name,
            )

        logger.info(f"Fetching NWS forecast for {point}")
        forecast = self._parse_json(await self._fetch(forecast_url))
        snapshot = self._translate_response(forecast, coordinates)

        hourly_url = properties.get("forecastHourly")
        if self.include_hourly and hourly_url:
            snapshot.hourly = await self._get_hourly(hourly_url)

        snapshot.alerts = await self.get_alerts(coordinates)
        return snapshot

    async def _get_hourly(self, url: str) -> list[ForecastPeriod] | None:
        try:
            return parse_periods(self._parse_json(await self._fetch(url)))
        except (ProviderError, httpx.HTTPError) as e:
            logger.warning(f"Hourly forecast unavailable (continuing without it): {e}")
            return None

    async def get_alerts(self, coordinates: Coordinates) -> AlertSet:
        """Get active alerts, degrading to an empty set on failure."""
        try:
            response = await self._fetch(
                f"{self.base_url}/alerts/active",
                params={"point": self._point(coordinates)},
                timeout=self.alerts_timeout,
            )
            return parse_alerts(self._parse_json(response))
        except (ProviderError, httpx.HTTPError) as e:
            logger.warning(f"Error fetching alerts (continuing anyway): {e}")
            return AlertSet()

    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
    ) -> ForecastSnapshot:
        """Translate an NWS forecast response to canonical format.

        See module docstring for detailed field mapping.
        """
        properties = response_data.get("properties", {})

        generated_at = None
        updated = properties.get("updateTime") or properties.get("updated")
        if updated:
            try:
                generated_at = datetime.fromisoformat(updated)
            except ValueError:
                generated_at = None

        return ForecastSnapshot(
            provider=self.name,
            periods=parse_periods(response_data),
            generated_at=generated_at,
        )
