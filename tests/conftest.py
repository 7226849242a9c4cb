"""Pytest fixtures for venue decision tests.

This module provides test fixtures that ensure:
1. No external API calls are made (weather, air quality, geolocation)
2. Isolated test environment with controlled configuration
"""

import os
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("WEATHER_PROVIDER", "nws")
os.environ.setdefault("TIMEZONE", "America/Chicago")
os.environ.setdefault("USER_AGENT", "venue-decision-tests (tests@example.org)")

from venue_decision.models.location import Coordinates
from venue_decision.models.weather import (
    AirQualityReading,
    AlertSet,
    ForecastPeriod,
    ForecastSnapshot,
    WeatherAlert,
)
from venue_decision.providers.airnow import AirNowProvider
from venue_decision.providers.base import ProviderError, WeatherProvider


CHICAGO = ZoneInfo("America/Chicago")


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from venue_decision.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Stub Providers
# =============================================================================


class StubWeatherProvider(WeatherProvider):
    """Weather provider returning a fixed snapshot or raising a fixed error."""

    name = "stub"
    base_url = "https://weather.invalid"

    def __init__(
        self,
        snapshot: ForecastSnapshot | None = None,
        error: Exception | None = None,
        resolution_strategy: str = "interval",
    ):
        super().__init__()
        self.snapshot = snapshot
        self.error = error
        self.resolution_strategy = resolution_strategy
        self.calls: list[Coordinates] = []

    async def get_snapshot(self, coordinates: Coordinates) -> ForecastSnapshot:
        self.calls.append(coordinates)
        if self.error is not None:
            raise self.error
        return self.snapshot

    def _translate_response(self, response_data, coordinates) -> ForecastSnapshot:
        return self.snapshot


class StubAirQualityProvider(AirNowProvider):
    """Air quality provider returning a fixed reading or raising a fixed error."""

    def __init__(
        self,
        reading: AirQualityReading | None = None,
        error: Exception | None = None,
    ):
        super().__init__(api_key="stub")
        self.reading = reading or AirQualityReading(aqi=40, category="Good")
        self.error = error

    async def get_reading(self, coordinates: Coordinates) -> AirQualityReading:
        if self.error is not None:
            raise self.error
        return self.reading


# =============================================================================
# Forecast Fixtures
# =============================================================================


def make_period(
    start: datetime,
    hours: float = 1,
    name: str = "",
    temperature: float = 72,
    wind_speed: str = "5 mph",
    wind_gust: str | None = None,
    short_forecast: str = "Sunny",
    detailed_forecast: str = "",
    **extra,
) -> ForecastPeriod:
    """Build a forecast period starting at `start` lasting `hours`."""
    return ForecastPeriod(
        name=name or start.strftime("%H:%M"),
        start_time=start,
        end_time=start + timedelta(hours=hours),
        temperature=temperature,
        wind_speed_text=wind_speed,
        wind_gust_text=wind_gust,
        short_forecast=short_forecast,
        detailed_forecast=detailed_forecast,
        **extra,
    )


@pytest.fixture
def now() -> datetime:
    """Mid-morning on a summer day in the venue timezone."""
    return datetime(2024, 6, 15, 9, 30, tzinfo=CHICAGO)


@pytest.fixture
def sample_coordinates() -> Coordinates:
    """Memorial Union Terrace."""
    return Coordinates(latitude=43.07625, longitude=-89.40006)


@pytest.fixture
def standard_periods() -> list[ForecastPeriod]:
    """Three consecutive 6-hour standard periods starting at 06:00."""
    base = datetime(2024, 6, 15, 6, 0, tzinfo=CHICAGO)
    return [
        make_period(
            base,
            hours=6,
            name="This Morning",
            temperature=64,
            wind_speed="5 to 10 mph",
            detailed_forecast="Mostly sunny. Chance of precipitation is 10%.",
        ),
        make_period(
            base + timedelta(hours=6),
            hours=6,
            name="This Afternoon",
            temperature=78,
            wind_speed="10 to 15 mph",
            wind_gust="25 mph",
            short_forecast="Chance Showers And Thunderstorms",
            detailed_forecast="A 40% chance of precipitation. Partly sunny.",
        ),
        make_period(
            base + timedelta(hours=12),
            hours=6,
            name="Tonight",
            temperature=60,
            wind_speed="5 mph",
            detailed_forecast="Clear.",
        ),
    ]


@pytest.fixture
def hourly_periods() -> list[ForecastPeriod]:
    """Hourly periods from 10:00 to 14:00."""
    base = datetime(2024, 6, 15, 10, 0, tzinfo=CHICAGO)
    return [
        make_period(base + timedelta(hours=i), temperature=70 + i)
        for i in range(4)
    ]


@pytest.fixture
def nws_snapshot(standard_periods, hourly_periods) -> ForecastSnapshot:
    """Snapshot shaped like an NWS response."""
    return ForecastSnapshot(
        provider="nws",
        periods=standard_periods,
        hourly=hourly_periods,
        alerts=AlertSet(),
    )


@pytest.fixture
def tornado_alerts() -> AlertSet:
    """An alert set with a tornado warning in effect."""
    return AlertSet(
        alerts=[
            WeatherAlert(event="Severe Thunderstorm Watch"),
            WeatherAlert(event="Tornado Warning", severity="Extreme"),
        ]
    )


@pytest.fixture
def stub_weather_provider(nws_snapshot) -> StubWeatherProvider:
    return StubWeatherProvider(snapshot=nws_snapshot)


@pytest.fixture
def stub_air_quality_provider() -> StubAirQualityProvider:
    return StubAirQualityProvider()


@pytest.fixture
def failing_weather_provider() -> StubWeatherProvider:
    return StubWeatherProvider(
        error=ProviderError("API request failed: 500", provider="stub", status_code=500)
    )
