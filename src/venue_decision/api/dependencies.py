"""FastAPI dependencies providing upstream clients.

Each request gets its own provider instances, closed when the response is
sent. Tests override these with `app.dependency_overrides`.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends

from venue_decision.config import Settings, get_settings
from venue_decision.providers.airnow import AirNowProvider
from venue_decision.providers.base import WeatherProvider
from venue_decision.providers.factory import (
    create_air_quality_provider,
    create_geolocation_provider,
    create_weather_provider,
)
from venue_decision.providers.geolocation import GeolocationProvider


async def get_weather_provider(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[WeatherProvider, None]:
    """Weather provider selected by `WEATHER_PROVIDER`."""
    provider = create_weather_provider(settings)
    try:
        yield provider
    finally:
        await provider.aclose()


async def get_air_quality_provider(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[AirNowProvider, None]:
    """AirNow provider."""
    provider = create_air_quality_provider(settings)
    try:
        yield provider
    finally:
        await provider.aclose()


async def get_geolocation_provider(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[GeolocationProvider, None]:
    """Geolocation provider falling back to the configured venue."""
    provider = create_geolocation_provider(settings)
    try:
        yield provider
    finally:
        await provider.aclose()
