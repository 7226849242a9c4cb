"""Build providers from application settings."""

from __future__ import annotations

from venue_decision.config import Settings
from venue_decision.models.location import GeoLocation
from venue_decision.providers.airnow import AirNowProvider
from venue_decision.providers.base import WeatherProvider
from venue_decision.providers.geolocation import GeolocationProvider
from venue_decision.providers.nws import NWSProvider
from venue_decision.providers.openweather import OpenWeatherProvider


def create_weather_provider(settings: Settings) -> WeatherProvider:
    """Create the configured weather provider."""
    if settings.weather_provider == "openweather":
        return OpenWeatherProvider(
            api_key=settings.openweather_api_key,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout_seconds,
        )
    return NWSProvider(
        user_agent=settings.user_agent,
        timeout=settings.request_timeout_seconds,
        alerts_timeout=settings.alerts_timeout_seconds,
    )


def create_air_quality_provider(settings: Settings) -> AirNowProvider:
    """Create the AirNow provider (unavailable readings without a key)."""
    return AirNowProvider(
        api_key=settings.airnow_api_key,
        distance_miles=settings.airnow_search_radius_miles,
        user_agent=settings.user_agent,
        timeout=settings.alerts_timeout_seconds,
    )


def default_geolocation(settings: Settings) -> GeoLocation:
    """The documented fallback location: the configured venue."""
    return GeoLocation(
        success=False,
        latitude=settings.default_latitude,
        longitude=settings.default_longitude,
        city=settings.default_city,
        region=settings.default_region,
        country=settings.default_country,
        country_code=settings.default_country_code,
    )


def create_geolocation_provider(settings: Settings) -> GeolocationProvider:
    """Create the geolocation provider with the venue as its fallback."""
    return GeolocationProvider(
        default=default_geolocation(settings),
        user_agent=settings.user_agent,
        timeout=settings.geolocation_timeout_seconds,
    )
