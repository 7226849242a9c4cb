"""Upstream data providers."""

from venue_decision.providers.base import (
    AuthenticationError,
    HTTPProvider,
    ProviderError,
    RateLimitError,
    WeatherProvider,
    WeatherUnavailableError,
)
from venue_decision.providers.nws import NWSProvider
from venue_decision.providers.openweather import OpenWeatherProvider
from venue_decision.providers.airnow import AirNowProvider
from venue_decision.providers.geolocation import GeolocationProvider
from venue_decision.providers.factory import (
    create_air_quality_provider,
    create_geolocation_provider,
    create_weather_provider,
)

__all__ = [
    "AuthenticationError",
    "HTTPProvider",
    "ProviderError",
    "RateLimitError",
    "WeatherProvider",
    "WeatherUnavailableError",
    "NWSProvider",
    "OpenWeatherProvider",
    "AirNowProvider",
    "GeolocationProvider",
    "create_air_quality_provider",
    "create_geolocation_provider",
    "create_weather_provider",
]
