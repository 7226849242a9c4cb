"""Domain models for venue decisions."""

from venue_decision.models.location import Coordinates, GeoLocation, Location
from venue_decision.models.weather import (
    AQI_UNAVAILABLE,
    AirQualityReading,
    AlertSet,
    ForecastPeriod,
    ForecastSnapshot,
    WeatherAlert,
)
from venue_decision.models.decision import (
    RecommendationResult,
    Tier,
    VenueDecision,
    Vote,
    VoteTally,
    WeatherDecision,
)

__all__ = [
    # Location
    "Coordinates",
    "GeoLocation",
    "Location",
    # Weather
    "AQI_UNAVAILABLE",
    "AirQualityReading",
    "AlertSet",
    "ForecastPeriod",
    "ForecastSnapshot",
    "WeatherAlert",
    # Decision
    "RecommendationResult",
    "Tier",
    "VenueDecision",
    "Vote",
    "VoteTally",
    "WeatherDecision",
]
