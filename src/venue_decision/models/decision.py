"""Decision models: scorer output, votes and response payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Tier(str, Enum):
    """Qualitative recommendation derived from the numeric score."""

    GREAT = "Great"
    MARGINAL = "Marginal"
    BAD = "Bad"


class VenueDecision(str, Enum):
    """Where the event should be held."""

    OUTSIDE = "Outside"
    INSIDE = "Inside"
    DEPENDS = "Depends"


class Vote(str, Enum):
    """A single stakeholder vote."""

    OUTSIDE = "Outside"
    INSIDE = "Inside"
    ABSTAIN = "Abstain"


# Venue decision implied by each tier
TIER_TO_VENUE: dict[Tier, VenueDecision] = {
    Tier.BAD: VenueDecision.INSIDE,
    Tier.GREAT: VenueDecision.OUTSIDE,
    Tier.MARGINAL: VenueDecision.DEPENDS,
}


class RecommendationResult(BaseModel):
    """Output of the suitability scorer."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., le=0, description="Sum of penalties (0 = no penalties)")
    tier: Tier
    venue_decision: VenueDecision
    details: tuple[str, ...] = Field(
        default=(), description="One line per penalty, in rule order"
    )


class VoteTally(BaseModel):
    """The three stakeholder votes and the majority outcome."""

    dining_vote: Vote
    program_vote: Vote
    facilities_vote: Vote
    final_decision: VenueDecision


class WeatherDecision(BaseModel):
    """Weather decision payload returned to the display surface."""

    thunderstorm_alert: str = Field(..., description="'Yes' or 'No'")
    tornado_alert: str = Field(..., description="'Yes' or 'No'")
    temperature: float
    wind_speed: float
    wind_gust: float
    rain_chance: int
    aqi: int
    air_quality: str = Field(..., description="AQI category, or 'Unavailable'")
    recommendation: Tier
    final_decision: VenueDecision
    score: int
    score_details: list[str] = Field(default_factory=list)
    forecast_period: str
    forecast_time: str
    short_forecast: str = ""
    weather_icon: str | None = None
    location: str | None = None
