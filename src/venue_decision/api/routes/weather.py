"""Weather decision routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from venue_decision.api.dependencies import (
    get_air_quality_provider,
    get_weather_provider,
)
from venue_decision.config import Settings, get_settings
from venue_decision.decision.service import decide_weather
from venue_decision.models.decision import WeatherDecision
from venue_decision.models.location import Location
from venue_decision.providers.airnow import AirNowProvider
from venue_decision.providers.base import WeatherProvider

router = APIRouter()


class WeatherDecisionRequest(BaseModel):
    """Weather decision request.

    Coordinates are optional; the configured venue is used when either is
    missing.
    """

    event_time: str | None = Field(default=None, description="Event start, HH:MM")
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    city: str | None = None
    country: str | None = None


def request_location(data: WeatherDecisionRequest, settings: Settings) -> Location:
    """Location for this request only."""
    if data.latitude is not None and data.longitude is not None:
        return Location.from_coordinates(
            data.latitude, data.longitude, city=data.city, country=data.country
        )
    return Location.from_coordinates(
        settings.default_latitude,
        settings.default_longitude,
        city=settings.default_city,
        country=settings.default_country,
    )


@router.post("/decision", response_model=WeatherDecision)
async def weather_decision(
    data: WeatherDecisionRequest,
    settings: Settings = Depends(get_settings),
    weather_provider: WeatherProvider = Depends(get_weather_provider),
    air_quality_provider: AirNowProvider = Depends(get_air_quality_provider),
) -> WeatherDecision:
    """Score the forecast for an event time and recommend a venue."""
    return await decide_weather(
        data.event_time,
        request_location(data, settings),
        weather_provider,
        air_quality_provider,
        settings,
    )
