"""Request-level orchestration.

Fetches provider data for one request and hands it to the decision engine.
Forecast failures are fatal for the request; air quality failures degrade to
the unavailable sentinel so scoring proceeds without the AQI term.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

import httpx

from venue_decision.config import Settings
from venue_decision.decision.engine import DecisionEngine, parse_event_time
from venue_decision.decision.normalizer import PrecipitationStrategy
from venue_decision.decision.resolver import get_resolver
from venue_decision.decision.votes import aggregate_votes
from venue_decision.models.decision import VoteTally, WeatherDecision
from venue_decision.models.location import Coordinates, Location
from venue_decision.models.weather import AirQualityReading, ForecastSnapshot
from venue_decision.providers.airnow import AirNowProvider, reading_for_error
from venue_decision.providers.base import (
    ProviderError,
    WeatherProvider,
    WeatherUnavailableError,
)

logger = logging.getLogger(__name__)


async def fetch_snapshot(
    provider: WeatherProvider,
    coordinates: Coordinates,
) -> ForecastSnapshot:
    """Fetch forecast data, surfacing any failure as WeatherUnavailableError."""
    try:
        return await provider.get_snapshot(coordinates)
    except ProviderError as e:
        logger.error(f"Error fetching weather data: {e}")
        raise WeatherUnavailableError(
            f"Weather service unavailable: {e}",
            provider=e.provider,
            status_code=e.status_code,
        ) from e
    except httpx.HTTPError as e:
        logger.error(f"Error fetching weather data: {e}")
        raise WeatherUnavailableError(
            "Network timeout while connecting to weather service. Please try again later.",
            provider=provider.name,
        ) from e


async def fetch_air_quality(
    provider: AirNowProvider,
    coordinates: Coordinates,
) -> AirQualityReading:
    """Fetch the AQI, degrading any failure to the unavailable sentinel."""
    try:
        return await provider.get_reading(coordinates)
    except (ProviderError, httpx.HTTPError) as e:
        logger.warning(f"Error fetching AQI data (continuing without it): {e}")
        return reading_for_error(e)


def build_engine(provider: WeatherProvider, settings: Settings) -> DecisionEngine:
    """Engine matching the provider's data shape and the configured estimator."""
    return DecisionEngine(
        resolver=get_resolver(provider.resolution_strategy),
        precipitation_strategy=PrecipitationStrategy(settings.precipitation_strategy),
        tz=settings.tzinfo,
    )


async def decide_weather(
    event_time: object,
    location: Location,
    weather_provider: WeatherProvider,
    air_quality_provider: AirNowProvider,
    settings: Settings,
    now: datetime | None = None,
) -> WeatherDecision:
    """Produce the weather decision for an event time at a location.

    Args:
        event_time: Event start as 'HH:MM' on today's date
        location: Request-scoped venue location
        weather_provider: Forecast source
        air_quality_provider: AQI source
        settings: Application settings
        now: Current time (defaults to the wall clock in the venue timezone)

    Raises:
        InvalidEventTimeError: If the event time is malformed
        WeatherUnavailableError: If the forecast cannot be fetched
        NoForecastAvailableError: If the forecast holds no periods
    """
    now = now or datetime.now(settings.tzinfo)
    event_start = parse_event_time(event_time, now)
    logger.info(f"Parsed event start time: {event_start.isoformat()}")

    snapshot, air_quality = await asyncio.gather(
        fetch_snapshot(weather_provider, location.coordinates),
        fetch_air_quality(air_quality_provider, location.coordinates),
    )
    logger.info(
        f"Fetched {len(snapshot.periods)} periods, "
        f"{len(snapshot.hourly or [])} hourly periods and "
        f"{len(snapshot.alerts)} alerts from {snapshot.provider}; AQI {air_quality.aqi}"
    )

    engine = build_engine(weather_provider, settings)
    decision = engine.decide(
        snapshot,
        air_quality,
        event_start,
        now,
        location=location.display_name() if location.city else None,
    )
    logger.info(
        f"Score: {decision.score}, Details: {', '.join(decision.score_details)}"
    )
    logger.info(
        f"Selected forecast period {decision.forecast_period!r}: "
        f"{decision.recommendation.value} / {decision.final_decision.value}"
    )
    return decision


def decide_votes(
    dining_vote: object,
    program_vote: object,
    facilities_vote: object,
) -> VoteTally:
    """Aggregate the stakeholder votes.

    Raises:
        InvalidVoteError: If any vote is not Outside, Inside or Abstain
    """
    tally = aggregate_votes(dining_vote, program_vote, facilities_vote)
    logger.info(
        f"Final decision calculated: {tally.final_decision.value} "
        f"(dining={tally.dining_vote.value}, program={tally.program_vote.value}, "
        f"facilities={tally.facilities_vote.value})"
    )
    return tally
