"""Decision engine: resolve a forecast period, normalize its signals, score it.

The engine is synchronous and performs no I/O; providers are awaited by the
caller (see `venue_decision.decision.service`) before the engine runs.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo

from venue_decision.decision.errors import InvalidEventTimeError
from venue_decision.decision.normalizer import (
    PrecipitationStrategy,
    is_thunderstorm,
    parse_magnitude,
    rain_chance_for,
)
from venue_decision.decision.resolver import ForecastResolver
from venue_decision.decision.scorer import score_suitability
from venue_decision.models.decision import WeatherDecision
from venue_decision.models.weather import (
    AirQualityReading,
    ForecastPeriod,
    ForecastSnapshot,
)


EVENT_TIME_PATTERN = re.compile(r"^(?P<hour>[01]\d|2[0-3]):(?P<minute>[0-5]\d)$")


def parse_event_time(value: object, now: datetime) -> datetime:
    """Parse an 'HH:MM' event time onto `now`'s calendar day.

    Raises:
        InvalidEventTimeError: If the value is missing or malformed
    """
    if not isinstance(value, str):
        raise InvalidEventTimeError(value)
    match = EVENT_TIME_PATTERN.match(value.strip())
    if not match:
        raise InvalidEventTimeError(value)
    return now.replace(
        hour=int(match.group("hour")),
        minute=int(match.group("minute")),
        second=0,
        microsecond=0,
    )


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


@dataclass
class PeriodSignals:
    """Numeric signals extracted from one forecast period."""

    temperature: float
    wind_speed: float
    wind_gust: float
    rain_chance: int
    thunderstorm: bool


def extract_signals(
    period: ForecastPeriod,
    strategy: PrecipitationStrategy = PrecipitationStrategy.AUTO,
) -> PeriodSignals:
    """Normalize a forecast period into scorer inputs."""
    return PeriodSignals(
        temperature=period.temperature,
        wind_speed=parse_magnitude(period.wind_speed_text),
        wind_gust=parse_magnitude(period.wind_gust_text),
        rain_chance=rain_chance_for(period, strategy),
        thunderstorm=is_thunderstorm(period),
    )


class DecisionEngine:
    """Turns provider data into a weather decision payload.

    Example:
        ```python
        engine = DecisionEngine(IntervalForecastResolver(), tz=ZoneInfo("America/Chicago"))
        decision = engine.decide(snapshot, air_quality, event_time, now)
        ```
    """

    def __init__(
        self,
        resolver: ForecastResolver,
        precipitation_strategy: PrecipitationStrategy = PrecipitationStrategy.AUTO,
        tz: tzinfo | None = None,
    ):
        """Initialize the engine.

        Args:
            resolver: Forecast resolution strategy
            precipitation_strategy: Rain chance estimator
            tz: Timezone the forecast time span is displayed in
        """
        self.resolver = resolver
        self.precipitation_strategy = precipitation_strategy
        self.tz = tz

    def decide(
        self,
        snapshot: ForecastSnapshot,
        air_quality: AirQualityReading,
        event_time: datetime,
        now: datetime,
        location: str | None = None,
        sink: Callable[[str], None] | None = None,
    ) -> WeatherDecision:
        """Resolve, normalize and score.

        Raises:
            NoForecastAvailableError: If the snapshot has no usable periods
        """
        period = self.resolver.resolve(snapshot, event_time, now)
        signals = extract_signals(period, self.precipitation_strategy)

        result = score_suitability(
            temperature=signals.temperature,
            wind_speed=signals.wind_speed,
            rain_chance=signals.rain_chance,
            thunderstorm=signals.thunderstorm,
            aqi=air_quality.aqi,
            sink=sink,
        )

        return WeatherDecision(
            thunderstorm_alert=yes_no(signals.thunderstorm),
            tornado_alert=yes_no(snapshot.alerts.severe_weather),
            temperature=signals.temperature,
            wind_speed=signals.wind_speed,
            wind_gust=signals.wind_gust,
            rain_chance=signals.rain_chance,
            aqi=air_quality.aqi,
            air_quality=air_quality.category or "Unavailable",
            recommendation=result.tier,
            final_decision=result.venue_decision,
            score=result.score,
            score_details=list(result.details),
            forecast_period=period.name,
            forecast_time=period.time_span(self.tz),
            short_forecast=period.short_forecast,
            weather_icon=period.icon,
            location=location,
        )
