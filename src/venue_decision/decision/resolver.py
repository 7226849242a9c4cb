"""Forecast period resolution.

Picks the single forecast period that governs a decision for a requested
event time. Two strategies exist because providers publish two different data
shapes; they are kept distinct rather than merged.

## Interval Strategy (`interval`)

For providers publishing ordered, time-bounded periods (NWS). Each step is
only attempted if the previous one finds nothing:

1. Hourly period containing the event time (hourly precision wins)
2. Standard period containing the event time (earliest match)
3. Period containing the current time (hourly first, then standard)
4. Standard period not yet ended whose start is closest to the event time,
   ties going to the earliest start
5. First standard period
6. `NoForecastAvailableError` when there are no standard periods at all

## Current Reading Strategy (`current_reading`)

For providers publishing a single current observation (OpenWeatherMap). The
reading is treated as the forecast for the current clock hour, whatever the
event time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime, timedelta

from venue_decision.decision.errors import NoForecastAvailableError
from venue_decision.models.weather import ForecastPeriod, ForecastSnapshot


def find_containing(
    periods: Sequence[ForecastPeriod] | None,
    moment: datetime,
) -> ForecastPeriod | None:
    """Return the first period whose window contains `moment`."""
    if not periods:
        return None
    for period in periods:
        if period.contains(moment):
            return period
    return None


def find_nearest_future(
    periods: Sequence[ForecastPeriod],
    event_time: datetime,
    now: datetime,
) -> ForecastPeriod | None:
    """Return the not-yet-ended period whose start is closest to `event_time`."""
    upcoming = sorted(
        (p for p in periods if p.end_time > now),
        key=lambda p: p.start_time,
    )
    if not upcoming:
        return None
    # min() keeps the first of equal keys, so ties go to the earliest start
    return min(
        upcoming,
        key=lambda p: abs((p.start_time - event_time).total_seconds()),
    )


class ForecastResolver(ABC):
    """Selects the forecast period relevant to an event time."""

    name: str

    @abstractmethod
    def resolve(
        self,
        snapshot: ForecastSnapshot,
        event_time: datetime,
        now: datetime,
    ) -> ForecastPeriod:
        """Resolve the governing forecast period.

        Args:
            snapshot: Provider data for the venue
            event_time: Requested event start (aware)
            now: Current wall-clock time (aware)

        Returns:
            The forecast period to score

        Raises:
            NoForecastAvailableError: If the snapshot has nothing to resolve
        """
        pass


class IntervalForecastResolver(ForecastResolver):
    """Exact-interval matching with a graceful fallback ladder."""

    name = "interval"

    def resolve(
        self,
        snapshot: ForecastSnapshot,
        event_time: datetime,
        now: datetime,
    ) -> ForecastPeriod:
        standard = snapshot.periods

        period = find_containing(snapshot.hourly, event_time)
        if period is None:
            period = find_containing(standard, event_time)
        if period is None:
            period = find_containing(snapshot.hourly, now) or find_containing(
                standard, now
            )
        if period is None:
            period = find_nearest_future(standard, event_time, now)
        if period is None and standard:
            period = standard[0]
        if period is None:
            raise NoForecastAvailableError()
        return period


class CurrentReadingResolver(ForecastResolver):
    """Treat a single current reading as the current hour's forecast."""

    name = "current_reading"

    def resolve(
        self,
        snapshot: ForecastSnapshot,
        event_time: datetime,
        now: datetime,
    ) -> ForecastPeriod:
        reading = snapshot.current
        if reading is None:
            raise NoForecastAvailableError()

        hour_start = now.replace(minute=0, second=0, microsecond=0)
        return reading.model_copy(
            update={
                "start_time": hour_start,
                "end_time": hour_start + timedelta(hours=1),
            }
        )


RESOLVERS: dict[str, type[ForecastResolver]] = {
    IntervalForecastResolver.name: IntervalForecastResolver,
    CurrentReadingResolver.name: CurrentReadingResolver,
}


def get_resolver(name: str) -> ForecastResolver:
    """Get a resolver strategy by name."""
    try:
        return RESOLVERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown resolution strategy: '{name}'. "
            f"Expected one of: {', '.join(sorted(RESOLVERS))}"
        ) from None
