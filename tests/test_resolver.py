"""Tests for forecast period resolution."""

from datetime import datetime, timedelta

import pytest

from conftest import CHICAGO, make_period
from venue_decision.decision.errors import NoForecastAvailableError
from venue_decision.decision.resolver import (
    CurrentReadingResolver,
    IntervalForecastResolver,
    find_nearest_future,
    get_resolver,
)
from venue_decision.models.weather import ForecastSnapshot


def at(hour: int, minute: int = 0, day: int = 15) -> datetime:
    return datetime(2024, 6, day, hour, minute, tzinfo=CHICAGO)


def snapshot(periods, hourly=None) -> ForecastSnapshot:
    return ForecastSnapshot(provider="test", periods=periods, hourly=hourly)


class TestIntervalForecastResolver:
    """Tests for the exact-interval strategy and its fallback ladder."""

    @pytest.fixture
    def resolver(self) -> IntervalForecastResolver:
        return IntervalForecastResolver()

    def test_hourly_preferred_over_standard(self, resolver):
        """Test an hourly period wins when both sequences contain the event."""
        hourly = [make_period(at(10), hours=1, name="10 AM")]
        standard = [make_period(at(9), hours=3, name="Morning")]

        period = resolver.resolve(snapshot(standard, hourly), at(10, 30), now=at(8))

        assert period.name == "10 AM"

    def test_standard_containment(self, resolver, standard_periods, now):
        period = resolver.resolve(snapshot(standard_periods), at(13), now)
        assert period.name == "This Afternoon"

    def test_hourly_miss_falls_through_to_standard(self, resolver, standard_periods, now):
        """Test an hourly sequence that misses the event time is skipped."""
        hourly = [make_period(at(10), hours=1, name="10 AM")]
        period = resolver.resolve(snapshot(standard_periods, hourly), at(19), now)
        assert period.name == "Tonight"

    def test_start_inclusive_end_exclusive(self, resolver, standard_periods, now):
        """Test a boundary time belongs to the period starting there."""
        period = resolver.resolve(snapshot(standard_periods), at(12), now)
        assert period.name == "This Afternoon"

    def test_first_match_in_sequence_order(self, resolver, now):
        """Test overlapping periods resolve to the earliest in sequence."""
        standard = [
            make_period(at(9), hours=4, name="First"),
            make_period(at(10), hours=4, name="Second"),
        ]
        period = resolver.resolve(snapshot(standard), at(11), now)
        assert period.name == "First"

    def test_current_time_fallback(self, resolver, standard_periods):
        """Test the period containing 'now' is used when the event matches nothing."""
        now = at(13)
        event = at(5, day=16)  # after the last period ends
        period = resolver.resolve(snapshot(standard_periods), event, now)
        assert period.name == "This Afternoon"

    def test_current_time_fallback_prefers_hourly(self, resolver, standard_periods, hourly_periods):
        now = at(11, 15)
        period = resolver.resolve(
            snapshot(standard_periods, hourly_periods), at(5, day=16), now
        )
        assert period.start_time == at(11)

    def test_nearest_future_fallback(self, resolver):
        """Test the closest not-yet-ended period by start time is chosen."""
        standard = [
            make_period(at(6), hours=2, name="Early"),  # ended
            make_period(at(14), hours=2, name="Afternoon"),
            make_period(at(18), hours=2, name="Evening"),
        ]
        now = at(10)  # between periods, contained by none
        period = resolver.resolve(snapshot(standard), at(19, 30, day=16), now)
        assert period.name == "Evening"

    def test_nearest_future_ignores_ended_periods(self, resolver):
        """Test an ended period is never chosen even if its start is closest."""
        standard = [
            make_period(at(8), hours=1, name="Ended"),
            make_period(at(20), hours=1, name="Later"),
        ]
        period = resolver.resolve(snapshot(standard), at(7), now=at(10))
        assert period.name == "Later"

    def test_nearest_future_tie_goes_to_earliest(self):
        """Test equidistant periods resolve to the earlier start."""
        before = make_period(at(12), hours=1, name="Before")
        after = make_period(at(16), hours=1, name="After")
        chosen = find_nearest_future([after, before], at(14), now=at(10))
        assert chosen.name == "Before"

    def test_first_available_fallback(self, resolver):
        """Test the first period is returned when every period has ended."""
        standard = [
            make_period(at(6), hours=1, name="Six"),
            make_period(at(7), hours=1, name="Seven"),
        ]
        period = resolver.resolve(snapshot(standard), at(22), now=at(21))
        assert period.name == "Six"

    def test_empty_standard_is_an_error(self, resolver):
        with pytest.raises(NoForecastAvailableError):
            resolver.resolve(snapshot([]), at(12), now=at(10))

    def test_empty_standard_with_matching_hourly(self, resolver):
        """Test an exact hourly match still resolves without standard periods."""
        hourly = [make_period(at(12), hours=1, name="Noon")]
        period = resolver.resolve(snapshot([], hourly), at(12, 30), now=at(10))
        assert period.name == "Noon"

    def test_resolution_is_deterministic(self, resolver, nws_snapshot, now):
        first = resolver.resolve(nws_snapshot, at(12, 45), now)
        second = resolver.resolve(nws_snapshot, at(12, 45), now)
        assert first == second


class TestCurrentReadingResolver:
    """Tests for the single-reading strategy."""

    def test_reading_becomes_current_hour(self):
        reading = make_period(at(9), name="Current Conditions", temperature=68)
        now = at(9, 40)

        period = CurrentReadingResolver().resolve(
            ForecastSnapshot(provider="openweather", current=reading),
            event_time=at(18),
            now=now,
        )

        assert period.name == "Current Conditions"
        assert period.start_time == at(9)
        assert period.end_time == at(9) + timedelta(hours=1)
        assert period.temperature == 68

    def test_missing_reading_is_an_error(self):
        with pytest.raises(NoForecastAvailableError):
            CurrentReadingResolver().resolve(
                ForecastSnapshot(provider="openweather"), at(12), at(10)
            )


class TestGetResolver:
    """Tests for strategy lookup."""

    def test_known_strategies(self):
        assert isinstance(get_resolver("interval"), IntervalForecastResolver)
        assert isinstance(get_resolver("current_reading"), CurrentReadingResolver)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown resolution strategy"):
            get_resolver("psychic")
