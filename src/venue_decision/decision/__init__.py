"""Decision engine: forecast resolution, suitability scoring and vote aggregation."""

from venue_decision.decision.errors import (
    DecisionError,
    InvalidEventTimeError,
    InvalidVoteError,
    NoForecastAvailableError,
)
from venue_decision.decision.normalizer import (
    PrecipitationStrategy,
    estimate_precipitation_chance,
    extract_precipitation_chance,
    parse_magnitude,
)
from venue_decision.decision.resolver import (
    CurrentReadingResolver,
    ForecastResolver,
    IntervalForecastResolver,
    get_resolver,
)
from venue_decision.decision.scorer import score_suitability, tier_for_score
from venue_decision.decision.votes import aggregate_votes
from venue_decision.decision.engine import DecisionEngine, parse_event_time

__all__ = [
    "DecisionError",
    "InvalidEventTimeError",
    "InvalidVoteError",
    "NoForecastAvailableError",
    "PrecipitationStrategy",
    "estimate_precipitation_chance",
    "extract_precipitation_chance",
    "parse_magnitude",
    "CurrentReadingResolver",
    "ForecastResolver",
    "IntervalForecastResolver",
    "get_resolver",
    "score_suitability",
    "tier_for_score",
    "aggregate_votes",
    "DecisionEngine",
    "parse_event_time",
]
