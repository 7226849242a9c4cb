"""Suitability scoring for outdoor events.

Scoring is additive: every rule that fires subtracts its penalty from a score
that starts at 0. Each signal contributes at most one penalty, its most
severe tier.

| Signal | Condition | Penalty |
|--------|-----------|---------|
| Temperature | <= 58°F | -2 |
| Temperature | <= 65°F | -1 |
| Wind speed | >= 44.7 mph | -2 |
| Wind speed | >= 33.5 mph | -1 |
| Rain chance | >= 95% | -2 |
| Rain chance | >= 80% | -1 |
| Thunderstorm | active | -2 |
| AQI | >= 151 | -2 |
| AQI | >= 101 | -1 |

Wind gust is not scored. An AQI of -1 means "unavailable" and never
contributes a penalty.

## Tiers

| Score | Tier | Venue |
|-------|------|-------|
| <= -5 | Bad | Inside |
| -4 to -2 | Marginal | Depends |
| > -2 | Great | Outside |
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from venue_decision.models.decision import (
    TIER_TO_VENUE,
    RecommendationResult,
    Tier,
)
from venue_decision.models.weather import AQI_UNAVAILABLE


BAD_SCORE = -5
MARGINAL_SCORE = -2


@dataclass(frozen=True)
class PenaltyTier:
    """One threshold of a scored signal."""

    threshold: float
    penalty: int
    description: str
    at_most: bool = False  # True: fires when value <= threshold

    def applies(self, value: float) -> bool:
        if self.at_most:
            return value <= self.threshold
        return value >= self.threshold


# Most severe tier first
TEMPERATURE_TIERS = (
    PenaltyTier(58, -2, "Temperature below 58°F: -2", at_most=True),
    PenaltyTier(65, -1, "Temperature below 65°F: -1", at_most=True),
)
WIND_SPEED_TIERS = (
    PenaltyTier(44.7, -2, "Wind speed above 44.7 mph: -2"),
    PenaltyTier(33.5, -1, "Wind speed above 33.5 mph: -1"),
)
RAIN_CHANCE_TIERS = (
    PenaltyTier(95, -2, "Rain chance above 95%: -2"),
    PenaltyTier(80, -1, "Rain chance above 80%: -1"),
)
THUNDERSTORM_PENALTY = PenaltyTier(1, -2, "Thunderstorm detected: -2")
AQI_TIERS = (
    PenaltyTier(151, -2, "AQI above 151: -2"),
    PenaltyTier(101, -1, "AQI above 101: -1"),
)


def _first_applicable(
    tiers: tuple[PenaltyTier, ...], value: float
) -> PenaltyTier | None:
    for tier in tiers:
        if tier.applies(value):
            return tier
    return None


def tier_for_score(score: int) -> Tier:
    """Map a final score to its recommendation tier."""
    if score <= BAD_SCORE:
        return Tier.BAD
    if score <= MARGINAL_SCORE:
        return Tier.MARGINAL
    return Tier.GREAT


def score_suitability(
    temperature: float,
    wind_speed: float,
    rain_chance: float,
    thunderstorm: bool,
    aqi: int = AQI_UNAVAILABLE,
    sink: Callable[[str], None] | None = None,
) -> RecommendationResult:
    """Score outdoor suitability from normalized weather signals.

    Pure and deterministic: the same inputs always produce the same result.

    Args:
        temperature: Temperature in °F
        wind_speed: Sustained wind speed in mph
        rain_chance: Chance of rain (0-100)
        thunderstorm: Whether a thunderstorm is forecast
        aqi: Air quality index, or -1 when unavailable
        sink: Optional callback receiving each penalty line as it is applied

    Returns:
        RecommendationResult with score, tier, venue decision and details
    """
    applied: list[PenaltyTier] = []

    for tiers, value in (
        (TEMPERATURE_TIERS, temperature),
        (WIND_SPEED_TIERS, wind_speed),
        (RAIN_CHANCE_TIERS, rain_chance),
    ):
        tier = _first_applicable(tiers, value)
        if tier is not None:
            applied.append(tier)

    if thunderstorm:
        applied.append(THUNDERSTORM_PENALTY)

    if aqi != AQI_UNAVAILABLE:
        tier = _first_applicable(AQI_TIERS, aqi)
        if tier is not None:
            applied.append(tier)

    details: list[str] = []
    for tier in applied:
        details.append(tier.description)
        if sink is not None:
            sink(tier.description)

    score = sum(tier.penalty for tier in applied)
    rating = tier_for_score(score)

    return RecommendationResult(
        score=score,
        tier=rating,
        venue_decision=TIER_TO_VENUE[rating],
        details=tuple(details),
    )
