"""Signal normalization.

Upstream providers publish wind as prose ("10 to 15 mph") and precipitation
chance either buried in forecast text or not at all. These helpers turn those
signals into numbers the scorer can compare against thresholds.

## Precipitation Estimators

| Strategy | Inputs | Used when (auto) |
|----------|--------|------------------|
| cloud_humidity | condition group, cloud cover %, humidity % | period carries cloud cover and humidity |
| text | "<N>% chance of precipitation" in detailed forecast | phrase present |
| reported | provider's probability-of-precipitation field | field present |

Only one estimator contributes to a given period; signals are never blended.
"""

from __future__ import annotations

import math
import re
from enum import Enum

from venue_decision.models.weather import ForecastPeriod


NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")
PRECIPITATION_PATTERN = re.compile(r"(\d+)% chance of precipitation", re.IGNORECASE)
THUNDERSTORM_PATTERN = re.compile(r"thunderstorm", re.IGNORECASE)

# Fixed chances when it is already raining/storming
RAINING_CONDITIONS = ("Rain", "Drizzle")
RAINING_CHANCE = 90
THUNDERSTORM_CONDITION = "Thunderstorm"
THUNDERSTORM_CHANCE = 95

CLOUD_WEIGHT = 0.6
HUMIDITY_WEIGHT = 0.4
MAX_ESTIMATED_CHANCE = 95


class PrecipitationStrategy(str, Enum):
    """How a rain chance is derived from a forecast period."""

    AUTO = "auto"
    TEXT = "text"
    REPORTED = "reported"
    CLOUD_HUMIDITY = "cloud_humidity"


def parse_magnitude(text: str | None) -> float:
    """Return the largest number found in `text`, or 0 if there is none.

    Examples:
        '10 to 15 mph' -> 15.0
        '7 mph' -> 7.0
        'calm' -> 0.0
    """
    if not text:
        return 0.0
    numbers = NUMBER_PATTERN.findall(text)
    if not numbers:
        return 0.0
    return max(float(n) for n in numbers)


def extract_precipitation_chance(text: str | None) -> int:
    """Extract "<N>% chance of precipitation" from forecast prose, else 0."""
    if not text:
        return 0
    match = PRECIPITATION_PATTERN.search(text)
    if not match:
        return 0
    return int(match.group(1))


def estimate_precipitation_chance(
    condition_main: str | None,
    cloud_cover_percent: float,
    humidity_percent: float,
) -> int:
    """Estimate a rain chance from current conditions, cloud cover and humidity."""
    if condition_main in RAINING_CONDITIONS:
        return RAINING_CHANCE
    if condition_main == THUNDERSTORM_CONDITION:
        return THUNDERSTORM_CHANCE

    estimate = min(
        MAX_ESTIMATED_CHANCE,
        CLOUD_WEIGHT * cloud_cover_percent + HUMIDITY_WEIGHT * humidity_percent,
    )
    # Round half up
    return int(math.floor(estimate + 0.5))


def select_precipitation_strategy(period: ForecastPeriod) -> PrecipitationStrategy:
    """Pick the estimator matching the signals a period actually carries."""
    if period.cloud_cover_percent is not None and period.humidity_percent is not None:
        return PrecipitationStrategy.CLOUD_HUMIDITY
    if PRECIPITATION_PATTERN.search(period.detailed_forecast or ""):
        return PrecipitationStrategy.TEXT
    if period.reported_precipitation_percent is not None:
        return PrecipitationStrategy.REPORTED
    return PrecipitationStrategy.TEXT


def rain_chance_for(
    period: ForecastPeriod,
    strategy: PrecipitationStrategy = PrecipitationStrategy.AUTO,
) -> int:
    """Rain chance (0-100) for a period using the given estimator.

    A forced strategy whose inputs are missing yields 0.
    """
    if strategy == PrecipitationStrategy.AUTO:
        strategy = select_precipitation_strategy(period)

    if strategy == PrecipitationStrategy.CLOUD_HUMIDITY:
        if period.cloud_cover_percent is None or period.humidity_percent is None:
            return 0
        return estimate_precipitation_chance(
            period.condition_main,
            period.cloud_cover_percent,
            period.humidity_percent,
        )
    if strategy == PrecipitationStrategy.REPORTED:
        return period.reported_precipitation_percent or 0
    return extract_precipitation_chance(period.detailed_forecast)


def is_thunderstorm(period: ForecastPeriod) -> bool:
    """Whether the period's conditions mention a thunderstorm."""
    if period.condition_main == THUNDERSTORM_CONDITION:
        return True
    return bool(THUNDERSTORM_PATTERN.search(period.short_forecast or ""))
