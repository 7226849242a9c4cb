"""Errors raised by the decision engine."""

from __future__ import annotations


class DecisionError(Exception):
    """Base exception for decision engine errors."""


class InvalidEventTimeError(DecisionError, ValueError):
    """Raised when an event time is not in HH:MM format."""

    def __init__(self, value: object):
        super().__init__(
            f"Invalid or missing event time: {value!r}. Must be in HH:MM format."
        )
        self.value = value


class InvalidVoteError(DecisionError, ValueError):
    """Raised when one or more votes fall outside the allowed vocabulary."""

    def __init__(self, invalid: dict[str, object]):
        roles = ", ".join(f"{role}={value!r}" for role, value in invalid.items())
        super().__init__(f"Invalid vote options: {roles}")
        self.invalid = invalid


class NoForecastAvailableError(DecisionError):
    """Raised when there is no forecast period to resolve against."""

    def __init__(self, message: str = "No forecast data available."):
        super().__init__(message)
