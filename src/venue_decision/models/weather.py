"""Forecast, alert and air-quality models.

All providers translate their payloads into these models. Units follow the
National Weather Service conventions the scoring thresholds are written in:

- Temperature: Fahrenheit (°F)
- Wind speed and gust: free text as published ("10 to 15 mph"), normalized later
- Cloud cover, humidity, precipitation chance: percentage (0-100)
- Air quality: US EPA AQI, with -1 meaning "unavailable"
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Sentinel AQI value meaning "no measurement available"
AQI_UNAVAILABLE = -1

TIME_SPAN_FORMAT = "%b %d, %Y %I:%M %p"


class ForecastPeriod(BaseModel):
    """A named, time-bounded forecast window.

    Immutable once built by a provider adapter; consumed read-only by the
    resolver and scorer.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Period name (e.g., 'This Afternoon')")
    start_time: datetime = Field(..., description="Start of validity window (aware)")
    end_time: datetime = Field(..., description="End of validity window, exclusive")
    temperature: float = Field(..., description="Temperature in °F")
    wind_speed_text: str = Field(default="", description="Wind speed as published")
    wind_gust_text: str | None = Field(default=None, description="Wind gust as published")
    short_forecast: str = Field(default="", description="Short condition summary")
    detailed_forecast: str = Field(default="", description="Forecast prose")
    icon: str | None = Field(default=None, description="Provider icon code or URL")

    # Optional signals used by alternate precipitation estimators
    reported_precipitation_percent: int | None = Field(
        default=None, ge=0, le=100, description="Provider-reported precipitation chance"
    )
    cloud_cover_percent: float | None = Field(default=None, ge=0, le=100)
    humidity_percent: float | None = Field(default=None, ge=0, le=100)
    condition_main: str | None = Field(
        default=None, description="Condition group (e.g., 'Rain', 'Thunderstorm')"
    )

    @model_validator(mode="after")
    def validate_window(self) -> Self:
        """Ensure the validity window is non-empty."""
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Forecast period must start before it ends: "
                f"{self.start_time.isoformat()} >= {self.end_time.isoformat()}"
            )
        return self

    def contains(self, moment: datetime) -> bool:
        """Check if `moment` falls in [start_time, end_time)."""
        return self.start_time <= moment < self.end_time

    def time_span(self, tz: tzinfo | None = None) -> str:
        """Human-readable validity window, optionally converted to `tz`."""
        start = self.start_time.astimezone(tz) if tz else self.start_time
        end = self.end_time.astimezone(tz) if tz else self.end_time
        return f"{start.strftime(TIME_SPAN_FORMAT)} to {end.strftime(TIME_SPAN_FORMAT)}"


class WeatherAlert(BaseModel):
    """An active weather alert."""

    event: str = Field(..., description="Alert classification (e.g., 'Tornado Warning')")
    headline: str | None = None
    severity: str | None = None


class AlertSet(BaseModel):
    """Active alerts for a point; may be empty."""

    alerts: list[WeatherAlert] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.alerts)

    def has_event(self, keyword: str) -> bool:
        """Check if any alert classification contains `keyword` (case-insensitive)."""
        keyword = keyword.lower()
        return any(keyword in alert.event.lower() for alert in self.alerts)

    @property
    def severe_weather(self) -> bool:
        """Whether a tornado-class alert is in effect."""
        return self.has_event("tornado")


class AirQualityReading(BaseModel):
    """Air quality index reading, or the unavailable sentinel."""

    aqi: int = Field(..., ge=AQI_UNAVAILABLE, description="AQI, or -1 when unavailable")
    category: str = Field(default="", description="Category text (e.g., 'Good')")

    @classmethod
    def unavailable(cls, reason: str = "Unavailable") -> Self:
        """Build the sentinel reading with a human-readable reason."""
        return cls(aqi=AQI_UNAVAILABLE, category=reason)

    @property
    def is_available(self) -> bool:
        """Whether `aqi` is a real index value."""
        return self.aqi != AQI_UNAVAILABLE


class ForecastSnapshot(BaseModel):
    """Everything a weather provider returned for one point.

    Interval providers fill `periods` (and optionally `hourly`); current-reading
    providers fill `current`.
    """

    provider: str
    periods: list[ForecastPeriod] = Field(default_factory=list)
    hourly: list[ForecastPeriod] | None = None
    current: ForecastPeriod | None = None
    alerts: AlertSet = Field(default_factory=AlertSet)
    generated_at: datetime | None = None
