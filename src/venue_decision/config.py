"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
API keys should be provided via environment variables, not config files.

## Optional Environment Variables

- WEATHER_PROVIDER: `nws` (default) or `openweather`
- USER_AGENT: User-Agent sent to the National Weather Service (required by its TOS)
- AIRNOW_API_KEY: AirNow API key; without it air quality is reported as unavailable
- OPENWEATHER_API_KEY: OpenWeatherMap API key (required when WEATHER_PROVIDER=openweather)
- TIMEZONE: IANA timezone that event times are interpreted in
- PRECIPITATION_STRATEGY: `auto`, `text`, `reported` or `cloud_humidity`
- LOG_LEVEL: Logging level (default: INFO)

## Example .env file

```
USER_AGENT=Performance Weather Decision System (ops@example.org)
AIRNOW_API_KEY=your-airnow-key
TIMEZONE=America/Chicago
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Venue Decision Service"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="CORS allowed origins",
    )

    # Venue (Memorial Union Terrace)
    default_latitude: float = Field(default=43.07625, ge=-90, le=90)
    default_longitude: float = Field(default=-89.40006, ge=-180, le=180)
    default_city: str = "Madison"
    default_region: str = "Wisconsin"
    default_country: str = "United States"
    default_country_code: str = "US"
    timezone: str = Field(
        default="America/Chicago",
        description="IANA timezone that event times are interpreted in",
    )

    # Weather providers
    weather_provider: Literal["nws", "openweather"] = "nws"
    user_agent: str = Field(
        default="Performance Weather Decision System (mubms@wisc.edu)",
        description="User-Agent for the National Weather Service API (required)",
    )
    openweather_api_key: str | None = None
    airnow_api_key: str | None = None
    airnow_search_radius_miles: int = Field(default=25, ge=1, le=100)

    # Timeouts (seconds)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    alerts_timeout_seconds: float = Field(default=8.0, gt=0)
    geolocation_timeout_seconds: float = Field(default=5.0, gt=0)

    # Decision
    precipitation_strategy: Literal["auto", "text", "reported", "cloud_humidity"] = "auto"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject timezone names the zoneinfo database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Timezone object for the configured venue."""
        return ZoneInfo(self.timezone)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def airnow_configured(self) -> bool:
        """Check if an AirNow API key is configured."""
        return bool(self.airnow_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
