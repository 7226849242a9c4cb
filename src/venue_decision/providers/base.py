"""Base provider abstractions.

This module defines the shared HTTP plumbing for upstream data providers and
the interface weather providers implement.

## Canonical Data Format

Weather providers translate their API responses into
`venue_decision.models.weather.ForecastSnapshot`:

- Interval providers (NWS) fill `periods`, optionally `hourly`, and `alerts`
- Current-reading providers (OpenWeatherMap) fill `current`

Each weather provider names the resolution strategy its data shape needs
(`resolution_strategy`), see `venue_decision.decision.resolver`.

### Canonical Units
- Temperature: Fahrenheit (°F)
- Wind: free text with mph values (e.g., "10 to 15 mph")
- Cloud cover, humidity, precipitation chance: percentage (0-100)

## Supported Providers

### National Weather Service (api.weather.gov)
- Auth: User-Agent header required (no API key)
- Key response paths: properties.forecast, properties.forecastHourly, properties.periods[]

### OpenWeatherMap (api.openweathermap.org)
- Auth: API key as `appid` query parameter
- Key response paths: main, wind, clouds, weather[0]

### AirNow (www.airnowapi.org)
- Auth: API key as `API_KEY` query parameter
- Key response path: top-level list of observations
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from venue_decision.models.location import Coordinates
from venue_decision.models.weather import ForecastSnapshot


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(ProviderError):
    """Raised when provider rate limit is exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            status_code=status_code,
        )
        self.retry_after = retry_after


class AuthenticationError(ProviderError):
    """Raised when authentication fails or credentials are missing."""

    pass


class WeatherUnavailableError(ProviderError):
    """Raised when no forecast could be obtained for a decision."""

    pass


class HTTPProvider:
    """Shared HTTP client handling for upstream providers.

    Attributes:
        name: Provider name used in errors and logs
        base_url: Base URL for the API
    """

    name: str
    base_url: str

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 3,
    ):
        """Initialize the provider.

        Args:
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            max_attempts: Attempts per request on timeouts/network errors
        """
        self.user_agent = user_agent or "venue-decision/0.1.0"
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HTTPProvider:
        """Enter async context manager."""
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Fetch data from the API with retry logic.

        Timeouts and network errors are retried with exponential backoff;
        after the last attempt the httpx exception propagates.

        Args:
            url: Full URL to fetch
            params: Query parameters
            headers: Additional headers
            timeout: Per-request timeout overriding the provider default

        Returns:
            HTTP response

        Raises:
            ProviderError: If the API answers with an error status
            RateLimitError: If rate limit is exceeded
        """
        client = self._get_client()
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            reraise=True,
        ):
            with attempt:
                response = await client.get(
                    url,
                    params=params,
                    headers=request_headers,
                    timeout=timeout if timeout is not None else self.timeout,
                )

        # Handle rate limiting
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                status_code=429,
            )

        # Handle other errors
        if response.status_code >= 400:
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    def _parse_json(self, response: httpx.Response) -> Any:
        """Decode a JSON body, converting decode failures to ProviderError."""
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                response_body=response.text,
            ) from e


class WeatherProvider(HTTPProvider, ABC):
    """Abstract base class for weather data providers.

    Example:
        ```python
        class MyProvider(WeatherProvider):
            name = "my_provider"
            base_url = "https://api.example.com"
            resolution_strategy = "interval"

            async def get_snapshot(self, coordinates):
                response = await self._fetch(...)
                return self._translate_response(response.json(), coordinates)
        ```
    """

    resolution_strategy: str = "interval"

    @abstractmethod
    async def get_snapshot(self, coordinates: Coordinates) -> ForecastSnapshot:
        """Get forecast data for a location.

        Args:
            coordinates: Location coordinates

        Returns:
            Forecast data in canonical format

        Raises:
            ProviderError: If the forecast cannot be retrieved
        """
        pass

    @abstractmethod
    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
    ) -> ForecastSnapshot:
        """Translate provider-specific response to canonical format."""
        pass
