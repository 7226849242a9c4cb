"""Geolocation providers.

- IP lookup: https://ipapi.co/json/ (no key required)
- Reverse geocoding: https://nominatim.openstreetmap.org/reverse (User-Agent required)

Neither lookup raises. IP lookup failures fall back to a configured default
venue; reverse geocoding failures yield "Unknown Location".
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from venue_decision.models.location import Coordinates, GeoLocation
from venue_decision.providers.base import HTTPProvider, ProviderError

logger = logging.getLogger(__name__)


IPAPI_URL = "https://ipapi.co/json/"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"

UNKNOWN_LOCATION = "Unknown Location"


class GeolocationProvider(HTTPProvider):
    """Resolve an IP to coordinates or coordinates to a place name."""

    name = "geolocation"
    base_url = IPAPI_URL

    def __init__(
        self,
        default: GeoLocation,
        user_agent: str | None = None,
        timeout: float = 5.0,
        max_attempts: int = 1,
    ):
        """Initialize geolocation provider.

        Args:
            default: Location returned (with success=False) when IP lookup fails
            user_agent: User-Agent string (required by Nominatim)
            timeout: Request timeout in seconds
            max_attempts: Attempts per request on timeouts/network errors
        """
        super().__init__(user_agent=user_agent, timeout=timeout, max_attempts=max_attempts)
        self.default = default

    async def locate_ip(self) -> GeoLocation:
        """Locate the server's public IP, falling back to the default venue."""
        try:
            data = self._parse_json(await self._fetch(IPAPI_URL))
        except (ProviderError, httpx.HTTPError) as e:
            logger.error(f"Error fetching geolocation: {e}")
            return self.default.model_copy(update={"success": False, "error": str(e)})

        latitude = data.get("latitude") if isinstance(data, dict) else None
        longitude = data.get("longitude") if isinstance(data, dict) else None
        if latitude is None or longitude is None:
            logger.warning("Could not determine geolocation from IP, using default venue")
            return self.default.model_copy(
                update={"success": False, "error": "Could not determine location"}
            )

        try:
            location = GeoLocation(
                success=True,
                latitude=latitude,
                longitude=longitude,
                city=data.get("city"),
                region=data.get("region"),
                country=data.get("country_name"),
                country_code=data.get("country_code"),
            )
        except ValueError as e:
            logger.warning(f"Unexpected geolocation payload, using default venue: {e}")
            return self.default.model_copy(update={"success": False, "error": str(e)})

        logger.info(f"Geolocation found: {location.display_name()}")
        return location

    async def reverse(self, coordinates: Coordinates) -> GeoLocation:
        """Resolve coordinates to a city/region/country."""
        params = {
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
            "format": "json",
            "addressdetails": 1,
        }
        try:
            data = self._parse_json(
                await self._fetch(NOMINATIM_REVERSE_URL, params=params)
            )
        except (ProviderError, httpx.HTTPError) as e:
            logger.error(f"Error fetching location info: {e}")
            return GeoLocation(success=False, city=UNKNOWN_LOCATION, error=str(e))

        address: dict[str, Any] | None = data.get("address")
        if not address:
            logger.warning("Could not determine location from coordinates")
            return GeoLocation(
                success=False,
                city=UNKNOWN_LOCATION,
                error="Could not determine location",
            )

        city = (
            address.get("city")
            or address.get("town")
            or address.get("village")
            or address.get("county")
            or "Unknown"
        )
        return GeoLocation(
            success=True,
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
            city=city,
            region=address.get("state") or "",
            country=address.get("country") or "",
            country_code=(address.get("country_code") or "").upper(),
        )
