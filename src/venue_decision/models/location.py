"""Location models for venue decisions."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field


# Regex for parsing lat/long coordinates: "latitude,longitude"
# Supports optional +/- prefix for both values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '43.07625,-89.40006' -> Memorial Union Terrace
            '+51.5074,-0.1278' -> London
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '43.07625,-89.40006')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
        )

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


class Location(BaseModel):
    """A request-scoped location: coordinates plus optional display labels."""

    coordinates: Coordinates = Field(..., description="Geographic coordinates")
    city: str | None = Field(default=None, description="City or town name")
    country: str | None = Field(default=None, description="Country name")

    @classmethod
    def from_coordinates(
        cls,
        latitude: float,
        longitude: float,
        city: str | None = None,
        country: str | None = None,
    ) -> Self:
        """Create a Location from latitude/longitude values."""
        return cls(
            coordinates=Coordinates(latitude=latitude, longitude=longitude),
            city=city,
            country=country,
        )

    def display_name(self) -> str:
        """Get a display name for this location."""
        if self.city and self.country:
            return f"{self.city}, {self.country}"
        if self.city:
            return self.city
        return str(self.coordinates)


class GeoLocation(BaseModel):
    """Result of an IP lookup or reverse geocode.

    `success` is False whenever the lookup failed; in that case the
    coordinates may still hold the configured default venue.
    """

    success: bool
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    city: str | None = None
    region: str | None = None
    country: str | None = None
    country_code: str | None = None
    error: str | None = None

    @property
    def coordinates(self) -> Coordinates | None:
        """Coordinates, if the lookup produced any."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def display_name(self) -> str:
        """City, region and country joined for display."""
        parts = [p for p in (self.city, self.region, self.country) if p]
        return ", ".join(parts) if parts else "Unknown Location"
