"""Location lookup routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from venue_decision.api.dependencies import get_geolocation_provider
from venue_decision.models.location import Coordinates, GeoLocation
from venue_decision.providers.geolocation import GeolocationProvider

router = APIRouter()


@router.get("", response_model=GeoLocation)
async def locate(
    provider: GeolocationProvider = Depends(get_geolocation_provider),
) -> GeoLocation:
    """Locate by IP, falling back to the configured venue."""
    return await provider.locate_ip()


@router.get("/reverse", response_model=GeoLocation)
async def reverse_geocode(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    provider: GeolocationProvider = Depends(get_geolocation_provider),
) -> GeoLocation:
    """Resolve coordinates to a place name."""
    return await provider.reverse(Coordinates(latitude=latitude, longitude=longitude))
