"""FastAPI application and routes.

This module provides the REST API for the venue decision service.

## API Structure

- POST /api/weather/decision - Weather suitability and venue recommendation
- POST /api/votes - Stakeholder vote aggregation
- GET /api/location - IP geolocation (falls back to the configured venue)
- GET /api/location/reverse - Reverse geocoding
- GET /health - Health check

## Errors

- 400: malformed event time or vote values (`{"error": ...}`)
- 502: weather provider unavailable
- 503: provider returned no forecast periods
"""

from venue_decision.api.app import create_app

__all__ = ["create_app"]
