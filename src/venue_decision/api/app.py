"""FastAPI application factory.

Creates and configures the FastAPI application with all routes and middleware.

## Usage

```python
from venue_decision.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3000)
```

## Configuration

The app is configured via environment variables. See `venue_decision.config`
for available settings.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from venue_decision.config import get_settings
from venue_decision.decision.errors import (
    InvalidEventTimeError,
    InvalidVoteError,
    NoForecastAvailableError,
)
from venue_decision.log_config import configure_logging
from venue_decision.providers.base import WeatherUnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(
        f"Weather provider: {settings.weather_provider}, "
        f"AirNow configured: {settings.airnow_configured}"
    )

    yield

    logger.info("Shutting down")


async def invalid_event_time_handler(
    request: Request, exc: InvalidEventTimeError
) -> JSONResponse:
    logger.error(str(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


async def invalid_vote_handler(request: Request, exc: InvalidVoteError) -> JSONResponse:
    logger.error(f"Invalid votes detected: {exc.invalid}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid vote options.", "detail": exc.invalid},
    )


async def weather_unavailable_handler(
    request: Request, exc: WeatherUnavailableError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": str(exc)},
    )


async def no_forecast_handler(
    request: Request, exc: NoForecastAvailableError
) -> JSONResponse:
    logger.error(str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Outdoor event venue decisions from weather, air quality and votes",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidEventTimeError, invalid_event_time_handler)
    app.add_exception_handler(InvalidVoteError, invalid_vote_handler)
    app.add_exception_handler(WeatherUnavailableError, weather_unavailable_handler)
    app.add_exception_handler(NoForecastAvailableError, no_forecast_handler)

    # Include routers
    from venue_decision.api.routes import location, votes, weather

    app.include_router(weather.router, prefix="/api/weather", tags=["Weather"])
    app.include_router(votes.router, prefix="/api/votes", tags=["Votes"])
    app.include_router(location.router, prefix="/api/location", tags=["Location"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
