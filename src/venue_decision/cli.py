"""Command-line interface for venue decisions."""

import argparse
import asyncio
import logging
import sys

from venue_decision.config import get_settings
from venue_decision.decision.errors import DecisionError, NoForecastAvailableError
from venue_decision.log_config import configure_logging
from venue_decision.models.location import Location
from venue_decision.models.weather import AQI_UNAVAILABLE
from venue_decision.providers.base import ProviderError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UPSTREAM = 1
EXIT_INVALID = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Venue Decision - Should the outdoor event happen outside?"
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")

    # Decide command
    decide_parser = subparsers.add_parser(
        "decide", help="Fetch the forecast and recommend a venue"
    )
    decide_parser.add_argument("event_time", help="Event start time (HH:MM)")
    decide_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    decide_parser.add_argument("--lon", type=float, default=None, help="Longitude")

    # Score command
    score_parser = subparsers.add_parser(
        "score", help="Score conditions without fetching anything"
    )
    score_parser.add_argument("--temperature", type=float, required=True, help="°F")
    score_parser.add_argument("--wind-speed", type=float, default=0.0, help="mph")
    score_parser.add_argument("--rain-chance", type=float, default=0.0, help="0-100")
    score_parser.add_argument("--thunderstorm", action="store_true")
    score_parser.add_argument(
        "--aqi", type=int, default=AQI_UNAVAILABLE, help="AQI (-1 = unavailable)"
    )

    # Vote command
    vote_parser = subparsers.add_parser("vote", help="Aggregate stakeholder votes")
    vote_parser.add_argument("dining", help="Outside, Inside or Abstain")
    vote_parser.add_argument("program", help="Outside, Inside or Abstain")
    vote_parser.add_argument("facilities", help="Outside, Inside or Abstain")

    return parser


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from venue_decision.api import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(),
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )
    return EXIT_OK


async def _decide(args: argparse.Namespace) -> str:
    from venue_decision.decision.service import decide_weather
    from venue_decision.providers.factory import (
        create_air_quality_provider,
        create_weather_provider,
    )

    settings = get_settings()
    if args.lat is not None and args.lon is not None:
        location = Location.from_coordinates(args.lat, args.lon)
    else:
        location = Location.from_coordinates(
            settings.default_latitude,
            settings.default_longitude,
            city=settings.default_city,
            country=settings.default_country,
        )

    async with create_weather_provider(settings) as weather, create_air_quality_provider(
        settings
    ) as air_quality:
        decision = await decide_weather(
            args.event_time, location, weather, air_quality, settings
        )
    return decision.model_dump_json(indent=2)


def _cmd_decide(args: argparse.Namespace) -> int:
    try:
        print(asyncio.run(_decide(args)))
    except NoForecastAvailableError as e:
        logger.error(str(e))
        return EXIT_UPSTREAM
    except DecisionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID
    except ProviderError as e:
        logger.error(str(e))
        return EXIT_UPSTREAM
    return EXIT_OK


def _cmd_score(args: argparse.Namespace) -> int:
    from venue_decision.decision.scorer import score_suitability

    result = score_suitability(
        temperature=args.temperature,
        wind_speed=args.wind_speed,
        rain_chance=args.rain_chance,
        thunderstorm=args.thunderstorm,
        aqi=args.aqi,
    )
    print(result.model_dump_json(indent=2))
    return EXIT_OK


def _cmd_vote(args: argparse.Namespace) -> int:
    from venue_decision.decision.service import decide_votes

    try:
        tally = decide_votes(args.dining, args.program, args.facilities)
    except DecisionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID
    print(tally.model_dump_json(indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    configure_logging(get_settings().log_level)

    if args.command == "serve":
        return _cmd_serve(args)
    elif args.command == "decide":
        return _cmd_decide(args)
    elif args.command == "score":
        return _cmd_score(args)
    elif args.command == "vote":
        return _cmd_vote(args)

    parser.print_help()
    return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
