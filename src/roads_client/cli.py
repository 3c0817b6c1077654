"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys

import requests
from pydantic import BaseModel

from roads_client import __version__
from roads_client.cancellation import Cancelled, Context
from roads_client.config import get_settings
from roads_client.geometry import parse_path
from roads_client.roads import Client
from roads_client.roads.client import redact_secrets
from roads_client.schemas import SnapToRoadRequest, SpeedLimitsRequest, SpeedLimitUnit

#: Failures reported as ``Error: ...`` with exit code 1. Decode and signing
#: errors (pydantic.ValidationError, MissingCredentialsError) are ValueErrors.
CLIENT_ERRORS = (ValueError, requests.RequestException, Cancelled)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="roads-client",
        description="Snap GPS paths to roads and look up speed limits (Google Roads API)",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds (default: no deadline)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    snap_parser = subparsers.add_parser("snap", help="Snap a path to roads")
    snap_parser.add_argument(
        "--path",
        type=parse_path,
        required=True,
        help="Points as 'lat,lng|lat,lng|...'",
    )
    snap_parser.add_argument(
        "--interpolate",
        action="store_true",
        help="Add points following the full road geometry",
    )

    limits_parser = subparsers.add_parser("speed-limits", help="Look up speed limits")
    limits_parser.add_argument(
        "--path",
        type=parse_path,
        default=(),
        help="Points as 'lat,lng|lat,lng|...'",
    )
    limits_parser.add_argument(
        "--place-id",
        dest="place_ids",
        action="append",
        default=[],
        help="Place ID (repeatable)",
    )
    limits_parser.add_argument(
        "--units",
        type=SpeedLimitUnit,
        choices=list(SpeedLimitUnit),
        default=None,
        help="MPH or KPH (server default: KPH)",
    )

    subparsers.add_parser("info", help="Show application info")

    return parser


def configure_logging(debug: bool) -> None:
    """Set up root logging from settings (``--debug`` forces DEBUG)."""
    level = "DEBUG" if debug else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _print_model(model: BaseModel) -> None:
    print(model.model_dump_json(by_alias=True, indent=2))


def _print_error(exc: Exception) -> None:
    print(f"Error: {redact_secrets(str(exc))}", file=sys.stderr)


def _context(args: argparse.Namespace) -> Context:
    timeout = getattr(args, "timeout", None)
    return Context(timeout=timeout)


def cmd_snap(args: argparse.Namespace) -> int:
    """Handle the 'snap' command."""
    client = Client.from_settings()
    request = SnapToRoadRequest(path=args.path, interpolate=args.interpolate)
    try:
        with _context(args) as ctx:
            response = client.snap_to_road(request, ctx)
    except CLIENT_ERRORS as exc:
        _print_error(exc)
        return 1

    _print_model(response)
    return 0


def cmd_speed_limits(args: argparse.Namespace) -> int:
    """Handle the 'speed-limits' command."""
    client = Client.from_settings()
    request = SpeedLimitsRequest(path=args.path, place_ids=args.place_ids, units=args.units)
    try:
        with _context(args) as ctx:
            response = client.speed_limits(request, ctx)
    except CLIENT_ERRORS as exc:
        _print_error(exc)
        return 1

    _print_model(response)
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Base URL: {settings.base_url}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "snap": cmd_snap,
        "speed-limits": cmd_speed_limits,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
