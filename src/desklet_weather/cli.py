"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from desklet_weather import __version__
from desklet_weather.config import get_settings
from desklet_weather.drivers import DRIVERS
from desklet_weather.flows.refresh import refresh_weather, store


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="desklet-weather",
        description="Normalized current conditions and forecasts from public weather services",
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
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("providers", help="List available weather providers")
    subparsers.add_parser("info", help="Show application info")

    # 'refresh' command - fetch one provider and store the record
    refresh_parser = subparsers.add_parser("refresh", help="Fetch weather and store the record")
    refresh_parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="Provider key (default: provider from settings)",
    )
    refresh_parser.add_argument(
        "--station",
        type=str,
        default=None,
        help="Location as 'lat,lon' or a provider location id",
    )
    refresh_parser.add_argument("--api-key", type=str, default=None, help="Provider API key")
    refresh_parser.add_argument(
        "--language",
        type=str,
        default=None,
        help="Locale for condition text, e.g. de_DE",
    )
    refresh_parser.add_argument(
        "--force",
        action="store_true",
        help="Fetch even if the stored snapshot is still fresh",
    )

    # 'show' command - print the last stored record
    show_parser = subparsers.add_parser("show", help="Show the last stored record")
    show_parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="Provider key (default: provider from settings)",
    )
    show_parser.add_argument("--json", action="store_true", help="Print the raw record as JSON")

    return parser


def cmd_providers(_args: argparse.Namespace) -> int:
    """Handle the 'providers' command."""
    for key, driver_cls in sorted(DRIVERS.items()):
        info = driver_cls.info
        key_note = " (API key)" if info.needs_api_key else ""
        print(f"{key:<10} {info.display_name}, {info.max_days} days{key_note}")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Provider: {settings.provider}")
    print(f"Station: {settings.station}")
    print(f"Data directory: {settings.data_dir}")
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: run the refresh flow for one provider."""
    provider = (args.provider or get_settings().provider).lower()
    if provider not in DRIVERS:
        print(
            f"Error: unknown provider {provider!r} (choose from {', '.join(sorted(DRIVERS))})",
            file=sys.stderr,
        )
        return 1

    summary = refresh_weather(
        provider=provider,
        station=args.station,
        api_key=args.api_key,
        language=args.language,
        force=args.force,
    )
    if not summary["ok"]:
        return 1
    print("Done.")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handle the 'show' command: print the last stored record."""
    provider = (args.provider or get_settings().provider).lower()
    record = store.load_record(provider)
    if record is None:
        print(
            f"No stored {provider} record. Run 'desklet-weather refresh' first.",
            file=sys.stderr,
        )
        return 1

    if args.json:
        print(json.dumps(record.model_dump(mode="json"), indent=2))
        return 0

    loc = record.location
    place = ", ".join(p for p in (loc.city, loc.region, loc.country) if p)
    print(f"{place or 'Unknown location'} ({provider})")
    cc = record.current
    if cc.has_temperature:
        print(f"  Now: {cc.temperature:g}°C, {cc.condition_text}")
    for day in record.days:
        if not day.day:
            continue
        high = f"{day.maximum_temperature:g}" if day.maximum_temperature is not None else "-"
        low = f"{day.minimum_temperature:g}" if day.minimum_temperature is not None else "-"
        print(f"  {day.day}: {high}/{low}°C {day.condition_text}")
    if record.status.last_error:
        print(f"  Last error: {record.status.last_error}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    level = logging.DEBUG if args.debug or settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "providers": cmd_providers,
        "info": cmd_info,
        "refresh": cmd_refresh,
        "show": cmd_show,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
