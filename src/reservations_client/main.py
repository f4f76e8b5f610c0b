"""
Command-line entry point for the reservations client.

Runs a single backend operation and prints the JSON result, which is handy
for checking a backend deployment by hand.

Usage:
    reservations-client list-reservations --date 2023-01-01
    reservations-client read-reservation 12
    reservations-client list-tables
    reservations-client finish-table 5
    reservations-client set-status 12 cancelled
"""
import argparse
import asyncio
import json
import sys
from typing import Any, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from .config import Settings, get_settings
from .error_handling import APIError, ReservationsClientError, configure_logging
from .services import ReservationsAPI


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="reservations-client",
        description="Call the restaurant reservations backend"
    )
    parser.add_argument(
        "--base-url",
        help="Backend base URL (defaults to API_BASE_URL)"
    )
    parser.add_argument(
        "--log-level",
        help="Log level (defaults to LOG_LEVEL)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list-reservations", help="List reservations")
    list_parser.add_argument("--date", help="Reservation date (YYYY-MM-DD)")
    list_parser.add_argument("--mobile-number", help="Phone number to search for")

    read_parser = subparsers.add_parser("read-reservation", help="Show one reservation")
    read_parser.add_argument("reservation_id")

    subparsers.add_parser("list-tables", help="List tables")

    finish_parser = subparsers.add_parser("finish-table", help="Free a seated table")
    finish_parser.add_argument("table_id")

    status_parser = subparsers.add_parser("set-status", help="Change a reservation's status")
    status_parser.add_argument("reservation_id")
    status_parser.add_argument("status")

    return parser


async def run_command(api: ReservationsAPI, args: argparse.Namespace) -> Any:
    """Dispatch the parsed command to the matching client operation."""
    if args.command == "list-reservations":
        if args.mobile_number:
            return await api.search_by_phone(args.mobile_number)
        params = {"date": args.date} if args.date else {}
        return await api.list_reservations(params)
    elif args.command == "read-reservation":
        return await api.read_reservation(args.reservation_id)
    elif args.command == "list-tables":
        return await api.list_tables()
    elif args.command == "finish-table":
        return await api.finish_table({"table_id": args.table_id})
    elif args.command == "set-status":
        return await api.update_reservation_status(args.reservation_id, args.status)
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace, settings: Settings) -> Any:
    if args.base_url:
        settings = settings.model_copy(update={"api_base_url": args.base_url.rstrip("/")})

    async with ReservationsAPI(settings) as api:
        return await run_command(api, args)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the command-line client.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(log_level=args.log_level or "INFO", format_type="simple")
        logger.error(f"Invalid configuration: {e}")
        return 2

    configure_logging(
        log_level=args.log_level or settings.log_level,
        format_type="simple"
    )

    try:
        result = asyncio.run(_run(args, settings))
        print(json.dumps(result, indent=2, default=str))
        return 0

    except APIError as e:
        logger.error(f"Backend rejected the request: {e.message}")
        return 1

    except ReservationsClientError as e:
        logger.error(f"Request not sent: {e.message}")
        return 1

    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Request to the backend failed: {e}")
        return 2

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
