"""Bluse history CLI entry points.
This module exposes lookup commands for target and antenna history.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence

from core.config import BluseConfig
from core.constants import (
    DEFAULT_ANTENNAS_MAX_DISTANCE,
    DEFAULT_TARGET_MAX_DISTANCE,
    LABEL_LENGTH,
)
from core.errors import BluseError
from core.timestamp_label import parse_label
from store.history_sdk import HistoryClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="bluse-history", description="Bluse history lookups")
    parser.add_argument("--redis-host", help="Override BLUSE_REDIS_HOST for this command")
    parser.add_argument("--redis-port", type=int, help="Override BLUSE_REDIS_PORT for this command")
    parser.add_argument("--redis-db", type=int, help="Override BLUSE_REDIS_DB for this command")
    parser.add_argument("--subarray", help="Override BLUSE_SUBARRAY for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_lookup_command(
        subparsers, "target", "Print the raw target record", DEFAULT_TARGET_MAX_DISTANCE
    )
    _add_lookup_command(
        subparsers, "radec", "Print target name, RA and Dec in degrees", DEFAULT_TARGET_MAX_DISTANCE
    )
    _add_lookup_command(
        subparsers, "antennas", "Print the antenna list as JSON", DEFAULT_ANTENNAS_MAX_DISTANCE
    )
    _add_labels_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the history CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args)
        if args.command == "target":
            return _run_target_command(client, args)
        if args.command == "radec":
            return _run_radec_command(client, args)
        if args.command == "antennas":
            return _run_antennas_command(client, args)
        return _run_labels_command(client, args)
    except BluseError as error:
        print(f"error={error}", file=sys.stderr)
        return 1


def parse_instant(value: str) -> datetime:
    """Parse a ``--time`` argument.

    Accepts ISO-8601 strings and history labels. Naive values are UTC.

    Args:
        value: Raw argument value.

    Returns:
        Parsed datetime.

    Raises:
        argparse.ArgumentTypeError: If the value matches neither format.
    """
    if len(value) == LABEL_LENGTH and value.endswith("Z") and "-" not in value:
        try:
            return parse_label(value)
        except BluseError as error:
            raise argparse.ArgumentTypeError(str(error)) from error
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"Invalid time '{value}': expected ISO-8601 or yyyymmddTHHMMSS.sssZ."
        ) from error
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _build_client(args: argparse.Namespace) -> HistoryClient:
    """Build SDK client with optional connection overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    config = BluseConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.redis_host:
        overrides["redis_host"] = args.redis_host
    if args.redis_port is not None:
        overrides["redis_port"] = args.redis_port
    if args.redis_db is not None:
        overrides["redis_db"] = args.redis_db
    if args.subarray:
        overrides["subarray"] = args.subarray
    return HistoryClient(replace(config, **overrides))


def _run_target_command(client: HistoryClient, args: argparse.Namespace) -> int:
    """Handle target command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    print(client.lookup_target(_query_time(args), _max_distance(args)))
    return 0


def _run_radec_command(client: HistoryClient, args: argparse.Namespace) -> int:
    """Handle radec command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    target = client.lookup_target_descriptor(_query_time(args), _max_distance(args))
    print(f"{target.src_name}\t{target.ra:.6f}\t{target.decl:.6f}")
    return 0


def _run_antennas_command(client: HistoryClient, args: argparse.Namespace) -> int:
    """Handle antennas command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    antennas = client.lookup_antennas(_query_time(args), _max_distance(args))
    print(json.dumps(antennas, indent=2))
    return 0


def _run_labels_command(client: HistoryClient, args: argparse.Namespace) -> int:
    """Handle labels command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for label in client.labels(args.history_type):
        print(label)
    return 0


def _query_time(args: argparse.Namespace) -> datetime:
    return args.time or datetime.now(timezone.utc)


def _max_distance(args: argparse.Namespace) -> timedelta:
    return timedelta(seconds=args.max_distance)


def _add_lookup_command(
    subparsers: Any,
    name: str,
    help_text: str,
    default_max_distance: timedelta,
) -> None:
    """Register one nearest-record lookup subcommand."""
    parser = subparsers.add_parser(name, help=help_text)
    parser.add_argument(
        "--time",
        type=parse_instant,
        help="Query time as ISO-8601 or yyyymmddTHHMMSS.sssZ; defaults to now",
    )
    parser.add_argument(
        "--max-distance",
        type=float,
        default=default_max_distance.total_seconds(),
        help="Seconds beyond which the match is reported stale",
    )


def _add_labels_command(subparsers: Any) -> None:
    """Register labels subcommand."""
    parser = subparsers.add_parser("labels", help="List history labels in time order")
    parser.add_argument("--type", dest="history_type", required=True, help="History type name")
