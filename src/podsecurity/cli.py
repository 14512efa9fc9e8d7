"""
podsecurity CLI entry point.

This module provides the command-line interface for podsecurity.
"""

from __future__ import annotations

import argparse
import sys

from podsecurity import __version__
from podsecurity.cli_checks import add_checks_parser, cmd_checks
from podsecurity.cli_fixtures import add_fixtures_parser, cmd_fixtures
from podsecurity.config import load_config_from_env
from podsecurity.observability import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="podsecurity",
        description="podsecurity - Versioned Pod Security check evaluation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"podsecurity {__version__}",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )

    parser.add_argument(
        "--log-format",
        choices=["human", "json"],
        default=None,
        help="Log output format (default: PODSECURITY_LOG_FORMAT or human)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    subparsers.add_parser("version", help="Show version information")

    # checks command (Check engine)
    add_checks_parser(subparsers)

    # fixtures command (Fixture verification)
    add_fixtures_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config_from_env()
    except (OSError, ValueError) as e:
        print(f"Error: Invalid configuration: {e}")
        return 1
    args.config = config

    # Command-line flags override the configured log settings
    level = config.log_level
    if args.verbose:
        level = "DEBUG" if args.verbose > 1 else "INFO"
    configure_logging(level=level, format=args.log_format or config.log_format)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "version":
        print(f"podsecurity version {__version__}")
        return 0

    command_handlers = {
        "checks": cmd_checks,
        "fixtures": cmd_fixtures,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    print(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
