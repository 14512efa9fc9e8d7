"""
CLI commands for fixture verification.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from podsecurity.observability import get_logger
from podsecurity.testing import check_coverage, minimal_pod, verify_all

log = get_logger("cli.fixtures")


def add_fixtures_parser(subparsers: Any) -> None:
    """
    Add fixtures subcommand parser.

    Args:
        subparsers: Argument parser subparsers
    """
    fixtures_parser = subparsers.add_parser(
        "fixtures",
        help="Fixture verification commands",
        description="Verify checks against generated pass/fail pods",
    )

    fixtures_subparsers = fixtures_parser.add_subparsers(
        dest="fixtures_action",
        help="Fixtures action to perform",
    )

    for name, help_text in (
        ("verify", "Run every fixture generator through its check"),
        ("coverage", "List check versions without pass and fail fixtures"),
    ):
        action_parser = fixtures_subparsers.add_parser(name, help=help_text)
        action_parser.add_argument(
            "--format",
            type=str,
            default="table",
            choices=["table", "json"],
            help="Output format (default: table)",
        )


def cmd_fixtures(args: argparse.Namespace) -> int:
    """
    Handle fixtures commands.

    Args:
        args: Parsed command arguments

    Returns:
        Exit code (0 for success, 1 for failures)
    """
    action = getattr(args, "fixtures_action", None)

    if not action:
        print("Error: No action specified. Use --help for available actions.")
        return 1

    handlers = {
        "verify": _handle_verify,
        "coverage": _handle_coverage,
    }

    handler = handlers.get(action)
    if handler:
        return handler(args)

    print(f"Unknown fixtures action: {action}")
    return 1


def _handle_verify(args: argparse.Namespace) -> int:
    """Handle verify command."""
    report = verify_all(minimal_pod)

    log.verification_completed(
        keys_checked=report.keys_checked,
        pods_checked=report.pass_pods_checked + report.fail_pods_checked,
        failure_count=len(report.failures),
        duration_seconds=report.duration_seconds,
    )

    if args.format == "json":
        print(json.dumps({
            "summary": report.summary(),
            "failures": [f.to_dict() for f in report.failures],
        }, indent=2))
    else:
        print("\nFixture Verification")
        print("=" * 60)
        print(f"  Keys checked: {report.keys_checked}")
        print(f"  Passing pods checked: {report.pass_pods_checked}")
        print(f"  Failing pods checked: {report.fail_pods_checked}")
        print(f"  Status: {'PASSED' if report.passed else 'FAILED'}")

        if report.keys_without_coverage:
            print("\n  Keys without generated pods:")
            for key in report.keys_without_coverage:
                print(f"    - {key}")

        if report.failures:
            print("\n  Failures:")
            for failure in report.failures:
                print(f"    - {failure.message}")

    return 0 if report.passed else 1


def _handle_coverage(args: argparse.Namespace) -> int:
    """Handle coverage command."""
    gaps = check_coverage(minimal_pod)
    entries = [
        {"check": check_id, "level": level.value, "version": str(version)}
        for check_id, level, version in gaps
    ]

    if args.format == "json":
        print(json.dumps({"gaps": entries, "total": len(entries)}, indent=2))
    else:
        print("\nFixture Coverage")
        print("=" * 60)
        if not entries:
            print("  Every check version has passing and failing fixtures")
        for entry in entries:
            print(f"  {entry['check']:<30} {entry['level']:<12} {entry['version']}")

    return 1 if entries else 0
