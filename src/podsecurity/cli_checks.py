"""
CLI commands for the check engine.

Provides commands for listing registered checks and evaluating
manifests against a check at a given level and version.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from podsecurity.collectors import ManifestLoadError, load_pods
from podsecurity.config import load_config_from_env
from podsecurity.models import Level, PolicyVersion
from podsecurity.observability import get_logger
from podsecurity.policy import CheckResolutionError, default_registry

log = get_logger("cli.checks")


def add_checks_parser(subparsers: Any) -> None:
    """
    Add checks subcommand parser.

    Args:
        subparsers: Argument parser subparsers
    """
    checks_parser = subparsers.add_parser(
        "checks",
        help="Check engine commands",
        description="List registered checks and evaluate workloads",
    )

    checks_subparsers = checks_parser.add_subparsers(
        dest="checks_action",
        help="Checks action to perform",
    )

    # list - List registered checks
    list_parser = checks_subparsers.add_parser(
        "list",
        help="List registered checks",
        description="List every registered check and its versions",
    )
    list_parser.add_argument(
        "--format",
        type=str,
        default="table",
        choices=["table", "json"],
        help="Output format (default: table)",
    )

    # evaluate - Evaluate a manifest
    evaluate_parser = checks_subparsers.add_parser(
        "evaluate",
        help="Evaluate manifests against a check",
        description="Evaluate every pod in a manifest against one check",
    )
    evaluate_parser.add_argument(
        "manifest",
        type=str,
        help="Path to a YAML or JSON manifest",
    )
    evaluate_parser.add_argument(
        "--check",
        type=str,
        default=None,
        help="Check ID (default: every check registered at the level)",
    )
    evaluate_parser.add_argument(
        "--level",
        type=str,
        default=None,
        choices=[level.value for level in Level],
        help="Enforcement level (default: PODSECURITY_LEVEL or restricted)",
    )
    evaluate_parser.add_argument(
        "--version",
        type=str,
        default=None,
        dest="policy_version",
        help="Policy version, e.g. v1.25 (default: PODSECURITY_VERSION or latest)",
    )
    evaluate_parser.add_argument(
        "--format",
        type=str,
        default="table",
        choices=["table", "json"],
        help="Output format (default: table)",
    )


def cmd_checks(args: argparse.Namespace) -> int:
    """
    Handle checks commands.

    Args:
        args: Parsed command arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    action = getattr(args, "checks_action", None)

    if not action:
        print("Error: No action specified. Use --help for available actions.")
        return 1

    handlers = {
        "list": _handle_list,
        "evaluate": _handle_evaluate,
    }

    handler = handlers.get(action)
    if handler:
        return handler(args)

    print(f"Unknown checks action: {action}")
    return 1


def _handle_list(args: argparse.Namespace) -> int:
    """Handle list command."""
    checks = [
        {
            "id": check.id,
            "level": check.level.value,
            "versions": [str(v.minimum_version) for v in check.versions],
        }
        for check in default_registry().checks()
    ]

    if args.format == "json":
        print(json.dumps({"checks": checks, "total": len(checks)}, indent=2))
    else:
        print(f"\nRegistered Checks ({len(checks)} total)")
        print("=" * 60)
        for check in checks:
            print(f"  {check['id']:<30} {check['level']:<12} {', '.join(check['versions'])}")

    return 0


def _handle_evaluate(args: argparse.Namespace) -> int:
    """Handle evaluate command."""
    try:
        config = getattr(args, "config", None) or load_config_from_env()
        level = Level.from_string(args.level) if args.level else config.level
        version = (
            PolicyVersion.parse(args.policy_version) if args.policy_version else config.version
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    registry = default_registry()
    if args.check:
        check_ids = [args.check]
    elif config.checks:
        check_ids = [c for c in config.checks if (c, level) in registry]
        skipped = [c for c in config.checks if c not in check_ids]
        if skipped:
            log.warning(
                f"Skipping configured checks not registered at level {level.value}: "
                f"{', '.join(skipped)}"
            )
        if not check_ids:
            print(f"Error: None of the configured checks are registered at level {level.value}")
            return 1
    else:
        check_ids = [c.id for c in registry.checks() if c.level == level]

    try:
        pods = load_pods(args.manifest)
    except ManifestLoadError as e:
        print(f"Error: {e}")
        return 1

    results: list[dict[str, Any]] = []
    for pod in pods:
        for check_id in check_ids:
            try:
                result = registry.evaluate_pod(check_id, level, version, pod)
            except CheckResolutionError as e:
                print(f"Error: {e}")
                return 1

            log.check_evaluated(
                check_id=check_id,
                level=level.value,
                version=str(version),
                pod_name=pod.metadata.name,
                allowed=result.allowed,
                detail=result.forbidden_detail or "",
            )
            results.append({
                "pod": f"{pod.metadata.namespace}/{pod.metadata.name}",
                "check": check_id,
                **result.to_dict(),
            })

    denied = [r for r in results if not r["allowed"]]

    if args.format == "json":
        print(json.dumps({
            "level": level.value,
            "version": str(version),
            "results": results,
            "denied": len(denied),
        }, indent=2))
    else:
        print(f"\nEvaluation at {level.value} {version} ({len(pods)} pods)")
        print("=" * 60)
        for r in results:
            status = "ALLOWED" if r["allowed"] else "DENIED"
            print(f"  {r['pod']:<30} {r['check']:<22} {status}")
            if not r["allowed"]:
                print(f"      {r['forbidden_reason']}: {r['forbidden_detail']}")

    return 1 if denied else 0
