"""
Fixture generation and verification for podsecurity checks.

This package provides:

- FixtureRegistryBuilder / FixtureRegistry: Generators keyed by (level, version, check)
- tweak: Derive independent pod variants from a seed pod
- verify_all / check_coverage: Run generated pods through the checks they target
"""

from __future__ import annotations

from typing import Optional

from podsecurity.testing.fixtures import (
    FixtureGenerator,
    FixtureKey,
    FixtureRegistrationError,
    FixtureRegistry,
    FixtureRegistryBuilder,
    tweak,
)
from podsecurity.testing.fixtures_seccomp import register_seccomp_fixtures
from podsecurity.testing.harness import (
    FixtureFailure,
    FixtureKind,
    VerificationReport,
    check_coverage,
    verify_all,
)
from podsecurity.testing.seed import minimal_pod

__all__ = [
    # Fixtures
    "FixtureGenerator",
    "FixtureKey",
    "FixtureRegistrationError",
    "FixtureRegistry",
    "FixtureRegistryBuilder",
    "tweak",
    # Harness
    "FixtureFailure",
    "FixtureKind",
    "VerificationReport",
    "check_coverage",
    "verify_all",
    # Seeds
    "minimal_pod",
    # Convenience functions
    "build_fixtures",
    "default_fixtures",
]

_default_fixtures: Optional[FixtureRegistry] = None


def build_fixtures() -> FixtureRegistry:
    """Build a fresh registry holding every built-in fixture generator."""
    builder = FixtureRegistryBuilder()
    register_seccomp_fixtures(builder)
    return builder.build()


def default_fixtures() -> FixtureRegistry:
    """
    Get the shared registry of built-in fixture generators.

    Example:
        >>> from podsecurity.testing import default_fixtures, minimal_pod, verify_all
        >>> report = verify_all(minimal_pod, fixtures=default_fixtures())
        >>> report.passed
        True
    """
    global _default_fixtures
    if _default_fixtures is None:
        _default_fixtures = build_fixtures()
    return _default_fixtures
