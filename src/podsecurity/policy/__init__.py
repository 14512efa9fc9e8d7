"""
Pod Security check engine for podsecurity.

This package provides the check evaluation framework including:

- container_locations: Uniform traversal of main, init and ephemeral containers
- CheckRegistryBuilder / CheckRegistry: Versioned check registration and resolution
- Built-in checks (seccomp at baseline and restricted levels)
"""

from __future__ import annotations

from typing import Callable, Optional

from podsecurity.policy.check_seccomp import (
    CHECK_ID_BASELINE,
    CHECK_ID_RESTRICTED,
    check_seccomp_baseline,
    check_seccomp_restricted,
)
from podsecurity.policy.registry import (
    Check,
    CheckPodFn,
    CheckRegistrationError,
    CheckRegistry,
    CheckRegistryBuilder,
    CheckResolutionError,
    VersionedCheck,
)
from podsecurity.policy.visitor import (
    ContainerKind,
    ContainerLocation,
    FieldPath,
    container_locations,
    visit_containers,
)

__all__ = [
    # Visitor
    "ContainerKind",
    "ContainerLocation",
    "FieldPath",
    "container_locations",
    "visit_containers",
    # Registry
    "Check",
    "CheckPodFn",
    "CheckRegistrationError",
    "CheckRegistry",
    "CheckRegistryBuilder",
    "CheckResolutionError",
    "VersionedCheck",
    # Checks
    "CHECK_ID_BASELINE",
    "CHECK_ID_RESTRICTED",
    "BUILTIN_CHECKS",
    "check_seccomp_baseline",
    "check_seccomp_restricted",
    # Convenience functions
    "build_registry",
    "default_registry",
]

BUILTIN_CHECKS: tuple[Callable[[], Check], ...] = (
    check_seccomp_baseline,
    check_seccomp_restricted,
)

_default_registry: Optional[CheckRegistry] = None


def build_registry() -> CheckRegistry:
    """
    Build a fresh registry holding every built-in check.

    Raises:
        CheckRegistrationError: If a built-in check is malformed
    """
    builder = CheckRegistryBuilder()
    for factory in BUILTIN_CHECKS:
        builder.register(factory())
    return builder.build()


def default_registry() -> CheckRegistry:
    """
    Get the shared registry of built-in checks.

    The registry is built on first use and read-only afterwards.

    Example:
        >>> from podsecurity.policy import default_registry
        >>> registry = default_registry()
        >>> [c.id for c in registry.checks()]
        ['seccomp_baseline', 'seccomp_restricted']
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = build_registry()
    return _default_registry
