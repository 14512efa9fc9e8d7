"""
podsecurity - Versioned Pod Security check evaluation

Decides whether a Kubernetes pod complies with a Pod Security check at a
given enforcement level and policy version, and verifies every check
version against generated passing and failing pods.

Key Features:
- Pure evaluation: never mutates workloads, persists state or calls the network
- Versioned checks: each check keeps one implementation per policy version
- Fixture harness: regression-test every check version from a seed pod

Quick Start:
    >>> from podsecurity import Level, PolicyVersion, default_registry
    >>> from podsecurity.collectors import load_pods
    >>>
    >>> registry = default_registry()
    >>> for pod in load_pods("deployment.yaml"):
    ...     result = registry.evaluate_pod(
    ...         "seccomp_restricted", Level.RESTRICTED, PolicyVersion.parse("v1.25"), pod
    ...     )
    ...     print(pod.metadata.name, result.allowed)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core models
from podsecurity.models import (
    LATEST_VERSION,
    CheckResult,
    Container,
    Level,
    ObjectMeta,
    Pod,
    PodSecurityContext,
    PodSpec,
    PolicyVersion,
    SeccompProfile,
    SecurityContext,
)

# Check engine
from podsecurity.policy import (
    Check,
    CheckRegistrationError,
    CheckRegistry,
    CheckRegistryBuilder,
    CheckResolutionError,
    ContainerLocation,
    VersionedCheck,
    container_locations,
    default_registry,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "LATEST_VERSION",
    "CheckResult",
    "Container",
    "Level",
    "ObjectMeta",
    "Pod",
    "PodSecurityContext",
    "PodSpec",
    "PolicyVersion",
    "SeccompProfile",
    "SecurityContext",
    # Check engine
    "Check",
    "CheckRegistrationError",
    "CheckRegistry",
    "CheckRegistryBuilder",
    "CheckResolutionError",
    "ContainerLocation",
    "VersionedCheck",
    "container_locations",
    "default_registry",
]
