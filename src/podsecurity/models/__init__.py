"""
Data models for podsecurity.

This package provides the core data models used throughout podsecurity:

- Level, PolicyVersion: Enforcement level and policy version selection
- Pod and friends: Typed view of the Kubernetes workload being checked
- CheckResult: Allow/deny verdict of a single check
"""

from __future__ import annotations

from podsecurity.models.policy import LATEST_VERSION, Level, PolicyVersion
from podsecurity.models.result import CheckResult
from podsecurity.models.workload import (
    SECCOMP_PROFILE_LOCALHOST,
    SECCOMP_PROFILE_RUNTIME_DEFAULT,
    SECCOMP_PROFILE_UNCONFINED,
    Container,
    ObjectMeta,
    Pod,
    PodSecurityContext,
    PodSpec,
    SeccompProfile,
    SecurityContext,
)

__all__ = [
    # Policy
    "Level",
    "PolicyVersion",
    "LATEST_VERSION",
    # Result
    "CheckResult",
    # Workload
    "Container",
    "ObjectMeta",
    "Pod",
    "PodSecurityContext",
    "PodSpec",
    "SeccompProfile",
    "SecurityContext",
    "SECCOMP_PROFILE_LOCALHOST",
    "SECCOMP_PROFILE_RUNTIME_DEFAULT",
    "SECCOMP_PROFILE_UNCONFINED",
]
