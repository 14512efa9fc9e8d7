"""
Check registry and version resolution for podsecurity.

A Check is identified by (id, level) and owns an ordered list of
VersionedCheck entries. Each entry's implementation applies from its
minimum version until the next entry's minimum version.

Registries are assembled with CheckRegistryBuilder during startup and
frozen by ``build()``; the resulting CheckRegistry is read-only and safe
to share between threads.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterator, Optional

from podsecurity.models.policy import Level, PolicyVersion
from podsecurity.models.result import CheckResult
from podsecurity.models.workload import ObjectMeta, Pod, PodSpec

logger = logging.getLogger(__name__)

CheckPodFn = Callable[[ObjectMeta, PodSpec], CheckResult]


class CheckRegistrationError(Exception):
    """Exception raised when a check cannot be registered."""

    def __init__(self, message: str, check_id: str | None = None):
        self.check_id = check_id
        prefix = f"{check_id}: " if check_id else ""
        super().__init__(f"{prefix}{message}")


class CheckResolutionError(LookupError):
    """
    Exception raised when no check implementation applies to a request.

    This is a caller configuration error, distinct from a denying
    CheckResult.
    """

    def __init__(
        self,
        message: str,
        check_id: str,
        level: Level,
        version: PolicyVersion,
    ):
        self.check_id = check_id
        self.level = level
        self.version = version
        super().__init__(f"{check_id} ({level.value}, {version}): {message}")


@dataclass(frozen=True)
class VersionedCheck:
    """A check implementation effective from a minimum version."""

    minimum_version: PolicyVersion
    check_pod: CheckPodFn


@dataclass(frozen=True)
class Check:
    """A named check at one enforcement level."""

    id: str
    level: Level
    versions: tuple[VersionedCheck, ...]

    def __post_init__(self):
        # any sequence is accepted; stored as a tuple
        object.__setattr__(self, "versions", tuple(self.versions))

    @property
    def key(self) -> tuple[str, Level]:
        """Registry key of this check."""
        return (self.id, self.level)

    def validate(self) -> list[str]:
        """
        Validate check structure.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.id:
            errors.append("Missing required field: id")
        if not isinstance(self.level, Level):
            errors.append(f"Invalid level: {self.level!r}")
        if not self.versions:
            errors.append("Check must have at least one versioned implementation")

        for previous, current in zip(self.versions, self.versions[1:]):
            if not previous.minimum_version < current.minimum_version:
                errors.append(
                    "Minimum versions must be strictly increasing: "
                    f"{previous.minimum_version} is followed by {current.minimum_version}"
                )

        for versioned in self.versions:
            if versioned.minimum_version.latest:
                errors.append("Minimum version must be a concrete version, not latest")
            if not callable(versioned.check_pod):
                errors.append(f"Implementation for {versioned.minimum_version} is not callable")

        return errors


class CheckRegistry:
    """
    Read-only set of registered checks.

    Example:
        registry = default_registry()
        result = registry.evaluate(
            "seccomp_restricted", Level.RESTRICTED, PolicyVersion.of(1, 25),
            pod.metadata, pod.spec,
        )
        if not result.allowed:
            print(result.message)
    """

    def __init__(self, checks: dict[tuple[str, Level], Check]):
        self._checks = MappingProxyType(dict(checks))
        self._minimums = MappingProxyType({
            key: tuple(v.minimum_version for v in check.versions)
            for key, check in self._checks.items()
        })

    def __len__(self) -> int:
        return len(self._checks)

    def __iter__(self) -> Iterator[Check]:
        return iter(self.checks())

    def __contains__(self, key: object) -> bool:
        return key in self._checks

    def checks(self) -> list[Check]:
        """All checks, ordered by id then level."""
        return sorted(self._checks.values(), key=lambda c: (c.id, c.level.value))

    def get(self, check_id: str, level: Level) -> Optional[Check]:
        """Look up a check by id and level."""
        return self._checks.get((check_id, level))

    def resolve_variant(
        self,
        check_id: str,
        level: Level,
        version: PolicyVersion,
    ) -> VersionedCheck:
        """
        Select the implementation with the greatest minimum version <= version.

        Raises:
            CheckResolutionError: If the check is unknown or the version
                precedes every implementation
        """
        check = self._checks.get((check_id, level))
        if check is None:
            levels = sorted(lvl.value for cid, lvl in self._checks if cid == check_id)
            message = "check is not registered"
            if levels:
                message += f" at this level (registered at: {', '.join(levels)})"
            raise CheckResolutionError(message, check_id, level, version)

        index = bisect_right(self._minimums[(check_id, level)], version)
        if index == 0:
            raise CheckResolutionError(
                f"no implementation applies; earliest is {check.versions[0].minimum_version}",
                check_id,
                level,
                version,
            )
        return check.versions[index - 1]

    def resolve(
        self,
        check_id: str,
        level: Level,
        version: PolicyVersion,
    ) -> CheckPodFn:
        """Resolve the check function applicable at ``version``."""
        return self.resolve_variant(check_id, level, version).check_pod

    def evaluate(
        self,
        check_id: str,
        level: Level,
        version: PolicyVersion,
        metadata: ObjectMeta,
        spec: PodSpec,
    ) -> CheckResult:
        """
        Evaluate a check against pod metadata and spec.

        Args:
            check_id: Check identifier
            level: Enforcement level
            version: Target policy version
            metadata: Pod metadata
            spec: Pod spec

        Returns:
            CheckResult for the resolved implementation

        Raises:
            CheckResolutionError: If no implementation applies
        """
        check_pod = self.resolve(check_id, level, version)
        return check_pod(metadata, spec)

    def evaluate_pod(
        self,
        check_id: str,
        level: Level,
        version: PolicyVersion,
        pod: Pod,
    ) -> CheckResult:
        """Evaluate a check against a whole pod."""
        return self.evaluate(check_id, level, version, pod.metadata, pod.spec)


class CheckRegistryBuilder:
    """
    Collects checks during startup and freezes them into a CheckRegistry.

    Registration errors are programming errors in check authorship and
    are raised immediately.
    """

    def __init__(self):
        """Initialize an empty builder."""
        self._checks: dict[tuple[str, Level], Check] = {}
        self._built = False

    def register(self, check: Check) -> CheckRegistryBuilder:
        """
        Register a check.

        Args:
            check: Check to add

        Returns:
            This builder, for chaining

        Raises:
            CheckRegistrationError: On invalid or duplicate checks, or after build()
        """
        if self._built:
            raise CheckRegistrationError("registry is already built", check.id)

        errors = check.validate()
        if errors:
            raise CheckRegistrationError("; ".join(errors), check.id)

        if check.key in self._checks:
            raise CheckRegistrationError(
                f"already registered at level {check.level.value}", check.id
            )

        self._checks[check.key] = check
        logger.debug(
            f"Registered check {check.id} ({check.level.value}) with "
            f"{len(check.versions)} versions"
        )
        return self

    def build(self) -> CheckRegistry:
        """Freeze registered checks into a read-only registry."""
        self._built = True
        logger.debug(f"Built check registry with {len(self._checks)} checks")
        return CheckRegistry(self._checks)
