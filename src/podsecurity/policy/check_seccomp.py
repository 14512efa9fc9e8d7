"""
Seccomp profile checks.

**Restricted Fields:**

spec.securityContext.seccompProfile.type
spec.containers[*].securityContext.seccompProfile.type
spec.initContainers[*].securityContext.seccompProfile.type
spec.ephemeralContainers[*].securityContext.seccompProfile.type

**Allowed Values:**

Baseline: anything except 'Unconfined'; undefined is allowed.
Restricted: 'RuntimeDefault' or 'Localhost'.
"""

from __future__ import annotations

from podsecurity.models.policy import Level, PolicyVersion
from podsecurity.models.result import CheckResult
from podsecurity.models.workload import (
    SECCOMP_PROFILE_LOCALHOST,
    SECCOMP_PROFILE_RUNTIME_DEFAULT,
    SECCOMP_PROFILE_UNCONFINED,
    ObjectMeta,
    PodSpec,
)
from podsecurity.policy.registry import Check, VersionedCheck
from podsecurity.policy.visitor import container_locations

CHECK_ID_BASELINE = "seccomp_baseline"
CHECK_ID_RESTRICTED = "seccomp_restricted"

FORBIDDEN_REASON = "seccomp profile"

RESTRICTED_ALLOWED_TYPES = frozenset({
    SECCOMP_PROFILE_RUNTIME_DEFAULT,
    SECCOMP_PROFILE_LOCALHOST,
})


def _restricted_allowed(profile_type: str | None) -> bool:
    return profile_type in RESTRICTED_ALLOWED_TYPES


def _forbid(forbidden: set[str]) -> CheckResult:
    return CheckResult.forbid(FORBIDDEN_REASON, ", ".join(sorted(forbidden)))


def _quote_names(names: list[str]) -> str:
    return ", ".join(f'"{name}"' for name in names)


def seccomp_baseline_1_0(pod_metadata: ObjectMeta, pod_spec: PodSpec) -> CheckResult:
    """
    Baseline seccomp check for v1.0+.

    Only the pod-level profile is inspected in this epoch; it must not be
    explicitly set to ``Unconfined``.
    """
    forbidden: set[str] = set()

    if pod_spec.seccomp_profile_type == SECCOMP_PROFILE_UNCONFINED:
        forbidden.add(f"pod {pod_metadata.name}")

    if forbidden:
        return _forbid(forbidden)
    return CheckResult.allow()


def seccomp_baseline_1_19(pod_metadata: ObjectMeta, pod_spec: PodSpec) -> CheckResult:
    """
    Baseline seccomp check for v1.19+.

    Neither the pod nor any container may explicitly set the profile to
    ``Unconfined``.
    """
    forbidden: set[str] = set()

    if pod_spec.seccomp_profile_type == SECCOMP_PROFILE_UNCONFINED:
        forbidden.add(f"pod {pod_metadata.name}")

    for location in container_locations(pod_spec):
        if location.container.seccomp_profile_type == SECCOMP_PROFILE_UNCONFINED:
            forbidden.add(f"container {location.container.name}")

    if forbidden:
        return _forbid(forbidden)
    return CheckResult.allow()


def seccomp_restricted_1_0(pod_metadata: ObjectMeta, pod_spec: PodSpec) -> CheckResult:
    """
    Restricted seccomp check for v1.0+.

    A declared profile must be ``RuntimeDefault`` or ``Localhost``. An
    undeclared pod profile is acceptable as long as no container declares
    a rejected one; any rejection denies the pod as a whole.
    """
    rejected = False

    pod_type = pod_spec.seccomp_profile_type
    if pod_type is not None and not _restricted_allowed(pod_type):
        rejected = True

    for location in container_locations(pod_spec):
        container_type = location.container.seccomp_profile_type
        if container_type is not None and not _restricted_allowed(container_type):
            rejected = True

    if rejected:
        return _forbid({f"pod {pod_metadata.name}"})
    return CheckResult.allow()


def seccomp_restricted_1_19(pod_metadata: ObjectMeta, pod_spec: PodSpec) -> CheckResult:
    """
    Restricted seccomp check for v1.19+.

    Every declared profile is checked on its own and reported per entity.
    Containers that declare nothing inherit the pod profile, so when the
    pod does not set a valid profile they must each set one.
    """
    forbidden: set[str] = set()
    pod_profile_valid = False

    pod_type = pod_spec.seccomp_profile_type
    if pod_type is not None:
        if _restricted_allowed(pod_type):
            pod_profile_valid = True
        else:
            forbidden.add("pod")

    # containers that declare nothing and are not covered by the pod profile
    unset: list[str] = []

    for location in container_locations(pod_spec):
        container_type = location.container.seccomp_profile_type
        if container_type is None:
            if not pod_profile_valid:
                unset.append(location.container.name)
        elif not _restricted_allowed(container_type):
            forbidden.add(f"container {location.container.name}")

    if forbidden:
        return _forbid(forbidden)

    if unset:
        noun = "container" if len(unset) == 1 else "containers"
        return CheckResult.forbid(
            FORBIDDEN_REASON,
            f"pod or {noun} {_quote_names(unset)} must set "
            f'securityContext.seccompProfile.type to "{SECCOMP_PROFILE_RUNTIME_DEFAULT}" '
            f'or "{SECCOMP_PROFILE_LOCALHOST}"',
        )

    return CheckResult.allow()


def check_seccomp_baseline() -> Check:
    """Baseline level check that verifies the seccomp profile in 1.0+."""
    return Check(
        id=CHECK_ID_BASELINE,
        level=Level.BASELINE,
        versions=(
            VersionedCheck(
                minimum_version=PolicyVersion.of(1, 0),
                check_pod=seccomp_baseline_1_0,
            ),
            VersionedCheck(
                minimum_version=PolicyVersion.of(1, 19),
                check_pod=seccomp_baseline_1_19,
            ),
        ),
    )


def check_seccomp_restricted() -> Check:
    """Restricted level check that verifies the seccomp profile in 1.0+."""
    return Check(
        id=CHECK_ID_RESTRICTED,
        level=Level.RESTRICTED,
        versions=(
            VersionedCheck(
                minimum_version=PolicyVersion.of(1, 0),
                check_pod=seccomp_restricted_1_0,
            ),
            VersionedCheck(
                minimum_version=PolicyVersion.of(1, 19),
                check_pod=seccomp_restricted_1_19,
            ),
        ),
    )
