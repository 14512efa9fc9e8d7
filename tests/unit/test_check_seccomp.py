"""
Unit tests for the seccomp checks.

Tests cover:
- Baseline and restricted variants at each policy version
- Detail formatting per version
- Resolution through the registry
"""

import pytest

from podsecurity.models import LATEST_VERSION, CheckResult, Level, PodSpec, PolicyVersion
from podsecurity.models.workload import ObjectMeta
from podsecurity.policy.check_seccomp import (
    CHECK_ID_BASELINE,
    CHECK_ID_RESTRICTED,
    seccomp_baseline_1_0,
    seccomp_baseline_1_19,
    seccomp_restricted_1_0,
    seccomp_restricted_1_19,
)

ALL_VARIANTS = [
    seccomp_baseline_1_0,
    seccomp_baseline_1_19,
    seccomp_restricted_1_0,
    seccomp_restricted_1_19,
]


def _evaluate(check_pod, pod):
    return check_pod(pod.metadata, pod.spec)


class TestSeccompBaseline:
    """Tests for the baseline seccomp check."""

    def test_v1_0_pod_unconfined(self, make_pod, make_container):
        """Test an Unconfined pod profile is denied and the pod is named."""
        pod = make_pod(pod_profile="Unconfined", containers=[make_container("app")])

        result = _evaluate(seccomp_baseline_1_0, pod)

        assert result == CheckResult.forbid("seccomp profile", "pod test-pod")

    def test_v1_0_ignores_containers(self, make_pod, make_container):
        """Test the earliest baseline variant does not inspect containers."""
        pod = make_pod(containers=[make_container("app", "Unconfined")])

        assert _evaluate(seccomp_baseline_1_0, pod).allowed

    def test_v1_19_container_unconfined(self, make_pod, make_container):
        """Test an Unconfined container is denied and named."""
        pod = make_pod(containers=[make_container("app", "Unconfined"), make_container("web")])

        result = _evaluate(seccomp_baseline_1_19, pod)

        assert result.allowed is False
        assert result.forbidden_reason == "seccomp profile"
        assert result.forbidden_detail == "container app"

    def test_v1_19_labels_sorted_and_deduplicated(self, make_pod, make_container):
        """Test pod and container labels are sorted and listed once."""
        pod = make_pod(
            pod_profile="Unconfined",
            containers=[make_container("web", "Unconfined")],
            init_containers=[make_container("app", "Unconfined")],
            ephemeral_containers=[make_container("web", "Unconfined")],
        )

        result = _evaluate(seccomp_baseline_1_19, pod)

        assert result.forbidden_detail == "container app, container web, pod test-pod"

    def test_v1_19_ephemeral_unconfined(self, make_pod, make_container):
        """Test ephemeral containers are inspected."""
        pod = make_pod(ephemeral_containers=[make_container("debugger", "Unconfined")])

        assert _evaluate(seccomp_baseline_1_19, pod).forbidden_detail == "container debugger"

    @pytest.mark.parametrize("profile_type", [None, "RuntimeDefault", "Localhost", "Custom"])
    def test_v1_19_non_unconfined_allowed(self, make_pod, make_container, profile_type):
        """Test anything other than Unconfined is allowed at baseline."""
        pod = make_pod(
            pod_profile=profile_type,
            containers=[make_container("app", profile_type)],
        )

        assert _evaluate(seccomp_baseline_1_19, pod).allowed


class TestSeccompRestricted:
    """Tests for the restricted seccomp check."""

    def test_v1_0_undeclared_pod_allowed(self, make_pod, make_container):
        """Test an undeclared pod profile is acceptable in the earliest version."""
        pod = make_pod(containers=[make_container("app")])

        assert _evaluate(seccomp_restricted_1_0, pod).allowed

    def test_v1_0_container_rejection_denies_pod(self, make_pod, make_container):
        """Test a rejected container profile denies the pod as a whole."""
        pod = make_pod(containers=[make_container("app", "Unconfined")])

        result = _evaluate(seccomp_restricted_1_0, pod)

        assert result == CheckResult.forbid("seccomp profile", "pod test-pod")

    def test_v1_0_pod_rejection(self, make_pod):
        """Test a rejected pod profile is denied."""
        pod = make_pod(pod_profile="Unconfined")

        assert _evaluate(seccomp_restricted_1_0, pod).forbidden_detail == "pod test-pod"

    def test_v1_19_undeclared_everywhere(self, make_pod, make_container):
        """Test containers without a profile must set one when the pod does not."""
        pod = make_pod(containers=[make_container("app")])

        result = _evaluate(seccomp_restricted_1_19, pod)

        assert result.allowed is False
        assert result.forbidden_detail == (
            'pod or container "app" must set securityContext.seccompProfile.type '
            'to "RuntimeDefault" or "Localhost"'
        )

    def test_v1_19_undeclared_lists_every_container(self, make_pod, make_container):
        """Test every unset container is listed in traversal order."""
        pod = make_pod(
            containers=[make_container("b"), make_container("a", "RuntimeDefault")],
            init_containers=[make_container("init")],
        )

        result = _evaluate(seccomp_restricted_1_19, pod)

        assert result.forbidden_detail.startswith('pod or containers "b", "init" must set')

    def test_v1_19_explicit_rejections(self, make_pod, make_container):
        """Test explicit rejections are reported per entity."""
        pod = make_pod(
            pod_profile="Unconfined",
            containers=[make_container("web", "Unconfined"), make_container("app")],
        )

        result = _evaluate(seccomp_restricted_1_19, pod)

        assert result.forbidden_detail == "container web, pod"

    def test_v1_19_pod_profile_covers_containers(self, make_pod, make_container):
        """Test containers inherit a valid pod profile."""
        pod = make_pod(
            pod_profile="RuntimeDefault",
            containers=[make_container("app")],
            init_containers=[make_container("init")],
        )

        assert _evaluate(seccomp_restricted_1_19, pod).allowed

    def test_v1_19_container_overrides_valid_pod(self, make_pod, make_container):
        """Test a container may not override a valid pod profile with Unconfined."""
        pod = make_pod(
            pod_profile="RuntimeDefault",
            containers=[make_container("app", "Unconfined")],
        )

        assert _evaluate(seccomp_restricted_1_19, pod).forbidden_detail == "container app"

    def test_v1_19_every_container_set(self, make_pod, make_container):
        """Test an undeclared pod profile is fine when every container sets one."""
        pod = make_pod(
            containers=[make_container("app", "RuntimeDefault")],
            init_containers=[make_container("init", "Localhost", "profiles/audit.json")],
        )

        assert _evaluate(seccomp_restricted_1_19, pod).allowed


class TestSeccompCommon:
    """Tests shared by every seccomp variant."""

    @pytest.mark.parametrize("check_pod", ALL_VARIANTS)
    def test_zero_containers(self, check_pod):
        """Test a pod with no containers and no settings is allowed."""
        assert check_pod(ObjectMeta(name="empty"), PodSpec()) == CheckResult.allow()

    @pytest.mark.parametrize("check_pod", ALL_VARIANTS)
    def test_localhost_init_container_allowed(self, check_pod, make_pod, make_container):
        """Test a Localhost init container profile is accepted."""
        pod = make_pod(
            pod_profile="RuntimeDefault",
            containers=[make_container("app")],
            init_containers=[make_container("init", "Localhost", "profiles/audit.json")],
        )

        assert _evaluate(check_pod, pod).allowed

    @pytest.mark.parametrize("check_pod", ALL_VARIANTS)
    def test_deterministic(self, check_pod, make_pod, make_container):
        """Test repeated evaluation yields equal results."""
        pod = make_pod(
            pod_profile="Unconfined",
            containers=[make_container("b", "Unconfined"), make_container("a", "Unconfined")],
        )

        assert _evaluate(check_pod, pod) == _evaluate(check_pod, pod)

    @pytest.mark.parametrize("check_pod", ALL_VARIANTS)
    def test_does_not_mutate_pod(self, check_pod, make_pod, make_container):
        """Test evaluation leaves the pod unchanged."""
        pod = make_pod(containers=[make_container("app", "Unconfined")])
        before = pod.to_dict()

        _evaluate(check_pod, pod)

        assert pod.to_dict() == before


class TestSeccompThroughRegistry:
    """Tests resolving the seccomp checks by version."""

    def test_restricted_latest_no_settings(self, registry, make_pod, make_container):
        """Test restricted/latest denies a pod without security settings."""
        pod = make_pod(containers=[make_container("app")])

        result = registry.evaluate_pod(CHECK_ID_RESTRICTED, Level.RESTRICTED, LATEST_VERSION, pod)

        assert result.allowed is False
        assert "pod or container" in result.forbidden_detail

    def test_restricted_latest_runtime_default(self, registry, make_pod, make_container):
        """Test restricted/latest allows a RuntimeDefault pod profile."""
        pod = make_pod(pod_profile="RuntimeDefault", containers=[make_container("app")])

        result = registry.evaluate_pod(CHECK_ID_RESTRICTED, Level.RESTRICTED, LATEST_VERSION, pod)

        assert result.allowed is True

    def test_baseline_per_container_version(self, registry, make_pod, make_container):
        """Test baseline at v1.19 names the Unconfined container."""
        pod = make_pod(containers=[make_container("app", "Unconfined")])

        result = registry.evaluate_pod(
            CHECK_ID_BASELINE, Level.BASELINE, PolicyVersion.of(1, 19), pod
        )

        assert result.allowed is False
        assert "app" in result.forbidden_detail

    def test_restricted_earliest_container_violation(self, registry, make_pod, make_container):
        """Test restricted at v1.0 denies the pod for a container violation."""
        pod = make_pod(containers=[make_container("app", "Unconfined")])

        result = registry.evaluate_pod(
            CHECK_ID_RESTRICTED, Level.RESTRICTED, PolicyVersion.of(1, 0), pod
        )

        assert result.allowed is False

    def test_version_changes_outcome(self, registry, make_pod, make_container):
        """Test the same pod is judged differently across versions."""
        pod = make_pod(containers=[make_container("app")])

        old = registry.evaluate_pod(
            CHECK_ID_RESTRICTED, Level.RESTRICTED, PolicyVersion.of(1, 18), pod
        )
        new = registry.evaluate_pod(
            CHECK_ID_RESTRICTED, Level.RESTRICTED, PolicyVersion.of(1, 19), pod
        )

        assert old.allowed is True
        assert new.allowed is False
