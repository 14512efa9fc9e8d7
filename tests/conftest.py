"""
Pytest configuration and fixtures for podsecurity tests.

This module provides common fixtures used across unit tests.
"""

from __future__ import annotations

import pytest

from podsecurity.models import (
    Container,
    ObjectMeta,
    Pod,
    PodSecurityContext,
    PodSpec,
    SeccompProfile,
    SecurityContext,
)
from podsecurity.policy import CheckRegistry, build_registry


def make_container(name: str, profile_type: str | None = None, localhost_profile: str | None = None) -> Container:
    """Build a container, optionally declaring a seccomp profile."""
    security_context = None
    if profile_type is not None:
        security_context = SecurityContext(
            seccomp_profile=SeccompProfile(type=profile_type, localhost_profile=localhost_profile),
        )
    return Container(name=name, image="nginx", security_context=security_context)


def make_pod(
    pod_profile: str | None = None,
    containers: list[Container] | None = None,
    init_containers: list[Container] | None = None,
    ephemeral_containers: list[Container] | None = None,
    name: str = "test-pod",
) -> Pod:
    """Build a pod, optionally declaring a pod-level seccomp profile."""
    security_context = None
    if pod_profile is not None:
        security_context = PodSecurityContext(seccomp_profile=SeccompProfile(type=pod_profile))
    return Pod(
        metadata=ObjectMeta(name=name),
        spec=PodSpec(
            security_context=security_context,
            containers=containers or [],
            init_containers=init_containers or [],
            ephemeral_containers=ephemeral_containers or [],
        ),
    )


@pytest.fixture
def registry() -> CheckRegistry:
    """Return a freshly built registry of the built-in checks."""
    return build_registry()


@pytest.fixture
def sample_pod_manifest() -> dict:
    """Return a sample Pod manifest dict."""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {"name": "web", "namespace": "apps", "labels": {"app": "web"}},
        "spec": {
            "securityContext": {"seccompProfile": {"type": "RuntimeDefault"}},
            "containers": [
                {"name": "app", "image": "nginx"},
                {
                    "name": "sidecar",
                    "image": "envoy",
                    "securityContext": {
                        "seccompProfile": {
                            "type": "Localhost",
                            "localhostProfile": "profiles/audit.json",
                        },
                    },
                },
            ],
            "initContainers": [{"name": "init", "image": "busybox"}],
        },
    }


@pytest.fixture
def sample_deployment_manifest() -> dict:
    """Return a sample Deployment manifest dict."""
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": "api", "namespace": "prod"},
        "spec": {
            "replicas": 2,
            "template": {
                "metadata": {"labels": {"app": "api"}},
                "spec": {
                    "containers": [
                        {
                            "name": "api",
                            "image": "api:1.0",
                            "securityContext": {"seccompProfile": {"type": "Unconfined"}},
                        },
                    ],
                },
            },
        },
    }


@pytest.fixture(name="make_pod")
def make_pod_fixture():
    """Return the pod builder."""
    return make_pod


@pytest.fixture(name="make_container")
def make_container_fixture():
    """Return the container builder."""
    return make_container
