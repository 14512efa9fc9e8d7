"""
Workload data model for podsecurity.

A reduced, typed view of a Kubernetes Pod carrying the fields Pod
Security checks inspect. Objects are built from Kubernetes JSON
(camelCase keys) with ``from_dict`` and rendered back with ``to_dict``.

Parsing is lenient: absent or wrongly-typed optional fields are read
as "not specified" and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# Seccomp profile types
SECCOMP_PROFILE_UNCONFINED = "Unconfined"
SECCOMP_PROFILE_RUNTIME_DEFAULT = "RuntimeDefault"
SECCOMP_PROFILE_LOCALHOST = "Localhost"


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_str_map(value: Any) -> dict[str, str]:
    return {
        str(k): str(v)
        for k, v in _as_dict(value).items()
        if v is not None
    }


@dataclass
class SeccompProfile:
    """A declared seccomp profile."""

    type: Optional[str] = None
    localhost_profile: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {}
        if self.type is not None:
            data["type"] = self.type
        if self.localhost_profile is not None:
            data["localhostProfile"] = self.localhost_profile
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional[SeccompProfile]:
        """Create from dictionary, or None when not specified."""
        if not isinstance(data, dict):
            return None
        return cls(
            type=_as_str(data.get("type")),
            localhost_profile=_as_str(data.get("localhostProfile")),
        )


@dataclass
class SecurityContext:
    """Container-level security settings."""

    seccomp_profile: Optional[SeccompProfile] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {}
        if self.seccomp_profile is not None:
            data["seccompProfile"] = self.seccomp_profile.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional[SecurityContext]:
        """Create from dictionary, or None when not specified."""
        if not isinstance(data, dict):
            return None
        return cls(seccomp_profile=SeccompProfile.from_dict(data.get("seccompProfile")))


@dataclass
class PodSecurityContext:
    """Pod-level security settings."""

    seccomp_profile: Optional[SeccompProfile] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {}
        if self.seccomp_profile is not None:
            data["seccompProfile"] = self.seccomp_profile.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional[PodSecurityContext]:
        """Create from dictionary, or None when not specified."""
        if not isinstance(data, dict):
            return None
        return cls(seccomp_profile=SeccompProfile.from_dict(data.get("seccompProfile")))


@dataclass
class Container:
    """
    A container of any class (main, init or ephemeral).

    Ephemeral containers share the fields checks care about, so they are
    modeled with the same type.
    """

    name: str
    image: str = ""
    security_context: Optional[SecurityContext] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"name": self.name}
        if self.image:
            data["image"] = self.image
        if self.security_context is not None:
            data["securityContext"] = self.security_context.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Container:
        """Create from dictionary."""
        data = _as_dict(data)
        return cls(
            name=_as_str(data.get("name")) or "",
            image=_as_str(data.get("image")) or "",
            security_context=SecurityContext.from_dict(data.get("securityContext")),
        )

    @property
    def seccomp_profile_type(self) -> Optional[str]:
        """Declared seccomp profile type, or None when not specified."""
        if self.security_context is None or self.security_context.seccomp_profile is None:
            return None
        return self.security_context.seccomp_profile.type


@dataclass
class PodSpec:
    """Pod specification."""

    security_context: Optional[PodSecurityContext] = None
    containers: list[Container] = field(default_factory=list)
    init_containers: list[Container] = field(default_factory=list)
    ephemeral_containers: list[Container] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "containers": [c.to_dict() for c in self.containers],
        }
        if self.security_context is not None:
            data["securityContext"] = self.security_context.to_dict()
        if self.init_containers:
            data["initContainers"] = [c.to_dict() for c in self.init_containers]
        if self.ephemeral_containers:
            data["ephemeralContainers"] = [c.to_dict() for c in self.ephemeral_containers]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> PodSpec:
        """Create from dictionary."""
        data = _as_dict(data)
        return cls(
            security_context=PodSecurityContext.from_dict(data.get("securityContext")),
            containers=[Container.from_dict(c) for c in _as_list(data.get("containers"))],
            init_containers=[
                Container.from_dict(c) for c in _as_list(data.get("initContainers"))
            ],
            ephemeral_containers=[
                Container.from_dict(c) for c in _as_list(data.get("ephemeralContainers"))
            ],
        )

    @property
    def seccomp_profile_type(self) -> Optional[str]:
        """Declared pod-level seccomp profile type, or None when not specified."""
        if self.security_context is None or self.security_context.seccomp_profile is None:
            return None
        return self.security_context.seccomp_profile.type


@dataclass
class ObjectMeta:
    """Workload metadata."""

    name: str = ""
    namespace: str = "default"
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {"name": self.name, "namespace": self.namespace}
        if self.labels:
            data["labels"] = dict(self.labels)
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        return data

    @classmethod
    def from_dict(cls, data: Any) -> ObjectMeta:
        """Create from dictionary."""
        data = _as_dict(data)
        return cls(
            name=_as_str(data.get("name")) or "",
            namespace=_as_str(data.get("namespace")) or "default",
            labels=_as_str_map(data.get("labels")),
            annotations=_as_str_map(data.get("annotations")),
        )


@dataclass
class Pod:
    """A workload: metadata plus pod spec."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a Kubernetes Pod manifest dictionary."""
        return {
            "apiVersion": "v1",
            "kind": "Pod",
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Pod:
        """Create from a Pod manifest dictionary."""
        data = _as_dict(data)
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=PodSpec.from_dict(data.get("spec")),
        )

    @property
    def container_count(self) -> int:
        """Number of containers across all three classes."""
        return (
            len(self.spec.containers)
            + len(self.spec.init_containers)
            + len(self.spec.ephemeral_containers)
        )
