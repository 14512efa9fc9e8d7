"""
Container traversal for Pod Security checks.

Checks that apply a per-container rule walk main, init and ephemeral
containers through one sequence of locations instead of three loops.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from podsecurity.models.workload import Container, PodSpec


class ContainerKind(Enum):
    """Class of a container within a pod spec."""

    MAIN = "containers"
    INIT = "initContainers"
    EPHEMERAL = "ephemeralContainers"


@dataclass(frozen=True)
class FieldPath:
    """A structural path into a manifest, e.g. ``spec.initContainers[2]``."""

    path: str = "spec"

    def child(self, name: str) -> FieldPath:
        """Path to a named field below this one."""
        return FieldPath(f"{self.path}.{name}" if self.path else name)

    def index(self, i: int) -> FieldPath:
        """Path to a list element of this field."""
        return FieldPath(f"{self.path}[{i}]")

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class ContainerLocation:
    """A container paired with its path and class."""

    container: Container
    path: FieldPath
    kind: ContainerKind


class ContainerLocations:
    """
    Restartable sequence of every container location in a pod spec.

    Each iteration walks main containers, then init containers, then
    ephemeral containers.
    """

    def __init__(self, spec: PodSpec, root: FieldPath):
        self._spec = spec
        self._root = root

    def __iter__(self) -> Iterator[ContainerLocation]:
        groups = (
            (ContainerKind.MAIN, self._spec.containers),
            (ContainerKind.INIT, self._spec.init_containers),
            (ContainerKind.EPHEMERAL, self._spec.ephemeral_containers),
        )
        for kind, containers in groups:
            base = self._root.child(kind.value)
            for i, container in enumerate(containers):
                yield ContainerLocation(container=container, path=base.index(i), kind=kind)

    def __len__(self) -> int:
        return (
            len(self._spec.containers)
            + len(self._spec.init_containers)
            + len(self._spec.ephemeral_containers)
        )


def container_locations(
    spec: PodSpec,
    root: FieldPath | str = "spec",
) -> ContainerLocations:
    """
    Enumerate every container in a pod spec.

    Args:
        spec: Pod specification to walk
        root: Path label the container paths are anchored at

    Returns:
        Restartable iterable of ContainerLocation
    """
    if isinstance(root, str):
        root = FieldPath(root)
    return ContainerLocations(spec, root)


def visit_containers(
    spec: PodSpec,
    visitor: Callable[[Container, FieldPath], None],
    root: FieldPath | str = "spec",
) -> None:
    """Call ``visitor(container, path)`` for every container in the spec."""
    for location in container_locations(spec, root):
        visitor(location.container, location.path)
