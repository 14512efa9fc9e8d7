"""
Fixture generator registry for podsecurity checks.

A fixture generator derives passing and failing pods from a seed pod
for one (level, version, check) key. Generators are registered on a
FixtureRegistryBuilder during startup and frozen with ``build()``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterator, Optional

from podsecurity.models.policy import Level, PolicyVersion
from podsecurity.models.workload import Pod

logger = logging.getLogger(__name__)

PodGenerator = Callable[[Pod], list[Pod]]


class FixtureRegistrationError(Exception):
    """Exception raised when a fixture generator cannot be registered."""

    def __init__(self, message: str, key: FixtureKey | None = None):
        self.key = key
        prefix = f"{key}: " if key else ""
        super().__init__(f"{prefix}{message}")


@dataclass(frozen=True)
class FixtureKey:
    """Identifies the check, level and version a generator targets."""

    level: Level
    version: PolicyVersion
    check: str

    def __str__(self) -> str:
        return f"{self.check}/{self.level.value}/{self.version}"

    def sort_key(self) -> tuple[str, str, PolicyVersion]:
        """Ordering used when iterating a registry."""
        return (self.check, self.level.value, self.version)


def _no_pods(pod: Pod) -> list[Pod]:
    return []


@dataclass(frozen=True)
class FixtureGenerator:
    """
    Passing and failing pod generators for one fixture key.

    Either generator may return an empty list when no meaningful variant
    exists at that version.
    """

    expect_error_substring: str
    generate_pass: PodGenerator = field(default=_no_pods)
    generate_fail: PodGenerator = field(default=_no_pods)


class FixtureRegistry:
    """Read-only set of registered fixture generators."""

    def __init__(self, generators: dict[FixtureKey, FixtureGenerator]):
        self._generators = MappingProxyType(dict(generators))

    def __len__(self) -> int:
        return len(self._generators)

    def __iter__(self) -> Iterator[tuple[FixtureKey, FixtureGenerator]]:
        return iter(self.items())

    def __contains__(self, key: object) -> bool:
        return key in self._generators

    def keys(self) -> list[FixtureKey]:
        """All keys, ordered by check, level and version."""
        return sorted(self._generators, key=FixtureKey.sort_key)

    def items(self) -> list[tuple[FixtureKey, FixtureGenerator]]:
        """All (key, generator) pairs in key order."""
        return [(key, self._generators[key]) for key in self.keys()]

    def get(self, key: FixtureKey) -> Optional[FixtureGenerator]:
        """Look up the generator for a key."""
        return self._generators.get(key)


class FixtureRegistryBuilder:
    """Collects fixture generators during startup."""

    def __init__(self):
        """Initialize an empty builder."""
        self._generators: dict[FixtureKey, FixtureGenerator] = {}
        self._built = False

    def register(self, key: FixtureKey, generator: FixtureGenerator) -> FixtureRegistryBuilder:
        """
        Register a fixture generator.

        Raises:
            FixtureRegistrationError: On duplicate key or after build()
        """
        if self._built:
            raise FixtureRegistrationError("registry is already built", key)
        if key in self._generators:
            raise FixtureRegistrationError("fixture generator already registered", key)

        self._generators[key] = generator
        logger.debug(f"Registered fixture generator {key}")
        return self

    def build(self) -> FixtureRegistry:
        """Freeze registered generators into a read-only registry."""
        self._built = True
        return FixtureRegistry(self._generators)


def tweak(pod: Pod, mutator: Callable[[Pod], None]) -> Pod:
    """
    Derive a variant of a pod.

    The pod is deep-copied and the mutator applied to the copy, so one
    seed can back any number of independent variants.

    Args:
        pod: Seed pod (left unchanged)
        mutator: Function that modifies the copy in place

    Returns:
        The modified copy
    """
    variant = copy.deepcopy(pod)
    mutator(variant)
    return variant
