"""
Policy level and version model for podsecurity.

Checks are registered per enforcement level and carry one implementation
per policy version. Versions are Kubernetes minor releases (``v1.19``)
plus a ``latest`` value that sorts after every concrete release.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

_VERSION_PATTERN = re.compile(r"^v?(\d+)\.(\d+)$")


class Level(Enum):
    """Pod Security Standards enforcement levels."""

    PRIVILEGED = "privileged"  # Unrestricted
    BASELINE = "baseline"  # Prevents known privilege escalations
    RESTRICTED = "restricted"  # Hardened pods

    @classmethod
    def from_string(cls, value: str) -> Level:
        """
        Create Level from string value.

        Args:
            value: String representation (case-insensitive)

        Returns:
            Matching Level enum value

        Raises:
            ValueError: If value is not a valid level
        """
        if not isinstance(value, str):
            raise ValueError(f"Invalid level: {value!r} (expected a string)")
        value_lower = value.strip().lower()
        for level in cls:
            if level.value == value_lower:
                return level
        raise ValueError(f"Invalid level: {value}")


@total_ordering
@dataclass(frozen=True)
class PolicyVersion:
    """
    A policy version, ordered by (major, minor).

    The ``latest`` version compares greater than every concrete version
    and equal only to itself.
    """

    major: int = 0
    minor: int = 0
    latest: bool = False

    def __post_init__(self):
        if self.major < 0 or self.minor < 0:
            raise ValueError(
                f"Version components must be non-negative: {self.major}.{self.minor}"
            )

    @classmethod
    def of(cls, major: int, minor: int) -> PolicyVersion:
        """Create a concrete major.minor version."""
        return cls(major=major, minor=minor)

    @classmethod
    def parse(cls, value: str) -> PolicyVersion:
        """
        Parse a version string.

        Accepts ``latest``, ``v1.19`` and ``1.19``.

        Raises:
            ValueError: If value is not a valid version string
        """
        if not isinstance(value, str):
            raise ValueError(
                f"Invalid version: {value!r} (expected a string; quote versions such as \"v1.20\" in YAML)"
            )
        text = value.strip()
        if text.lower() == "latest":
            return LATEST_VERSION

        match = _VERSION_PATTERN.match(text)
        if not match:
            raise ValueError(f"Invalid version: {value!r} (expected 'latest' or 'v<major>.<minor>')")
        return cls(major=int(match.group(1)), minor=int(match.group(2)))

    def _sort_key(self) -> tuple[bool, int, int]:
        if self.latest:
            return (True, 0, 0)
        return (False, self.major, self.minor)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolicyVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PolicyVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __str__(self) -> str:
        if self.latest:
            return "latest"
        return f"v{self.major}.{self.minor}"


LATEST_VERSION = PolicyVersion(latest=True)
