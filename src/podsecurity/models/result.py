"""
Check result model for podsecurity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CheckResult:
    """
    Verdict of evaluating one check against one pod.

    A denial is normal output, not an error: ``allowed`` is False and the
    reason/detail describe what was rejected.
    """

    allowed: bool
    forbidden_reason: Optional[str] = None
    forbidden_detail: Optional[str] = None

    @classmethod
    def allow(cls) -> CheckResult:
        """Create an allowing result."""
        return cls(allowed=True)

    @classmethod
    def forbid(cls, reason: str, detail: str) -> CheckResult:
        """Create a denying result."""
        return cls(allowed=False, forbidden_reason=reason, forbidden_detail=detail)

    @property
    def message(self) -> str:
        """Reason and detail rendered as one line, empty when allowed."""
        if self.allowed:
            return ""
        if self.forbidden_detail:
            return f"{self.forbidden_reason}: {self.forbidden_detail}"
        return self.forbidden_reason or ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "allowed": self.allowed,
            "forbidden_reason": self.forbidden_reason,
            "forbidden_detail": self.forbidden_detail,
        }
