"""
Observability for podsecurity.

Provides logging configuration and structured event logging.
"""

from podsecurity.observability.logging import (
    HumanReadableFormatter,
    PodSecurityLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "HumanReadableFormatter",
    "PodSecurityLogger",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]
