"""
Configuration management for podsecurity.

Provides the configuration used by the CLI to select the enforcement
level, policy version and checks to evaluate.
"""

from podsecurity.config.evaluation_config import (
    EvaluationConfig,
    load_config_from_env,
)

__all__ = [
    "EvaluationConfig",
    "load_config_from_env",
]
