"""
Evaluation configuration for podsecurity.

Selects which level, version and checks the CLI evaluates, and how it
logs. The check engine itself never reads configuration; callers pass
level and version explicitly.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from podsecurity.models.policy import LATEST_VERSION, Level, PolicyVersion


@dataclass
class EvaluationConfig:
    """Configuration for evaluating workloads."""

    level: Level = Level.RESTRICTED
    version: PolicyVersion = LATEST_VERSION
    checks: list[str] = field(default_factory=list)  # Empty means all checks at the level
    log_level: str = "INFO"
    log_format: str = "human"  # human or json

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level.value,
            "version": str(self.version),
            "checks": list(self.checks),
            "log_level": self.log_level,
            "log_format": self.log_format,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvaluationConfig:
        """
        Create from dictionary.

        Raises:
            ValueError: If level or version is invalid
        """
        checks = data.get("checks", [])
        if isinstance(checks, str):
            checks = [c.strip() for c in checks.split(",") if c.strip()]

        return cls(
            level=Level.from_string(data.get("level", Level.RESTRICTED.value)),
            version=PolicyVersion.parse(data.get("version", "latest")),
            checks=list(checks),
            log_level=data.get("log_level", "INFO"),
            log_format=data.get("log_format", "human"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> EvaluationConfig:
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_file(cls, path: str) -> EvaluationConfig:
        """
        Load configuration from a JSON or YAML file.

        Raises:
            ValueError: If the file is malformed or holds invalid values
        """
        path = os.path.expanduser(path)
        with open(path, "r", encoding="utf-8") as f:
            try:
                if path.endswith(".json"):
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f) or {}
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise ValueError(f"Invalid configuration file {path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration file {path}: expected a mapping")
        return cls.from_dict(data)

    def save(self, path: str) -> None:
        """Save configuration to a JSON or YAML file."""
        path = os.path.expanduser(path)
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            if path.endswith(".json"):
                json.dump(self.to_dict(), f, indent=2)
            else:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False)


def load_config_from_env() -> EvaluationConfig:
    """
    Load configuration from environment variables.

    Environment variables:
        PODSECURITY_CONFIG_FILE: Path to configuration file
        PODSECURITY_LEVEL: Enforcement level (privileged, baseline, restricted)
        PODSECURITY_VERSION: Policy version (e.g. v1.25 or latest)
        PODSECURITY_CHECKS: Comma-separated check IDs
        PODSECURITY_LOG_LEVEL: Log level
        PODSECURITY_LOG_FORMAT: Log format (human, json)

    Returns:
        EvaluationConfig instance
    """
    config_file = os.getenv("PODSECURITY_CONFIG_FILE")
    if config_file and os.path.exists(config_file):
        return EvaluationConfig.from_file(config_file)

    config = EvaluationConfig()

    level = os.getenv("PODSECURITY_LEVEL")
    if level:
        config.level = Level.from_string(level)

    version = os.getenv("PODSECURITY_VERSION")
    if version:
        config.version = PolicyVersion.parse(version)

    checks = os.getenv("PODSECURITY_CHECKS")
    if checks:
        config.checks = [c.strip() for c in checks.split(",") if c.strip()]

    config.log_level = os.getenv("PODSECURITY_LOG_LEVEL", config.log_level)
    config.log_format = os.getenv("PODSECURITY_LOG_FORMAT", config.log_format)

    return config
