"""
Runtime Configuration

Central configuration for distribution building policy and logging.

The commitment core itself takes no configuration: every function is a
pure computation over explicit inputs. This module only carries the
caller-side policy decisions (how to treat zero amounts, repeated
addresses and unparseable rows) and logging settings.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "MERKLEDROP_"


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"


@dataclass
class DistributionConfig:
    """Policy applied when turning records into a distribution."""
    require_positive_amounts: bool = False
    reject_duplicate_addresses: bool = False
    skip_invalid_records: bool = False


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    distribution: DistributionConfig = field(default_factory=DistributionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - MERKLEDROP_REQUIRE_POSITIVE_AMOUNTS: reject zero amounts (true/false)
        - MERKLEDROP_REJECT_DUPLICATE_ADDRESSES: reject any repeated address (true/false)
        - MERKLEDROP_SKIP_INVALID_RECORDS: drop unparseable rows instead of aborting (true/false)
        - MERKLEDROP_LOG_LEVEL: log level name
        - MERKLEDROP_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        for key in (
            "require_positive_amounts",
            "reject_duplicate_addresses",
            "skip_invalid_records",
        ):
            env_name = f"{ENV_PREFIX}{key.upper()}"
            if os.getenv(env_name):
                overrides.setdefault("distribution", {})[key] = _env_bool(env_name, False)

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        distribution_data = data.get("distribution", {}) or {}
        logging_data = data.get("logging", {}) or {}

        distribution = (
            DistributionConfig(**distribution_data) if distribution_data else DistributionConfig()
        )
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(distribution=distribution, logging=log)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("distribution", {}).items():
            setattr(new_config.distribution, key, value)

        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "distribution": {
                "require_positive_amounts": self.distribution.require_positive_amounts,
                "reject_duplicate_addresses": self.distribution.reject_duplicate_addresses,
                "skip_invalid_records": self.distribution.skip_invalid_records,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }

