"""
Module 04 - CLI Configuration

Configuration management for the merkledrop CLI.
Supports a JSON or YAML configuration file and MERKLEDROP_* environment variables.
"""

from __future__ import annotations

import json
from argparse import Namespace
from dataclasses import dataclass, field
from pathlib import Path

from core.config import DistributionConfig, LoggingConfig, RuntimeConfig


DEFAULT_CONFIG_NAME = "merkledrop.json"
YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Record and duplicate policy
    distribution: DistributionConfig = field(default_factory=DistributionConfig)

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_runtime(self) -> RuntimeConfig:
        return RuntimeConfig(
            distribution=self.distribution,
            logging=LoggingConfig(level=self.log_level, file=self.log_file),
        )

    def to_dict(self) -> dict:
        data = self.to_runtime().to_dict()
        data["default_output_format"] = self.default_output_format
        return data


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.cwd() / f".{DEFAULT_CONFIG_NAME}",
        Path.cwd() / "merkledrop.yaml",
        Path.home() / ".config" / "merkledrop" / "config.json",
    ]


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML (.yaml, .yml) file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix.lower() in YAML_SUFFIXES:
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        with open(path, "r") as f:
            data = json.load(f)

    runtime = RuntimeConfig.from_dict(data)
    return CLIConfig(
        distribution=runtime.distribution,
        log_level=runtime.logging.level,
        log_file=runtime.logging.file,
        default_output_format=data.get("default_output_format", "human"),
    )


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. When no path is given,
    the default locations are searched in order.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        if config_path.exists():
            config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    runtime = config.to_runtime().with_env_overrides()

    config.distribution = runtime.distribution
    config.log_level = runtime.logging.level
    config.log_file = runtime.logging.file
    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "distribution": {
    "require_positive_amounts": false,
    "reject_duplicate_addresses": false,
    "skip_invalid_records": false
  },
  "logging": {
    "level": "INFO",
    "file": null
  },
  "default_output_format": "human"
}
"""


def wants_json(args: Namespace) -> bool:
    """True if --json was given or the config defaults output to JSON."""
    if getattr(args, "json", False):
        return True
    cli_config = getattr(args, "cli_config", None)
    return cli_config is not None and cli_config.default_output_format == "json"
