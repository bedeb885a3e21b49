"""
Module 05 - API Dependencies

Dependency injection for the API.
Provides the distribution policy used by the build route.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

import yaml

from core.config.runtime import DistributionConfig, RuntimeConfig

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _read_config_file(path: Path) -> RuntimeConfig:
    if path.suffix.lower() in YAML_SUFFIXES:
        return RuntimeConfig.from_yaml(path)
    with open(path) as f:
        return RuntimeConfig.from_dict(json.load(f))


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./merkledrop.json
      2. ./.merkledrop.json
      3. ./merkledrop.yaml
      4. ./merkledrop.yml
      5. ~/.config/merkledrop/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "merkledrop.json",
        Path.cwd() / ".merkledrop.json",
        Path.cwd() / "merkledrop.yaml",
        Path.cwd() / "merkledrop.yml",
        Path.home() / ".config" / "merkledrop" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                config = _read_config_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


@lru_cache(maxsize=1)
def get_runtime_config() -> RuntimeConfig:
    return _load_runtime_config()


def get_distribution_config() -> DistributionConfig:
    """Distribution policy for request handlers (overridable in tests)."""
    return get_runtime_config().distribution
