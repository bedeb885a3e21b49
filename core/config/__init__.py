"""
Runtime Configuration Module

Provides configuration loading and management for distribution building.
"""

from .runtime import (
    DistributionConfig,
    LoggingConfig,
    RuntimeConfig,
)

__all__ = [
    "DistributionConfig",
    "LoggingConfig",
    "RuntimeConfig",
]
