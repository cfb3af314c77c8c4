"""
Runtime Configuration Module

Provides configuration loading and management for bloomtree.
"""

from .runtime import (
    ENV_PREFIX,
    TreeConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config_template,
)

__all__ = [
    "ENV_PREFIX",
    "TreeConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "get_default_config_template",
]
