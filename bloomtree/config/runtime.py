"""
Runtime Configuration

Configuration for tree construction (hash policy, Bloom acceleration)
and for logging in the CLI.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from bloomtree.crypto.hashing import DEFAULT_HASH_ALGORITHM, HashPolicy, get_hash_policy


ENV_PREFIX = "BLOOMTREE_"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TreeConfig:
    """Configuration for building a MerkleTree."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    enable_bloom: bool = False
    false_positive_rate: float = 0.01

    def __post_init__(self):
        if not 0.0 < self.false_positive_rate < 1.0:
            raise ValueError(
                f"false_positive_rate must be in (0, 1), got {self.false_positive_rate}"
            )
        # Fail early on unknown algorithms
        get_hash_policy(self.hash_algorithm)

    @property
    def hash_policy(self) -> HashPolicy:
        return get_hash_policy(self.hash_algorithm)


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a .env file is honoured)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - BLOOMTREE_HASH_ALGORITHM: hash policy name (sha256, sha512, ...)
        - BLOOMTREE_ENABLE_BLOOM: enable Bloom acceleration (true/false)
        - BLOOMTREE_FALSE_POSITIVE_RATE: target Bloom false positive rate
        - BLOOMTREE_LOG_LEVEL: log level
        - BLOOMTREE_LOG_FILE: log file path
        """
        load_dotenv()
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}ENABLE_BLOOM"):
            overrides.setdefault("tree", {})["enable_bloom"] = _env_bool(os.getenv(f"{ENV_PREFIX}ENABLE_BLOOM", "false"))
        if os.getenv(f"{ENV_PREFIX}FALSE_POSITIVE_RATE"):
            overrides.setdefault("tree", {})["false_positive_rate"] = float(
                os.getenv(f"{ENV_PREFIX}FALSE_POSITIVE_RATE", "0.01")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

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
        tree_data = data.get("tree", {})
        logging_data = data.get("logging", {})

        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            tree=tree,
            logging=log,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "tree" in overrides:
            tree_data = {
                "hash_algorithm": new_config.tree.hash_algorithm,
                "enable_bloom": new_config.tree.enable_bloom,
                "false_positive_rate": new_config.tree.false_positive_rate,
            }
            tree_data.update(overrides["tree"])
            # Rebuild so overrides are validated
            new_config.tree = TreeConfig(**tree_data)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "hash_algorithm": self.tree.hash_algorithm,
                "enable_bloom": self.tree.enable_bloom,
                "false_positive_rate": self.tree.false_positive_rate,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return """tree:
  hash_algorithm: sha256
  enable_bloom: true
  false_positive_rate: 0.01
logging:
  level: INFO
  log_file: null
"""
