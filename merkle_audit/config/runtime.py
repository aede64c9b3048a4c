"""
Runtime Configuration

Central configuration for tree construction defaults and logging.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkle_audit.crypto.hashing import DEFAULT_HASH_ALGORITHM, HashFunction, get_hash_function


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TreeConfig:
    """Defaults applied to MerkleTree instances."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    # False restores the legacy "empty trail" answer for unknown leaves
    strict_leaf_lookup: bool = True

    def hash_function(self) -> HashFunction:
        """Resolve the configured algorithm name to a hash function."""
        return get_hash_function(self.hash_algorithm)


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "WARNING"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for merkle_audit.

    Can be loaded from:
    - Environment variables (a .env file is honoured)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_AUDIT_HASH_ALGORITHM: hash registry name (e.g. sha256)
        - MERKLE_AUDIT_STRICT_LOOKUP: raise on unknown leaves (true/false)
        - MERKLE_AUDIT_LOG_LEVEL: logging level name
        - MERKLE_AUDIT_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_AUDIT_HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv("MERKLE_AUDIT_HASH_ALGORITHM")
        if os.getenv("MERKLE_AUDIT_STRICT_LOOKUP"):
            overrides.setdefault("tree", {})["strict_leaf_lookup"] = _env_flag(
                os.getenv("MERKLE_AUDIT_STRICT_LOOKUP", "true")
            )

        if os.getenv("MERKLE_AUDIT_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("MERKLE_AUDIT_LOG_LEVEL")
        if os.getenv("MERKLE_AUDIT_LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv("MERKLE_AUDIT_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        load_dotenv()
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {})
        logging_data = data.get("logging", {})

        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        # Fail early on an unknown algorithm name
        tree.hash_function()

        return cls(tree=tree, logging=log)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("tree", {}).items():
            setattr(new_config.tree, key, value)
        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)

        new_config.tree.hash_function()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "hash_algorithm": self.tree.hash_algorithm,
                "strict_leaf_lookup": self.tree.strict_leaf_lookup,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
        }


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure root logging handlers for applications embedding the library."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def configure_logging(config: RuntimeConfig) -> None:
    """Apply the logging section of a RuntimeConfig."""
    setup_logging(config.logging.level, config.logging.log_file)


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to lazy env loading)."""
    global _default_config
    _default_config = config
