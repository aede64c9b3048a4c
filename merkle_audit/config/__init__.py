"""
Runtime Configuration Module

Provides configuration loading and logging setup for merkle_audit.
"""

from .runtime import (
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    configure_logging,
    get_default_config,
    set_default_config,
    setup_logging,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
    "configure_logging",
]
