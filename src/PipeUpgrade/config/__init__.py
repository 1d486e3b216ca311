from __future__ import annotations

"""Public configuration API for the Pipe upgrade."""

from PipeUpgrade.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from PipeUpgrade.config.database import DatabaseConfig
from PipeUpgrade.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "DatabaseConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
