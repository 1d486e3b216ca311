"""Database domain configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from PipeUpgrade.config.common import (
    expect_optional_str,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Database configuration.

    Attributes:
        path: SQLite file holding the platform data.
        path_env: Environment variable that overrides ``path`` when set.
    """

    path: str
    path_env: str | None


def load_database(raw: Mapping[str, Any]) -> DatabaseConfig:
    """Load database domain config from raw mapping.

    The environment variable named by ``database.path_env`` wins over
    ``database.path`` when it is set and non-empty.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "database", required=True)
    path = expect_str(get_required_value(section, "path", "database.path"), "database.path")
    path_env = expect_optional_str(get_optional_value(section, "path_env", None), "database.path_env")
    if path_env:
        path = os.getenv(path_env, "").strip() or path
    return DatabaseConfig(path=path, path_env=path_env)


def check_database(config: DatabaseConfig) -> None:
    """Validate database domain constraints."""
    if not config.path.strip():
        raise ValueError("database.path must not be empty")
