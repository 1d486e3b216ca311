"""Storage layer for the Pipe upgrade.

Provides database management, schema migrations and the settings store.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PipeUpgrade.storage.db import DatabaseManager
from PipeUpgrade.storage.migration import run_migrations
from PipeUpgrade.storage.settings import SqliteSettingStore
from PipeUpgrade.utils.log import log

if TYPE_CHECKING:
    from PipeUpgrade.config import AppConfig


def create_storage(config: AppConfig) -> tuple[DatabaseManager, SqliteSettingStore]:
    """Open the configured database and create the settings store.

    Args:
        config: Application configuration containing database settings.

    Returns:
        Tuple of (db_manager, setting_store).
    """
    db_path = Path(config.database.path)
    db_manager = DatabaseManager(db_path)
    log.info("Database opened: %s", db_path)
    return db_manager, SqliteSettingStore(db_manager)


__all__ = [
    "DatabaseManager",
    "SqliteSettingStore",
    "run_migrations",
    "create_storage",
]
