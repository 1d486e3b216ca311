"""Service layer for the Pipe upgrade.

Provides initialization state, the release upgrade step and factory
functions for component creation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PipeUpgrade.services.init import InitService
from PipeUpgrade.services.upgrade import (
    CorruptStateError,
    MigrationWriteError,
    UnsupportedUpgradeError,
    UpgradeError,
    UpgradePlan,
    UpgradeService,
)

if TYPE_CHECKING:
    from PipeUpgrade.storage.db import DatabaseManager
    from PipeUpgrade.storage.settings import SqliteSettingStore


def create_upgrade_service(
    db_manager: DatabaseManager,
    setting_store: SqliteSettingStore,
) -> UpgradeService:
    """Create an upgrade service wired to the given storage components.

    Args:
        db_manager: Database manager providing transactions.
        setting_store: Settings store on the same connection.

    Returns:
        UpgradeService targeting the running release.
    """
    return UpgradeService(
        db_manager=db_manager,
        setting_store=setting_store,
        init_service=InitService(db_manager, setting_store),
    )


__all__ = [
    "InitService",
    "UpgradeService",
    "UpgradePlan",
    "UpgradeError",
    "CorruptStateError",
    "UnsupportedUpgradeError",
    "MigrationWriteError",
    "create_upgrade_service",
]
