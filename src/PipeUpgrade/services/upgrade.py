"""Release-to-release data upgrade.

An installation records the release that last wrote its data in the
``system/systemVersion`` setting. At startup :class:`UpgradeService` compares
that marker with the running release and either does nothing, applies the one
supported forward step, or refuses to run.

The forward step is applied in a single transaction:

1. every version marker (one per blog) is rewritten to the running release;
2. each blog that owns settings receives an empty Google AdSense article
   embed setting.

Failures of step 1, or of the blog enumeration feeding step 2, roll the whole
transaction back and raise :class:`MigrationWriteError`. A failing insert in
step 2 that only aborts its own statement (e.g. a constraint violation) is
logged and skipped; the remaining blogs are still processed and the
transaction still commits. An insert failure that makes SQLite abort the
whole transaction is raised as :class:`MigrationWriteError` instead.
"""

from __future__ import annotations

import sqlite3
from enum import Enum
from typing import TYPE_CHECKING

from PipeUpgrade.core.models import (
    PLATFORM_BLOG_ID,
    SETTING_CATEGORY_AD,
    SETTING_CATEGORY_SYSTEM,
    SETTING_NAME_AD_GOOGLE_ADSENSE_ARTICLE_EMBED,
    SETTING_NAME_SYSTEM_VER,
    UPGRADE_FROM_VERSION,
    VERSION,
    Setting,
)
from PipeUpgrade.utils.log import log

if TYPE_CHECKING:
    from PipeUpgrade.services.init import InitService
    from PipeUpgrade.storage.db import DatabaseManager
    from PipeUpgrade.storage.settings import SqliteSettingStore


class UpgradeError(RuntimeError):
    """Base class for errors that must stop the application from starting."""


class CorruptStateError(UpgradeError):
    """The platform is initialized but its version marker is missing."""


class UnsupportedUpgradeError(UpgradeError):
    """The stored version is neither the running release nor its predecessor."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            "attempt to skip more than one version to upgrade. "
            f"Expected: {expected}, Actually: {actual}"
        )
        self.expected = expected
        self.actual = actual


class MigrationWriteError(UpgradeError):
    """A mandatory write of the upgrade failed; the transaction was rolled back."""


class UpgradePlan(str, Enum):
    NOT_INITIALIZED = "not-initialized"
    UP_TO_DATE = "up-to-date"
    PENDING = "pending"
    UNSUPPORTED = "unsupported"


class UpgradeService:
    """Upgrades the persisted data from the previous release to the running one.

    Attributes:
        db_manager: Provides the upgrade transaction.
        setting_store: Reads and writes settings.
        init_service: Reports whether the platform is installed.
        from_version: The only release accepted as a starting point.
        to_version: The running release.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        setting_store: SqliteSettingStore,
        init_service: InitService,
        *,
        from_version: str = UPGRADE_FROM_VERSION,
        to_version: str = VERSION,
    ):
        self.db_manager = db_manager
        self.setting_store = setting_store
        self.init_service = init_service
        self.from_version = from_version
        self.to_version = to_version

    def current_version(self) -> str:
        """Return the version recorded for the platform blog.

        Raises:
            CorruptStateError: If the version marker is missing.
        """
        marker = self.setting_store.get_setting(
            SETTING_CATEGORY_SYSTEM, SETTING_NAME_SYSTEM_VER, PLATFORM_BLOG_ID
        )
        if marker is None:
            raise CorruptStateError(
                f"system version setting of blog {PLATFORM_BLOG_ID} is missing, "
                "the database is in an inconsistent state"
            )
        return marker.value

    def plan(self) -> UpgradePlan:
        """Classify the installation without writing anything.

        Raises:
            CorruptStateError: If the platform is initialized but has no version marker.
        """
        if not self.init_service.inited():
            return UpgradePlan.NOT_INITIALIZED
        current = self.current_version()
        if current == self.to_version:
            return UpgradePlan.UP_TO_DATE
        if current == self.from_version:
            return UpgradePlan.PENDING
        return UpgradePlan.UNSUPPORTED

    def perform(self) -> None:
        """Bring the installation to the running release if needed.

        Raises:
            CorruptStateError: If the version marker is missing.
            UnsupportedUpgradeError: If more than one release was skipped.
            MigrationWriteError: If a mandatory write failed (nothing was changed).
        """
        plan = self.plan()
        if plan is UpgradePlan.NOT_INITIALIZED:
            log.debug("platform not initialized, skipping upgrade")
            return
        if plan is UpgradePlan.UP_TO_DATE:
            log.debug("data already at version [%s]", self.to_version)
            return
        if plan is UpgradePlan.UNSUPPORTED:
            raise UnsupportedUpgradeError(self.from_version, self.current_version())

        self._migrate()

    def _migrate(self) -> None:
        log.info("upgrading from version [%s] to version [%s]....", self.from_version, self.to_version)

        with self.db_manager.transaction() as conn:
            try:
                settings = self.setting_store.find_all()
            except sqlite3.Error as e:
                raise MigrationWriteError(f"load settings failed: {e}") from e

            markers: list[Setting] = []
            for setting in settings:
                if setting.is_version_marker():
                    setting.value = self.to_version
                    markers.append(setting)

            for marker in markers:
                try:
                    self.setting_store.save(marker)
                except sqlite3.Error as e:
                    raise MigrationWriteError(f"update setting [{marker}] failed: {e}") from e

            try:
                blog_ids = self.setting_store.distinct_blog_ids()
            except sqlite3.Error as e:
                raise MigrationWriteError(f"update settings failed: {e}") from e

            added = 0
            for blog_id in blog_ids:
                embed = Setting(
                    category=SETTING_CATEGORY_AD,
                    name=SETTING_NAME_AD_GOOGLE_ADSENSE_ARTICLE_EMBED,
                    value="",
                    blog_id=blog_id,
                )
                try:
                    self.setting_store.add_setting(embed)
                except sqlite3.Error as e:
                    if not conn.in_transaction:
                        # SQLite aborted the whole transaction, marker updates included.
                        raise MigrationWriteError(
                            f"create Google AdSense setting for blog {blog_id} failed "
                            f"and aborted the upgrade transaction: {e}"
                        ) from e
                    log.error("create Google AdSense setting for blog %d failed: %s", blog_id, e)
                    continue
                added += 1

        log.debug("updated %d version markers, added %d/%d embed settings", len(markers), added, len(blog_ids))
        log.info(
            "upgraded from version [%s] to version [%s] successfully", self.from_version, self.to_version
        )
