"""Platform initialization state and blog seeding."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PipeUpgrade.core.models import (
    SETTING_CATEGORY_AD,
    SETTING_CATEGORY_BASIC,
    SETTING_CATEGORY_PREFERENCE,
    SETTING_CATEGORY_SYSTEM,
    SETTING_NAME_AD_GOOGLE_ADSENSE_ARTICLE_EMBED,
    SETTING_NAME_BASIC_BLOG_SUBTITLE,
    SETTING_NAME_BASIC_BLOG_TITLE,
    SETTING_NAME_PREFERENCE_ARTICLE_LIST_PAGE_SIZE,
    SETTING_NAME_SYSTEM_VER,
    VERSION,
    Setting,
)
from PipeUpgrade.utils.log import log

if TYPE_CHECKING:
    from PipeUpgrade.storage.db import DatabaseManager
    from PipeUpgrade.storage.settings import SqliteSettingStore


class InitService:
    """Answers whether the platform is installed and seeds new blogs."""

    def __init__(self, db_manager: DatabaseManager, setting_store: SqliteSettingStore):
        self.db_manager = db_manager
        self.setting_store = setting_store
        self._inited = False

    def inited(self) -> bool:
        """Return True once any blog has been initialized.

        A positive answer is cached; a platform never becomes uninitialized.
        """
        if not self._inited:
            self._inited = self.setting_store.count() > 0
        return self._inited

    def init_blog(self, blog_id: int, version: str = VERSION) -> None:
        """Create the version marker and default settings of one blog.

        Args:
            blog_id: Blog to initialize.
            version: Value written to the version marker. Defaults to the
                running release; older values are used to stage upgrades.

        Raises:
            ValueError: If the blog already has a version marker or the id is negative.
            sqlite3.Error: If an insert fails; nothing is written in that case.
        """
        if blog_id < 0:
            raise ValueError(f"blog id must be non-negative, got {blog_id}")
        if self.setting_store.get_setting(SETTING_CATEGORY_SYSTEM, SETTING_NAME_SYSTEM_VER, blog_id):
            raise ValueError(f"blog {blog_id} is already initialized")

        defaults = [
            Setting(SETTING_CATEGORY_SYSTEM, SETTING_NAME_SYSTEM_VER, version, blog_id),
            Setting(SETTING_CATEGORY_BASIC, SETTING_NAME_BASIC_BLOG_TITLE, "Pipe", blog_id),
            Setting(SETTING_CATEGORY_BASIC, SETTING_NAME_BASIC_BLOG_SUBTITLE, "", blog_id),
            Setting(SETTING_CATEGORY_PREFERENCE, SETTING_NAME_PREFERENCE_ARTICLE_LIST_PAGE_SIZE, "20", blog_id),
        ]
        # The article embed setting only exists from VERSION on.
        if version == VERSION:
            defaults.append(
                Setting(SETTING_CATEGORY_AD, SETTING_NAME_AD_GOOGLE_ADSENSE_ARTICLE_EMBED, "", blog_id)
            )

        with self.db_manager.transaction():
            for setting in defaults:
                self.setting_store.add_setting(setting)
        self._inited = True
        log.info("Initialized blog %d at version [%s]", blog_id, version)
