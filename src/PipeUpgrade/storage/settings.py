"""Settings store implementation."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

from PipeUpgrade.core.models import Setting
from PipeUpgrade.utils.log import log

if TYPE_CHECKING:
    from PipeUpgrade.storage.db import DatabaseManager

_SEL = "id, category, name, value, blog_id"


class SqliteSettingStore:
    """SQLite-based store for per-blog settings.

    Methods never commit. Writes join whatever transaction the caller holds
    on the shared connection, see :meth:`DatabaseManager.transaction`.
    """

    def __init__(self, db_manager: DatabaseManager):
        """Initialize settings store.

        Args:
            db_manager: Shared database manager instance.
        """
        log.debug("Initializing SqliteSettingStore")
        self.conn = db_manager.get_connection()

    def get_setting(self, category: str, name: str, blog_id: int) -> Setting | None:
        """Look up one setting of a blog.

        Args:
            category: Setting category.
            name: Setting name.
            blog_id: Owning blog.

        Returns:
            The stored setting, or None if the blog has no such setting.
        """
        row = self.conn.execute(
            f"SELECT {_SEL} FROM settings WHERE category = ? AND name = ? AND blog_id = ?",
            (category, name, blog_id),
        ).fetchone()
        return _to_setting(row) if row else None

    def get_settings(self, category: str, blog_id: int) -> list[Setting]:
        """Return all settings of one category for a blog, ordered by id."""
        cursor = self.conn.execute(
            f"SELECT {_SEL} FROM settings WHERE category = ? AND blog_id = ? ORDER BY id",
            (category, blog_id),
        )
        return [_to_setting(row) for row in cursor]

    def find_all(self) -> list[Setting]:
        """Return every stored setting across all blogs, ordered by id."""
        cursor = self.conn.execute(f"SELECT {_SEL} FROM settings ORDER BY id")
        return [_to_setting(row) for row in cursor]

    def add_setting(self, setting: Setting) -> Setting:
        """Insert a new setting.

        Args:
            setting: Record to insert; its ``id`` is ignored.

        Returns:
            The inserted record carrying its assigned id.

        Raises:
            sqlite3.IntegrityError: If the blog already has this setting.
        """
        cursor = self.conn.execute(
            "INSERT INTO settings (category, name, value, blog_id) VALUES (?, ?, ?, ?)",
            (setting.category, setting.name, setting.value, setting.blog_id),
        )
        log.debug(
            "Added setting %s/%s for blog %d", setting.category, setting.name, setting.blog_id
        )
        return Setting(
            category=setting.category,
            name=setting.name,
            value=setting.value,
            blog_id=setting.blog_id,
            id=cursor.lastrowid,
        )

    def save(self, setting: Setting) -> None:
        """Persist the value of an existing setting.

        Args:
            setting: Stored record with an id.

        Raises:
            ValueError: If the record has never been stored.
            sqlite3.Error: If the update fails or matches no row.
        """
        if setting.id is None:
            raise ValueError(f"setting {setting.category}/{setting.name} has no id")
        cursor = self.conn.execute(
            "UPDATE settings SET category = ?, name = ?, value = ?, blog_id = ? WHERE id = ?",
            (setting.category, setting.name, setting.value, setting.blog_id, setting.id),
        )
        if cursor.rowcount != 1:
            raise sqlite3.DatabaseError(f"setting id={setting.id} not found")

    def distinct_blog_ids(self) -> list[int]:
        """Return every blog id that owns at least one setting, ascending."""
        cursor = self.conn.execute(
            "SELECT blog_id FROM settings GROUP BY blog_id ORDER BY blog_id"
        )
        return [row[0] for row in cursor]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM settings").fetchone()[0]


def _to_setting(row: tuple) -> Setting:
    return Setting(id=row[0], category=row[1], name=row[2], value=row[3], blog_id=row[4])
