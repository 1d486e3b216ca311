"""Tests for the SQLite settings store."""

from __future__ import annotations

import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PipeUpgrade.core.models import Setting
from PipeUpgrade.storage.db import DatabaseManager
from PipeUpgrade.storage.settings import SqliteSettingStore


class TestSettingStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.manager = DatabaseManager(Path(self._tmpdir.name) / "pipe.db")
        self.store = SqliteSettingStore(self.manager)

    def tearDown(self) -> None:
        self.manager.close()
        self._tmpdir.cleanup()

    def test_get_setting_missing_returns_none(self) -> None:
        self.assertIsNone(self.store.get_setting("system", "systemVersion", 1))

    def test_add_then_get(self) -> None:
        added = self.store.add_setting(Setting("system", "systemVersion", "1.8.4", 1))
        self.assertIsNotNone(added.id)

        found = self.store.get_setting("system", "systemVersion", 1)
        self.assertEqual(found, added)
        self.assertIsNone(self.store.get_setting("system", "systemVersion", 2))

    def test_duplicate_setting_rejected(self) -> None:
        self.store.add_setting(Setting("ad", "adGoogleAdSenseArticleEmbed", "", 3))
        with self.assertRaises(sqlite3.IntegrityError):
            self.store.add_setting(Setting("ad", "adGoogleAdSenseArticleEmbed", "<ins/>", 3))

    def test_save_updates_value(self) -> None:
        marker = self.store.add_setting(Setting("system", "systemVersion", "1.8.4", 1))
        marker.value = "1.8.5"
        self.store.save(marker)
        self.assertEqual(self.store.get_setting("system", "systemVersion", 1).value, "1.8.5")

    def test_save_requires_stored_record(self) -> None:
        with self.assertRaises(ValueError):
            self.store.save(Setting("system", "systemVersion", "1.8.5", 1))
        with self.assertRaises(sqlite3.DatabaseError):
            self.store.save(Setting("system", "systemVersion", "1.8.5", 1, id=999))

    def test_find_all_and_distinct_blog_ids(self) -> None:
        for blog_id in (3, 1, 3, 2):
            name = f"basicBlogTitle{len(self.store.find_all())}"
            self.store.add_setting(Setting("basic", name, "t", blog_id))

        self.assertEqual(len(self.store.find_all()), 4)
        self.assertEqual(self.store.count(), 4)
        self.assertEqual(self.store.distinct_blog_ids(), [1, 2, 3])

    def test_get_settings_filters_category_and_blog(self) -> None:
        self.store.add_setting(Setting("basic", "basicBlogTitle", "A", 1))
        self.store.add_setting(Setting("basic", "basicBlogSubtitle", "a", 1))
        self.store.add_setting(Setting("basic", "basicBlogTitle", "B", 2))
        self.store.add_setting(Setting("system", "systemVersion", "1.8.5", 1))

        names = [s.name for s in self.store.get_settings("basic", 1)]
        self.assertEqual(names, ["basicBlogTitle", "basicBlogSubtitle"])

    def test_writes_roll_back_with_transaction(self) -> None:
        with self.assertRaises(RuntimeError):
            with self.manager.transaction():
                self.store.add_setting(Setting("basic", "basicBlogTitle", "A", 1))
                raise RuntimeError("boom")
        self.assertEqual(self.store.count(), 0)

    def test_transaction_refuses_open_transaction(self) -> None:
        self.store.add_setting(Setting("basic", "basicBlogTitle", "A", 1))
        with self.assertRaisesRegex(RuntimeError, "another transaction is open"):
            with self.manager.transaction():
                self.fail("block must not run")
        self.assertTrue(self.manager.get_connection().in_transaction)

    def test_transaction_keeps_error_when_sqlite_already_rolled_back(self) -> None:
        conn = self.manager.get_connection()
        conn.execute(
            """
            CREATE TRIGGER reject_blog_9 BEFORE INSERT ON settings
            WHEN NEW.blog_id = 9
            BEGIN
              SELECT RAISE(ROLLBACK, 'disk full');
            END
            """
        )
        conn.commit()

        with self.assertRaisesRegex(sqlite3.IntegrityError, "disk full"):
            with self.manager.transaction():
                self.store.add_setting(Setting("basic", "basicBlogTitle", "A", 1))
                self.store.add_setting(Setting("basic", "basicBlogTitle", "B", 9))
        self.assertFalse(conn.in_transaction)
        self.assertEqual(self.store.count(), 0)

    def test_transaction_aborted_inside_block_is_not_committed(self) -> None:
        conn = self.manager.get_connection()
        conn.execute(
            """
            CREATE TRIGGER reject_blog_9 BEFORE INSERT ON settings
            WHEN NEW.blog_id = 9
            BEGIN
              SELECT RAISE(ROLLBACK, 'disk full');
            END
            """
        )
        conn.commit()

        with self.assertRaises(sqlite3.OperationalError):
            with self.manager.transaction():
                self.store.add_setting(Setting("basic", "basicBlogTitle", "A", 1))
                try:
                    self.store.add_setting(Setting("basic", "basicBlogTitle", "B", 9))
                except sqlite3.IntegrityError:
                    pass
        self.assertEqual(self.store.count(), 0)


if __name__ == "__main__":
    unittest.main()
