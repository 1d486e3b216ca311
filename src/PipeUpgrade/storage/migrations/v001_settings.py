"""Migration v001: settings table."""

from __future__ import annotations

from PipeUpgrade.storage.migration import Migration

MIGRATION = Migration(
    version=1,
    description="Initial schema: settings",
    sql="""
        CREATE TABLE IF NOT EXISTS settings (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          category TEXT NOT NULL,
          name TEXT NOT NULL,
          value TEXT NOT NULL DEFAULT '',
          blog_id INTEGER NOT NULL CHECK (blog_id >= 0),
          created_at INTEGER NOT NULL DEFAULT (CAST(strftime('%s','now') AS INTEGER)),
          UNIQUE(category, name, blog_id)
        );

        CREATE INDEX IF NOT EXISTS idx_settings_blog
          ON settings(blog_id);

        CREATE INDEX IF NOT EXISTS idx_settings_name
          ON settings(name)
    """,
)
