"""Versioned DDL for the settings database.

Tables are shaped by numbered ``vNNN_*`` modules in
``PipeUpgrade.storage.migrations``; the applied number lives in the
single-row ``schema_version`` table. This is independent of the release
version stored in the settings themselves (see PipeUpgrade.services.upgrade).
"""

from __future__ import annotations

import importlib
import pkgutil
import sqlite3
from dataclasses import dataclass

from PipeUpgrade.utils.log import log

_MIGRATIONS_PACKAGE = "PipeUpgrade.storage.migrations"


@dataclass(frozen=True)
class Migration:
    """One schema step: ``sql`` holds ``;``-separated statements."""

    version: int
    description: str
    sql: str

    def statements(self) -> list[str]:
        return [s.strip() for s in self.sql.split(";") if s.strip()]


def _load_migrations() -> list[Migration]:
    package = importlib.import_module(_MIGRATIONS_PACKAGE)
    modules = (
        importlib.import_module(f"{_MIGRATIONS_PACKAGE}.{info.name}")
        for info in pkgutil.iter_modules(package.__path__)
        if info.name.startswith("v")
    )
    return sorted((m.MIGRATION for m in modules), key=lambda m: m.version)


# Append-only: add a new vNNN module, never edit a published one.
MIGRATIONS: list[Migration] = _load_migrations()


def run_migrations(conn: sqlite3.Connection) -> None:
    """Bring the schema of ``conn`` to the newest migration.

    Each pending migration and its ``schema_version`` bump commit together.

    Raises:
        ValueError: If migration numbers are not 1, 2, 3, ...
        sqlite3.Error: If a statement fails; that migration is rolled back.
    """
    for expected, migration in enumerate(MIGRATIONS, start=1):
        if migration.version != expected:
            raise ValueError(
                f"migration {migration.description!r} has version {migration.version}, "
                f"expected {expected}: versions must be consecutive from 1"
            )

    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_version ("
        " id INTEGER PRIMARY KEY CHECK (id = 1), version INTEGER NOT NULL)"
    )
    conn.commit()
    row = conn.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    applied = row[0] if row else 0

    pending = [m for m in MIGRATIONS if m.version > applied]
    if not pending:
        log.debug("schema at version %d, nothing to migrate", applied)
        return

    for migration in pending:
        # executescript() would commit on its own; run statements one by one.
        conn.execute("BEGIN")
        try:
            for statement in migration.statements():
                conn.execute(statement)
            conn.execute(
                "INSERT OR REPLACE INTO schema_version (id, version) VALUES (1, ?)",
                (migration.version,),
            )
        except sqlite3.Error:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")
        log.info("schema migrated to v%d: %s", migration.version, migration.description)
