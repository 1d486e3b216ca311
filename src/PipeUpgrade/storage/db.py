"""SQLite database utilities."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from PipeUpgrade.storage.migration import run_migrations
from PipeUpgrade.utils.log import log


class DatabaseManager:
    """Shared database connection manager.

    Uses singleton pattern to ensure only one connection is created per process,
    so every store and service shares the same transaction scope.

    Supports context manager protocol for automatic connection cleanup.
    """

    _instance = None

    def __new__(cls, db_path: Path):
        """Create or return existing DatabaseManager instance.

        Args:
            db_path: Absolute path or project-relative path to database file.

        Returns:
            DatabaseManager singleton instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.db_path = db_path
            cls._instance.conn = ensure_db(db_path)
            run_migrations(cls._instance.conn)
        return cls._instance

    def get_connection(self) -> sqlite3.Connection:
        """Get the shared database connection.

        Returns:
            SQLite connection.
        """
        return self.conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed block in one explicit transaction.

        Commits when the block exits normally. On any exception the whole
        transaction is rolled back and the exception is re-raised. SQLite may
        already have aborted the transaction itself (I/O error, full disk,
        ``RAISE(ROLLBACK)``); the original exception is re-raised unchanged then.

        Yields:
            The shared SQLite connection.

        Raises:
            RuntimeError: If the connection already holds an open transaction,
                e.g. uncommitted writes made outside of ``transaction()``.
        """
        if self.conn.in_transaction:
            raise RuntimeError("transaction() called while another transaction is open")
        self.conn.execute("BEGIN")
        try:
            yield self.conn
        except BaseException:
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK")
                log.debug("transaction rolled back")
            else:
                log.debug("transaction already aborted by SQLite")
            raise
        if not self.conn.in_transaction:
            raise sqlite3.OperationalError("transaction was aborted before commit")
        self.conn.execute("COMMIT")

    def close(self) -> None:
        """Close the database connection and reset singleton instance.

        This allows creating a new instance with a different database path.
        """
        if hasattr(self, 'conn') and self.conn:
            self.conn.close()
            type(self)._instance = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path) -> sqlite3.Connection:
    """Ensure database file exists and return connection.

    Args:
        db_path: Absolute path or project-relative path to database file.

    Returns:
        SQLite connection.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    return conn
