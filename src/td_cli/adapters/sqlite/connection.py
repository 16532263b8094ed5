"""Database connection management for the local SQLite store.

This module provides a singleton connection manager for the task database,
ensuring one connection per process, WAL mode, and an up-to-date schema.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from td_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from td_cli.models.errors import RepositoryError

MEMORY_DB = ":memory:"


def open_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open and configure a connection, then migrate it to the latest schema.

    Args:
        db_path: Database file path, or ":memory:" for a throwaway database

    Returns:
        sqlite3.Connection with dict-like rows

    Raises:
        RepositoryError: If the database cannot be opened or migrated
    """
    in_memory = str(db_path) == MEMORY_DB
    is_new_database = False
    if not in_memory:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

    try:
        connection = sqlite3.connect(
            str(db_path),
            timeout=30.0,  # Wait up to 30s for locks
        )
        connection.row_factory = sqlite3.Row
        if not in_memory:
            connection.execute("PRAGMA journal_mode = WAL")
    except sqlite3.Error as e:
        raise RepositoryError(f"cannot open database {db_path}: {e}") from e

    # Owner read/write only
    if is_new_database:
        os.chmod(db_path, 0o600)

    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection


class DatabaseConnection:
    """Singleton connection manager for the task database.

    Provides:
    - Single connection per process (connection reuse)
    - Automatic directory creation and migrations
    - Graceful cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path) -> sqlite3.Connection:
        """Get or create the database connection for a path."""
        instance = cls()
        db_path = Path(db_path)

        # If connection exists and path hasn't changed, return it
        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        # Close existing connection if path changed
        if instance._connection is not None:
            instance._connection.close()

        instance._connection = open_connection(db_path)
        instance._db_path = db_path

        atexit.register(cls.close_connection)
        return instance._connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is None:
            return
        try:
            instance._connection.commit()
            instance._connection.close()
        finally:
            instance._connection = None
            instance._db_path = None


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
