"""Forward-only schema migrations for the SQLite store.

Each migration carries a sequential version. Applied versions are recorded in
``schema_version`` and pending ones run in order when a connection is opened.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from td_cli.models.errors import RepositoryError
from td_cli.utils.logger import get_logger


class Migration(ABC):
    """Base class for database migrations."""

    version: int
    description: str

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Execute forward migration."""


class MigrationRunner:
    """Applies pending migrations to a connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                description TEXT NOT NULL,
                applied_at DATETIME NOT NULL
            )
        """)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Return the highest applied version, 0 for a fresh database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] if row[0] is not None else 0

    def run_migration(self, migration: Migration) -> None:
        """Apply one migration and record it, rolling back on failure.

        Raises:
            ValueError: If the migration is not newer than the current version
            RepositoryError: If the migration itself fails
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current}"
            )

        try:
            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise RepositoryError(f"Migration {migration.version} failed: {e}") from e

        get_logger().info(
            "applied migration %d: %s", migration.version, migration.description
        )

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Apply every pending migration in version order.

        Returns:
            Number of migrations applied
        """
        current = self.get_current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.run_migration(migration)
        return len(pending)
