"""Initial database schema migration: projects and tasks tables."""

import sqlite3

from td_cli.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    version = 1
    description = "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        for table_sql in schema.ALL_TABLES:
            connection.execute(table_sql)
        for index_sql in schema.ALL_INDEXES:
            connection.execute(index_sql)


initial_migration = InitialSchemaMigration()

ALL_MIGRATIONS: list[Migration] = [initial_migration]
