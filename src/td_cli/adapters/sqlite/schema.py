"""Database schema definitions for the local SQLite store."""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

# Projects table - existence is tracked independently of tasks
CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    name TEXT PRIMARY KEY,
    created_at DATETIME NOT NULL
)
"""

# Tasks table - main task entity
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    notes TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL DEFAULT 'inbox'
        CHECK (status IN ('inbox', 'todo', 'doing', 'done', 'deleted')),
    project TEXT NOT NULL DEFAULT '',
    priority TEXT NOT NULL DEFAULT 'P2',
    due_at DATETIME,
    done_at DATETIME,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

# Tasks indexes
CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_due ON tasks(due_at)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_updated ON tasks(updated_at)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_PROJECTS_TABLE,
    CREATE_TASKS_TABLE,
]

# All index creation statements
ALL_INDEXES = CREATE_TASK_INDEXES
