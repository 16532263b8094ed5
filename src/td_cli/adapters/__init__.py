"""Adapters module - Repository implementations for storage backends.

This package contains concrete implementations (adapters) for the repository
interface:
- sqlite: Local SQLite database storage
"""

from .sqlite import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
]
