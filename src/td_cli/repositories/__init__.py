"""Repository interfaces for td.

This package contains the abstract repository interface that defines the
contract for task and project storage.
"""

from td_cli.repositories.repository import TaskRepository

__all__ = [
    "TaskRepository",
]
