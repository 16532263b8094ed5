"""Bootstrap of the repository and services from configuration.

Usage Pattern:
    from td_cli.services.context_manager import get_task_repository

    repository = get_task_repository()
    tasks = await repository.list_all(TaskFilters())
"""

from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache

from td_cli.adapters.sqlite import SqliteTaskRepository
from td_cli.repositories import TaskRepository
from td_cli.services.config_service import get_config_service
from td_cli.services.project_service import ProjectService
from td_cli.services.task_service import TaskService
from td_cli.services.undo_service import UndoCoordinator
from td_cli.services.view_service import ViewService
from td_cli.utils.datetime_utils import resolve_timezone


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    """Get the cached repository for the configured database."""
    config = get_config_service().config
    return SqliteTaskRepository(db_path=config.db_path)


def get_task_service() -> TaskService:
    return TaskService(get_task_repository())


def get_project_service() -> ProjectService:
    return ProjectService(get_task_repository())


def get_view_service() -> ViewService:
    config = get_config_service().config
    return ViewService(get_task_repository(), log_window_days=config.log_window_days)


def get_undo_coordinator() -> UndoCoordinator:
    """A coordinator with a fresh undo history."""
    return UndoCoordinator(get_task_repository())


def get_display_timezone() -> tzinfo:
    return resolve_timezone(get_config_service().config.timezone)
