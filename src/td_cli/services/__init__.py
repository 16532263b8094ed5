"""Services module for td - Business logic layer."""

from .project_service import ProjectService, ProjectSummary
from .task_service import TaskService
from .undo_service import UndoCoordinator, UndoStack
from .view_service import ViewService, classify

__all__ = [
    "TaskService",
    "ProjectService",
    "ProjectSummary",
    "ViewService",
    "UndoCoordinator",
    "UndoStack",
    "classify",
]
