"""Undo action records.

An undo action describes how to reverse one completed mutation. Actions live
only in memory for the lifetime of an ``UndoStack``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from td_cli.models.core import Status


class UndoKind(StrEnum):
    """Kinds of reversible mutation."""

    TASK_DELETE = "task-delete"
    PROJECT_DELETE = "project-delete"
    TASK_STATUS = "task-status"


class StatusChange(BaseModel):
    """One task's status change inside a task-status action."""

    task_id: int
    from_status: Status
    to_status: Status


class UndoAction(BaseModel):
    """Inverse description of a single logical mutation.

    Attributes:
        kind: Which mutation this reverses
        task_ids: Tasks soft-deleted (task-delete) or detached (project-delete)
        project: Deleted project name (project-delete only)
        changes: Per-task status changes in insertion order (task-status only)
    """

    kind: UndoKind
    task_ids: list[int] = Field(default_factory=list)
    project: str = ""
    changes: list[StatusChange] = Field(default_factory=list)

    @classmethod
    def task_delete(cls, task_ids: list[int]) -> UndoAction:
        return cls(kind=UndoKind.TASK_DELETE, task_ids=list(task_ids))

    @classmethod
    def project_delete(cls, project: str, task_ids: list[int]) -> UndoAction:
        return cls(kind=UndoKind.PROJECT_DELETE, project=project, task_ids=list(task_ids))

    @classmethod
    def task_status(cls, changes: list[StatusChange]) -> UndoAction:
        return cls(kind=UndoKind.TASK_STATUS, changes=list(changes))


class MutationSummary(BaseModel):
    """Result of a coordinated mutation, for display."""

    kind: UndoKind
    task_ids: list[int] = Field(default_factory=list)
    project: str = ""
    message: str
    recorded: bool = True


class UndoSummary(BaseModel):
    """Result of a successful undo, for display."""

    action: UndoAction
    message: str
