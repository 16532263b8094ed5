"""Custom exceptions for td."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from td_cli.models.core import Status
    from td_cli.models.undo import UndoAction


class TdError(Exception):
    """Base exception for all td errors."""


class ValidationError(TdError):
    """Raised when user input or a requested value is not acceptable."""


class InvalidStatusError(ValidationError):
    """Raised when a status string is not one of the known statuses."""

    def __init__(self, raw: str):
        super().__init__(f"invalid status: {raw!r}")
        self.raw = raw


class InvalidPriorityError(ValidationError):
    """Raised when a priority is not one of P1..P4."""

    def __init__(self, raw: str):
        super().__init__(f"invalid priority {raw!r}, expect P1, P2, P3 or P4")
        self.raw = raw


class InvalidViewError(ValidationError):
    """Raised when an unknown view name is requested."""

    def __init__(self, raw: str):
        super().__init__(f"unsupported view {raw!r}")
        self.raw = raw


class InvalidDueError(ValidationError):
    """Raised when a due datetime cannot be parsed."""

    def __init__(self, raw: str):
        super().__init__(
            f"invalid due datetime {raw!r}, expect YYYY-MM-DD, "
            "YYYY-MM-DD HH:MM, YYYYMMDDHHMM, today or tomorrow"
        )
        self.raw = raw


class InvalidTransitionError(ValidationError):
    """Raised when a status change is not permitted by the transition table."""

    def __init__(self, from_status: Status, to_status: Status):
        super().__init__(
            f"invalid status transition: {from_status} -> {to_status}"
        )
        self.from_status = from_status
        self.to_status = to_status


class ProjectExistsError(ValidationError):
    """Raised when renaming a project onto a name that is already taken."""

    def __init__(self, name: str):
        super().__init__(f"project already exists: {name}")
        self.name = name


class NotFoundError(TdError):
    """Raised when a referenced task or project does not exist."""


class TaskNotFoundError(NotFoundError):
    """Raised when a task id does not exist."""

    def __init__(self, task_id: int):
        super().__init__(f"task not found: #{task_id}")
        self.task_id = task_id


class ProjectNotFoundError(NotFoundError):
    """Raised when a project name does not exist."""

    def __init__(self, name: str):
        super().__init__(f"project not found: {name}")
        self.name = name


class RepositoryError(TdError):
    """Opaque failure from the storage backend."""


class NothingToUndoError(TdError):
    """Raised when undo is requested on an empty stack."""

    def __init__(self):
        super().__init__("nothing to undo")


class UndoFailedError(TdError):
    """Raised when replaying an undo action fails part way.

    The action has already been removed from the stack and is not retried.
    """

    def __init__(self, action: UndoAction, cause: Exception):
        super().__init__(f"undo failed: {cause}")
        self.action = action
        self.cause = cause
