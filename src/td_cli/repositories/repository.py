"""Repository abstraction layer for td.

This module defines the abstract base class (interface) for task storage,
following the hexagonal architecture (Ports & Adapters) pattern. Services and
the undo coordinator depend only on this contract; the SQLite adapter is one
implementation of it.

Every method is assumed to be atomic from the caller's point of view: a call
either applies completely or raises and applies nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from td_cli.models import Status, Task, TaskCreate, TaskFilters


class TaskRepository(ABC):
    """Abstract base class for task and project persistence operations."""

    @abstractmethod
    async def create(self, task_data: TaskCreate) -> int:
        """Create a new task.

        Args:
            task_data: TaskCreate object with task details

        Returns:
            The new task id

        Raises:
            InvalidPriorityError: If the priority is not P1..P4
        """
        raise NotImplementedError("TaskRepository.create() must be implemented by adapter")

    @abstractmethod
    async def get(self, task_id: int) -> Task:
        """Get a specific task by id.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks ordered by id, optionally restricted to one project."""
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def set_status(self, task_id: int, status: Status) -> None:
        """Write a task's status directly, without consulting the transition table.

        Used to put a task back into a recorded earlier status. Sets
        ``done_at`` when the target is done and clears it otherwise.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.set_status() must be implemented by adapter"
        )

    @abstractmethod
    async def mark_done(self, task_ids: list[int]) -> None:
        """Move tasks to done, stamping ``done_at``.

        Raises:
            TaskNotFoundError: If a task does not exist
            InvalidTransitionError: If a task cannot become done
        """
        raise NotImplementedError(
            "TaskRepository.mark_done() must be implemented by adapter"
        )

    @abstractmethod
    async def mark_doing(self, task_ids: list[int]) -> None:
        """Move tasks to doing."""
        raise NotImplementedError(
            "TaskRepository.mark_doing() must be implemented by adapter"
        )

    @abstractmethod
    async def reopen(self, task_ids: list[int]) -> None:
        """Move tasks back to todo."""
        raise NotImplementedError(
            "TaskRepository.reopen() must be implemented by adapter"
        )

    @abstractmethod
    async def update_project(self, task_id: int, project: str) -> None:
        """Attach a task to a project, or detach it with an empty name.

        Attaching an inbox task to a project also moves it to todo.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update_project() must be implemented by adapter"
        )

    @abstractmethod
    async def update_due(self, task_id: int, due_at: datetime | None) -> None:
        """Set or clear a task's due datetime."""
        raise NotImplementedError(
            "TaskRepository.update_due() must be implemented by adapter"
        )

    @abstractmethod
    async def update_title(self, task_id: int, title: str) -> None:
        """Rename a task."""
        raise NotImplementedError(
            "TaskRepository.update_title() must be implemented by adapter"
        )

    @abstractmethod
    async def update_notes(self, task_id: int, notes: str) -> None:
        """Replace a task's notes."""
        raise NotImplementedError(
            "TaskRepository.update_notes() must be implemented by adapter"
        )

    @abstractmethod
    async def update_priority(self, task_id: int, priority: str) -> None:
        """Set a task's priority.

        Raises:
            InvalidPriorityError: If the priority is not P1..P4
        """
        raise NotImplementedError(
            "TaskRepository.update_priority() must be implemented by adapter"
        )

    @abstractmethod
    async def create_project(self, name: str) -> None:
        """Create a project. Creating an existing project is a no-op."""
        raise NotImplementedError(
            "TaskRepository.create_project() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_project(self, name: str) -> None:
        """Delete a project and detach every task attached to it.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete_project() must be implemented by adapter"
        )

    @abstractmethod
    async def rename_project(self, old_name: str, new_name: str) -> None:
        """Rename a project and every task reference to it.

        Raises:
            ProjectNotFoundError: If the old project does not exist
            ProjectExistsError: If the new name is already taken
        """
        raise NotImplementedError(
            "TaskRepository.rename_project() must be implemented by adapter"
        )

    @abstractmethod
    async def list_projects(self) -> list[str]:
        """List project names in ascending order."""
        raise NotImplementedError(
            "TaskRepository.list_projects() must be implemented by adapter"
        )

    @abstractmethod
    async def soft_delete(self, task_ids: list[int]) -> None:
        """Move tasks to the trash (status deleted)."""
        raise NotImplementedError(
            "TaskRepository.soft_delete() must be implemented by adapter"
        )

    @abstractmethod
    async def restore(self, task_ids: list[int]) -> None:
        """Bring tasks back from the trash as todo."""
        raise NotImplementedError(
            "TaskRepository.restore() must be implemented by adapter"
        )

    @abstractmethod
    async def purge(self, task_ids: list[int]) -> None:
        """Permanently remove tasks. Only deleted tasks can be purged.

        Raises:
            InvalidTransitionError: If a task is not in the trash
        """
        raise NotImplementedError("TaskRepository.purge() must be implemented by adapter")
