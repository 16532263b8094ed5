"""Task service - Business logic for task operations.

This service layer sits between commands and the repository for operations
that are not recorded on the undo stack: creating and editing tasks, moving
them between projects, restoring and purging the trash.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from td_cli.models import Task, TaskCreate
from td_cli.models.errors import ValidationError
from td_cli.repositories import TaskRepository


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def add_task(
        self,
        title: str,
        *,
        notes: str = "",
        project: str = "",
        priority: str = "",
        due_at: datetime | None = None,
    ) -> Task:
        """Create a new task.

        A task created with a project starts as todo, otherwise in the inbox.

        Args:
            title: Task title (required)
            notes: Free-form notes
            project: Project to attach to; registered if new
            priority: P1..P4, empty for the default
            due_at: Optional deadline

        Returns:
            Created Task object

        Raises:
            ValidationError: If the title is empty or the priority invalid
        """
        try:
            task_data = TaskCreate(
                title=title,
                notes=notes or "",
                project=project or "",
                priority=priority or "P2",
                due_at=due_at,
            )
        except PydanticValidationError as e:
            raise ValidationError("title cannot be empty") from e

        task_id = await self.repository.create(task_data)
        return await self.repository.get(task_id)

    async def get_task(self, task_id: int) -> Task:
        return await self.repository.get(task_id)

    async def rename_task(self, task_id: int, title: str) -> Task:
        await self.repository.update_title(task_id, title)
        return await self.repository.get(task_id)

    async def set_notes(self, task_id: int, notes: str) -> Task:
        await self.repository.update_notes(task_id, notes)
        return await self.repository.get(task_id)

    async def set_due(self, task_id: int, due_at: datetime | None) -> Task:
        """Set a task's deadline, or clear it with None."""
        await self.repository.update_due(task_id, due_at)
        return await self.repository.get(task_id)

    async def set_priority(self, task_id: int, priority: str) -> Task:
        await self.repository.update_priority(task_id, priority)
        return await self.repository.get(task_id)

    async def move_task(self, task_id: int, project: str) -> Task:
        """Attach a task to a project, or detach it with an empty name."""
        await self.repository.update_project(task_id, project)
        return await self.repository.get(task_id)

    async def restore_tasks(self, task_ids: list[int]) -> list[Task]:
        """Bring tasks back from the trash. They come back as todo."""
        await self.repository.restore(task_ids)
        return [await self.repository.get(task_id) for task_id in task_ids]

    async def purge_tasks(self, task_ids: list[int]) -> int:
        """Permanently remove trashed tasks.

        Returns:
            Number of tasks removed
        """
        await self.repository.purge(task_ids)
        return len(task_ids)
