"""Project service - Business logic for project operations.

Deleting and completing projects are undoable and live on the undo
coordinator instead.
"""

from __future__ import annotations

from pydantic import BaseModel

from td_cli.models import OPEN_STATUSES, Status, TaskFilters
from td_cli.repositories import TaskRepository


class ProjectSummary(BaseModel):
    """A project with its task counts."""

    name: str
    open_count: int = 0
    done_count: int = 0


class ProjectService:
    """Service for project business logic."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the project service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_projects(self) -> list[str]:
        return await self.repository.list_projects()

    async def list_project_summaries(self) -> list[ProjectSummary]:
        """List projects with open and done task counts."""
        names = await self.repository.list_projects()
        tasks = await self.repository.list_all(TaskFilters())
        summaries = {name: ProjectSummary(name=name) for name in names}
        for task in tasks:
            summary = summaries.get(task.project)
            if summary is None:
                continue
            if task.status in OPEN_STATUSES:
                summary.open_count += 1
            elif task.status == Status.DONE:
                summary.done_count += 1
        return list(summaries.values())

    async def create_project(self, name: str) -> str:
        """Create a project; creating an existing one is a no-op."""
        name = name.strip()
        await self.repository.create_project(name)
        return name

    async def rename_project(self, old_name: str, new_name: str) -> str:
        new_name = new_name.strip()
        await self.repository.rename_project(old_name, new_name)
        return new_name
