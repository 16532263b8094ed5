"""Unit tests for TaskService and ProjectService."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from td_cli.models import Status, TaskFilters
from td_cli.models.errors import (
    InvalidPriorityError,
    InvalidTransitionError,
    ProjectNotFoundError,
    ValidationError,
)
from td_cli.services.project_service import ProjectService
from td_cli.services.task_service import TaskService


@pytest.fixture
def service(repo):
    return TaskService(repo)


@pytest.fixture
def projects(repo):
    return ProjectService(repo)


# ---------------------------------------------------------------------------
# TaskService
# ---------------------------------------------------------------------------


class TestAddTask:
    @pytest.mark.asyncio
    async def test_inbox_by_default(self, service):
        task = await service.add_task("  buy milk ")

        assert task.id == 1
        assert task.title == "buy milk"
        assert task.status == Status.INBOX
        assert task.priority == "P2"

    @pytest.mark.asyncio
    async def test_with_everything(self, service):
        due = datetime(2026, 3, 11, 22, 59, tzinfo=UTC)

        task = await service.add_task(
            "report", notes="draft first", project="work", priority="p1", due_at=due
        )

        assert task.status == Status.TODO
        assert task.project == "work"
        assert task.priority == "P1"
        assert task.notes == "draft first"
        assert task.due_at == due

    @pytest.mark.asyncio
    async def test_empty_title(self, service):
        with pytest.raises(ValidationError, match="title cannot be empty"):
            await service.add_task("   ")

    @pytest.mark.asyncio
    async def test_bad_priority(self, service):
        with pytest.raises(InvalidPriorityError):
            await service.add_task("t", priority="P0")


class TestEditTask:
    @pytest.mark.asyncio
    async def test_rename_and_notes(self, service):
        task = await service.add_task("old")

        await service.rename_task(task.id, "new")
        task = await service.set_notes(task.id, "some notes")

        assert task.title == "new"
        assert task.notes == "some notes"

    @pytest.mark.asyncio
    async def test_due_and_priority(self, service):
        task = await service.add_task("t")
        due = datetime(2026, 5, 1, tzinfo=UTC)

        task = await service.set_due(task.id, due)
        assert task.due_at == due
        task = await service.set_due(task.id, None)
        assert task.due_at is None

        task = await service.set_priority(task.id, "P3")
        assert task.priority == "P3"

    @pytest.mark.asyncio
    async def test_move_inbox_task(self, service):
        task = await service.add_task("t")

        moved = await service.move_task(task.id, "home")

        assert moved.project == "home"
        assert moved.status == Status.TODO


class TestTrash:
    @pytest.mark.asyncio
    async def test_restore_returns_todo_tasks(self, service, repo):
        task = await service.add_task("t")
        await repo.soft_delete([task.id])

        restored = await service.restore_tasks([task.id])

        assert [t.status for t in restored] == [Status.TODO]

    @pytest.mark.asyncio
    async def test_restore_live_task_rejected(self, service):
        task = await service.add_task("t")
        with pytest.raises(InvalidTransitionError):
            await service.restore_tasks([task.id])

    @pytest.mark.asyncio
    async def test_purge(self, service, repo):
        a = await service.add_task("a")
        b = await service.add_task("b")
        await repo.soft_delete([a.id, b.id])

        assert await service.purge_tasks([a.id, b.id]) == 2
        assert await repo.list_all(TaskFilters()) == []


# ---------------------------------------------------------------------------
# ProjectService
# ---------------------------------------------------------------------------


class TestProjectService:
    @pytest.mark.asyncio
    async def test_create_strips(self, projects):
        assert await projects.create_project("  work ") == "work"
        assert await projects.list_projects() == ["work"]

    @pytest.mark.asyncio
    async def test_summaries_count_open_and_done(self, projects, service, repo):
        await projects.create_project("empty")
        a = await service.add_task("a", project="work")
        await service.add_task("b", project="work")
        c = await service.add_task("c", project="work")
        await service.add_task("loose")
        await repo.mark_done([a.id])
        await repo.soft_delete([c.id])

        summaries = {s.name: s for s in await projects.list_project_summaries()}

        assert list(summaries) == ["empty", "work"]
        assert summaries["work"].open_count == 1
        assert summaries["work"].done_count == 1
        assert summaries["empty"].open_count == 0

    @pytest.mark.asyncio
    async def test_rename(self, projects, service):
        task = await service.add_task("a", project="work")

        assert await projects.rename_project("work", " job ") == "job"
        assert (await service.get_task(task.id)).project == "job"

    @pytest.mark.asyncio
    async def test_rename_missing(self, projects):
        with pytest.raises(ProjectNotFoundError):
            await projects.rename_project("nope", "x")
