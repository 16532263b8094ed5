"""Mutations that can be undone, and the undo stack that records them.

Every mutation here goes through the repository first. Only when the
repository call returns normally is an inverse ``UndoAction`` pushed, so a
failed mutation never leaves an undo entry behind.
"""

from __future__ import annotations

from td_cli.models import (
    MutationSummary,
    Status,
    StatusChange,
    Task,
    TaskFilters,
    UndoAction,
    UndoKind,
    UndoSummary,
    validate_transition,
)
from td_cli.models.errors import (
    NothingToUndoError,
    ProjectNotFoundError,
    TdError,
    UndoFailedError,
    ValidationError,
)
from td_cli.repositories import TaskRepository
from td_cli.utils.logger import get_logger


class UndoStack:
    """Last-in, first-out record of undoable actions for one session."""

    def __init__(self):
        self._actions: list[UndoAction] = []

    def push(self, action: UndoAction) -> None:
        self._actions.append(action)

    def pop(self) -> UndoAction:
        """Remove and return the most recent action.

        Raises:
            NothingToUndoError: If the stack is empty
        """
        if not self._actions:
            raise NothingToUndoError()
        return self._actions.pop()

    def peek(self) -> UndoAction | None:
        return self._actions[-1] if self._actions else None

    def clear(self) -> None:
        self._actions.clear()

    def __len__(self) -> int:
        return len(self._actions)


def _unique(task_ids: list[int]) -> list[int]:
    return list(dict.fromkeys(task_ids))


class UndoCoordinator:
    """Runs undoable mutations against a repository and replays their inverses.

    The stack belongs to this instance. Two coordinators never share history
    unless they are handed the same ``UndoStack``.
    """

    def __init__(self, task_repository: TaskRepository, stack: UndoStack | None = None):
        """Initialize the coordinator.

        Args:
            task_repository: TaskRepository implementation for data access
            stack: Undo history to record into; a fresh one when omitted
        """
        self.repository = task_repository
        self.stack = stack if stack is not None else UndoStack()
        self.logger = get_logger()

    def _push(self, action: UndoAction) -> None:
        self.stack.push(action)
        self.logger.debug(
            "undo push: %s tasks=%s project=%r depth=%d",
            action.kind,
            action.task_ids or [c.task_id for c in action.changes],
            action.project,
            len(self.stack),
        )

    async def _load(self, task_ids: list[int]) -> list[Task]:
        return [await self.repository.get(task_id) for task_id in task_ids]

    async def _existing_project(self, project: str) -> str:
        project = project.strip()
        if not project:
            raise ValidationError("project name cannot be empty")
        if project not in await self.repository.list_projects():
            raise ProjectNotFoundError(project)
        return project

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def soft_delete(self, task_ids: list[int]) -> MutationSummary:
        """Move tasks to the trash.

        Raises:
            TaskNotFoundError: If any id does not exist
            InvalidTransitionError: If any task cannot be deleted
        """
        task_ids = _unique(task_ids)
        if not task_ids:
            return MutationSummary(
                kind=UndoKind.TASK_DELETE, message="nothing to delete", recorded=False
            )
        for task in await self._load(task_ids):
            validate_transition(task.status, Status.DELETED)

        await self.repository.soft_delete(task_ids)
        self._push(UndoAction.task_delete(task_ids))

        if len(task_ids) == 1:
            message = f"deleted #{task_ids[0]}"
        else:
            message = f"deleted {len(task_ids)} task(s)"
        return MutationSummary(kind=UndoKind.TASK_DELETE, task_ids=task_ids, message=message)

    async def mark_done(self, task_ids: list[int]) -> MutationSummary:
        """Complete tasks, remembering each task's own prior status.

        Tasks that are already done are skipped.

        Raises:
            TaskNotFoundError: If any id does not exist
            InvalidTransitionError: If any task cannot become done
        """
        return await self._complete(await self._load(_unique(task_ids)))

    async def complete_project(self, project: str) -> MutationSummary:
        """Complete every open task attached to a project.

        Raises:
            ValidationError: If the name is blank
            ProjectNotFoundError: If the project does not exist
        """
        project = await self._existing_project(project)
        tasks = await self.repository.list_all(TaskFilters(project=project))
        open_tasks = [
            task
            for task in tasks
            if task.status in (Status.INBOX, Status.TODO, Status.DOING)
        ]
        if not open_tasks:
            return MutationSummary(
                kind=UndoKind.TASK_STATUS,
                project=project,
                message=f"project {project} has no open task",
                recorded=False,
            )

        summary = await self._complete(open_tasks)
        summary.project = project
        summary.message = f"done {len(summary.task_ids)} task(s) in {project}"
        return summary

    async def _complete(self, tasks: list[Task]) -> MutationSummary:
        pending = [task for task in tasks if task.status != Status.DONE]
        if not pending:
            if len(tasks) == 1:
                message = f"#{tasks[0].id} is already done"
            else:
                message = "all tasks are already done"
            return MutationSummary(kind=UndoKind.TASK_STATUS, message=message, recorded=False)

        for task in pending:
            validate_transition(task.status, Status.DONE)

        ids = [task.id for task in pending]
        await self.repository.mark_done(ids)
        self._push(
            UndoAction.task_status(
                [
                    StatusChange(task_id=task.id, from_status=task.status, to_status=Status.DONE)
                    for task in pending
                ]
            )
        )

        if len(ids) == 1:
            message = f"done #{ids[0]}"
        else:
            message = f"done {len(ids)} task(s)"
        return MutationSummary(kind=UndoKind.TASK_STATUS, task_ids=ids, message=message)

    async def toggle_today(self, task_id: int) -> MutationSummary:
        """Start a task, or put a task that is already in progress back to todo.

        Raises:
            TaskNotFoundError: If the task does not exist
            InvalidTransitionError: If the task cannot be started
        """
        task = await self.repository.get(task_id)
        target = Status.TODO if task.status == Status.DOING else Status.DOING
        validate_transition(task.status, target)

        if target == Status.TODO:
            await self.repository.reopen([task_id])
        else:
            await self.repository.mark_doing([task_id])

        self._push(
            UndoAction.task_status(
                [StatusChange(task_id=task_id, from_status=task.status, to_status=target)]
            )
        )
        return MutationSummary(
            kind=UndoKind.TASK_STATUS,
            task_ids=[task_id],
            message=f"{target} #{task_id}",
        )

    async def reopen(self, task_ids: list[int]) -> MutationSummary:
        """Move tasks back to todo.

        Raises:
            TaskNotFoundError: If any id does not exist
            InvalidTransitionError: If any task cannot be reopened
        """
        task_ids = _unique(task_ids)
        tasks = await self._load(task_ids)
        for task in tasks:
            validate_transition(task.status, Status.TODO)

        changed = [task for task in tasks if task.status != Status.TODO]
        if not changed:
            return MutationSummary(
                kind=UndoKind.TASK_STATUS,
                message="nothing to reopen",
                recorded=False,
            )

        ids = [task.id for task in changed]
        await self.repository.reopen(ids)
        self._push(
            UndoAction.task_status(
                [
                    StatusChange(task_id=task.id, from_status=task.status, to_status=Status.TODO)
                    for task in changed
                ]
            )
        )
        return MutationSummary(
            kind=UndoKind.TASK_STATUS,
            task_ids=ids,
            message=f"reopened {len(ids)} task(s)",
        )

    async def delete_project(self, project: str) -> MutationSummary:
        """Delete a project, detaching its tasks.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        project = await self._existing_project(project)
        tasks = await self.repository.list_all(TaskFilters(project=project))
        task_ids = [task.id for task in tasks]

        await self.repository.delete_project(project)
        self._push(UndoAction.project_delete(project, task_ids))
        return MutationSummary(
            kind=UndoKind.PROJECT_DELETE,
            task_ids=task_ids,
            project=project,
            message=f"deleted project {project}",
        )

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    async def undo(self) -> UndoSummary:
        """Pop the most recent action and apply its inverse.

        Raises:
            NothingToUndoError: If there is nothing to undo
            UndoFailedError: If the inverse could not be applied; the action
                is not put back
        """
        action = self.stack.pop()
        self.logger.debug(
            "undo pop: %s depth=%d", action.kind, len(self.stack)
        )
        try:
            message = await self._replay(action)
        except TdError as e:
            self.logger.warning("undo of %s failed: %s", action.kind, e)
            raise UndoFailedError(action, e) from e
        return UndoSummary(action=action, message=message)

    async def _replay(self, action: UndoAction) -> str:
        match action.kind:
            case UndoKind.TASK_DELETE:
                await self.repository.restore(action.task_ids)
                return f"undid delete of {len(action.task_ids)} task(s)"
            case UndoKind.PROJECT_DELETE:
                await self.repository.create_project(action.project)
                for task_id in action.task_ids:
                    await self.repository.update_project(task_id, action.project)
                return f"undid delete project {action.project}"
            case UndoKind.TASK_STATUS:
                for change in reversed(action.changes):
                    await self.repository.set_status(change.task_id, change.from_status)
                return f"undid status change of {len(action.changes)} task(s)"
        raise TdError(f"unknown undo kind {action.kind}")
