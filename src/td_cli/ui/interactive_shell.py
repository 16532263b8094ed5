"""Interactive shell: one session, one undo history.

Every mutation goes through the session's ``UndoCoordinator``; after each
command the current view is recomputed and redrawn.
"""

from __future__ import annotations

import shlex
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, tzinfo

from rich.markup import escape
from rich.prompt import Prompt

from td_cli.models import MutationSummary, View
from td_cli.models.errors import NothingToUndoError, TdError, ValidationError
from td_cli.services.project_service import ProjectService
from td_cli.services.task_service import TaskService
from td_cli.services.undo_service import UndoCoordinator
from td_cli.services.view_service import ViewService, parse_view
from td_cli.utils.datetime_utils import parse_due_input
from td_cli.utils.logger import get_logger
from td_cli.utils.task_helpers import parse_task_id, parse_task_ids
from td_cli.utils.ui.console import get_console
from td_cli.utils.ui.formatters import (
    format_error,
    format_info,
    format_progress,
    format_success,
    format_task_list,
)

UNDO_HINT = " (z undo)"

HELP = [
    ("ls [VIEW] [PROJECT]", "switch view: all, today, inbox, log, project, trash"),
    ("add TITLE", "add a task (to the current project in the project view)"),
    ("done IDS", "mark tasks done"),
    ("today ID", "start a task, or put it back to todo"),
    ("reopen IDS", "move tasks back to todo"),
    ("rm IDS", "move tasks to the trash"),
    ("restore IDS", "bring tasks back from the trash"),
    ("move ID [PROJECT]", "attach a task to a project, or detach it"),
    ("due ID DUE|clear", "set or clear a due date"),
    ("pri ID P1..P4", "set priority"),
    ("pdone PROJECT", "complete every open task in a project"),
    ("prm PROJECT", "delete a project, keeping its tasks"),
    ("z, undo", "undo the last change"),
    ("projects", "list projects"),
    ("help", "show this help"),
    ("q, quit", "leave the shell"),
]


class InteractiveShell:
    """Read-eval-print loop over the task store."""

    def __init__(
        self,
        coordinator: UndoCoordinator,
        task_service: TaskService,
        view_service: ViewService,
        project_service: ProjectService,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        self.coordinator = coordinator
        self.task_service = task_service
        self.view_service = view_service
        self.project_service = project_service
        self.tz = tz
        self.clock = clock
        self.console = get_console()
        self.logger = get_logger()

        self.view: View | None = View.TODAY
        self.project = ""
        self.include_done = False

        self._handlers: dict[str, Callable[[list[str]], Awaitable[None]]] = {
            "ls": self._cmd_ls,
            "add": self._cmd_add,
            "done": self._cmd_done,
            "today": self._cmd_today,
            "reopen": self._cmd_reopen,
            "rm": self._cmd_rm,
            "restore": self._cmd_restore,
            "move": self._cmd_move,
            "due": self._cmd_due,
            "pri": self._cmd_priority,
            "pdone": self._cmd_project_done,
            "prm": self._cmd_project_rm,
            "undo": self._cmd_undo,
            "z": self._cmd_undo,
            "projects": self._cmd_projects,
            "help": self._cmd_help,
        }

    @property
    def prompt(self) -> str:
        if self.view is None:
            label = "all"
        elif self.view == View.PROJECT:
            label = f"project:{self.project}"
        else:
            label = str(self.view)
        return f"td {label}"

    async def execute(self, line: str) -> bool:
        """Run one line of input.

        Returns:
            False when the shell should exit
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            format_error(str(e))
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in ("q", "quit", "exit"):
            return False

        handler = self._handlers.get(command)
        if handler is None:
            format_error(f"unknown command: {command} (try 'help')")
            return True

        self.logger.info("shell command: %s", command)
        try:
            await handler(args)
        except NothingToUndoError as e:
            format_info(str(e))
        except TdError as e:
            self.logger.warning("shell command failed: %s - %s", command, e)
            format_error(str(e))
        return True

    async def render(self) -> None:
        """Recompute and draw the current view."""
        now = self.clock()
        if self.view is None:
            tasks = await self.view_service.list_all_active()
            title = "All tasks"
        else:
            tasks = await self.view_service.list_by_view(
                self.view, now, project=self.project, include_done=self.include_done
            )
            title = self.project if self.view == View.PROJECT else self.view.capitalize()
        format_task_list(tasks, title=title, tz=self.tz)
        if self.view == View.TODAY:
            done, total = await self.view_service.today_progress(now)
            format_progress(done, total)

    async def run(self) -> None:
        """Prompt until the user quits or closes input."""
        await self.render()
        while True:
            try:
                line = Prompt.ask(f"[bold cyan]{escape(self.prompt)}[/bold cyan]", console=self.console)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not await self.execute(line):
                break

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _report(self, summary: MutationSummary) -> None:
        if summary.recorded:
            format_success(summary.message + UNDO_HINT)
        else:
            format_info(summary.message)

    async def _cmd_ls(self, args: list[str]) -> None:
        if not args or args[0] == "all":
            self.view = None
            self.project = ""
        else:
            view = parse_view(args[0])
            if view == View.PROJECT:
                if len(args) < 2:
                    raise ValidationError("usage: ls project NAME")
                self.project = args[1]
                self.include_done = "--all" in args[2:]
            else:
                self.project = ""
            self.view = view
        await self.render()

    async def _cmd_add(self, args: list[str]) -> None:
        project = self.project if self.view == View.PROJECT else ""
        task = await self.task_service.add_task(" ".join(args), project=project)
        format_success(f"added #{task.id} {task.title}")
        await self.render()

    async def _cmd_done(self, args: list[str]) -> None:
        self._report(await self.coordinator.mark_done(parse_task_ids(args)))
        await self.render()

    async def _cmd_today(self, args: list[str]) -> None:
        if len(args) != 1:
            raise ValidationError("usage: today ID")
        self._report(await self.coordinator.toggle_today(parse_task_id(args[0])))
        await self.render()

    async def _cmd_reopen(self, args: list[str]) -> None:
        self._report(await self.coordinator.reopen(parse_task_ids(args)))
        await self.render()

    async def _cmd_rm(self, args: list[str]) -> None:
        self._report(await self.coordinator.soft_delete(parse_task_ids(args)))
        await self.render()

    async def _cmd_restore(self, args: list[str]) -> None:
        ids = parse_task_ids(args)
        await self.task_service.restore_tasks(ids)
        format_success(f"restored {len(ids)} task(s)")
        await self.render()

    async def _cmd_move(self, args: list[str]) -> None:
        if not args:
            raise ValidationError("usage: move ID [PROJECT]")
        project = " ".join(args[1:])
        task = await self.task_service.move_task(parse_task_id(args[0]), project)
        if task.project:
            format_success(f"moved #{task.id} to {task.project}")
        else:
            format_success(f"detached #{task.id} from its project")
        await self.render()

    async def _cmd_due(self, args: list[str]) -> None:
        if len(args) < 2:
            raise ValidationError("usage: due ID DUE|clear")
        task_id = parse_task_id(args[0])
        raw = " ".join(args[1:])
        due_at = None if raw == "clear" else parse_due_input(raw, self.tz, now=self.clock())
        await self.task_service.set_due(task_id, due_at)
        format_success(f"updated due of #{task_id}")
        await self.render()

    async def _cmd_priority(self, args: list[str]) -> None:
        if len(args) != 2:
            raise ValidationError("usage: pri ID P1..P4")
        task = await self.task_service.set_priority(parse_task_id(args[0]), args[1])
        format_success(f"#{task.id} priority {task.priority}")
        await self.render()

    async def _cmd_project_done(self, args: list[str]) -> None:
        name = " ".join(args) or self.project
        if not name:
            raise ValidationError("usage: pdone PROJECT")
        self._report(await self.coordinator.complete_project(name))
        await self.render()

    async def _cmd_project_rm(self, args: list[str]) -> None:
        name = " ".join(args) or self.project
        if not name:
            raise ValidationError("usage: prm PROJECT")
        self._report(await self.coordinator.delete_project(name))
        if self.view == View.PROJECT and self.project == name:
            self.view = View.INBOX
            self.project = ""
        await self.render()

    async def _cmd_undo(self, args: list[str]) -> None:
        summary = await self.coordinator.undo()
        format_success(summary.message)
        if summary.action.project:
            self.view = View.PROJECT
            self.project = summary.action.project
        await self.render()

    async def _cmd_help(self, args: list[str]) -> None:
        for usage, description in HELP:
            self.console.print(f"  [cyan]{usage:<22}[/cyan] {description}")

    async def _cmd_projects(self, args: list[str]) -> None:
        names = await self.project_service.list_projects()
        if not names:
            format_info("no projects yet")
            return
        for name in names:
            self.console.print(f"  [green]{name}[/green]")
