"""Command 'add' of td"""

from typing import Annotated

import typer

from td_cli.services.context_manager import get_display_timezone, get_task_service
from td_cli.utils.datetime_utils import format_local, parse_due_input
from td_cli.utils.ui.console import get_console
from td_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
async def add_command(
    title: Annotated[list[str], typer.Argument(help="Task title")],
    project: Annotated[
        str, typer.Option("--project", "-p", help="Attach to project (created if new)")
    ] = "",
    priority: Annotated[
        str, typer.Option("--priority", "-P", help="Priority P1..P4")
    ] = "P2",
    due: Annotated[
        str | None,
        typer.Option("--due", "-d", help="Due: today, tomorrow, YYYY-MM-DD [HH:MM]"),
    ] = None,
    notes: Annotated[str, typer.Option("--notes", "-n", help="Task notes")] = "",
) -> None:
    """Add a task. Without a project it goes to the inbox."""
    tz = get_display_timezone()
    due_at = parse_due_input(due, tz) if due else None

    task_service = get_task_service()
    task = await task_service.add_task(
        " ".join(title),
        notes=notes,
        project=project,
        priority=priority,
        due_at=due_at,
    )

    details = [str(task.status), task.priority]
    if task.project:
        details.append(task.project)
    if task.due_at:
        details.append(f"due {format_local(task.due_at, tz)}")
    format_success(f"added #{task.id} {task.title} ({', '.join(details)})")
