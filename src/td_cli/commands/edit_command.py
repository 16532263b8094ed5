"""Commands that edit a single task: 'edit', 'due', 'priority', 'move' and 'show'."""

from typing import Annotated

import typer

from td_cli.models.errors import ValidationError
from td_cli.services.context_manager import get_display_timezone, get_task_service
from td_cli.utils.datetime_utils import format_local, parse_due_input
from td_cli.utils.task_helpers import parse_task_id
from td_cli.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_success,
    format_task_detail,
    print_data,
    task_to_dict,
)

from .decorators import command_wrapper

app = typer.Typer()


@app.command("edit")
@command_wrapper
async def edit_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    title: Annotated[list[str] | None, typer.Argument(help="New title")] = None,
    notes: Annotated[
        str | None, typer.Option("--notes", "-n", help="Replace notes ('' clears)")
    ] = None,
) -> None:
    """Change a task's title and/or notes."""
    task_id_int = parse_task_id(task_id)
    if not title and notes is None:
        raise ValidationError("nothing to change: give a new title or --notes")

    task_service = get_task_service()
    if title:
        task = await task_service.rename_task(task_id_int, " ".join(title))
    if notes is not None:
        task = await task_service.set_notes(task_id_int, notes)
    format_success(f"updated #{task.id} {task.title}")


@app.command("due")
@command_wrapper
async def due_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    due: Annotated[
        str | None,
        typer.Argument(help="today, tomorrow, YYYY-MM-DD, YYYY-MM-DD HH:MM, YYYYMMDDHHMM"),
    ] = None,
    clear: Annotated[bool, typer.Option("--clear", help="Remove the due date")] = False,
) -> None:
    """Set or clear a task's due date."""
    task_id_int = parse_task_id(task_id)
    if clear == bool(due):
        raise ValidationError("give either a due date or --clear")

    tz = get_display_timezone()
    due_at = None if clear else parse_due_input(due, tz)
    task = await get_task_service().set_due(task_id_int, due_at)
    if task.due_at is None:
        format_success(f"cleared due of #{task.id}")
    else:
        format_success(f"#{task.id} due {format_local(task.due_at, tz)}")


@app.command("priority")
@command_wrapper
async def priority_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    priority: Annotated[str, typer.Argument(help="P1 (highest) to P4")],
) -> None:
    """Set a task's priority."""
    task = await get_task_service().set_priority(parse_task_id(task_id), priority)
    format_success(f"#{task.id} priority {task.priority}")


@app.command("move")
@command_wrapper
async def move_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    project: Annotated[
        str, typer.Argument(help="Target project; omit to detach from any project")
    ] = "",
) -> None:
    """Attach a task to a project (created if new), or detach it."""
    task = await get_task_service().move_task(parse_task_id(task_id), project)
    if task.project:
        format_success(f"moved #{task.id} to {task.project}")
    else:
        format_success(f"detached #{task.id} from its project")


@app.command("show")
@command_wrapper
async def show_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: table, json, yaml")
    ] = "table",
) -> None:
    """Show every field of a task."""
    if output not in OUTPUT_FORMATS:
        raise ValidationError(f"unsupported output format: {output}")

    task = await get_task_service().get_task(parse_task_id(task_id))
    if output == "table":
        format_task_detail(task, tz=get_display_timezone())
    else:
        print_data(task_to_dict(task), output)
