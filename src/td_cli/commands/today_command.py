"""Command 'today' of td"""

from datetime import UTC, datetime
from typing import Annotated

import typer

from td_cli.models import View
from td_cli.services.context_manager import (
    get_display_timezone,
    get_undo_coordinator,
    get_view_service,
)
from td_cli.utils.task_helpers import parse_task_ids
from td_cli.utils.ui.console import get_console
from td_cli.utils.ui.formatters import format_progress, format_success, format_task_list

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("today")
@command_wrapper
async def today_command(
    task_ids: Annotated[
        list[str] | None,
        typer.Argument(help="Tasks to start, or to put back to todo if already started"),
    ] = None,
) -> None:
    """Show today's tasks (doing, due today and overdue), or toggle tasks into today."""
    if task_ids:
        coordinator = get_undo_coordinator()
        for task_id in parse_task_ids(task_ids):
            summary = await coordinator.toggle_today(task_id)
            format_success(summary.message)
        return

    view_service = get_view_service()
    now = datetime.now(UTC)
    tasks = await view_service.list_by_view(View.TODAY, now)
    format_task_list(
        tasks,
        title="Today",
        tz=get_display_timezone(),
        empty_message="Nothing due today",
    )
    done, total = await view_service.today_progress(now)
    format_progress(done, total)
