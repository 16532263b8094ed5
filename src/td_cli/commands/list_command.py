"""Command 'ls' of td"""

from datetime import UTC, datetime
from typing import Annotated

import typer

from td_cli.models import View
from td_cli.models.errors import ValidationError
from td_cli.services.context_manager import get_display_timezone, get_view_service
from td_cli.services.view_service import parse_view
from td_cli.utils.ui.console import get_console
from td_cli.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_progress,
    format_task_list,
    print_data,
    task_to_dict,
)

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("ls")
@command_wrapper
async def list_command(
    view: Annotated[
        str | None,
        typer.Argument(help="View: today, inbox, log, project or trash"),
    ] = None,
    project: Annotated[
        str, typer.Option("--project", "-p", help="Project for the project view")
    ] = "",
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Include done tasks in the project view")
    ] = False,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: table, json, yaml")
    ] = "table",
) -> None:
    """List tasks. Without a view, every task outside the trash."""
    if output not in OUTPUT_FORMATS:
        raise ValidationError(f"unsupported output format: {output}")

    view_service = get_view_service()
    now = datetime.now(UTC)

    selected: View | None = parse_view(view) if view else None
    if selected is None and project:
        selected = View.PROJECT
    if selected == View.PROJECT and not project.strip():
        raise ValidationError("the project view needs --project NAME")

    if selected is None:
        tasks = await view_service.list_all_active()
        title = "All tasks"
    else:
        tasks = await view_service.list_by_view(
            selected, now, project=project.strip(), include_done=show_all
        )
        title = project.strip() if selected == View.PROJECT else selected.capitalize()

    if output != "table":
        print_data([task_to_dict(task) for task in tasks], output)
        return

    format_task_list(tasks, title=title, tz=get_display_timezone())
    if selected == View.TODAY:
        done, total = await view_service.today_progress(now)
        format_progress(done, total)
