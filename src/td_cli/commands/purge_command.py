"""Command 'purge' of td"""

from typing import Annotated

import typer

from td_cli.services.context_manager import get_task_service
from td_cli.utils.task_helpers import parse_task_ids
from td_cli.utils.ui.formatters import format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer()


@app.command("purge")
@command_wrapper
async def purge_command(
    task_ids: Annotated[list[str], typer.Argument(help="Trashed task IDs to remove")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Permanently remove tasks from the trash. This cannot be undone."""
    ids = parse_task_ids(task_ids)
    if not yes:
        confirm = typer.confirm(f"Permanently remove {len(ids)} task(s)?")
        if not confirm:
            format_warning("Cancelled")
            raise typer.Exit(0)

    count = await get_task_service().purge_tasks(ids)
    format_success(f"purged {count} task(s)")
