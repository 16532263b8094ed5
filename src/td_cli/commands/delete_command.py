"""Commands 'rm' and 'restore' of td"""

from typing import Annotated

import typer

from td_cli.services.context_manager import get_task_service, get_undo_coordinator
from td_cli.utils.task_helpers import parse_task_ids
from td_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("rm")
@command_wrapper
async def delete_command(
    task_ids: Annotated[list[str], typer.Argument(help="Task IDs to move to the trash")],
) -> None:
    """Move tasks to the trash. Use 'restore' to bring them back."""
    summary = await get_undo_coordinator().soft_delete(parse_task_ids(task_ids))
    format_success(summary.message)


@app.command("restore")
@command_wrapper
async def restore_command(
    task_ids: Annotated[list[str], typer.Argument(help="Task IDs to restore")],
) -> None:
    """Bring tasks back from the trash as todo."""
    ids = parse_task_ids(task_ids)
    await get_task_service().restore_tasks(ids)
    format_success(f"restored {len(ids)} task(s)")
