"""Command 'reopen' of td"""

from typing import Annotated

import typer

from td_cli.services.context_manager import get_undo_coordinator
from td_cli.utils.task_helpers import parse_task_ids
from td_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("reopen")
@command_wrapper
async def reopen_command(
    task_ids: Annotated[list[str], typer.Argument(help="Task IDs to reopen")],
) -> None:
    """Move done or in-progress tasks back to todo."""
    summary = await get_undo_coordinator().reopen(parse_task_ids(task_ids))
    if summary.recorded:
        format_success(summary.message)
    else:
        format_info(summary.message)
