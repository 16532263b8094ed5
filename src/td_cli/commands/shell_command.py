"""Command 'shell' of td"""

import typer

from td_cli.services.context_manager import (
    get_display_timezone,
    get_project_service,
    get_task_service,
    get_undo_coordinator,
    get_view_service,
)
from td_cli.ui.interactive_shell import InteractiveShell
from td_cli.utils.ui.console import get_console

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("shell")
@command_wrapper
async def shell_command() -> None:
    """Start an interactive session with undo ('z') for every change."""
    console.print("[bold]td shell[/bold] [dim]- 'help' for commands, 'q' to quit[/dim]")
    shell = InteractiveShell(
        coordinator=get_undo_coordinator(),
        task_service=get_task_service(),
        view_service=get_view_service(),
        project_service=get_project_service(),
        tz=get_display_timezone(),
    )
    await shell.run()
