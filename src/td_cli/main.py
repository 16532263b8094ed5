"""Main entry point for td."""

import typer

from td_cli import __version__
from td_cli.commands import (
    add_command,
    complete_command,
    config,
    delete_command,
    edit_command,
    list_command,
    projects,
    purge_command,
    reopen_command,
    shell_command,
    today_command,
)
from td_cli.utils.ui.console import get_console

app = typer.Typer(
    name="td",
    help="A local task manager with views, projects and undo",
    no_args_is_help=True,
)

console = get_console()


# Top-level task commands
app.add_typer(add_command.app)
app.add_typer(list_command.app)
app.add_typer(today_command.app)
app.add_typer(complete_command.app)
app.add_typer(reopen_command.app)
app.add_typer(delete_command.app)
app.add_typer(purge_command.app)
app.add_typer(edit_command.app)
app.add_typer(shell_command.app)

# Subcommands
app.add_typer(projects.app, name="project", help="Project management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]td[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
