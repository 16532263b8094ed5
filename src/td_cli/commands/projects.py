"""Project management commands."""

import typer
from rich.table import Table

from td_cli.services.context_manager import get_project_service, get_undo_coordinator
from td_cli.utils.ui.console import get_console
from td_cli.utils.ui.formatters import format_info, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(help="Project management commands", no_args_is_help=True)
console = get_console()


@app.command("ls")
@command_wrapper
async def list_projects() -> None:
    """List projects with their open and done task counts."""
    summaries = await get_project_service().list_project_summaries()
    if not summaries:
        console.print("[yellow]No projects yet[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Project", style="green")
    table.add_column("Open", justify="right")
    table.add_column("Done", justify="right", style="dim")
    for summary in summaries:
        table.add_row(summary.name, str(summary.open_count), str(summary.done_count))
    console.print(table)


@app.command("add")
@command_wrapper
async def create_project(
    name: str = typer.Argument(..., help="Project name"),
) -> None:
    """Create a project."""
    name = await get_project_service().create_project(name)
    format_success(f"project {name}")


@app.command("rename")
@command_wrapper
async def rename_project(
    old_name: str = typer.Argument(..., help="Current project name"),
    new_name: str = typer.Argument(..., help="New project name"),
) -> None:
    """Rename a project; its tasks follow."""
    new_name = await get_project_service().rename_project(old_name, new_name)
    format_success(f"renamed project {old_name} to {new_name}")


@app.command("rm")
@command_wrapper
async def delete_project(
    name: str = typer.Argument(..., help="Project name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project. Its tasks stay, without a project."""
    if not yes:
        confirm = typer.confirm(f"Delete project {name}?")
        if not confirm:
            format_warning("Cancelled")
            raise typer.Exit(0)

    summary = await get_undo_coordinator().delete_project(name)
    format_success(f"{summary.message}, detached {len(summary.task_ids)} task(s)")


@app.command("done")
@command_wrapper
async def complete_project(
    name: str = typer.Argument(..., help="Project name"),
) -> None:
    """Mark every open task in a project as done."""
    summary = await get_undo_coordinator().complete_project(name)
    if summary.recorded:
        format_success(summary.message)
    else:
        format_info(summary.message)
