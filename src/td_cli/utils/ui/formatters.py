"""Output formatters for tasks, projects and messages."""

from __future__ import annotations

import json
from datetime import UTC, datetime, tzinfo
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from td_cli.models import Status, Task
from td_cli.utils.datetime_utils import format_local
from td_cli.utils.ui.console import get_console

console = get_console()

STATUS_ICONS = {
    Status.INBOX: "📥",
    Status.TODO: "⬜",
    Status.DOING: "▶️",
    Status.DONE: "✅",
    Status.DELETED: "🗑️",
}

STATUS_STYLES = {
    Status.INBOX: "cyan",
    Status.TODO: "white",
    Status.DOING: "bold yellow",
    Status.DONE: "dim green",
    Status.DELETED: "dim red",
}

PRIORITY_COLORS = {
    "P1": "bold red",
    "P2": "yellow",
    "P3": "blue",
    "P4": "dim",
}

OUTPUT_FORMATS = ("table", "json", "yaml")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def task_to_dict(task: Task) -> dict[str, Any]:
    """Plain dict for machine-readable output, datetimes as ISO strings."""
    return task.model_dump(mode="json")


def print_data(data: Any, output_format: str) -> None:
    """Print data as json or yaml."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    else:
        raise ValueError(f"unsupported output format: {output_format}")


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    if task.due_at is None or task.status not in (Status.INBOX, Status.TODO, Status.DOING):
        return False
    return task.due_at < (now or datetime.now(UTC))


def format_due(task: Task, tz: tzinfo | None = None, now: datetime | None = None) -> Text:
    if task.due_at is None:
        return Text("")
    style = "bold red" if is_overdue(task, now) else ""
    return Text(format_local(task.due_at, tz), style=style)


def build_task_table(
    tasks: list[Task],
    title: str | None = None,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> Table:
    """Build a rich table of tasks."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("", no_wrap=True)
    table.add_column("Title")
    table.add_column("Project", style="green")
    table.add_column("Pri", no_wrap=True)
    table.add_column("Due", no_wrap=True)

    for task in tasks:
        table.add_row(
            f"#{task.id}",
            STATUS_ICONS.get(task.status, ""),
            Text(task.title, style=STATUS_STYLES.get(task.status, "")),
            task.project,
            Text(task.priority, style=PRIORITY_COLORS.get(task.priority, "")),
            format_due(task, tz, now),
        )
    return table


def format_task_list(
    tasks: list[Task],
    title: str | None = None,
    tz: tzinfo | None = None,
    empty_message: str = "No tasks found",
) -> None:
    """Display tasks as a table, or a notice when there are none."""
    if not tasks:
        console.print(f"[yellow]{empty_message}[/yellow]")
        return
    console.print(build_task_table(tasks, title=title, tz=tz))


def format_task_detail(task: Task, tz: tzinfo | None = None) -> None:
    """Display every field of one task."""
    header = Text()
    header.append(f"#{task.id} ", style="bold cyan")
    header.append(task.title, style="bold")
    console.print(header)

    rows = [
        ("Status", f"{STATUS_ICONS.get(task.status, '')} {task.status}"),
        ("Project", task.project or "-"),
        ("Priority", task.priority),
        ("Due", format_local(task.due_at, tz) or "-"),
        ("Done", format_local(task.done_at, tz) or "-"),
        ("Created", format_local(task.created_at, tz)),
        ("Updated", format_local(task.updated_at, tz)),
    ]
    for label, value in rows:
        console.print(f"  [dim]{label:<9}[/dim] {value}")
    if task.notes:
        console.print()
        console.print(task.notes)


def format_progress(done: int, total: int) -> None:
    """Display today's progress line."""
    if total == 0:
        return
    percentage = done * 100 // total
    filled = percentage // 10
    bar = "█" * filled + "░" * (10 - filled)
    color = "green" if percentage >= 80 else "yellow" if percentage >= 40 else "red"
    console.print(f"[{color}]{bar}[/{color}] {done}/{total} done today")
