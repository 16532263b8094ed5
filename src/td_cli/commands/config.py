"""Configuration management commands."""

import typer

from td_cli.services.config_service import get_config_service
from td_cli.utils.ui.console import get_console
from td_cli.utils.ui.formatters import format_success, format_warning, print_data

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format: json, yaml"),
) -> None:
    """Show the current configuration."""
    config_service = get_config_service()
    console.print(f"[dim]{config_service.config_path}[/dim]")
    print_data(config_service.config.model_dump(mode="json"), output)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., log_window_days)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    get_config_service().set(key, value)
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        confirm = typer.confirm("Are you sure you want to reset the configuration?")
        if not confirm:
            format_warning("Cancelled")
            raise typer.Exit(0)

    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
