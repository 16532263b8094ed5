"""Shared rich console used by the formatters and the shell."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """One console per highlight setting, so styling and width stay consistent."""
    return Console(highlight=highlight)
