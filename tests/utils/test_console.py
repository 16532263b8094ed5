"""Tests for the shared console."""

from rich.console import Console

from td_cli.utils.ui.console import get_console


class TestGetConsole:
    def test_cached_per_highlight(self):
        assert isinstance(get_console(), Console)
        assert get_console() is get_console()
        assert get_console(highlight=False) is not get_console()
