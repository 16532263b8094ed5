"""Unit tests for command decorators."""

from __future__ import annotations

import typer
from typer.testing import CliRunner

from td_cli.commands.decorators import command_wrapper
from td_cli.models.errors import NothingToUndoError, RepositoryError, TaskNotFoundError

runner = CliRunner()


def _app_for(func) -> typer.Typer:
    app = typer.Typer()
    app.command("run")(command_wrapper(func))
    return app


class TestCommandWrapper:
    def test_sync_success(self):
        def cmd():
            print("sync ran")

        result = runner.invoke(_app_for(cmd), [])

        assert result.exit_code == 0
        assert "sync ran" in result.output

    def test_async_is_run(self):
        async def cmd():
            print("async ran")

        result = runner.invoke(_app_for(cmd), [])

        assert result.exit_code == 0
        assert "async ran" in result.output

    def test_not_found_maps_to_exit_code(self):
        async def cmd():
            raise TaskNotFoundError(3)

        result = runner.invoke(_app_for(cmd), [])

        assert result.exit_code == 5
        assert "Error:" in result.output
        assert "task not found: #3" in result.output

    def test_storage_error(self):
        def cmd():
            raise RepositoryError("disk full")

        result = runner.invoke(_app_for(cmd), [])

        assert result.exit_code == 7

    def test_nothing_to_undo_is_success(self):
        def cmd():
            raise NothingToUndoError()

        assert runner.invoke(_app_for(cmd), []).exit_code == 0

    def test_typer_exit_passes_through(self):
        def cmd():
            raise typer.Exit(3)

        assert runner.invoke(_app_for(cmd), []).exit_code == 3

    def test_unexpected_error(self):
        def cmd():
            raise RuntimeError("boom")

        result = runner.invoke(_app_for(cmd), [])

        assert result.exit_code == 1
        assert "An unexpected error occurred: boom" in result.output

    def test_keeps_function_name(self):
        def my_command():
            pass

        assert command_wrapper(my_command).__name__ == "my_command"
