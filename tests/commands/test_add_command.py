"""Unit tests for the 'add' command."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from td_cli.commands.add_command import app
from td_cli.models import Status, Task

runner = CliRunner()

_NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


def _task(**kwargs) -> Task:
    fields = {
        "id": 1,
        "title": "buy milk",
        "created_at": _NOW,
        "updated_at": _NOW,
    }
    fields.update(kwargs)
    return Task(**fields)


def _run(args: list[str], task_service=None):
    if task_service is None:
        task_service = MagicMock()
        task_service.add_task = AsyncMock(return_value=_task())
    with (
        patch("td_cli.commands.add_command.get_task_service", return_value=task_service),
        patch("td_cli.commands.add_command.get_display_timezone", return_value=UTC),
    ):
        result = runner.invoke(app, args)
    return result, task_service


class TestAddCommand:
    def test_joins_title_words(self):
        result, svc = _run(["buy", "milk"])

        assert result.exit_code == 0
        assert "added #1 buy milk (inbox, P2)" in result.output
        svc.add_task.assert_awaited_once_with(
            "buy milk", notes="", project="", priority="P2", due_at=None
        )

    def test_options(self):
        svc = MagicMock()
        svc.add_task = AsyncMock(
            return_value=_task(
                status=Status.TODO,
                project="work",
                priority="P1",
                due_at=datetime(2026, 3, 12, 23, 59, tzinfo=UTC),
            )
        )

        result, _ = _run(
            ["buy", "milk", "-p", "work", "-P", "p1", "-d", "2026-03-12", "-n", "2 litres"],
            task_service=svc,
        )

        assert result.exit_code == 0
        assert "(todo, P1, work, due 2026-03-12 23:59)" in result.output
        kwargs = svc.add_task.await_args.kwargs
        assert kwargs["project"] == "work"
        assert kwargs["priority"] == "p1"
        assert kwargs["notes"] == "2 litres"
        assert kwargs["due_at"] == datetime(2026, 3, 12, 23, 59, tzinfo=UTC)

    def test_bad_due_is_invalid_args(self):
        result, svc = _run(["t", "--due", "someday"])

        assert result.exit_code == 2
        assert "invalid due datetime" in result.output
        svc.add_task.assert_not_awaited()

    def test_missing_title(self):
        result, _ = _run([])
        assert result.exit_code != 0
