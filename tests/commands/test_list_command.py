"""Unit tests for the 'ls' and 'today' commands."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from td_cli.commands.list_command import app as list_app
from td_cli.commands.today_command import app as today_app
from td_cli.models import Status, Task, View
from td_cli.models.undo import MutationSummary, UndoKind

runner = CliRunner()

_NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)

TASK_1 = Task(id=1, title="Write report", status=Status.DOING, created_at=_NOW, updated_at=_NOW)
TASK_2 = Task(
    id=2, title="Call bank", status=Status.TODO, project="home", created_at=_NOW, updated_at=_NOW
)


def _make_view_service(tasks=None, progress=(1, 2)):
    svc = MagicMock()
    svc.list_by_view = AsyncMock(return_value=tasks if tasks is not None else [TASK_1])
    svc.list_all_active = AsyncMock(return_value=[TASK_1, TASK_2])
    svc.today_progress = AsyncMock(return_value=progress)
    return svc


def _run_ls(args: list[str], view_service=None):
    view_service = view_service or _make_view_service()
    with (
        patch("td_cli.commands.list_command.get_view_service", return_value=view_service),
        patch("td_cli.commands.list_command.get_display_timezone", return_value=UTC),
    ):
        result = runner.invoke(list_app, args)
    return result, view_service


# ---------------------------------------------------------------------------
# ls
# ---------------------------------------------------------------------------


class TestListCommand:
    def test_no_view_lists_all_active(self):
        result, svc = _run_ls([])

        assert result.exit_code == 0
        assert "Write report" in result.output
        assert "Call bank" in result.output
        svc.list_all_active.assert_awaited_once()
        svc.list_by_view.assert_not_awaited()

    def test_named_view(self):
        result, svc = _run_ls(["inbox"])

        assert result.exit_code == 0
        assert svc.list_by_view.await_args.args[0] == View.INBOX

    def test_today_prints_progress(self):
        result, _ = _run_ls(["today"])

        assert result.exit_code == 0
        assert "1/2 done today" in result.output

    def test_project_option_implies_project_view(self):
        result, svc = _run_ls(["-p", "home", "--all"])

        assert result.exit_code == 0
        call = svc.list_by_view.await_args
        assert call.args[0] == View.PROJECT
        assert call.kwargs["project"] == "home"
        assert call.kwargs["include_done"] is True

    def test_project_view_needs_name(self):
        result, svc = _run_ls(["project"])

        assert result.exit_code == 2
        assert "--project" in result.output
        svc.list_by_view.assert_not_awaited()

    def test_unknown_view(self):
        result, _ = _run_ls(["someday"])

        assert result.exit_code == 2
        assert "unsupported view" in result.output

    def test_empty_view(self):
        result, _ = _run_ls(["trash"], _make_view_service(tasks=[]))

        assert result.exit_code == 0
        assert "No tasks found" in result.output

    def test_json_output(self):
        result, _ = _run_ls(["today", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["id"] == 1
        assert data[0]["status"] == "doing"

    def test_bad_output_format(self):
        result, _ = _run_ls(["-o", "xml"])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# today
# ---------------------------------------------------------------------------


class TestTodayCommand:
    def test_lists_today_view(self):
        view_service = _make_view_service()
        with (
            patch("td_cli.commands.today_command.get_view_service", return_value=view_service),
            patch("td_cli.commands.today_command.get_display_timezone", return_value=UTC),
        ):
            result = runner.invoke(today_app, [])

        assert result.exit_code == 0
        assert "Write report" in result.output
        assert "1/2 done today" in result.output
        assert view_service.list_by_view.await_args.args[0] == View.TODAY

    def test_nothing_today(self):
        view_service = _make_view_service(tasks=[], progress=(0, 0))
        with (
            patch("td_cli.commands.today_command.get_view_service", return_value=view_service),
            patch("td_cli.commands.today_command.get_display_timezone", return_value=UTC),
        ):
            result = runner.invoke(today_app, [])

        assert result.exit_code == 0
        assert "Nothing due today" in result.output

    def test_toggles_each_id(self):
        coordinator = MagicMock()
        coordinator.toggle_today = AsyncMock(
            side_effect=[
                MutationSummary(kind=UndoKind.TASK_STATUS, task_ids=[3], message="doing #3"),
                MutationSummary(kind=UndoKind.TASK_STATUS, task_ids=[4], message="todo #4"),
            ]
        )
        with patch(
            "td_cli.commands.today_command.get_undo_coordinator", return_value=coordinator
        ):
            result = runner.invoke(today_app, ["3,4"])

        assert result.exit_code == 0
        assert "doing #3" in result.output
        assert "todo #4" in result.output
        assert [c.args[0] for c in coordinator.toggle_today.await_args_list] == [3, 4]
