"""Unit tests for the 'project' and 'config' command groups."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from td_cli.commands.config import app as config_app
from td_cli.commands.projects import app as projects_app
from td_cli.models.errors import ProjectNotFoundError
from td_cli.models.undo import MutationSummary, UndoKind
from td_cli.services.project_service import ProjectSummary

runner = CliRunner()


def _run_projects(args: list[str], project_service=None, coordinator=None, input=None):
    project_service = project_service or MagicMock()
    coordinator = coordinator or MagicMock()
    with (
        patch("td_cli.commands.projects.get_project_service", return_value=project_service),
        patch("td_cli.commands.projects.get_undo_coordinator", return_value=coordinator),
    ):
        return runner.invoke(projects_app, args, input=input)


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------


class TestProjectCommands:
    def test_ls(self):
        svc = MagicMock()
        svc.list_project_summaries = AsyncMock(
            return_value=[ProjectSummary(name="work", open_count=3, done_count=1)]
        )

        result = _run_projects(["ls"], project_service=svc)

        assert result.exit_code == 0
        assert "work" in result.output
        assert "3" in result.output

    def test_ls_empty(self):
        svc = MagicMock()
        svc.list_project_summaries = AsyncMock(return_value=[])

        result = _run_projects(["ls"], project_service=svc)

        assert "No projects yet" in result.output

    def test_add(self):
        svc = MagicMock()
        svc.create_project = AsyncMock(return_value="work")

        result = _run_projects(["add", "work"], project_service=svc)

        assert result.exit_code == 0
        assert "project work" in result.output

    def test_rename(self):
        svc = MagicMock()
        svc.rename_project = AsyncMock(return_value="job")

        result = _run_projects(["rename", "work", "job"], project_service=svc)

        assert result.exit_code == 0
        assert "renamed project work to job" in result.output

    def test_rm_with_yes(self):
        coordinator = MagicMock()
        coordinator.delete_project = AsyncMock(
            return_value=MutationSummary(
                kind=UndoKind.PROJECT_DELETE,
                task_ids=[1, 2],
                project="work",
                message="deleted project work",
            )
        )

        result = _run_projects(["rm", "work", "-y"], coordinator=coordinator)

        assert result.exit_code == 0
        assert "deleted project work, detached 2 task(s)" in result.output

    def test_rm_cancelled(self):
        coordinator = MagicMock()
        coordinator.delete_project = AsyncMock()

        result = _run_projects(["rm", "work"], coordinator=coordinator, input="n\n")

        assert result.exit_code == 0
        coordinator.delete_project.assert_not_awaited()

    def test_rm_missing(self):
        coordinator = MagicMock()
        coordinator.delete_project = AsyncMock(side_effect=ProjectNotFoundError("nope"))

        result = _run_projects(["rm", "nope", "-y"], coordinator=coordinator)

        assert result.exit_code == 5
        assert "project not found: nope" in result.output

    def test_done(self):
        coordinator = MagicMock()
        coordinator.complete_project = AsyncMock(
            return_value=MutationSummary(
                kind=UndoKind.TASK_STATUS, task_ids=[1], message="done 1 task(s) in work"
            )
        )

        result = _run_projects(["done", "work"], coordinator=coordinator)

        assert result.exit_code == 0
        assert "done 1 task(s) in work" in result.output


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


class TestConfigCommands:
    def test_show_yaml(self, tmp_config):
        with patch("td_cli.commands.config.get_config_service", return_value=tmp_config):
            result = runner.invoke(config_app, ["show"])

        assert result.exit_code == 0
        assert "log_window_days: 14" in result.output

    def test_set(self, tmp_config):
        with patch("td_cli.commands.config.get_config_service", return_value=tmp_config):
            result = runner.invoke(config_app, ["set", "log_window_days", "7"])

        assert result.exit_code == 0
        assert tmp_config.config.log_window_days == 7

    def test_set_unknown_key(self, tmp_config):
        with patch("td_cli.commands.config.get_config_service", return_value=tmp_config):
            result = runner.invoke(config_app, ["set", "colour", "red"])

        assert result.exit_code == 2
        assert "unknown config key" in result.output

    def test_reset(self, tmp_config):
        tmp_config.set("log_window_days", "3")
        with patch("td_cli.commands.config.get_config_service", return_value=tmp_config):
            result = runner.invoke(config_app, ["reset", "--yes"])

        assert result.exit_code == 0
        assert tmp_config.config.log_window_days == 14
