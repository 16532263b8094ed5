"""Tests for the application logger and exit code mapping."""

from __future__ import annotations

import logging.handlers

from td_cli.models import Status
from td_cli.models.errors import (
    InvalidTransitionError,
    NothingToUndoError,
    ProjectNotFoundError,
    RepositoryError,
    TaskNotFoundError,
    TdError,
)
from td_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    SUCCESS,
    exit_code_for,
)
from td_cli.utils.logger import get_logger


class TestGetLogger:
    def test_singleton(self):
        assert get_logger() is get_logger()

    def test_writes_under_td_home(self, isolated_home):
        logger = get_logger()
        logger.info("hello from the test")
        for handler in logger.handlers:
            handler.flush()

        log_file = isolated_home / "logs" / "td.log"
        assert log_file.exists()
        assert "hello from the test" in log_file.read_text()

    def test_rotating_handler_and_no_propagation(self):
        logger = get_logger()
        assert logger.name == "td_cli"
        assert not logger.propagate
        assert any(
            isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
        )


class TestExitCodes:
    def test_mapping(self):
        assert exit_code_for(InvalidTransitionError(Status.DONE, Status.DOING)) == ERROR_INVALID_ARGS
        assert exit_code_for(TaskNotFoundError(1)) == ERROR_NOT_FOUND
        assert exit_code_for(ProjectNotFoundError("x")) == ERROR_NOT_FOUND
        assert exit_code_for(RepositoryError("disk")) == ERROR_STORAGE
        assert exit_code_for(NothingToUndoError()) == SUCCESS
        assert exit_code_for(TdError("other")) == ERROR_GENERAL
        assert exit_code_for(RuntimeError("boom")) == ERROR_GENERAL
