"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import pytest

from td_cli.adapters.sqlite import SqliteTaskRepository, open_connection

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock for deterministic timestamps."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point TD_HOME at a temp dir and reset the logger singleton."""
    import td_cli.utils.logger as logger_mod

    monkeypatch.setenv("TD_HOME", str(tmp_path / "td_home"))
    logger_mod._logger = None
    logging.getLogger("td_cli").handlers.clear()

    yield tmp_path / "td_home"

    logging.getLogger("td_cli").handlers.clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo(clock):
    """Repository over a fresh, fully migrated in-memory database."""
    conn = open_connection(":memory:")
    yield SqliteTaskRepository(connection=conn, clock=clock)
    conn.close()


@pytest.fixture
def tmp_config(tmp_path):
    """A real ConfigService rooted in a temporary directory."""
    from td_cli.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    yield ConfigService(home=tmp_path / "config_home")
    get_config_service.cache_clear()
