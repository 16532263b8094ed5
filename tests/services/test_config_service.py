"""Tests for ConfigService."""

from __future__ import annotations

import json

import pytest

from td_cli.models.errors import ValidationError
from td_cli.services.config_service import ConfigService, get_config_service


class TestLoadConfig:
    def test_first_run_writes_defaults(self, tmp_config):
        config = tmp_config.load_config()

        assert tmp_config.config_path.exists()
        assert config.db_path == str(tmp_config.data_dir / "td.db")
        assert config.log_window_days == 14
        assert (tmp_config.config_path.stat().st_mode & 0o777) == 0o600

    def test_reads_existing_file(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / "config.json").write_text(
            json.dumps({"db_path": "/data/custom.db", "log_window_days": 30})
        )

        config = ConfigService(home=home).load_config()

        assert config.db_path == "/data/custom.db"
        assert config.log_window_days == 30

    def test_invalid_file(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / "config.json").write_text(json.dumps({"db_path": ""}))

        with pytest.raises(ValidationError):
            ConfigService(home=home).load_config()

    def test_td_home_env(self, isolated_home):
        service = ConfigService()

        assert service.config_dir == isolated_home
        assert service.config.db_path == str(isolated_home / "td.db")

    def test_cached_getter(self):
        get_config_service.cache_clear()
        try:
            assert get_config_service() is get_config_service()
        finally:
            get_config_service.cache_clear()


class TestGetSet:
    def test_get_dotted(self, tmp_config):
        assert tmp_config.get("timezone") == "local"
        assert tmp_config.get("nope") is None
        assert tmp_config.get("timezone.more") is None

    def test_set_coerces_and_persists(self, tmp_config):
        tmp_config.set("log_window_days", "30")

        reloaded = ConfigService(home=tmp_config.config_dir)
        assert reloaded.config.log_window_days == 30

    def test_set_unknown_key(self, tmp_config):
        with pytest.raises(ValidationError, match="unknown config key"):
            tmp_config.set("colour", "red")

    def test_set_invalid_value_keeps_old(self, tmp_config):
        with pytest.raises(ValidationError):
            tmp_config.set("log_window_days", "0")
        assert tmp_config.config.log_window_days == 14

    def test_reset(self, tmp_config):
        tmp_config.set("timezone", "Europe/Paris")

        config = tmp_config.reset_config()

        assert config.timezone == "local"
        assert ConfigService(home=tmp_config.config_dir).config.timezone == "local"
