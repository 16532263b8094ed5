"""Configuration service for td.

Loads and saves ``config.json`` in the user config directory, creating a
default configuration (with the database in the user data directory) on first
run. Setting ``TD_HOME`` moves both directories under that path.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from td_cli.models.config_models import AppConfig
from td_cli.models.errors import ValidationError

APP_NAME = "td_cli"
DB_FILENAME = "td.db"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, home: str | Path | None = None):
        """Initialize the config service.

        Args:
            home: Base directory overriding the platform directories. Falls
                back to ``TD_HOME`` when not given.
        """
        home = home or os.environ.get("TD_HOME")
        if home:
            self.config_dir = Path(home)
            self.data_dir = Path(home)
        else:
            self.config_dir = Path(user_config_dir(APP_NAME))
            self.data_dir = Path(user_data_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def default_config(self) -> AppConfig:
        return AppConfig(db_path=str(self.data_dir / DB_FILENAME))

    def load_config(self) -> AppConfig:
        """Load configuration from disk, writing defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = self.default_config()
            self.save_config()
        except PydanticValidationError as e:
            raise ValidationError(f"invalid config file {self.config_path}: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to disk."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write(self.config.model_dump_json(indent=4))

        # Owner read/write only
        self.config_path.chmod(0o600)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key, or None if unknown."""
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel):
                return None
            value = getattr(value, part, None)
        return value

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a configuration value by dot-separated key and save.

        Raises:
            ValidationError: If the key is unknown or the value is rejected
        """
        if self.get(key) is None:
            raise ValidationError(f"unknown config key: {key}")

        config_dict = self.config.model_dump()
        current = config_dict
        parts = key.split(".")
        for part in parts[:-1]:
            current = current[part]
        current[parts[-1]] = value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except PydanticValidationError as e:
            raise ValidationError(f"invalid value for {key}: {value!r}") from e
        self.save_config()
        return self._config

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = self.default_config()
        self.save_config()
        return self._config


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
