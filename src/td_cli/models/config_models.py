"""Configuration models for td."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from td_cli.models.core import DEFAULT_LOG_WINDOW_DAYS


class AppConfig(BaseModel):
    """Main td configuration."""

    db_path: str = Field(..., description="SQLite database file")
    log_window_days: int = Field(
        default=DEFAULT_LOG_WINDOW_DAYS,
        ge=1,
        description="How many days completed tasks stay in the log view",
    )
    timezone: str = Field(
        default="local",
        description="'local' or an IANA zone used for due input and display",
    )

    @field_validator("db_path")
    @classmethod
    def validate_db_path(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("db_path cannot be empty")
        return v.strip()
