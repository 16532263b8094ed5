"""Task and project data models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

DEFAULT_PRIORITY = "P2"
VALID_PRIORITIES = ("P1", "P2", "P3", "P4")
DEFAULT_LOG_WINDOW_DAYS = 14


class Status(StrEnum):
    """Lifecycle status of a task."""

    INBOX = "inbox"
    TODO = "todo"
    DOING = "doing"
    DONE = "done"
    DELETED = "deleted"


OPEN_STATUSES = frozenset({Status.INBOX, Status.TODO, Status.DOING})


class View(StrEnum):
    """The fixed set of task views."""

    TODAY = "today"
    INBOX = "inbox"
    LOG = "log"
    PROJECT = "project"
    TRASH = "trash"


def normalize_priority(priority: str | None) -> str:
    """Upper-case and strip a priority, defaulting empty input to P2."""
    normalized = (priority or "").strip().upper()
    if not normalized:
        return DEFAULT_PRIORITY
    return normalized


def is_valid_priority(priority: str | None) -> bool:
    return normalize_priority(priority) in VALID_PRIORITIES


class Task(BaseModel):
    """Task model representing a stored task.

    Attributes:
        id: Repository-assigned identity, never reused
        title: Display text
        notes: Free text, may be empty
        status: Lifecycle status
        project: Project name, empty string when unassigned
        priority: P1 (highest) to P4
        due_at: Optional deadline (UTC)
        done_at: Completion time, set only while status is done
        created_at: Creation timestamp
        updated_at: Last mutation timestamp
    """

    id: int
    title: str
    notes: str = ""
    status: Status = Status.INBOX
    project: str = ""
    priority: str = DEFAULT_PRIORITY
    due_at: datetime | None = None
    done_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, v: str | None) -> str:
        if not is_valid_priority(v):
            return DEFAULT_PRIORITY
        return normalize_priority(v)

    @field_validator("project", "notes", mode="before")
    @classmethod
    def _none_to_empty(cls, v: str | None) -> str:
        return v or ""


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        notes: Optional notes
        status: Initial status; inbox unless a project is given
        project: Optional project name
        priority: Priority label, defaults to P2
        due_at: Optional deadline
    """

    title: str = Field(min_length=1)
    notes: str = ""
    status: Status | None = None
    project: str = ""
    priority: str = DEFAULT_PRIORITY
    due_at: datetime | None = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

    @field_validator("project")
    @classmethod
    def _strip_project(cls, v: str) -> str:
        return v.strip()

    def initial_status(self) -> Status:
        if self.status is not None:
            return self.status
        return Status.TODO if self.project else Status.INBOX


class TaskFilters(BaseModel):
    """Filters for listing tasks.

    Attributes:
        project: Only tasks attached to this project
        limit: Maximum number of results
    """

    project: str | None = None
    limit: int | None = Field(default=None, ge=1)
