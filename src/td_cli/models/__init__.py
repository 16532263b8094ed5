"""td domain models.

This package contains the Pydantic models and plain rules that describe the
core entities of td: tasks, their status lifecycle and undo records.
"""

from .config_models import AppConfig
from .core import (
    DEFAULT_LOG_WINDOW_DAYS,
    DEFAULT_PRIORITY,
    OPEN_STATUSES,
    Status,
    Task,
    TaskCreate,
    TaskFilters,
    View,
    is_valid_priority,
    normalize_priority,
)
from .status import can_transition, parse_status, validate_transition
from .undo import MutationSummary, StatusChange, UndoAction, UndoKind, UndoSummary

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskFilters",
    "Status",
    "View",
    "OPEN_STATUSES",
    "DEFAULT_LOG_WINDOW_DAYS",
    "DEFAULT_PRIORITY",
    "normalize_priority",
    "is_valid_priority",
    # Status rules
    "can_transition",
    "validate_transition",
    "parse_status",
    # Undo models
    "UndoKind",
    "UndoAction",
    "StatusChange",
    "MutationSummary",
    "UndoSummary",
    # Config models
    "AppConfig",
]
