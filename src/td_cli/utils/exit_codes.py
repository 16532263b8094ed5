"""
Exit codes for td.

Semantic exit codes so scripts can tell a rejected request from a storage
failure without parsing output.
"""

from td_cli.models.errors import (
    NotFoundError,
    NothingToUndoError,
    RepositoryError,
    ValidationError,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments, validation error or illegal status transition
ERROR_INVALID_ARGS = 2

# Task or project not found
ERROR_NOT_FOUND = 5

# Storage backend failure
ERROR_STORAGE = 7


def exit_code_for(error: Exception) -> int:
    """Map an exception raised by the core to an exit code."""
    if isinstance(error, ValidationError):
        return ERROR_INVALID_ARGS
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, RepositoryError):
        return ERROR_STORAGE
    if isinstance(error, NothingToUndoError):
        return SUCCESS
    return ERROR_GENERAL
