"""Task status transition rules.

The table below is the single source of truth for which status changes are
allowed. It is consulted by the repository's bulk status writes and by the
undo coordinator before it issues one. Undo replay writes the prior status
directly. Self-transitions are always legal.

"Restore from trash" and "reopen a done task" both map to ``-> todo``; the
table does not tell them apart.
"""

from __future__ import annotations

from td_cli.models.core import Status
from td_cli.models.errors import InvalidStatusError, InvalidTransitionError

TRANSITIONS: dict[Status, frozenset[Status]] = {
    Status.INBOX: frozenset({Status.TODO, Status.DOING, Status.DONE, Status.DELETED}),
    Status.TODO: frozenset({Status.DOING, Status.DONE, Status.DELETED}),
    Status.DOING: frozenset({Status.TODO, Status.DONE, Status.DELETED}),
    Status.DONE: frozenset({Status.TODO, Status.DELETED}),
    Status.DELETED: frozenset({Status.TODO}),
}


def parse_status(raw: str | Status) -> Status:
    """Parse a status string.

    Raises:
        InvalidStatusError: If the value is not a known status
    """
    try:
        return Status(str(raw).strip().lower())
    except ValueError as e:
        raise InvalidStatusError(str(raw)) from e


def can_transition(from_status: Status, to_status: Status) -> bool:
    """Return True if a task may move from one status to another."""
    if from_status == to_status:
        return True
    return to_status in TRANSITIONS.get(from_status, frozenset())


def validate_transition(from_status: Status, to_status: Status) -> None:
    """Check a status change against the transition table.

    Raises:
        InvalidTransitionError: If the change is not permitted
    """
    if not can_transition(from_status, to_status):
        raise InvalidTransitionError(from_status, to_status)
