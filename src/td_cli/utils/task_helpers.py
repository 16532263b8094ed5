"""Task helper utilities."""

from __future__ import annotations

from td_cli.models.errors import ValidationError


def parse_task_id(raw: str) -> int:
    """Parse a task id given as ``5`` or ``#5``.

    Raises:
        ValidationError: If the value is not a positive integer
    """
    value = raw.strip().lstrip("#")
    try:
        task_id = int(value)
    except ValueError as e:
        raise ValidationError(f"invalid task id: {raw!r}") from e
    if task_id <= 0:
        raise ValidationError(f"invalid task id: {raw!r}")
    return task_id


def parse_task_ids(raw_ids: list[str]) -> list[int]:
    """Parse several ids, accepting comma-separated groups (``1,2 3``).

    Duplicates are dropped, first occurrence wins.
    """
    ids: list[int] = []
    for raw in raw_ids:
        for part in raw.split(","):
            if part.strip():
                ids.append(parse_task_id(part))
    if not ids:
        raise ValidationError("at least one task id is required")
    return list(dict.fromkeys(ids))
