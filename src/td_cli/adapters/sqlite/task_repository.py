"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from td_cli.adapters.sqlite.connection import get_connection
from td_cli.adapters.sqlite.utils import (
    now_utc,
    parse_datetime,
    placeholders,
    row_to_dict,
    to_iso,
)
from td_cli.models import (
    Status,
    Task,
    TaskCreate,
    TaskFilters,
    is_valid_priority,
    normalize_priority,
    parse_status,
    validate_transition,
)
from td_cli.models.errors import (
    InvalidPriorityError,
    InvalidTransitionError,
    ProjectExistsError,
    ProjectNotFoundError,
    RepositoryError,
    TaskNotFoundError,
    ValidationError,
)
from td_cli.repositories import TaskRepository

_TASK_COLUMNS = (
    "id, title, notes, status, project, priority, due_at, done_at, created_at, updated_at"
)


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of the task repository.

    Multi-task writes run inside a single transaction, so a failure on any id
    leaves every task untouched.
    """

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Database file path, used when no connection is given.
            connection: Optional pre-opened connection (tests, in-memory use).
            clock: Source of "now" for timestamps.
        """
        self.db_path = db_path
        self._connection = connection
        self.clock = clock

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            if self.db_path is None:
                raise RepositoryError("no database path configured")
            self._connection = get_connection(self.db_path)
        return self._connection

    @contextmanager
    def _write(self) -> Iterator[sqlite3.Connection]:
        """Run a block in one transaction, committing on success."""
        try:
            with self.connection as conn:
                yield conn
        except sqlite3.Error as e:
            raise RepositoryError(str(e)) from e

    def _read(self, query: str, params: tuple | list = ()) -> list[sqlite3.Row]:
        try:
            return self.connection.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise RepositoryError(str(e)) from e

    def _now(self) -> str:
        return to_iso(self.clock())

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def create(self, task_data: TaskCreate) -> int:
        """Create a new task and return its id."""
        if not is_valid_priority(task_data.priority):
            raise InvalidPriorityError(task_data.priority)
        status = task_data.initial_status()
        now = self._now()

        with self._write() as conn:
            if task_data.project:
                self._ensure_project(conn, task_data.project, now)
            cursor = conn.execute(
                """INSERT INTO tasks (
                    title, notes, status, project, priority,
                    due_at, done_at, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task_data.title,
                    task_data.notes,
                    str(status),
                    task_data.project,
                    normalize_priority(task_data.priority),
                    to_iso(task_data.due_at),
                    now if status == Status.DONE else None,
                    now,
                    now,
                ),
            )
            return cursor.lastrowid

    async def get(self, task_id: int) -> Task:
        """Get a specific task by id."""
        rows = self._read(f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,))
        if not rows:
            raise TaskNotFoundError(task_id)
        return _row_to_task(rows[0])

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks ordered by id."""
        query = f"SELECT {_TASK_COLUMNS} FROM tasks"
        params: list[Any] = []

        if filters.project:
            query += " WHERE project = ?"
            params.append(filters.project)

        query += " ORDER BY id ASC"

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)

        return [_row_to_task(row) for row in self._read(query, params)]

    async def set_status(self, task_id: int, status: Status) -> None:
        now = self._now()
        with self._write() as conn:
            self._status_of(conn, task_id)
            conn.execute(
                "UPDATE tasks SET status = ?, done_at = ?, updated_at = ? WHERE id = ?",
                (str(status), now if status == Status.DONE else None, now, task_id),
            )

    async def mark_done(self, task_ids: list[int]) -> None:
        self._transit(task_ids, Status.DONE)

    async def mark_doing(self, task_ids: list[int]) -> None:
        self._transit(task_ids, Status.DOING)

    async def reopen(self, task_ids: list[int]) -> None:
        self._transit(task_ids, Status.TODO)

    async def soft_delete(self, task_ids: list[int]) -> None:
        self._transit(task_ids, Status.DELETED)

    async def restore(self, task_ids: list[int]) -> None:
        self._transit(task_ids, Status.TODO)

    async def purge(self, task_ids: list[int]) -> None:
        """Permanently remove tasks that are already in the trash."""
        if not task_ids:
            return
        with self._write() as conn:
            for task_id in task_ids:
                status = self._status_of(conn, task_id)
                if status != Status.DELETED:
                    raise InvalidTransitionError(status, Status.DELETED)
            conn.execute(
                f"DELETE FROM tasks WHERE id IN ({placeholders(len(task_ids))})",
                list(task_ids),
            )

    async def update_project(self, task_id: int, project: str) -> None:
        """Attach or detach a task; an inbox task attached to a project becomes todo."""
        project = (project or "").strip()
        now = self._now()
        with self._write() as conn:
            status = self._status_of(conn, task_id)
            if project:
                self._ensure_project(conn, project, now)
                if status == Status.INBOX:
                    status = Status.TODO
            conn.execute(
                "UPDATE tasks SET project = ?, status = ?, updated_at = ? WHERE id = ?",
                (project, str(status), now, task_id),
            )

    async def update_due(self, task_id: int, due_at: datetime | None) -> None:
        self._update_field(task_id, "due_at", to_iso(due_at))

    async def update_title(self, task_id: int, title: str) -> None:
        title = (title or "").strip()
        if not title:
            raise ValidationError("title cannot be empty")
        self._update_field(task_id, "title", title)

    async def update_notes(self, task_id: int, notes: str) -> None:
        self._update_field(task_id, "notes", notes or "")

    async def update_priority(self, task_id: int, priority: str) -> None:
        if not is_valid_priority(priority):
            raise InvalidPriorityError(priority)
        self._update_field(task_id, "priority", normalize_priority(priority))

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    async def create_project(self, name: str) -> None:
        name = _clean_project_name(name)
        with self._write() as conn:
            self._ensure_project(conn, name, self._now())

    async def delete_project(self, name: str) -> None:
        """Delete a project, detaching (not deleting) its tasks."""
        name = _clean_project_name(name)
        now = self._now()
        with self._write() as conn:
            if not self._project_exists(conn, name):
                raise ProjectNotFoundError(name)
            conn.execute(
                "UPDATE tasks SET project = '', updated_at = ? WHERE project = ?",
                (now, name),
            )
            conn.execute("DELETE FROM projects WHERE name = ?", (name,))

    async def rename_project(self, old_name: str, new_name: str) -> None:
        old_name = _clean_project_name(old_name)
        new_name = _clean_project_name(new_name)
        now = self._now()
        with self._write() as conn:
            if not self._project_exists(conn, old_name):
                raise ProjectNotFoundError(old_name)
            if old_name == new_name:
                return
            if self._project_exists(conn, new_name):
                raise ProjectExistsError(new_name)
            conn.execute(
                "UPDATE projects SET name = ? WHERE name = ?", (new_name, old_name)
            )
            conn.execute(
                "UPDATE tasks SET project = ?, updated_at = ? WHERE project = ?",
                (new_name, now, old_name),
            )

    async def list_projects(self) -> list[str]:
        return [row["name"] for row in self._read("SELECT name FROM projects ORDER BY name")]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _transit(self, task_ids: list[int], to_status: Status) -> None:
        """Validate and apply a status change to every id, all or nothing."""
        if not task_ids:
            return
        now = self._now()
        done_at = now if to_status == Status.DONE else None
        with self._write() as conn:
            for task_id in task_ids:
                validate_transition(self._status_of(conn, task_id), to_status)
                conn.execute(
                    "UPDATE tasks SET status = ?, done_at = ?, updated_at = ? WHERE id = ?",
                    (str(to_status), done_at, now, task_id),
                )

    def _update_field(self, task_id: int, column: str, value: Any) -> None:
        with self._write() as conn:
            cursor = conn.execute(
                f"UPDATE tasks SET {column} = ?, updated_at = ? WHERE id = ?",
                (value, self._now(), task_id),
            )
            if cursor.rowcount == 0:
                raise TaskNotFoundError(task_id)

    @staticmethod
    def _status_of(conn: sqlite3.Connection, task_id: int) -> Status:
        row = conn.execute("SELECT status FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return parse_status(row["status"])

    @staticmethod
    def _project_exists(conn: sqlite3.Connection, name: str) -> bool:
        row = conn.execute("SELECT 1 FROM projects WHERE name = ?", (name,)).fetchone()
        return row is not None

    @staticmethod
    def _ensure_project(conn: sqlite3.Connection, name: str, now: str) -> None:
        conn.execute(
            "INSERT OR IGNORE INTO projects (name, created_at) VALUES (?, ?)",
            (name, now),
        )


def _clean_project_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("project name cannot be empty")
    return name


def _row_to_task(row: sqlite3.Row) -> Task:
    task_dict = row_to_dict(row)
    task_dict["status"] = parse_status(task_dict["status"])
    for key in ("due_at", "done_at", "created_at", "updated_at"):
        task_dict[key] = parse_datetime(task_dict[key])
    return Task(**task_dict)
