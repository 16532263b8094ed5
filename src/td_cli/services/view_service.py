"""View classification - which tasks each view shows, and in what order.

``classify`` is a pure function of its inputs. ``ViewService`` loads the full
task set through a repository and delegates to it.

Today matches on the due date at UTC calendar-day granularity. Log matches on
the completion time over a rolling window.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from td_cli.models import (
    DEFAULT_LOG_WINDOW_DAYS,
    OPEN_STATUSES,
    Status,
    Task,
    TaskFilters,
    View,
)
from td_cli.models.errors import InvalidViewError
from td_cli.repositories import TaskRepository

_LISTING_STATUS_RANK = {
    Status.DOING: 0,
    Status.TODO: 1,
    Status.DONE: 2,
    Status.INBOX: 3,
    Status.DELETED: 4,
}


def parse_view(raw: str | View) -> View:
    """Parse a view name.

    Raises:
        InvalidViewError: If the name is not one of the five views
    """
    try:
        return View(str(raw).strip().lower())
    except ValueError as e:
        raise InvalidViewError(str(raw)) from e


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def start_of_utc_day(now: datetime) -> datetime:
    """Midnight UTC of the calendar day containing ``now``."""
    now = _as_utc(now)
    return datetime(now.year, now.month, now.day, tzinfo=UTC)


def effective_window_days(log_window_days: int | None) -> int:
    if log_window_days is None or log_window_days <= 0:
        return DEFAULT_LOG_WINDOW_DAYS
    return log_window_days


def is_inbox_task(task: Task) -> bool:
    """Inbox tasks, plus todo tasks that were never given a project."""
    if task.status == Status.INBOX:
        return True
    return task.status == Status.TODO and not task.project.strip()


def is_today_task(task: Task, now: datetime) -> bool:
    """Doing tasks always; todo tasks due before the end of today (UTC)."""
    if task.status == Status.DOING:
        return True
    if task.status != Status.TODO or task.due_at is None:
        return False
    day_end = start_of_utc_day(now) + timedelta(hours=24)
    # Overdue tasks (before day start) are included as well.
    return _as_utc(task.due_at) < day_end


def is_log_task(task: Task, now: datetime, window_days: int) -> bool:
    if task.status != Status.DONE or task.done_at is None:
        return False
    window_start = _as_utc(now) - timedelta(days=window_days)
    return _as_utc(task.done_at) >= window_start


def is_project_task(task: Task, project: str, include_done: bool) -> bool:
    if not project or task.project != project:
        return False
    if task.status in OPEN_STATUSES:
        return True
    return include_done and task.status == Status.DONE


def is_trash_task(task: Task) -> bool:
    return task.status == Status.DELETED


def matches_view(
    task: Task,
    view: View,
    now: datetime,
    project: str = "",
    include_done: bool = False,
    log_window_days: int | None = DEFAULT_LOG_WINDOW_DAYS,
) -> bool:
    """Return True if a task belongs in a view."""
    match view:
        case View.INBOX:
            return is_inbox_task(task)
        case View.TODAY:
            return is_today_task(task, now)
        case View.LOG:
            return is_log_task(task, now, effective_window_days(log_window_days))
        case View.PROJECT:
            return is_project_task(task, project, include_done)
        case View.TRASH:
            return is_trash_task(task)
    raise InvalidViewError(str(view))


def _log_sort_key(task: Task) -> tuple:
    # Null done_at sorts after every timestamp; ties fall back to id.
    if task.done_at is None:
        return (1, 0.0, -task.id)
    return (0, -_as_utc(task.done_at).timestamp(), -task.id)


def _trash_sort_key(task: Task) -> tuple:
    return (-_as_utc(task.updated_at).timestamp(), -task.id)


def classify(
    tasks: Iterable[Task],
    view: View | str,
    now: datetime,
    project: str = "",
    include_done: bool = False,
    log_window_days: int | None = DEFAULT_LOG_WINDOW_DAYS,
) -> list[Task]:
    """Select and order the tasks shown by a view.

    Args:
        tasks: The full task collection
        view: Which view to compute
        now: Reference time; naive values are taken as UTC
        project: Project name for the project view (empty never matches)
        include_done: Also show done tasks in the project view
        log_window_days: Log window; unset or non-positive means 14 days

    Returns:
        Matching tasks. Log is ordered by done_at desc, Trash by updated_at
        desc, both with id desc on ties. Other views keep input order.
    """
    view = parse_view(view)
    out = [
        task
        for task in tasks
        if matches_view(task, view, now, project, include_done, log_window_days)
    ]
    if view == View.LOG:
        out.sort(key=_log_sort_key)
    elif view == View.TRASH:
        out.sort(key=_trash_sort_key)
    return out


def filter_out_deleted(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if task.status != Status.DELETED]


def sort_tasks_for_listing(tasks: Iterable[Task]) -> list[Task]:
    """Order tasks for the plain listing.

    Project name ascending with unassigned tasks last, then status
    (doing, todo, done, inbox, deleted), then id.
    """

    def key(task: Task) -> tuple:
        project = task.project.strip()
        return (
            project == "",
            project,
            _LISTING_STATUS_RANK.get(task.status, len(_LISTING_STATUS_RANK)),
            task.id,
        )

    return sorted(tasks, key=key)


def count_today_progress(tasks: Iterable[Task], now: datetime) -> tuple[int, int]:
    """Count (done, total) for today's work.

    Total is every task in the Today view plus tasks completed today; done is
    the latter.
    """
    day_start = start_of_utc_day(now)
    day_end = day_start + timedelta(hours=24)
    done = 0
    total = 0
    for task in tasks:
        if is_today_task(task, now):
            total += 1
        elif (
            task.status == Status.DONE
            and task.done_at is not None
            and day_start <= _as_utc(task.done_at) < day_end
        ):
            done += 1
            total += 1
    return done, total


class ViewService:
    """Service that computes views over the repository's task set."""

    def __init__(
        self,
        task_repository: TaskRepository,
        log_window_days: int = DEFAULT_LOG_WINDOW_DAYS,
    ):
        """Initialize the view service.

        Args:
            task_repository: TaskRepository implementation for data access
            log_window_days: How far back the log view reaches
        """
        self.repository = task_repository
        self.log_window_days = log_window_days

    async def list_by_view(
        self,
        view: View | str,
        now: datetime,
        project: str = "",
        include_done: bool = False,
    ) -> list[Task]:
        """Load all tasks and classify them for one view."""
        tasks = await self.repository.list_all(TaskFilters())
        return classify(
            tasks,
            view,
            now,
            project=project,
            include_done=include_done,
            log_window_days=self.log_window_days,
        )

    async def list_all_active(self) -> list[Task]:
        """Every task not in the trash, in listing order."""
        tasks = await self.repository.list_all(TaskFilters())
        return sort_tasks_for_listing(filter_out_deleted(tasks))

    async def today_progress(self, now: datetime) -> tuple[int, int]:
        tasks = await self.repository.list_all(TaskFilters())
        return count_today_progress(tasks, now)
