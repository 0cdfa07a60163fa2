"""Dashboard and report calculations over already-loaded tasks.

All functions are pure. The dashboard counts use the derived overdue check;
the report counts use stored status only, so the two can show different
overdue numbers for the same tasks.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime, timedelta

from src.core import message_templates
from src.core.config import constants
from src.core.formatting import format_datetime
from src.domain.contact import Contact
from src.domain.task import Priority, Task, TaskStatus
from src.models.service_models import ActivityReport, DailyActivity, DashboardStats, ReportRow
from src.modules.tasks.status import is_overdue, is_stored_overdue


def dashboard_stats(tasks: Sequence[Task], now: datetime) -> DashboardStats:
    """Headline counts. Overdue includes tasks past due that are not stored as OVERDUE."""
    return DashboardStats(
        total=len(tasks),
        pending=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        overdue=sum(1 for t in tasks if is_stored_overdue(t) or is_overdue(t, now)),
    )


def next_task(tasks: Iterable[Task], now: datetime) -> Task | None:
    """Earliest upcoming task that is not completed, or None."""
    upcoming = [t for t in tasks if t.status != TaskStatus.COMPLETED and t.due_date > now]
    if not upcoming:
        return None
    return min(upcoming, key=lambda t: t.due_date)


def weekly_activity(
    tasks: Sequence[Task],
    now: datetime,
    *,
    days: int = constants.ACTIVITY_WINDOW_DAYS,
) -> list[DailyActivity]:
    """Tasks created on each of the last ``days`` UTC days, oldest first, by stored status."""
    today = now.astimezone(UTC).date()
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    activity = []
    for day in window:
        created_that_day = [t for t in tasks if t.created_at.astimezone(UTC).date() == day]
        activity.append(
            DailyActivity(
                day=day,
                pending=sum(1 for t in created_that_day if t.status == TaskStatus.PENDING),
                completed=sum(1 for t in created_that_day if t.status == TaskStatus.COMPLETED),
                overdue=sum(1 for t in created_that_day if t.status == TaskStatus.OVERDUE),
            )
        )
    return activity


def activity_report(
    tasks: Sequence[Task],
    contacts_by_id: Mapping[str, Contact],
    *,
    language: str | None = None,
    date_format: str = "DD/MM/YYYY",
    timezone: str | None = None,
) -> ActivityReport:
    """Report counts by stored status and one row per task that is not completed.

    Pending counts both PENDING and IN_PROGRESS tasks. Row due dates are also
    rendered as text in the given date format and timezone.
    """
    rows = []
    for task in tasks:
        if task.status == TaskStatus.COMPLETED:
            continue
        responsible = contacts_by_id.get(task.responsible) if task.responsible else None
        rows.append(
            ReportRow(
                task_id=task.id,
                name=task.name,
                responsible_name=responsible.name if responsible else message_templates.not_available(language=language),
                due_date=task.due_date,
                due_label=format_datetime(task.due_date, date_format=date_format, timezone=timezone),
                status=task.status,
                priority=task.priority,
            )
        )

    return ActivityReport(
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        overdue=sum(1 for t in tasks if t.status == TaskStatus.OVERDUE),
        pending=sum(1 for t in tasks if t.status in (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)),
        rows=rows,
    )


def filter_tasks(
    tasks: Iterable[Task],
    *,
    status: TaskStatus | None = None,
    priority: Priority | None = None,
    responsible: str | None = None,
) -> list[Task]:
    """Task list filters; an unset filter matches everything."""
    return [
        t
        for t in tasks
        if (status is None or t.status == status)
        and (priority is None or t.priority == priority)
        and (responsible is None or t.responsible == responsible)
    ]
