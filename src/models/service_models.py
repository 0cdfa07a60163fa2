"""Pydantic models for service layer return types.

These models provide type safety at service boundaries for values that are
computed rather than stored (dashboard numbers, reports, delivery results).
"""

from datetime import date, datetime

from pydantic import BaseModel

from src.domain.contact import Contact
from src.domain.preferences import Preferences
from src.domain.task import Priority, Task, TaskStatus
from src.domain.user import Group, User


class DashboardStats(BaseModel):
    """Headline task counts for the dashboard.

    ``overdue`` counts stored OVERDUE tasks plus tasks whose due date has
    passed without being completed.
    """

    total: int
    pending: int
    completed: int
    overdue: int


class DailyActivity(BaseModel):
    """Tasks created on one day, split by stored status."""

    day: date
    pending: int
    completed: int
    overdue: int


class Dashboard(BaseModel):
    """Everything the dashboard page shows."""

    stats: DashboardStats
    next_task: Task | None = None
    time_until_next: str | None = None
    weekly_activity: list[DailyActivity]


class ReportRow(BaseModel):
    """A non-completed task in the activity report."""

    task_id: str
    name: str
    responsible_name: str
    due_date: datetime
    due_label: str
    status: TaskStatus
    priority: Priority


class ActivityReport(BaseModel):
    """Activity report counts (stored status only) and open task rows."""

    completed: int
    overdue: int
    pending: int
    rows: list[ReportRow]


class InviteResult(BaseModel):
    """Result of sending a calendar invite."""

    success: bool
    message: str
    recipients: list[str] = []


class IcsFile(BaseModel):
    """Generated calendar file."""

    filename: str
    content: str


class AppData(BaseModel):
    """Bundle loaded by a client right after sign-in."""

    user: User
    users: list[User]
    contacts: list[Contact]
    groups: list[Group]
    tasks: list[Task]
    preferences: Preferences
