"""Task domain models and enums."""

import json
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.domain.log import ChangeLog


class TaskStatus(StrEnum):
    """Stored task status. Transitions between values are not validated."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"


class Priority(StrEnum):
    """Task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class Visibility(StrEnum):
    """Who may see a task."""

    PUBLIC = "public"  # Everyone
    PRIVATE = "private"  # Creator, responsible and participants
    GROUP = "group"  # Members of the task's group


class ReminderUnit(StrEnum):
    """Unit of the calendar reminder offset."""

    DAYS = "days"
    HOURS = "hours"


class Attachment(BaseModel):
    """Link attached to a task."""

    label: str = Field(..., description="Display label")
    url: str = Field(..., description="Target URL")


def decode_json_list(value: Any) -> Any:
    """Decode list-valued columns stored as JSON text."""
    if value is None:
        return []
    if isinstance(value, str):
        return json.loads(value) if value else []
    return value


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Task(BaseModel):
    """Task data transfer object."""

    id: str = Field(..., description="Unique task ID from database")
    name: str = Field(..., description="Task name")
    description: str = Field(default="", description="Detailed task description")
    due_date: datetime = Field(..., description="Due date and time")
    duration: int = Field(default=60, ge=0, description="Duration in minutes")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Stored status")
    reminder_value: int = Field(default=1, ge=0, description="Reminder offset before the due date (0 disables)")
    reminder_unit: ReminderUnit = Field(default=ReminderUnit.DAYS, description="Unit of the reminder offset")
    responsible: str | None = Field(default=None, description="Contact ID accountable for the task")
    participants: list[str] = Field(default_factory=list, description="Participant contact IDs")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    attachments: list[Attachment] = Field(default_factory=list, description="Attached links")
    comments: list[str] = Field(default_factory=list, description="Comments")
    history: list[ChangeLog] = Field(default_factory=list, description="Change log, newest first")
    created_at: datetime = Field(..., description="Creation timestamp")
    creator_id: str | None = Field(default=None, description="ID of the user who created the task")
    visibility: Visibility = Field(default=Visibility.PUBLIC, description="Who may see the task")
    group_id: str | None = Field(default=None, description="Group ID for group visibility")

    @field_validator("tags", "attachments", "comments", mode="before")
    @classmethod
    def decode_json_columns(cls, v: Any) -> Any:
        """Accept JSON text as stored in the database."""
        return decode_json_list(v)

    @field_validator("due_date", "created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        return ensure_utc(v)
