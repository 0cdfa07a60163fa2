"""Update models for database operations.

Fields left unset are not changed.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.domain.preferences import DateFormat, Language
from src.domain.task import Attachment, Priority, ReminderUnit, TaskStatus, Visibility, ensure_utc
from src.domain.user import UserRole, validate_email


class TaskUpdate(BaseModel):
    """Partial update payload for a task."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    duration: int | None = Field(default=None, ge=0)
    priority: Priority | None = None
    status: TaskStatus | None = None
    reminder_value: int | None = Field(default=None, ge=0)
    reminder_unit: ReminderUnit | None = None
    responsible: str | None = None
    participants: list[str] | None = None
    tags: list[str] | None = None
    attachments: list[Attachment] | None = None
    comments: list[str] | None = None
    visibility: Visibility | None = None
    group_id: str | None = None

    @field_validator("due_date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC."""
        return ensure_utc(v) if v is not None else None

    @field_validator("participants")
    @classmethod
    def dedupe_participants(cls, v: list[str] | None) -> list[str] | None:
        return list(dict.fromkeys(v)) if v is not None else None


class ContactUpdate(BaseModel):
    """Partial update payload for a contact."""

    name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    role: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return validate_email(v) if v is not None else None


class UserRoleUpdate(BaseModel):
    """DTO for changing a user's role."""

    role: UserRole


class GroupMembersUpdate(BaseModel):
    """DTO replacing the full member list of a group."""

    member_ids: list[str] = Field(default_factory=list)


class PreferencesUpdate(BaseModel):
    """Partial update payload for preferences."""

    language: Language | None = None
    date_format: DateFormat | None = None
    timezone: str | None = None
    backend_url: str | None = None
