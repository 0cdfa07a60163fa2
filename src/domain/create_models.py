"""Pydantic models for creating records in database."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from src.domain.task import Attachment, Priority, ReminderUnit, TaskStatus, Visibility, ensure_utc
from src.domain.user import UserRole, validate_email


class TaskCreate(BaseModel):
    """Pydantic model for creating a task."""

    name: str = Field(..., min_length=1, description="Task name")
    description: str = Field(default="", description="Detailed task description")
    due_date: datetime = Field(..., description="Due date and time")
    duration: int = Field(default=60, ge=0, description="Duration in minutes")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Initial status")
    reminder_value: int = Field(default=1, ge=0, description="Reminder offset (0 disables)")
    reminder_unit: ReminderUnit = Field(default=ReminderUnit.DAYS, description="Reminder unit")
    responsible: str | None = Field(default=None, description="Responsible contact ID")
    participants: list[str] = Field(default_factory=list, description="Participant contact IDs")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    attachments: list[Attachment] = Field(default_factory=list, description="Attached links")
    comments: list[str] = Field(default_factory=list, description="Comments")
    creator_id: str = Field(..., description="ID of the creating user")
    visibility: Visibility = Field(default=Visibility.PUBLIC, description="Who may see the task")
    group_id: str | None = Field(default=None, description="Group ID, required for group visibility")

    @field_validator("due_date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        return ensure_utc(v)

    @field_validator("participants")
    @classmethod
    def dedupe_participants(cls, v: list[str]) -> list[str]:
        """Drop repeated participant IDs, keeping first-seen order."""
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def check_group_visibility(self) -> "TaskCreate":
        """Group visibility requires a group."""
        if self.visibility == Visibility.GROUP and not self.group_id:
            msg = "Group visibility requires a group_id"
            raise ValueError(msg)
        return self


class ContactCreate(BaseModel):
    """Pydantic model for creating a contact."""

    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., description="E-mail address")
    phone: str = Field(default="", description="Phone number")
    company: str = Field(default="", description="Company name")
    role: str = Field(default="", description="Job title or role")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return validate_email(v)


class UserInvite(BaseModel):
    """Pydantic model for inviting a user by e-mail."""

    email: str = Field(..., description="E-mail address of the new user")
    role: UserRole = Field(default=UserRole.MEMBER, description="Role granted on creation")
    name: str | None = Field(default=None, description="Display name (defaults to the e-mail local part)")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return validate_email(v)


class GroupCreate(BaseModel):
    """Pydantic model for creating a group."""

    name: str = Field(..., min_length=1, description="Group name")
    member_ids: list[str] = Field(default_factory=list, description="Initial member user IDs")
