"""User and group domain models."""

import re
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


# Constants for validation
MAX_NAME_LENGTH = 100
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRole(StrEnum):
    """User role. Admins see every task."""

    ADMIN = "admin"
    MEMBER = "member"


class User(BaseModel):
    """User data transfer object."""

    id: str = Field(..., description="Unique user ID from database")
    name: str = Field(..., description="Display name of the user")
    email: str = Field(..., description="E-mail address (unique)")
    role: UserRole = Field(default=UserRole.MEMBER, description="User role")

    @field_validator("name")
    @classmethod
    def validate_name_usable(cls, v: str) -> str:
        """Validate name is not blank and not too long."""
        v = v.strip()

        if not v:
            raise ValueError("Name cannot be empty")

        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Name too long (max {MAX_NAME_LENGTH} characters)")

        return v

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class Group(BaseModel):
    """Named set of users sharing group-scoped tasks."""

    id: str = Field(..., description="Unique group ID from database")
    name: str = Field(..., description="Group name")
    member_ids: list[str] = Field(default_factory=list, description="IDs of member users")


def validate_email(v: str) -> str:
    """Normalize and validate an e-mail address."""
    v = v.strip().lower()
    if not re.match(EMAIL_PATTERN, v):
        msg = f"Invalid e-mail address: {v}"
        raise ValueError(msg)
    return v
