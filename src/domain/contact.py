"""Contact domain model."""

from pydantic import BaseModel, Field


class Contact(BaseModel):
    """Contact data transfer object. Contacts are the people tasks are assigned to."""

    id: str = Field(..., description="Unique contact ID from database")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="E-mail address used for calendar invites")
    phone: str = Field(default="", description="Phone number")
    company: str = Field(default="", description="Company name")
    role: str = Field(default="", description="Job title or role")
