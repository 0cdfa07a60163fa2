"""Application preferences domain model."""

from enum import StrEnum

from pydantic import BaseModel, Field


class Language(StrEnum):
    """Language used for history entries and reports."""

    PT = "pt"
    EN = "en"


class DateFormat(StrEnum):
    """Display format for dates."""

    DAY_FIRST = "DD/MM/YYYY"
    MONTH_FIRST = "MM/DD/YYYY"


class Preferences(BaseModel):
    """Application-wide preferences."""

    language: Language = Field(default=Language.PT, description="History and report language")
    date_format: DateFormat = Field(default=DateFormat.DAY_FIRST, description="Date display format")
    timezone: str = Field(default="America/Sao_Paulo", description="IANA display timezone")
    backend_url: str | None = Field(default=None, description="Base URL of the invite backend")
