"""In-app alert domain model."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class AlertType(StrEnum):
    """Visual category of an alert."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Alert(BaseModel):
    """Alert data transfer object."""

    id: str = Field(..., description="Unique alert ID from database")
    message: str = Field(..., description="Alert text")
    type: AlertType = Field(default=AlertType.INFO, description="Alert category")
    timestamp: datetime = Field(..., description="When the alert was raised")
    read: bool = Field(default=False, description="Whether the alert has been read")
