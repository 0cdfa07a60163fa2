"""Change log domain model for the task audit trail."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ChangeLog(BaseModel):
    """One human-readable entry of a task's history. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="When the change was recorded")
    user: str = Field(..., description="Display name of the actor")
    change: str = Field(..., description="Description of the change")
