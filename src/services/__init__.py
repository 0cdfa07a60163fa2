from src.services import (
    alert_service,
    preferences_service,
)


__all__ = [
    "alert_service",
    "preferences_service",
]
