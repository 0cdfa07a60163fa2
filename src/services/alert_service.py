"""In-app alert service."""

import logging
from datetime import UTC, datetime

from src.core import db_client
from src.core.config import constants
from src.core.logging import span
from src.domain.alert import Alert, AlertType


logger = logging.getLogger(__name__)


async def add_alert(*, message: str, alert_type: AlertType = AlertType.INFO, now: datetime | None = None) -> Alert:
    """Record a new unread alert."""
    with span("alert_service.add_alert"):
        record = await db_client.create_record(
            collection="alerts",
            data={
                "message": message,
                "type": alert_type,
                "timestamp": (now or datetime.now(UTC)).isoformat(),
                "read": False,
            },
        )
        logger.debug("Alert added: %s", message)
        return Alert(**record)


async def list_alerts(*, unread_only: bool = False) -> list[Alert]:
    """List alerts, newest first."""
    records = await db_client.list_records(
        collection="alerts",
        per_page=constants.DEFAULT_PER_PAGE_LIMIT,
        filter_query='read = "false"' if unread_only else "",
        sort="-id",
    )
    return [Alert(**record) for record in records]


async def mark_alert_read(*, alert_id: str) -> Alert:
    """Mark one alert as read.

    Raises:
        db_client.RecordNotFoundError: If the alert does not exist
    """
    with span("alert_service.mark_alert_read"):
        record = await db_client.update_record(collection="alerts", record_id=alert_id, data={"read": True})
        return Alert(**record)
