"""Application preferences service."""

import logging
from typing import Any

from src.core import db_client
from src.core.config import settings
from src.core.logging import span
from src.domain.preferences import Preferences
from src.domain.update_models import PreferencesUpdate


logger = logging.getLogger(__name__)


def _default_preferences() -> Preferences:
    return Preferences(
        language=settings.default_language,
        date_format=settings.default_date_format,
        timezone=settings.default_timezone,
        backend_url=settings.invite_backend_url,
    )


async def get_preferences() -> Preferences:
    """Get stored preferences or fall back to settings defaults.

    Returns:
        Preferences from the database, or built from environment settings when
        nothing has been saved yet
    """
    record = await db_client.get_first_record(collection="preferences", filter_query="")

    if record:
        return Preferences(**record)

    logger.debug("preferences_not_found_using_settings_fallback")
    return _default_preferences()


async def update_preferences(update: PreferencesUpdate) -> Preferences:
    """Apply a partial update and persist the result.

    Args:
        update: Fields to change; unset fields keep their current value

    Returns:
        The stored preferences after the update
    """
    with span("preferences_service.update_preferences"):
        changes: dict[str, Any] = update.model_dump(exclude_unset=True)
        record = await db_client.get_first_record(collection="preferences", filter_query="")

        if record:
            if changes:
                record = await db_client.update_record(collection="preferences", record_id=record["id"], data=changes)
        else:
            merged = _default_preferences().model_copy(update=changes)
            record = await db_client.create_record(collection="preferences", data=merged.model_dump(mode="json"))

        logger.info("Updated preferences: %s", ", ".join(sorted(changes)) or "no changes")
        return Preferences(**record)


async def get_language() -> str:
    """Language used for history entries and reports."""
    preferences = await get_preferences()
    return preferences.language
