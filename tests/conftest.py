"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from src.core import db_client
from src.core.config import Settings, settings


logger = logging.getLogger(__name__)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        sqlite_db_path=str(tmp_path / "test.db"),
        environment="test",
        default_language="en",
    )


@pytest.fixture
async def sqlite_db(test_settings: Settings, monkeypatch) -> AsyncGenerator[Path]:
    """Real SQLite database with every table created; closed after the test."""
    monkeypatch.setattr(settings, "sqlite_db_path", test_settings.sqlite_db_path)
    monkeypatch.setattr(settings, "default_language", "en")
    monkeypatch.setattr(settings, "invite_backend_url", None)

    await db_client.init_db()
    logger.debug("Initialized test database at %s", test_settings.sqlite_db_path)

    yield Path(test_settings.sqlite_db_path)

    await db_client.close_connection()
