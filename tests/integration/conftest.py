"""Pytest configuration and fixtures for integration tests (real SQLite)."""

import pytest

from src.core import db_client
from src.domain.user import UserRole


@pytest.fixture
async def admin_record(sqlite_db):
    """An admin user stored in the real database."""
    return await db_client.create_record(
        collection="users",
        data={"name": "Ana Admin", "email": "ana@example.com", "role": UserRole.ADMIN},
    )


@pytest.fixture
async def member_record(sqlite_db):
    """A regular member stored in the real database."""
    return await db_client.create_record(
        collection="users",
        data={"name": "Bruno Member", "email": "bruno@example.com", "role": UserRole.MEMBER},
    )


@pytest.fixture
async def contact_record(sqlite_db):
    """A contact stored in the real database."""
    return await db_client.create_record(
        collection="contacts",
        data={"name": "Carla Contact", "email": "carla@example.com"},
    )
