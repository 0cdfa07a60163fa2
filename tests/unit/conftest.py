"""Pytest configuration and fixtures for unit tests."""

from datetime import UTC, datetime, timedelta

import pytest

from src.core.config import settings
from src.domain.contact import Contact
from src.domain.task import Task
from src.domain.user import UserRole
from tests.unit.mocks import InMemoryDBClient


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient()


@pytest.fixture
def patched_db(monkeypatch, in_memory_db):
    """Patches src.core.db_client functions to use InMemoryDBClient."""
    monkeypatch.setattr("src.core.db_client.create_record", in_memory_db.create_record)
    monkeypatch.setattr("src.core.db_client.get_record", in_memory_db.get_record)
    monkeypatch.setattr("src.core.db_client.update_record", in_memory_db.update_record)
    monkeypatch.setattr("src.core.db_client.delete_record", in_memory_db.delete_record)
    monkeypatch.setattr("src.core.db_client.delete_records", in_memory_db.delete_records)
    monkeypatch.setattr("src.core.db_client.list_records", in_memory_db.list_records)
    monkeypatch.setattr("src.core.db_client.list_all_records", in_memory_db.list_all_records)
    monkeypatch.setattr("src.core.db_client.get_first_record", in_memory_db.get_first_record)

    # History and alert text in English unless a test stores preferences
    monkeypatch.setattr(settings, "default_language", "en")
    monkeypatch.setattr(settings, "invite_backend_url", None)

    return in_memory_db


@pytest.fixture
def fixed_now():
    """A fixed reference instant for time-dependent logic."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
async def admin_user(patched_db):
    """An admin user stored in the in-memory DB."""
    return await patched_db.create_record(
        collection="users",
        data={"name": "Ana Admin", "email": "ana@example.com", "role": UserRole.ADMIN},
    )


@pytest.fixture
async def member_user(patched_db):
    """A regular member stored in the in-memory DB."""
    return await patched_db.create_record(
        collection="users",
        data={"name": "Bruno Member", "email": "bruno@example.com", "role": UserRole.MEMBER},
    )


@pytest.fixture
async def contact(patched_db):
    """A contact stored in the in-memory DB."""
    return await patched_db.create_record(
        collection="contacts",
        data={"name": "Carla Contact", "email": "carla@example.com", "phone": "", "company": "", "role": ""},
    )


@pytest.fixture
def task_factory(fixed_now):
    """Factory for in-memory Task objects (nothing is stored)."""
    counter = iter(range(1, 10_000))

    def _create_task(**kwargs) -> Task:
        defaults = {
            "id": str(next(counter)),
            "name": "Weekly sync",
            "due_date": fixed_now + timedelta(days=1),
            "created_at": fixed_now - timedelta(days=1),
        }
        return Task(**{**defaults, **kwargs})

    return _create_task


@pytest.fixture
def contacts_by_id():
    """Two contacts keyed by ID."""
    return {
        "c1": Contact(id="c1", name="Carla", email="carla@example.com"),
        "c2": Contact(id="c2", name="Diego", email="diego@example.com"),
    }
