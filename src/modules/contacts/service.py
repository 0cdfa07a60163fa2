"""Contact service for CRUD operations."""

import logging

from src.core import db_client
from src.core.logging import span
from src.domain.contact import Contact
from src.domain.create_models import ContactCreate
from src.domain.update_models import ContactUpdate


logger = logging.getLogger(__name__)


async def create_contact(data: ContactCreate) -> Contact:
    """Create a new contact."""
    with span("contact_service.create_contact"):
        record = await db_client.create_record(collection="contacts", data=data.model_dump())
        logger.info("Created contact: %s", record["id"])
        return Contact(**record)


async def get_contact(contact_id: str) -> Contact:
    """Get a contact by ID.

    Raises:
        db_client.RecordNotFoundError: If the contact does not exist
    """
    record = await db_client.get_record(collection="contacts", record_id=contact_id)
    return Contact(**record)


async def list_contacts() -> list[Contact]:
    """List all contacts ordered by name."""
    records = await db_client.list_all_records(collection="contacts", sort="+name")
    return [Contact(**record) for record in records]


async def get_contacts_by_id() -> dict[str, Contact]:
    """All contacts keyed by ID, for name lookups."""
    return {contact.id: contact for contact in await list_contacts()}


async def update_contact(contact_id: str, data: ContactUpdate) -> Contact:
    """Apply a partial update to a contact.

    Raises:
        db_client.RecordNotFoundError: If the contact does not exist
    """
    with span("contact_service.update_contact"):
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return await get_contact(contact_id)

        record = await db_client.update_record(collection="contacts", record_id=contact_id, data=changes)
        logger.info("Updated contact %s: %s", contact_id, ", ".join(sorted(changes)))
        return Contact(**record)


async def delete_contact(contact_id: str) -> None:
    """Delete a contact and detach it from every task.

    The contact is removed from all participant lists and cleared as
    responsible wherever it was set.

    Raises:
        db_client.RecordNotFoundError: If the contact does not exist
    """
    with span("contact_service.delete_contact"):
        await get_contact(contact_id)
        safe_id = db_client.sanitize_param(contact_id)

        removed_links = await db_client.delete_records(
            collection="task_participants",
            filter_query=f'contact_id = "{safe_id}"',
        )

        responsible_tasks = await db_client.list_all_records(
            collection="tasks",
            filter_query=f'responsible = "{safe_id}"',
        )
        for task in responsible_tasks:
            await db_client.update_record(collection="tasks", record_id=task["id"], data={"responsible": None})

        await db_client.delete_record(collection="contacts", record_id=contact_id)
        logger.info(
            "Deleted contact %s (participant links: %d, responsible on: %d)",
            contact_id,
            removed_links,
            len(responsible_tasks),
        )
