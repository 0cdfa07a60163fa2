"""Contacts module: the people tasks are assigned to."""


class ContactsModule:
    """Contacts module.

    Provides contact CRUD. Deleting a contact detaches it from every task.
    """

    @property
    def name(self) -> str:
        """Module name (unique identifier)."""
        return "contacts"

    @property
    def description(self) -> str:
        """Module description (human-readable)."""
        return "Contact directory used for task responsibility and invites"

    def get_table_schemas(self) -> dict[str, str]:
        """Return table schemas for this module."""
        return {
            "contacts": """CREATE TABLE IF NOT EXISTS contacts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        phone TEXT NOT NULL DEFAULT '',
        company TEXT NOT NULL DEFAULT '',
        role TEXT NOT NULL DEFAULT ''
    )""",
        }

    def get_indexes(self) -> list[str]:
        """Return indexes for this module's tables."""
        return ["CREATE INDEX IF NOT EXISTS idx_contacts_name ON contacts (name)"]
