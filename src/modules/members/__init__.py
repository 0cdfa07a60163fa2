"""Members module: users, roles and groups."""


class MembersModule:
    """Members module.

    Provides:
    - User invites, role changes and removal
    - Groups and group membership (used by group visibility)
    """

    @property
    def name(self) -> str:
        """Module name (unique identifier)."""
        return "members"

    @property
    def description(self) -> str:
        """Module description (human-readable)."""
        return "Users, roles and groups"

    def get_table_schemas(self) -> dict[str, str]:
        """Return table schemas for this module."""
        return {
            "users": """CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        role TEXT NOT NULL DEFAULT 'member' CHECK (role IN ('admin', 'member'))
    )""",
            "user_groups": """CREATE TABLE IF NOT EXISTS user_groups (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL
    )""",
            "group_members": """CREATE TABLE IF NOT EXISTS group_members (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        group_id INTEGER NOT NULL REFERENCES user_groups(id) ON DELETE CASCADE,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        UNIQUE(group_id, user_id)
    )""",
        }

    def get_indexes(self) -> list[str]:
        """Return indexes for this module's tables."""
        return [
            "CREATE INDEX IF NOT EXISTS idx_group_members_group_id ON group_members (group_id)",
            "CREATE INDEX IF NOT EXISTS idx_group_members_user_id ON group_members (user_id)",
        ]
