"""Tasks module: task records, participants and change history."""


class TasksModule:
    """Tasks module for task management.

    Provides:
    - Task CRUD with participant links and change history
    - Visibility filtering (public, private, group)
    - Calendar invites (ICS) and invite delivery
    - Dashboard and report calculations
    """

    @property
    def name(self) -> str:
        """Module name (unique identifier)."""
        return "tasks"

    @property
    def description(self) -> str:
        """Module description (human-readable)."""
        return "Tasks with visibility rules, change history and calendar invites"

    def get_table_schemas(self) -> dict[str, str]:
        """Return table schemas for this module."""
        return {
            "tasks": """CREATE TABLE IF NOT EXISTS tasks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        due_date TEXT NOT NULL,
        duration INTEGER NOT NULL DEFAULT 60,
        priority TEXT NOT NULL DEFAULT 'MEDIUM'
            CHECK (priority IN ('LOW', 'MEDIUM', 'HIGH', 'URGENT')),
        status TEXT NOT NULL DEFAULT 'PENDING'
            CHECK (status IN ('PENDING', 'IN_PROGRESS', 'COMPLETED', 'OVERDUE')),
        reminder_value INTEGER NOT NULL DEFAULT 1,
        reminder_unit TEXT NOT NULL DEFAULT 'days' CHECK (reminder_unit IN ('days', 'hours')),
        responsible INTEGER REFERENCES contacts(id),
        tags TEXT NOT NULL DEFAULT '[]',
        attachments TEXT NOT NULL DEFAULT '[]',
        comments TEXT NOT NULL DEFAULT '[]',
        created_at TEXT NOT NULL,
        creator_id INTEGER,
        visibility TEXT NOT NULL DEFAULT 'public' CHECK (visibility IN ('public', 'private', 'group')),
        group_id INTEGER
    )""",
            "task_participants": """CREATE TABLE IF NOT EXISTS task_participants (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
        contact_id INTEGER NOT NULL REFERENCES contacts(id) ON DELETE CASCADE,
        UNIQUE(task_id, contact_id)
    )""",
            "task_history": """CREATE TABLE IF NOT EXISTS task_history (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
        timestamp TEXT NOT NULL,
        user TEXT NOT NULL,
        change TEXT NOT NULL
    )""",
        }

    def get_indexes(self) -> list[str]:
        """Return indexes for this module's tables."""
        return [
            "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks (status)",
            "CREATE INDEX IF NOT EXISTS idx_tasks_responsible ON tasks (responsible)",
            "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks (due_date)",
            "CREATE INDEX IF NOT EXISTS idx_task_participants_task_id ON task_participants (task_id)",
            "CREATE INDEX IF NOT EXISTS idx_task_participants_contact_id ON task_participants (contact_id)",
            "CREATE INDEX IF NOT EXISTS idx_task_history_task_id ON task_history (task_id)",
        ]
