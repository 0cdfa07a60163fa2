"""SQLite schema management (code-first approach).

Feature modules contribute their tables through the module registry; the
tables that belong to no feature module (alerts, preferences) live here.
"""

import logging

from src.core import db_client
from src.core.module_registry import get_all_indexes, get_all_table_schemas, register_builtin_modules


logger = logging.getLogger(__name__)


CORE_TABLE_SCHEMAS: dict[str, str] = {
    "alerts": """CREATE TABLE IF NOT EXISTS alerts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        message TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT 'info' CHECK (type IN ('info', 'success', 'warning', 'error')),
        timestamp TEXT NOT NULL,
        read INTEGER NOT NULL DEFAULT 0
    )""",
    "preferences": """CREATE TABLE IF NOT EXISTS preferences (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        language TEXT NOT NULL DEFAULT 'pt' CHECK (language IN ('pt', 'en')),
        date_format TEXT NOT NULL DEFAULT 'DD/MM/YYYY' CHECK (date_format IN ('DD/MM/YYYY', 'MM/DD/YYYY')),
        timezone TEXT NOT NULL,
        backend_url TEXT
    )""",
}

CORE_INDEXES: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_alerts_read ON alerts (read)",
]


def get_table_schemas() -> dict[str, str]:
    """Return every CREATE TABLE statement, core tables first."""
    register_builtin_modules()
    schemas = dict(CORE_TABLE_SCHEMAS)
    for table_name, ddl in get_all_table_schemas().items():
        if table_name in schemas:
            msg = f"Table '{table_name}' is declared by a module and by the core schema"
            raise ValueError(msg)
        schemas[table_name] = ddl
    return schemas


async def init_db(*, db_path: str | None = None) -> None:
    """Create all tables and indexes (idempotent)."""
    schemas = get_table_schemas()
    indexes = CORE_INDEXES + get_all_indexes()

    conn = await db_client.get_connection(db_path=db_path)
    for table_name, ddl in schemas.items():
        await conn.execute(ddl)
        logger.debug("Ensured table", extra={"table": table_name})
    for index in indexes:
        await conn.execute(index)
    await conn.commit()

    logger.info("Schema initialized", extra={"tables": len(schemas), "indexes": len(indexes)})
