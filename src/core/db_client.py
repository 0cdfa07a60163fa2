"""SQLite database client wrapper with CRUD operations."""

import asyncio
import json
import logging
import re
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import aiosqlite

from src.core.config import settings


logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when a storage operation fails."""


class RecordNotFoundError(DatabaseError, KeyError):
    """Raised when a record does not exist."""


def _validate_collection_name(collection: str) -> None:
    """Validate that a collection name contains only alphanumeric characters and underscores."""
    if not re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", collection):
        msg = f"Invalid collection name: {collection}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def sanitize_param(value: str | int | float | bool | None) -> str:
    """Escape a value for safe embedding in filter queries via json.dumps."""
    return json.dumps(str(value))[1:-1]


def _convert_record_ids(record: dict[str, Any]) -> dict[str, Any]:
    """Convert integer ID and foreign key fields to strings for Pydantic compatibility."""
    fk_fields = {
        "id",
        "responsible",
    }

    converted = record.copy()
    for key, value in converted.items():
        if isinstance(value, int) and (key in fk_fields or key.endswith("_id")):
            converted[key] = str(value)
    return converted


def _to_column_value(value: Any) -> Any:
    """Convert a Python value to something SQLite can store."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict | list):
        return json.dumps(value, default=str)
    return value


def _parse_record_id(collection: str, record_id: str) -> int:
    """Parse a string record id into the integer primary key."""
    if not str(record_id).isdigit():
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)
    return int(record_id)


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


def _parse_value(value: str, *, is_like: bool = False) -> str | int | float | bool | None:
    """Parse a string value to the appropriate Python type for SQLite."""
    if is_like:
        return "%" + value.replace("%", "\\%").replace("_", "\\_") + "%"

    if value.isdigit():
        return int(value)
    if value.replace(".", "", 1).isdigit():
        return float(value)

    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False

    return value


def _get_sql_operator(op: str) -> str:
    """Map filter operator to SQL operator."""
    op_map = {
        "=": "=",
        "!=": "!=",
        ">": ">",
        "<": "<",
        ">=": ">=",
        "<=": "<=",
        "~": "LIKE",
    }
    sql_op = op_map.get(op)
    if not sql_op:
        msg = f"Unsupported operator: {op}"
        raise ValueError(msg)
    return sql_op


_COMPARISON_PATTERN = re.compile(
    r"""(\w+)\s*(!=|>=|<=|=|>|<|~)\s*(?:"((?:\\.|[^"\\])*)"|'((?:\\.|[^'\\])*)')\s*$"""
)


def _parse_single_comparison(comparison: str) -> tuple[str, str | int | float | None]:
    """Parse a single comparison expression into a SQL condition and parameter.

    Double-quoted values are unescaped as JSON strings (the inverse of
    sanitize_param); single-quoted values only drop backslash escapes.
    """
    match = _COMPARISON_PATTERN.match(comparison.strip())
    if not match:
        msg = f"Invalid filter syntax: {comparison}"
        raise ValueError(msg)

    field = match.group(1)
    op = match.group(2)
    if match.group(3) is not None:
        raw_value = json.loads(f'"{match.group(3)}"')
    else:
        raw_value = re.sub(r"\\(.)", r"\1", match.group(4))

    sql_op = _get_sql_operator(op)
    is_like = sql_op == "LIKE"
    value = _parse_value(raw_value, is_like=is_like)

    if is_like:
        return f"{field} LIKE ? ESCAPE '\\'", value
    return f"{field} {sql_op} ?", value


def _parse_or_group(or_group: str) -> tuple[str, list[str | int | float | None]]:
    """Parse a parenthesized OR group into a SQL condition and parameters."""
    inner = or_group[1:-1]
    or_parts = [p.strip() for p in inner.split("||")]
    or_conditions = []
    or_params = []

    for part in or_parts:
        cond, value = _parse_single_comparison(part)
        or_conditions.append(cond)
        or_params.append(value)

    return f"({' OR '.join(or_conditions)})", or_params


def _split_and_conditions(filter_query: str) -> list[str]:
    """Split filter query by && while preserving parenthesized groups."""
    parts = []
    current = ""
    paren_depth = 0

    for char in filter_query:
        if char == "(":
            paren_depth += 1
        elif char == ")":
            paren_depth -= 1

        current += char

        if paren_depth == 0 and current.endswith("&&"):
            parts.append(current[:-2].strip())
            current = ""

    if current.strip():
        parts.append(current.strip())

    return parts


def parse_filter(filter_query: str) -> tuple[str, list[str | int | float | None]]:
    """Parse filter syntax into a SQL WHERE clause and parameter list."""
    if not filter_query:
        return "", []

    parts = _split_and_conditions(filter_query)
    conditions = []
    params = []

    for raw_part in parts:
        part = raw_part.strip()

        if part.startswith("(") and part.endswith(")"):
            cond, cond_params = _parse_or_group(part)
            conditions.append(cond)
            params.extend(cond_params)
        else:
            cond, value = _parse_single_comparison(part)
            conditions.append(cond)
            params.append(value)

    return " AND ".join(conditions), params


def parse_sort(sort: str) -> str:
    """Translate a "+field" / "-field" / "field [ASC|DESC]" sort into an ORDER BY clause.

    Anything that is not a plain column name falls back to "id ASC".
    """
    safe_sort = "id ASC"
    raw = sort.strip()
    if not raw:
        return safe_sort

    if raw[0] in "+-":
        direction = "DESC" if raw[0] == "-" else "ASC"
        raw = f"{raw[1:]} {direction}"

    if re.match(r"^[A-Za-z_][A-Za-z0-9_]*\s*(ASC|DESC)?$", raw, re.IGNORECASE):
        return raw

    logger.warning("Invalid sort parameter, using default", extra={"sort": sort})
    return safe_sort


_db_connections: dict[tuple[int, int, str], aiosqlite.Connection] = {}
_db_lock = asyncio.Lock()


async def get_connection(*, db_path: str | None = None) -> aiosqlite.Connection:
    """Get or create a cached connection for the current thread, loop, and db path."""
    thread_id = threading.get_ident()
    loop = asyncio.get_running_loop()
    loop_id = id(loop)
    path = get_db_path(db_path)
    cache_key = (thread_id, loop_id, str(path))

    if cache_key in _db_connections:
        return _db_connections[cache_key]

    async with _db_lock:
        if cache_key in _db_connections:
            return _db_connections[cache_key]

        path.parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(str(path))
        await conn.execute("PRAGMA foreign_keys = ON")
        await conn.execute("PRAGMA journal_mode = WAL")

        _db_connections[cache_key] = conn

        logger.info(
            "Created new SQLite connection",
            extra={"db_path": str(path), "thread_id": thread_id, "loop_id": loop_id},
        )
        return conn


async def close_connection(*, db_path: str | None = None) -> None:
    """Close the cached SQLite connection for the current thread, loop, and db path."""
    thread_id = threading.get_ident()
    loop_id = id(asyncio.get_running_loop())
    path = get_db_path(db_path)
    cache_key = (thread_id, loop_id, str(path))

    conn = _db_connections.pop(cache_key, None)
    if conn is None:
        return

    try:
        await conn.close()
        logger.info(
            "Closed SQLite connection",
            extra={"thread_id": thread_id, "loop_id": loop_id, "db_path": str(path)},
        )
    except aiosqlite.Error as e:
        logger.warning(
            "Error closing SQLite connection",
            extra={"error": str(e), "thread_id": thread_id, "loop_id": loop_id},
        )


async def init_db(*, db_path: str | None = None) -> None:
    """Initialize the database schema by delegating to schema.init_db()."""
    from src.core import schema

    await schema.init_db(db_path=db_path)


async def create_record(*, collection: str, data: dict[str, Any]) -> dict[str, Any]:
    """Insert a new record and return it with its assigned id."""
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        columns = list(data.keys())
        columns_str = ", ".join(columns)
        placeholders_str = ", ".join("?" for _ in columns)
        values = [_to_column_value(data[key]) for key in columns]

        query = f"INSERT INTO {collection} ({columns_str}) VALUES ({placeholders_str})"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, values)
        await conn.commit()

        record_id = cursor.lastrowid
        result = await get_record(collection=collection, record_id=str(record_id))

        logger.info("Created record", extra={"collection": collection, "record_id": record_id})
        return result
    except aiosqlite.IntegrityError as e:
        logger.warning("create_record_conflict", extra={"collection": collection, "error": str(e)})
        msg = f"Constraint violation in {collection}: {e}"
        raise ValueError(msg) from e
    except Exception as e:
        if isinstance(e, aiosqlite.OperationalError) and "no such table" in str(e):
            msg = f"Table '{collection}' does not exist. Call init_db() first."
            logger.error("Table not found", extra={"collection": collection})
            raise DatabaseError(msg) from e
        logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to create record in {collection}: {e}"
        raise DatabaseError(msg) from e


async def get_record(*, collection: str, record_id: str) -> dict[str, Any]:
    """Fetch a single record by ID, raising RecordNotFoundError if not found."""
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, (_parse_record_id(collection, record_id),))
        row = await cursor.fetchone()

        if row is None:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        columns = [description[0] for description in cursor.description]
        record = dict(zip(columns, row, strict=True))

        logger.debug("Retrieved record", extra={"collection": collection, "record_id": record_id})
        return _convert_record_ids(record)
    except RecordNotFoundError:
        raise
    except Exception as e:
        logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to get record from {collection}: {e}"
        raise DatabaseError(msg) from e


async def update_record(*, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
    """Update a record by ID and return the updated record."""
    if not data:
        msg = "Empty update payload"
        raise ValueError(msg)

    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        set_clause = ", ".join(f"{key} = ?" for key in data)
        values = [_to_column_value(val) for val in data.values()]
        values.append(_parse_record_id(collection, record_id))

        query = f"UPDATE {collection} SET {set_clause}, updated = datetime('now') WHERE id = ?"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, values)
        await conn.commit()

        if cursor.rowcount == 0:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
        return await get_record(collection=collection, record_id=record_id)
    except RecordNotFoundError:
        raise
    except aiosqlite.IntegrityError as e:
        msg = f"Constraint violation in {collection}: {e}"
        raise ValueError(msg) from e
    except Exception as e:
        logger.error("update_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to update record in {collection}: {e}"
        raise DatabaseError(msg) from e


async def delete_record(*, collection: str, record_id: str) -> None:
    """Delete a record by ID, raising RecordNotFoundError if not found."""
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        query = f"DELETE FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, (_parse_record_id(collection, record_id),))
        await conn.commit()

        if cursor.rowcount == 0:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Deleted record", extra={"collection": collection, "record_id": record_id})
    except RecordNotFoundError:
        raise
    except Exception as e:
        logger.error("delete_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to delete record from {collection}: {e}"
        raise DatabaseError(msg) from e


async def delete_records(*, collection: str, filter_query: str) -> int:
    """Delete every record matching the filter and return how many were removed."""
    where_clause, params = parse_filter(filter_query)
    if not where_clause:
        msg = "Refusing to delete without a filter"
        raise ValueError(msg)

    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        query = f"DELETE FROM {collection} WHERE {where_clause}"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, params)
        await conn.commit()

        logger.info("Deleted records", extra={"collection": collection, "count": cursor.rowcount})
        return cursor.rowcount
    except Exception as e:
        logger.error("delete_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to delete records from {collection}: {e}"
        raise DatabaseError(msg) from e


async def list_records(
    *,
    collection: str,
    page: int = 1,
    per_page: int = 50,
    filter_query: str = "",
    sort: str = "",
) -> list[dict[str, Any]]:
    """List records with optional filtering, sorting, and pagination."""
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        where_clause = ""
        params: list[Any] = []
        if filter_query:
            where_clause, params = parse_filter(filter_query)
            where_clause = f"WHERE {where_clause}"

        order_by = parse_sort(sort)
        offset = (page - 1) * per_page

        query = f"SELECT * FROM {collection} {where_clause} ORDER BY {order_by} LIMIT ? OFFSET ?"  # noqa: S608 - collection is validated
        params.extend([per_page, offset])

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()

        columns = [description[0] for description in cursor.description]
        records = [_convert_record_ids(dict(zip(columns, row, strict=True))) for row in rows]

        logger.debug("Listed records", extra={"collection": collection, "count": len(records)})
        return records
    except Exception as e:
        logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to list records from {collection}: {e}"
        raise DatabaseError(msg) from e


async def list_all_records(
    *,
    collection: str,
    filter_query: str = "",
    sort: str = "",
    per_page: int = 500,
) -> list[dict[str, Any]]:
    """Page through list_records until a short page and return every matching record."""
    records: list[dict[str, Any]] = []
    page = 1
    while True:
        batch = await list_records(
            collection=collection,
            page=page,
            per_page=per_page,
            filter_query=filter_query,
            sort=sort,
        )
        records.extend(batch)
        if len(batch) < per_page:
            return records
        page += 1


async def get_first_record(*, collection: str, filter_query: str) -> dict[str, Any] | None:
    """Return the first record matching the filter, or None."""
    try:
        _validate_collection_name(collection)
        conn = await get_connection()

        where_clause, params = parse_filter(filter_query)

        if where_clause:
            query = f"SELECT * FROM {collection} WHERE {where_clause} ORDER BY id ASC LIMIT 1"  # noqa: S608 - collection is validated
        else:
            query = f"SELECT * FROM {collection} ORDER BY id ASC LIMIT 1"  # noqa: S608 - collection is validated
            params = []

        cursor = await conn.execute(query, params)
        row = await cursor.fetchone()

        if row is None:
            return None

        columns = [description[0] for description in cursor.description]
        record = dict(zip(columns, row, strict=True))

        return _convert_record_ids(record)
    except Exception as e:
        logger.error(
            "get_first_record_failed", extra={"collection": collection, "filter_query": filter_query, "error": str(e)}
        )
        msg = f"Failed to get first record from {collection}: {e}"
        raise DatabaseError(msg) from e
