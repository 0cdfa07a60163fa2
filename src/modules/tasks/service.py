"""Task service for CRUD operations, history and invites."""

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from src.core import db_client, message_templates
from src.core.config import settings
from src.core.formatting import time_until
from src.core.logging import span
from src.domain.alert import AlertType
from src.domain.contact import Contact
from src.domain.create_models import TaskCreate
from src.domain.log import ChangeLog
from src.domain.task import Priority, Task, TaskStatus, Visibility
from src.domain.update_models import TaskUpdate
from src.interface import invite_sender
from src.models.service_models import ActivityReport, Dashboard, IcsFile, InviteResult
from src.modules.contacts import service as contact_service
from src.modules.members import service as member_service
from src.modules.tasks import analytics, calendar, history
from src.modules.tasks.status import toggle_completion
from src.modules.tasks.visibility import can_view_task, visible_tasks
from src.services import alert_service, preferences_service


logger = logging.getLogger(__name__)

# Task fields stored on the tasks row; participants and history have their own tables
_ROW_FIELDS = frozenset(
    {
        "name",
        "description",
        "due_date",
        "duration",
        "priority",
        "status",
        "reminder_value",
        "reminder_unit",
        "responsible",
        "tags",
        "attachments",
        "comments",
        "created_at",
        "creator_id",
        "visibility",
        "group_id",
    }
)
_JSON_FIELDS = frozenset({"tags", "attachments", "comments"})

# Task ids per OR group when loading links and history for a list of tasks
_ID_BATCH_SIZE = 200


def _to_row(values: dict[str, Any]) -> dict[str, Any]:
    """Serialize task fields to column values (UTC ISO timestamps, JSON lists)."""
    row: dict[str, Any] = {}
    for field, value in values.items():
        if field not in _ROW_FIELDS:
            continue
        if field in _JSON_FIELDS:
            row[field] = json.dumps(value)
        elif isinstance(value, datetime):
            row[field] = value.astimezone(UTC).isoformat()
        else:
            row[field] = value
    return row


def _history_from_records(records: list[dict[str, Any]]) -> list[ChangeLog]:
    return [ChangeLog(timestamp=r["timestamp"], user=r["user"], change=r["change"]) for r in records]


async def _load_task(record: dict[str, Any]) -> Task:
    """Build a Task from its row plus its participant links and history rows."""
    task_filter = f'task_id = "{db_client.sanitize_param(record["id"])}"'
    links = await db_client.list_all_records(collection="task_participants", filter_query=task_filter, sort="+id")
    history_records = await db_client.list_all_records(
        collection="task_history",
        filter_query=task_filter,
        sort="-id",
    )
    return Task(
        **record,
        participants=[str(link["contact_id"]) for link in links],
        history=_history_from_records(history_records),
    )


def _task_ids_filter(task_ids: list[str]) -> str:
    conditions = " || ".join(f'task_id = "{db_client.sanitize_param(task_id)}"' for task_id in task_ids)
    return f"({conditions})"


async def _load_tasks(records: list[dict[str, Any]]) -> list[Task]:
    """Build many Tasks, reading links and history only for the given task rows."""
    links: list[dict[str, Any]] = []
    history_records: list[dict[str, Any]] = []
    task_ids = [str(record["id"]) for record in records]

    for start in range(0, len(task_ids), _ID_BATCH_SIZE):
        ids_filter = _task_ids_filter(task_ids[start : start + _ID_BATCH_SIZE])
        links.extend(
            await db_client.list_all_records(collection="task_participants", filter_query=ids_filter, sort="+id")
        )
        history_records.extend(
            await db_client.list_all_records(collection="task_history", filter_query=ids_filter, sort="-id")
        )

    participants: dict[str, list[str]] = {}
    for link in links:
        participants.setdefault(str(link["task_id"]), []).append(str(link["contact_id"]))

    histories: dict[str, list[dict[str, Any]]] = {}
    for entry in history_records:
        histories.setdefault(str(entry["task_id"]), []).append(entry)

    return [
        Task(
            **record,
            participants=participants.get(str(record["id"]), []),
            history=_history_from_records(histories.get(str(record["id"]), [])),
        )
        for record in records
    ]


async def _insert_participants(task_id: str, contact_ids: list[str]) -> None:
    for contact_id in contact_ids:
        await db_client.create_record(
            collection="task_participants",
            data={"task_id": task_id, "contact_id": contact_id},
        )


async def _insert_history(task_id: str, entries: list[ChangeLog]) -> None:
    """Persist new entries so that reading by descending id yields them first, in order."""
    for entry in reversed(entries):
        await db_client.create_record(
            collection="task_history",
            data={
                "task_id": task_id,
                "timestamp": entry.timestamp.isoformat(),
                "user": entry.user,
                "change": entry.change,
            },
        )


def _check_group_visibility(task: Task) -> None:
    if task.visibility == Visibility.GROUP and not task.group_id:
        msg = "Group visibility requires a group_id"
        raise ValueError(msg)


def _check_contact_references(
    responsible: str | None, participants: list[str], contacts: Mapping[str, Contact]
) -> None:
    """Reject unknown responsible or participant contacts before anything is written."""
    referenced = [responsible, *participants] if responsible else participants
    missing = [contact_id for contact_id in dict.fromkeys(referenced) if contact_id not in contacts]
    if missing:
        msg = f"Unknown contact ID(s): {', '.join(missing)}"
        raise ValueError(msg)


async def create_task(data: TaskCreate, *, now: datetime | None = None) -> Task:
    """Create a task with its participants and the seed history entry.

    Args:
        data: Validated task payload
        now: Creation time (defaults to the current UTC time)

    Returns:
        The created task, history holding only the creation entry

    Raises:
        ValueError: If the responsible contact or a participant does not exist
        db_client.DatabaseError: If database operation fails
    """
    with span("task_service.create_task"):
        created_at = now or datetime.now(UTC)
        values = data.model_dump(mode="json", exclude={"participants"})
        values["due_date"] = data.due_date
        values["created_at"] = created_at

        contacts = await contact_service.get_contacts_by_id()
        language = await preferences_service.get_language()
        _check_contact_references(data.responsible, data.participants, contacts)

        record = await db_client.create_record(collection="tasks", data=_to_row(values))
        await _insert_participants(record["id"], data.participants)

        task = Task(**record, participants=data.participants)

        entry = history.creation_entry(task, contacts, now=created_at, language=language)
        await _insert_history(task.id, [entry])
        await alert_service.add_alert(message=message_templates.task_created_alert(task_name=task.name))

        logger.info("Created task %s: %s (visibility: %s)", task.id, task.name, task.visibility)
        return task.model_copy(update={"history": [entry]})


async def get_task(task_id: str, *, user_id: str) -> Task:
    """Get a task by ID on behalf of a user who must be able to see it.

    Every single-task read and write goes through here, so the visibility
    rules apply to edits and deletes as well as to listings.

    Args:
        task_id: Task ID
        user_id: Acting user; the task must be visible to them

    Raises:
        db_client.RecordNotFoundError: If the task (or user) does not exist
        PermissionError: If the user may not see the task
    """
    record = await db_client.get_record(collection="tasks", record_id=task_id)
    task = await _load_task(record)

    user = await member_service.get_user(user_id)
    if not can_view_task(task, user, await member_service.list_groups()):
        msg = f"Permission denied: task {task_id} is not visible to user {user_id}"
        raise PermissionError(msg)

    return task


async def update_task(task_id: str, data: TaskUpdate, *, user_id: str, now: datetime | None = None) -> Task:
    """Apply an edit and record what changed.

    The change entries come from ``history.diff_task`` and are prepended to
    the existing history. Status is stored as given; no transition rules apply.
    All checks run before the first write.

    Args:
        task_id: Task ID
        data: Fields to change
        user_id: Acting user; the task must be visible to them
        now: Timestamp for the new history entries

    Returns:
        The updated task with its full history, newest first

    Raises:
        db_client.RecordNotFoundError: If the task does not exist
        PermissionError: If the user may not see the task
        ValueError: If the result has group visibility without a group, or references unknown contacts
    """
    with span("task_service.update_task"):
        old = await get_task(task_id, user_id=user_id)
        changes = data.model_dump(exclude_unset=True)
        new = Task.model_validate({**old.model_dump(), **changes})
        _check_group_visibility(new)

        contacts = await contact_service.get_contacts_by_id()
        language = await preferences_service.get_language()
        if "responsible" in changes or "participants" in changes:
            _check_contact_references(new.responsible, new.participants, contacts)
        entries = history.diff_task(old, new, contacts, now=now or datetime.now(UTC), language=language)

        row = _to_row(new.model_dump(mode="json", include=set(changes) - {"due_date"}))
        if "due_date" in changes:
            row["due_date"] = new.due_date.astimezone(UTC).isoformat()
        if row:
            await db_client.update_record(collection="tasks", record_id=task_id, data=row)

        if set(old.participants) != set(new.participants):
            await db_client.delete_records(
                collection="task_participants",
                filter_query=f'task_id = "{db_client.sanitize_param(task_id)}"',
            )
            await _insert_participants(task_id, new.participants)

        await _insert_history(task_id, entries)
        await alert_service.add_alert(message=message_templates.task_updated_alert(task_name=new.name))

        logger.info("Updated task %s (%d changes recorded)", task_id, len(entries))
        return new.model_copy(update={"history": history.prepend_history(old.history, entries)})


async def toggle_task_status(task_id: str, *, user_id: str, now: datetime | None = None) -> Task:
    """Quick complete/reopen toggle with a single history entry.

    Raises:
        db_client.RecordNotFoundError: If the task does not exist
        PermissionError: If the user may not see the task
    """
    with span("task_service.toggle_task_status"):
        task = await get_task(task_id, user_id=user_id)
        new_status = toggle_completion(task.status)

        contacts = await contact_service.get_contacts_by_id()
        language = await preferences_service.get_language()
        entry = history.status_change_entry(task, new_status, contacts, now=now, language=language)

        await db_client.update_record(collection="tasks", record_id=task_id, data={"status": new_status})
        await _insert_history(task_id, [entry])

        logger.info("Toggled task %s: %s -> %s", task_id, task.status, new_status)
        return task.model_copy(update={"status": new_status, "history": history.prepend_history(task.history, [entry])})


async def delete_task(task_id: str, *, user_id: str) -> None:
    """Delete a task with its participant links and history.

    Raises:
        db_client.RecordNotFoundError: If the task does not exist
        PermissionError: If the user may not see the task
    """
    with span("task_service.delete_task"):
        task = await get_task(task_id, user_id=user_id)
        task_filter = f'task_id = "{db_client.sanitize_param(task_id)}"'

        await db_client.delete_records(collection="task_participants", filter_query=task_filter)
        await db_client.delete_records(collection="task_history", filter_query=task_filter)
        await db_client.delete_record(collection="tasks", record_id=task_id)

        await alert_service.add_alert(
            message=message_templates.task_deleted_alert(task_name=task.name),
            alert_type=AlertType.WARNING,
        )
        logger.info("Deleted task %s", task_id)


async def list_tasks(
    *,
    status: TaskStatus | None = None,
    priority: Priority | None = None,
    responsible: str | None = None,
) -> list[Task]:
    """List tasks by ascending due date, filtered on stored values.

    Args:
        status: Only tasks with this stored status
        priority: Only tasks with this priority
        responsible: Only tasks with this responsible contact ID

    Returns:
        Matching tasks with participants and history
    """
    with span("task_service.list_tasks"):
        filters = []
        if status:
            filters.append(f'status = "{db_client.sanitize_param(status)}"')
        if priority:
            filters.append(f'priority = "{db_client.sanitize_param(priority)}"')
        if responsible:
            filters.append(f'responsible = "{db_client.sanitize_param(responsible)}"')

        filter_query = " && ".join(filters)
        records = await db_client.list_all_records(collection="tasks", filter_query=filter_query, sort="+due_date")

        logger.debug("Retrieved %d tasks with filters: %s", len(records), filter_query)
        return await _load_tasks(records)


async def list_visible_tasks(user_id: str) -> list[Task]:
    """All tasks the user may see, by ascending due date.

    Raises:
        db_client.RecordNotFoundError: If the user does not exist
    """
    with span("task_service.list_visible_tasks"):
        user = await member_service.get_user(user_id)
        groups = await member_service.list_groups()
        tasks = await list_tasks()
        return visible_tasks(tasks, user, groups)


async def get_task_ics(task_id: str, *, user_id: str) -> IcsFile:
    """Render a task's calendar invite file."""
    task = await get_task(task_id, user_id=user_id)
    contacts = await contact_service.get_contacts_by_id()

    responsible = contacts.get(task.responsible) if task.responsible else None
    participants = [contacts[cid] for cid in task.participants if cid in contacts]
    return IcsFile(filename=calendar.ics_filename(task), content=calendar.build_ics(task, responsible, participants))


async def send_task_invite(task_id: str, *, user_id: str) -> InviteResult:
    """Send a task's calendar invite through the configured invite backend.

    The outcome is recorded as an alert. Delivery failures are returned, not raised.

    Raises:
        db_client.RecordNotFoundError: If the task does not exist
        PermissionError: If the user may not see the task
    """
    with span("task_service.send_task_invite"):
        task = await get_task(task_id, user_id=user_id)
        preferences = await preferences_service.get_preferences()
        backend_url = preferences.backend_url or settings.invite_backend_url

        if not backend_url:
            result = InviteResult(success=False, message="Invite backend URL is not configured")
        else:
            contacts = await contact_service.get_contacts_by_id()
            result = await invite_sender.send_invite(
                backend_url=backend_url,
                task=task,
                responsible=contacts.get(task.responsible) if task.responsible else None,
                participants=[contacts[cid] for cid in task.participants if cid in contacts],
            )

        if result.success:
            await alert_service.add_alert(message=message_templates.invite_sent_alert(task_name=task.name))
        else:
            await alert_service.add_alert(
                message=message_templates.invite_failed_alert(task_name=task.name),
                alert_type=AlertType.ERROR,
            )
        return result


async def get_dashboard(user_id: str, *, now: datetime | None = None) -> Dashboard:
    """Dashboard numbers over the tasks visible to the user."""
    with span("task_service.get_dashboard"):
        current = now or datetime.now(UTC)
        tasks = await list_visible_tasks(user_id)
        language = await preferences_service.get_language()

        upcoming = analytics.next_task(tasks, current)
        return Dashboard(
            stats=analytics.dashboard_stats(tasks, current),
            next_task=upcoming,
            time_until_next=time_until(upcoming.due_date, current, language=language) if upcoming else None,
            weekly_activity=analytics.weekly_activity(tasks, current),
        )


async def get_report(user_id: str) -> ActivityReport:
    """Activity report over the tasks visible to the user."""
    with span("task_service.get_report"):
        tasks = await list_visible_tasks(user_id)
        contacts = await contact_service.get_contacts_by_id()
        preferences = await preferences_service.get_preferences()
        return analytics.activity_report(
            tasks,
            contacts,
            language=preferences.language,
            date_format=preferences.date_format,
            timezone=preferences.timezone,
        )
