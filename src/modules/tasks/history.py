"""Change history for tasks.

``diff_task`` compares two versions of a task against an ordered table of
tracked fields and returns one ChangeLog entry per differing field. Entries
come out in table order and share one timestamp; callers prepend them to the
stored history so it stays newest first.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from src.core import message_templates
from src.domain.contact import Contact
from src.domain.log import ChangeLog
from src.domain.task import Task, TaskStatus


def _contact_name(contact_id: str | None, contacts_by_id: Mapping[str, Contact], language: str | None) -> str:
    contact = contacts_by_id.get(contact_id) if contact_id else None
    return contact.name if contact else message_templates.nobody(language=language)


def actor_name(task: Task, contacts_by_id: Mapping[str, Contact], *, language: str | None = None) -> str:
    """Name recorded as the author of an entry: the task's responsible contact."""
    contact = contacts_by_id.get(task.responsible) if task.responsible else None
    return contact.name if contact else message_templates.default_actor(language=language)


@dataclass(frozen=True)
class TrackedField:
    """One row of the diff table."""

    field: str
    changed: Callable[[Task, Task], bool]
    message: Callable[[Task, Task, Mapping[str, Contact], str | None], str]


TRACKED_FIELDS: tuple[TrackedField, ...] = (
    TrackedField(
        field="name",
        changed=lambda old, new: old.name != new.name,
        message=lambda old, new, _, lang: message_templates.name_changed(old=old.name, new=new.name, language=lang),
    ),
    TrackedField(
        field="description",
        changed=lambda old, new: old.description != new.description,
        message=lambda old, new, _, lang: message_templates.description_updated(language=lang),
    ),
    TrackedField(
        field="status",
        changed=lambda old, new: old.status != new.status,
        message=lambda old, new, _, lang: message_templates.status_changed(
            old=old.status, new=new.status, language=lang
        ),
    ),
    TrackedField(
        field="priority",
        changed=lambda old, new: old.priority != new.priority,
        message=lambda old, new, _, lang: message_templates.priority_changed(
            old=old.priority, new=new.priority, language=lang
        ),
    ),
    TrackedField(
        field="due_date",
        changed=lambda old, new: old.due_date != new.due_date,
        message=lambda old, new, _, lang: message_templates.due_date_changed(language=lang),
    ),
    TrackedField(
        field="responsible",
        changed=lambda old, new: old.responsible != new.responsible,
        message=lambda old, new, contacts, lang: message_templates.responsible_changed(
            old_name=_contact_name(old.responsible, contacts, lang),
            new_name=_contact_name(new.responsible, contacts, lang),
            language=lang,
        ),
    ),
    TrackedField(
        field="participants",
        changed=lambda old, new: set(old.participants) != set(new.participants),
        message=lambda old, new, _, lang: message_templates.participants_updated(language=lang),
    ),
)


def diff_task(
    old: Task,
    new: Task,
    contacts_by_id: Mapping[str, Contact],
    *,
    now: datetime | None = None,
    language: str | None = None,
) -> list[ChangeLog]:
    """Build the history entries describing how ``new`` differs from ``old``.

    Task identity is not checked; callers pass two versions of the same task.

    Args:
        old: Task before the edit
        new: Task after the edit
        contacts_by_id: Contacts used to resolve responsible names
        now: Timestamp shared by every entry (defaults to the current UTC time)
        language: "pt" (default) or "en"

    Returns:
        Entries in table order, empty when nothing tracked changed
    """
    timestamp = now or datetime.now(UTC)
    actor = actor_name(new, contacts_by_id, language=language)

    return [
        ChangeLog(timestamp=timestamp, user=actor, change=row.message(old, new, contacts_by_id, language))
        for row in TRACKED_FIELDS
        if row.changed(old, new)
    ]


def creation_entry(
    task: Task,
    contacts_by_id: Mapping[str, Contact],
    *,
    now: datetime | None = None,
    language: str | None = None,
) -> ChangeLog:
    """Seed entry recorded when a task is created."""
    return ChangeLog(
        timestamp=now or datetime.now(UTC),
        user=actor_name(task, contacts_by_id, language=language),
        change=message_templates.task_created(language=language),
    )


def status_change_entry(
    task: Task,
    new_status: TaskStatus,
    contacts_by_id: Mapping[str, Contact],
    *,
    now: datetime | None = None,
    language: str | None = None,
) -> ChangeLog:
    """Entry recorded by the quick complete/reopen toggle."""
    return ChangeLog(
        timestamp=now or datetime.now(UTC),
        user=actor_name(task, contacts_by_id, language=language),
        change=message_templates.status_set(new=new_status, language=language),
    )


def prepend_history(history: Iterable[ChangeLog], entries: Iterable[ChangeLog]) -> list[ChangeLog]:
    """Return a new history with ``entries`` placed before the existing ones."""
    return [*entries, *history]
