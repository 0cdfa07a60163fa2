"""iCalendar (ICS) invite generation for tasks."""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from src.core.config import constants
from src.domain.contact import Contact
from src.domain.task import ReminderUnit, Task


def to_ics_date(value: datetime) -> str:
    """Format a datetime as a UTC ICS stamp (YYYYMMDDTHHMMSSZ)."""
    return value.astimezone(UTC).strftime("%Y%m%dT%H%M%SZ")


def _alarm_lines(task: Task) -> list[str]:
    if task.reminder_value <= 0:
        return []

    if task.reminder_unit == ReminderUnit.HOURS:
        trigger = f"-PT{task.reminder_value}H"
    else:
        trigger = f"-P{task.reminder_value}D"

    return [
        "BEGIN:VALARM",
        "ACTION:DISPLAY",
        "DESCRIPTION:Lembrete",
        f"TRIGGER:{trigger}",
        "END:VALARM",
    ]


def build_ics(
    task: Task,
    responsible: Contact | None,
    participants: Sequence[Contact],
    *,
    now: datetime | None = None,
) -> str:
    """Render a METHOD:REQUEST calendar invite for a task.

    The event starts at the due date and lasts ``duration`` minutes. A display
    alarm is included only when ``reminder_value`` is positive. The responsible
    contact is the organizer and chair; participants are required attendees.

    Args:
        task: Task to render
        responsible: Responsible contact, if any
        participants: Participant contacts
        now: DTSTAMP value (defaults to the current UTC time)

    Returns:
        ICS text with CRLF line endings
    """
    start = task.due_date
    end = start + timedelta(minutes=task.duration)
    description = task.description.replace("\n", "\\n")

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{constants.ICS_PRODUCT_ID}",
        "CALSCALE:GREGORIAN",
        "METHOD:REQUEST",
        "BEGIN:VEVENT",
        f"UID:{task.id}@{constants.ICS_UID_DOMAIN}",
        f"DTSTAMP:{to_ics_date(now or datetime.now(UTC))}",
        f"DTSTART:{to_ics_date(start)}",
        f"DTEND:{to_ics_date(end)}",
        f"SUMMARY:{task.name}",
        f"DESCRIPTION:{description}",
        "LOCATION:N/A",
        "STATUS:CONFIRMED",
        *_alarm_lines(task),
    ]

    if responsible:
        lines.append(f"ORGANIZER;CN={responsible.name}:mailto:{responsible.email}")
        lines.append(f"ATTENDEE;ROLE=CHAIR;PARTSTAT=NEEDS-ACTION;CN={responsible.name}:mailto:{responsible.email}")

    lines.extend(
        f"ATTENDEE;ROLE=REQ-PARTICIPANT;PARTSTAT=NEEDS-ACTION;CN={participant.name}:mailto:{participant.email}"
        for participant in participants
    )

    lines.append("END:VEVENT")
    lines.append("END:VCALENDAR")
    return "\r\n".join(lines)


def ics_filename(task: Task) -> str:
    """File name offered for download, e.g. "Weekly_sync.ics"."""
    return f"{task.name.replace(' ', '_')}.ics"
