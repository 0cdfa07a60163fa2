"""Task status rules.

The stored ``status`` is what edits and list filters use, and any value may be
stored at any time. Separately, ``is_overdue`` derives lateness from the due
date, and only the dashboard counts use it. The two can disagree: a PENDING
task past its due date is overdue by the derived check but not by its stored
status, and a task stored as OVERDUE whose due date was moved into the future
is still OVERDUE. Nothing reconciles them; ``overdue_mismatch`` reports the
disagreement.
"""

from datetime import datetime

from src.domain.task import Task, TaskStatus


def is_overdue(task: Task, now: datetime) -> bool:
    """Derived check: due date has passed and the task is not completed."""
    return task.due_date < now and task.status != TaskStatus.COMPLETED


def is_stored_overdue(task: Task) -> bool:
    return task.status == TaskStatus.OVERDUE


def overdue_mismatch(task: Task, now: datetime) -> bool:
    """Whether the stored status and the derived overdue check disagree."""
    return is_stored_overdue(task) != is_overdue(task, now)


def toggle_completion(status: TaskStatus) -> TaskStatus:
    """Quick toggle: COMPLETED reopens to PENDING, anything else completes."""
    if status == TaskStatus.COMPLETED:
        return TaskStatus.PENDING
    return TaskStatus.COMPLETED
