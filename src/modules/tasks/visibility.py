"""Task visibility filtering.

Admins see every task. Everyone else sees public tasks, private tasks they
created or take part in, and group tasks of groups they belong to. A group
task without a group is hidden from non-admins.
"""

from collections.abc import Iterable, Sequence

from src.domain.task import Task, Visibility
from src.domain.user import Group, User


def user_group_ids(user: User, groups: Iterable[Group]) -> set[str]:
    """Return the IDs of the groups the user is a member of."""
    return {group.id for group in groups if user.id in group.member_ids}


def _passes(task: Task, user: User, group_ids: set[str]) -> bool:
    if task.visibility == Visibility.PUBLIC:
        return True
    if task.visibility == Visibility.PRIVATE:
        # Compared against the creator (a user) and the responsible/participants (contacts).
        involved = {task.creator_id, task.responsible, *task.participants}
        return user.id in involved
    if task.visibility == Visibility.GROUP:
        return task.group_id is not None and task.group_id in group_ids
    return False


def can_view_task(task: Task, user: User, groups: Iterable[Group]) -> bool:
    """Whether a single task is visible to the user."""
    if user.is_admin:
        return True
    return _passes(task, user, user_group_ids(user, groups))


def visible_tasks(tasks: Sequence[Task], user: User, groups: Iterable[Group]) -> list[Task]:
    """Return the subset of tasks the user may see, in input order.

    Args:
        tasks: Candidate tasks
        user: Requesting user
        groups: All groups (membership is read from ``member_ids``)

    Returns:
        New list of visible tasks; the input is not modified
    """
    if user.is_admin:
        return list(tasks)

    group_ids = user_group_ids(user, groups)
    return [task for task in tasks if _passes(task, user, group_ids)]
