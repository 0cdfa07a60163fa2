"""Tests for task visibility filtering."""

import pytest

from src.domain.task import Visibility
from src.domain.user import Group, User, UserRole
from src.modules.tasks.visibility import can_view_task, user_group_ids, visible_tasks


@pytest.fixture
def admin():
    return User(id="u1", name="Ana", email="ana@example.com", role=UserRole.ADMIN)


@pytest.fixture
def member():
    return User(id="u2", name="Bruno", email="bruno@example.com", role=UserRole.MEMBER)


@pytest.fixture
def groups():
    return [
        Group(id="g1", name="Ops", member_ids=["u2", "u3"]),
        Group(id="g2", name="Sales", member_ids=["u3"]),
    ]


@pytest.mark.unit
class TestUserGroupIds:
    def test_returns_only_groups_containing_user(self, member, groups):
        assert user_group_ids(member, groups) == {"g1"}

    def test_no_groups(self, member):
        assert user_group_ids(member, []) == set()


@pytest.mark.unit
class TestVisibleTasks:
    """Tests for visible_tasks."""

    def test_admin_sees_everything(self, admin, groups, task_factory):
        tasks = [
            task_factory(visibility=Visibility.PUBLIC),
            task_factory(visibility=Visibility.PRIVATE, creator_id="u9"),
            task_factory(visibility=Visibility.GROUP, group_id="g2"),
            task_factory(visibility=Visibility.GROUP, group_id=None),
        ]

        assert visible_tasks(tasks, admin, groups) == tasks

    def test_public_tasks_visible_to_everyone(self, member, task_factory):
        task = task_factory(visibility=Visibility.PUBLIC, creator_id="u9")

        assert visible_tasks([task], member, []) == [task]

    def test_private_task_visible_to_creator(self, member, task_factory):
        task = task_factory(visibility=Visibility.PRIVATE, creator_id="u2")

        assert visible_tasks([task], member, []) == [task]

    def test_private_task_visible_when_user_id_is_responsible(self, member, task_factory):
        task = task_factory(visibility=Visibility.PRIVATE, creator_id="u9", responsible="u2")

        assert visible_tasks([task], member, []) == [task]

    def test_private_task_visible_when_user_id_is_participant(self, member, task_factory):
        task = task_factory(visibility=Visibility.PRIVATE, creator_id="u9", participants=["c1", "u2"])

        assert visible_tasks([task], member, []) == [task]

    def test_private_task_hidden_from_others(self, member, task_factory):
        task = task_factory(visibility=Visibility.PRIVATE, creator_id="u9", responsible="c1", participants=["c2"])

        assert visible_tasks([task], member, []) == []

    def test_group_task_visible_to_group_member(self, member, groups, task_factory):
        task = task_factory(visibility=Visibility.GROUP, group_id="g1")

        assert visible_tasks([task], member, groups) == [task]

    def test_group_task_hidden_from_non_member(self, member, groups, task_factory):
        task = task_factory(visibility=Visibility.GROUP, group_id="g2", creator_id="u2")

        assert visible_tasks([task], member, groups) == []

    def test_group_task_without_group_hidden_from_non_admin(self, member, groups, task_factory):
        task = task_factory(visibility=Visibility.GROUP, group_id=None, creator_id="u2")

        assert visible_tasks([task], member, groups) == []

    def test_preserves_order_and_does_not_mutate_input(self, member, groups, task_factory):
        first = task_factory(name="first")
        hidden = task_factory(visibility=Visibility.PRIVATE, creator_id="u9")
        last = task_factory(name="last")
        tasks = [first, hidden, last]

        result = visible_tasks(tasks, member, groups)

        assert result == [first, last]
        assert tasks == [first, hidden, last]
        assert result is not tasks


@pytest.mark.unit
class TestCanViewTask:
    def test_matches_visible_tasks(self, admin, member, groups, task_factory):
        tasks = [
            task_factory(visibility=Visibility.PUBLIC),
            task_factory(visibility=Visibility.PRIVATE, creator_id="u9"),
            task_factory(visibility=Visibility.GROUP, group_id="g1"),
        ]

        for user in (admin, member):
            visible = visible_tasks(tasks, user, groups)
            assert [t for t in tasks if can_view_task(t, user, groups)] == visible
