"""Tests for dashboard and report calculations."""

from datetime import date, timedelta

import pytest

from src.domain.task import Priority, TaskStatus
from src.modules.tasks import analytics


@pytest.mark.unit
class TestDashboardStats:
    def test_counts(self, task_factory, fixed_now):
        tasks = [
            task_factory(status=TaskStatus.PENDING),
            task_factory(status=TaskStatus.PENDING, due_date=fixed_now - timedelta(days=1)),
            task_factory(status=TaskStatus.COMPLETED, due_date=fixed_now - timedelta(days=1)),
            task_factory(status=TaskStatus.IN_PROGRESS),
        ]

        stats = analytics.dashboard_stats(tasks, fixed_now)

        assert stats.total == 4
        assert stats.pending == 2
        assert stats.completed == 1
        # Only the past-due pending task counts; completed ones never do
        assert stats.overdue == 1

    def test_overdue_counts_stored_and_derived_once(self, task_factory, fixed_now):
        tasks = [
            task_factory(status=TaskStatus.OVERDUE, due_date=fixed_now + timedelta(days=2)),
            task_factory(status=TaskStatus.OVERDUE, due_date=fixed_now - timedelta(days=2)),
        ]

        assert analytics.dashboard_stats(tasks, fixed_now).overdue == 2

    def test_empty(self, fixed_now):
        stats = analytics.dashboard_stats([], fixed_now)

        assert (stats.total, stats.pending, stats.completed, stats.overdue) == (0, 0, 0, 0)


@pytest.mark.unit
class TestNextTask:
    def test_picks_earliest_upcoming_not_completed(self, task_factory, fixed_now):
        later = task_factory(name="later", due_date=fixed_now + timedelta(days=3))
        soon = task_factory(name="soon", due_date=fixed_now + timedelta(hours=2))
        done = task_factory(name="done", due_date=fixed_now + timedelta(hours=1), status=TaskStatus.COMPLETED)
        past = task_factory(name="past", due_date=fixed_now - timedelta(hours=1))

        assert analytics.next_task([later, done, past, soon], fixed_now) == soon

    def test_none_when_nothing_upcoming(self, task_factory, fixed_now):
        assert analytics.next_task([task_factory(due_date=fixed_now - timedelta(days=1))], fixed_now) is None


@pytest.mark.unit
class TestWeeklyActivity:
    def test_seven_days_oldest_first(self, fixed_now):
        activity = analytics.weekly_activity([], fixed_now)

        assert [a.day for a in activity] == [date(2024, 6, 9) + timedelta(days=i) for i in range(7)]
        assert activity[-1].day == date(2024, 6, 15)

    def test_groups_created_tasks_by_stored_status(self, task_factory, fixed_now):
        tasks = [
            task_factory(created_at=fixed_now, status=TaskStatus.PENDING),
            task_factory(created_at=fixed_now, status=TaskStatus.COMPLETED),
            task_factory(created_at=fixed_now - timedelta(days=2), status=TaskStatus.OVERDUE),
            task_factory(created_at=fixed_now - timedelta(days=30), status=TaskStatus.PENDING),
        ]

        activity = {a.day: a for a in analytics.weekly_activity(tasks, fixed_now)}

        today = activity[date(2024, 6, 15)]
        assert (today.pending, today.completed, today.overdue) == (1, 1, 0)
        assert activity[date(2024, 6, 13)].overdue == 1
        assert sum(a.pending for a in activity.values()) == 1


@pytest.mark.unit
class TestActivityReport:
    """The report uses stored status only."""

    def test_counts_and_rows(self, task_factory, contacts_by_id, fixed_now):
        tasks = [
            task_factory(name="a", status=TaskStatus.PENDING, responsible="c1"),
            task_factory(name="b", status=TaskStatus.IN_PROGRESS),
            task_factory(name="c", status=TaskStatus.COMPLETED),
            task_factory(name="d", status=TaskStatus.OVERDUE, responsible="missing"),
            # Past due but stored as PENDING: counted as pending, not overdue
            task_factory(name="e", status=TaskStatus.PENDING, due_date=fixed_now - timedelta(days=5)),
        ]

        report = analytics.activity_report(tasks, contacts_by_id, language="en")

        assert (report.completed, report.overdue, report.pending) == (1, 1, 3)
        assert [row.name for row in report.rows] == ["a", "b", "d", "e"]
        assert report.rows[0].responsible_name == "Carla"
        assert report.rows[2].responsible_name == "N/A"

    def test_due_label_uses_format_and_timezone(self, task_factory, contacts_by_id, fixed_now):
        task = task_factory(due_date=fixed_now)

        day_first = analytics.activity_report([task], contacts_by_id, date_format="DD/MM/YYYY", timezone="UTC")
        month_first = analytics.activity_report(
            [task], contacts_by_id, date_format="MM/DD/YYYY", timezone="America/Sao_Paulo"
        )

        assert day_first.rows[0].due_label == "15/06/2024 12:00:00"
        assert month_first.rows[0].due_label == "06/15/2024 09:00:00"


@pytest.mark.unit
class TestFilterTasks:
    def test_unset_filters_match_everything(self, task_factory):
        tasks = [task_factory(), task_factory()]

        assert analytics.filter_tasks(tasks) == tasks

    def test_combined_filters(self, task_factory):
        match = task_factory(status=TaskStatus.PENDING, priority=Priority.HIGH, responsible="c1")
        tasks = [
            match,
            task_factory(status=TaskStatus.PENDING, priority=Priority.LOW, responsible="c1"),
            task_factory(status=TaskStatus.COMPLETED, priority=Priority.HIGH, responsible="c1"),
            task_factory(status=TaskStatus.PENDING, priority=Priority.HIGH, responsible="c2"),
        ]

        result = analytics.filter_tasks(tasks, status=TaskStatus.PENDING, priority=Priority.HIGH, responsible="c1")

        assert result == [match]
