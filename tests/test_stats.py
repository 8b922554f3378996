"""Tests for statistics and the auto-abandon policy."""

from datetime import datetime, timedelta

import pytest

from tasktracker.core.stats import (
    TaskStatistics,
    compute_statistics,
    select_for_abandon,
    should_abandon,
)
from tasktracker.core.tasks import Task, TaskPriority, TaskStatus


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0)


class TestComputeStatistics:
    def test_empty_is_fully_seeded(self, now):
        stats = compute_statistics([], as_of=now)
        assert stats.total == 0
        assert stats.by_status == {s: 0 for s in TaskStatus}
        assert stats.by_priority == {p: 0 for p in TaskPriority}
        assert stats.overdue == 0
        assert stats.completed_last_week == 0

    def test_counts(self, now):
        tasks = [
            Task(title="A", priority=TaskPriority.HIGH),
            Task(title="B", due_date=now - timedelta(days=1)),
            Task(title="C", status=TaskStatus.DONE, completed_at=now - timedelta(days=2)),
            Task(title="D", status=TaskStatus.DONE, completed_at=now - timedelta(days=30)),
            Task(title="E", status=TaskStatus.ABANDONED, priority=TaskPriority.LOW,
                 due_date=now - timedelta(days=30)),
        ]
        stats = compute_statistics(tasks, as_of=now)

        assert stats.total == 5
        assert stats.by_status[TaskStatus.TODO] == 2
        assert stats.by_status[TaskStatus.IN_PROGRESS] == 0
        assert stats.by_status[TaskStatus.DONE] == 2
        assert stats.by_status[TaskStatus.ABANDONED] == 1
        assert stats.by_priority[TaskPriority.HIGH] == 1
        assert stats.by_priority[TaskPriority.MEDIUM] == 3
        assert stats.by_priority[TaskPriority.LOW] == 1
        assert stats.overdue == 1
        assert stats.completed_last_week == 1

    def test_sums_match_total(self, now):
        tasks = [
            Task(title=f"{p.name} {s.value}", priority=p, status=s)
            for p in TaskPriority
            for s in TaskStatus
        ]
        stats = compute_statistics(tasks, as_of=now)
        assert sum(stats.by_status.values()) == stats.total == len(tasks)
        assert sum(stats.by_priority.values()) == stats.total

    def test_completed_status_change_still_counts(self, now):
        """completed_at survives a status change, so the task still counts."""
        task = Task(title="Reopened")
        task.mark_as_done(as_of=now - timedelta(days=1))
        task.status = TaskStatus.TODO
        assert compute_statistics([task], as_of=now).completed_last_week == 1

    def test_to_dict(self, now):
        stats = compute_statistics([Task(title="A")], as_of=now)
        data = stats.to_dict()
        assert data == {
            "total": 1,
            "byStatus": {"todo": 1, "in_progress": 0, "done": 0, "abandoned": 0},
            "byPriority": {1: 0, 2: 1, 3: 0},
            "overdue": 0,
            "completedLastWeek": 0,
        }

    def test_default_record_is_seeded(self):
        stats = TaskStatistics()
        assert set(stats.by_status) == set(TaskStatus)
        assert set(stats.by_priority) == set(TaskPriority)


class TestAbandonPolicy:
    def test_medium_overdue_ten_days_is_abandoned(self, now):
        task = Task(title="Old", due_date=now - timedelta(days=10))
        assert should_abandon(task, as_of=now) is True

    def test_low_priority_is_abandoned(self, now):
        task = Task(title="Old", priority=TaskPriority.LOW, due_date=now - timedelta(days=10))
        assert should_abandon(task, as_of=now) is True

    def test_in_progress_is_abandoned(self, now):
        task = Task(title="Old", status=TaskStatus.IN_PROGRESS, due_date=now - timedelta(days=10))
        assert should_abandon(task, as_of=now) is True

    def test_high_priority_is_exempt(self, now):
        task = Task(title="Old", priority=TaskPriority.HIGH, due_date=now - timedelta(days=100))
        assert should_abandon(task, as_of=now) is False

    def test_five_days_overdue_is_kept(self, now):
        task = Task(title="Recent", due_date=now - timedelta(days=5))
        assert should_abandon(task, as_of=now) is False

    def test_exactly_seven_days_is_kept(self, now):
        task = Task(title="Edge", due_date=now - timedelta(days=7))
        assert should_abandon(task, as_of=now) is False

    @pytest.mark.parametrize("status", [TaskStatus.DONE, TaskStatus.ABANDONED])
    def test_resolved_is_kept(self, now, status):
        task = Task(title="Old", status=status, due_date=now - timedelta(days=10))
        assert should_abandon(task, as_of=now) is False

    def test_no_due_date_is_kept(self, now):
        assert should_abandon(Task(title="Someday"), as_of=now) is False

    def test_select_for_abandon(self, now):
        tasks = [
            Task(title="Abandon me", due_date=now - timedelta(days=10)),
            Task(title="High", priority=TaskPriority.HIGH, due_date=now - timedelta(days=10)),
            Task(title="Recent", due_date=now - timedelta(days=5)),
        ]
        selected = select_for_abandon(tasks, as_of=now)
        assert [t.title for t in selected] == ["Abandon me"]
