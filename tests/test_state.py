"""Tests for list state reducers."""

from datetime import datetime, timedelta

import pytest

from smarttodo.core import state as reducers
from smarttodo.core.state import ListState, TaskStats, compute_stats
from smarttodo.models import Priority, TaskRecord

BASE_TIME = datetime(2026, 1, 1, 9, 0, 0)


def make_task(task_id: str, minutes: int = 0, completed: bool = False) -> TaskRecord:
    return TaskRecord(
        id=task_id,
        title=f"Task {task_id}",
        is_completed=completed,
        priority=Priority.MEDIUM,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


@pytest.fixture
def tasks():
    """Three tasks, newest first, the middle one completed."""
    return (
        make_task("c", minutes=2),
        make_task("b", minutes=1, completed=True),
        make_task("a", minutes=0),
    )


class TestComputeStats:
    def test_empty(self):
        assert compute_stats(()) == TaskStats(total=0, pending=0, completed=0)

    def test_counts(self, tasks):
        assert compute_stats(tasks) == TaskStats(total=3, pending=2, completed=1)


class TestAdd:
    def test_prepends_and_increments_total(self, tasks):
        new = make_task("d", minutes=3)

        result = reducers.add(tasks, new)

        assert result[0] is new
        assert result[1:] == tasks
        assert compute_stats(result).total == compute_stats(tasks).total + 1

    def test_input_untouched(self, tasks):
        reducers.add(tasks, make_task("d"))

        assert len(tasks) == 3


class TestToggle:
    def test_flips_exactly_one(self, tasks):
        result = reducers.toggle(tasks, "a")

        assert len(result) == len(tasks)
        assert [t.id for t in result] == [t.id for t in tasks]
        changed = [
            (before, after)
            for before, after in zip(tasks, result)
            if before.is_completed != after.is_completed
        ]
        assert len(changed) == 1
        assert changed[0][1].id == "a"
        assert changed[0][1].is_completed is True

    def test_explicit_value(self, tasks):
        result = reducers.toggle(tasks, "b", is_completed=True)

        assert result == tasks

    def test_other_fields_unchanged(self, tasks):
        result = reducers.toggle(tasks, "b")
        before, after = tasks[1], result[1]

        assert after.is_completed is False
        assert after.model_dump(exclude={"is_completed"}) == before.model_dump(
            exclude={"is_completed"}
        )

    def test_unknown_id_is_noop(self, tasks):
        assert reducers.toggle(tasks, "zzz") == tasks


class TestRemove:
    def test_remove_one(self, tasks):
        result = reducers.remove(tasks, "b")

        assert [t.id for t in result] == ["c", "a"]

    def test_remove_unknown_id(self, tasks):
        assert reducers.remove(tasks, "zzz") == tasks

    def test_remove_many(self, tasks):
        before = compute_stats(tasks)

        result = reducers.remove_many(tasks, {"a", "b"})
        after = compute_stats(result)

        assert [t.id for t in result] == ["c"]
        assert after.total == before.total - 2
        assert after.completed == before.completed - 1

    def test_remove_many_empty(self, tasks):
        assert reducers.remove_many(tasks, set()) is tasks


class TestListState:
    def test_defaults(self):
        state = ListState()

        assert state.tasks == ()
        assert state.is_analyzing is False
        assert state.error is None
        assert state.stats == TaskStats(0, 0, 0)

    def test_derived_values_follow_tasks(self, tasks):
        state = ListState(tasks=tasks)

        assert state.stats == TaskStats(total=3, pending=2, completed=1)
        assert state.completed_ids == ["b"]
        assert state.find("a").title == "Task a"
        assert state.find("missing") is None

        state.tasks = reducers.toggle(state.tasks, "a")

        assert state.stats.completed == 2
