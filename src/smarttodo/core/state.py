"""Client-side task list state and the pure functions that update it.

The list is kept newest first. It is sorted once by the store on fetch and
afterwards only changed by the reducers below, which never re-sort.
"""

from collections.abc import Iterable
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field

from ..models import TaskRecord


class ViewMode(str, Enum):
    """What the presentation layer should show."""

    READY = "ready"
    SETUP_REQUIRED = "setup_required"
    ERROR = "error"


class SubmissionPhase(str, Enum):
    """Progress of the most recent add request."""

    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    FAILED = "failed"


class TaskStats(NamedTuple):
    """Counters derived from the current list."""

    total: int
    pending: int
    completed: int


def compute_stats(tasks: Iterable[TaskRecord]) -> TaskStats:
    total = completed = 0
    for task in tasks:
        total += 1
        if task.is_completed:
            completed += 1
    return TaskStats(total=total, pending=total - completed, completed=completed)


def add(tasks: tuple[TaskRecord, ...], record: TaskRecord) -> tuple[TaskRecord, ...]:
    """Prepend a freshly created record."""
    return (record, *tasks)


def toggle(
    tasks: tuple[TaskRecord, ...], task_id: str, is_completed: bool | None = None
) -> tuple[TaskRecord, ...]:
    """Set (or flip, when ``is_completed`` is None) one record's completion flag."""
    updated = []
    for task in tasks:
        if task.id == task_id:
            value = (not task.is_completed) if is_completed is None else is_completed
            task = task.model_copy(update={"is_completed": value})
        updated.append(task)
    return tuple(updated)


def remove(tasks: tuple[TaskRecord, ...], task_id: str) -> tuple[TaskRecord, ...]:
    return tuple(task for task in tasks if task.id != task_id)


def remove_many(
    tasks: tuple[TaskRecord, ...], task_ids: Iterable[str]
) -> tuple[TaskRecord, ...]:
    ids = set(task_ids)
    if not ids:
        return tasks
    return tuple(task for task in tasks if task.id not in ids)


class ListState(BaseModel):
    """Everything the presentation layer renders."""

    tasks: tuple[TaskRecord, ...] = ()
    input_value: str = ""
    is_analyzing: bool = False
    is_loading: bool = False
    mode: ViewMode = ViewMode.READY
    error: str | None = None
    submission: SubmissionPhase = SubmissionPhase.IDLE
    failed_title: str | None = Field(
        default=None, description="Title of the last add that failed to persist"
    )

    @property
    def stats(self) -> TaskStats:
        return compute_stats(self.tasks)

    @property
    def completed_ids(self) -> list[str]:
        return [task.id for task in self.tasks if task.is_completed]

    def find(self, task_id: str) -> TaskRecord | None:
        return next((task for task in self.tasks if task.id == task_id), None)
