"""Task controller: the operations a user can trigger and their effect on state."""

import logging
from datetime import datetime

from ..ai.analysis import AnalysisClient
from ..db.repository import TaskStore
from ..errors import StoreError, is_relation_missing
from ..models import NewTaskRecord, TaskRecord
from . import state as reducers
from .state import ListState, SubmissionPhase, TaskStats, ViewMode

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to load tasks"
ADD_FAILED_MESSAGE = "Something went wrong while analyzing the task. Please try again."


class TaskController:
    """Owns the list state and runs every user action against the store.

    Fetch and add failures are reported through ``state.error``; toggle,
    delete and clear failures are only logged and leave state unchanged.
    """

    def __init__(self, store: TaskStore, analysis_client: AnalysisClient):
        self.store = store
        self.analysis_client = analysis_client
        self.state = ListState()

    @property
    def stats(self) -> TaskStats:
        return self.state.stats

    def set_input(self, value: str) -> None:
        self.state.input_value = value

    async def fetch(self) -> bool:
        """Load all tasks from the store.

        Returns:
            True if the list was replaced, False on failure.
        """
        self.state.is_loading = True
        self.state.error = None
        try:
            tasks = self.store.list_all()
        except StoreError as e:
            logger.error("Error fetching tasks: %s", e.message)
            if is_relation_missing(e, self.store.qualified_name):
                self.state.mode = ViewMode.SETUP_REQUIRED
            else:
                self.state.mode = ViewMode.ERROR
            self.state.error = e.message or FETCH_FAILED_MESSAGE
            return False
        finally:
            self.state.is_loading = False

        self.state.tasks = tuple(tasks)
        self.state.mode = ViewMode.READY
        return True

    async def add_task(self, title: str | None = None) -> TaskRecord | None:
        """Analyze a title, persist the enriched task and prepend it to the list.

        Args:
            title: Task title. Defaults to the current input value.

        Returns:
            The stored task, or None if the request was rejected or failed.
        """
        if title is None:
            title = self.state.input_value
        if not title or not title.strip():
            logger.debug("Ignoring blank task title")
            return None
        if self.state.is_analyzing:
            logger.info("Analysis already in progress; rejecting %r", title)
            return None

        title = title.strip()
        self.state.input_value = ""
        self.state.is_analyzing = True
        self.state.submission = SubmissionPhase.PENDING
        self.state.failed_title = None

        try:
            analysis = await self.analysis_client.analyze(title)
            candidate = NewTaskRecord(
                title=title,
                is_completed=False,
                priority=analysis.suggested_priority,
                sub_tasks=analysis.sub_tasks,
                created_at=datetime.utcnow(),
            )
            record = self.store.insert(candidate)
        except Exception as e:
            logger.error("Error adding task %r: %s", title, e)
            self.state.error = ADD_FAILED_MESSAGE
            self.state.submission = SubmissionPhase.FAILED
            self.state.failed_title = title
            return None
        finally:
            self.state.is_analyzing = False

        self.state.tasks = reducers.add(self.state.tasks, record)
        self.state.submission = SubmissionPhase.COMMITTED
        return record

    async def toggle(self, task_id: str, is_completed: bool | None = None) -> bool:
        """Set a task's completion flag; None flips the current value."""
        if is_completed is None:
            current = self.state.find(task_id)
            if current is None:
                logger.warning("Cannot toggle unknown task %s", task_id)
                return False
            is_completed = not current.is_completed

        try:
            self.store.update_completion(task_id, is_completed)
        except StoreError as e:
            logger.error("Error updating task %s: %s", task_id, e.message)
            return False

        self.state.tasks = reducers.toggle(self.state.tasks, task_id, is_completed)
        return True

    async def delete(self, task_id: str) -> bool:
        try:
            self.store.delete_by_id(task_id)
        except StoreError as e:
            logger.error("Error deleting task %s: %s", task_id, e.message)
            return False

        self.state.tasks = reducers.remove(self.state.tasks, task_id)
        return True

    async def clear_completed(self) -> int:
        """Delete every completed task.

        Returns:
            Number of tasks removed from the list.
        """
        completed_ids = self.state.completed_ids
        if not completed_ids:
            return 0

        try:
            self.store.delete_by_ids(completed_ids)
        except StoreError as e:
            logger.error("Error clearing completed tasks: %s", e.message)
            return 0

        self.state.tasks = reducers.remove_many(self.state.tasks, completed_ids)
        return len(completed_ids)
