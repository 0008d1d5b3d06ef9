"""Task store facade over the ``todos`` table."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

import duckdb

from ..errors import RELATION_MISSING_CODE, StoreError
from ..models import NewTaskRecord, TaskRecord
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _row_to_dict(result: Any, cursor: Any = None) -> dict[str, Any]:
    """Convert DuckDB result row to dictionary.

    Args:
        result: DuckDB result row.
        cursor: DuckDB cursor with description.

    Returns:
        Dictionary representation of the row.
    """
    if not result:
        return {}
    if cursor and hasattr(cursor, "description"):
        column_names = [col[0] for col in cursor.description]
        return dict(zip(column_names, result))
    return {}


class TaskStore(ABC):
    """Generic operations the application needs from the task table."""

    @property
    @abstractmethod
    def qualified_name(self) -> str:
        """Schema-qualified table name, used to recognise a missing table."""

    @abstractmethod
    def list_all(self) -> list[TaskRecord]:
        """Return all records, newest first."""

    @abstractmethod
    def insert(self, record: NewTaskRecord) -> TaskRecord:
        """Insert a record and return it with store-assigned fields."""

    @abstractmethod
    def update_completion(self, task_id: str, is_completed: bool) -> None:
        """Set the completion flag of one record."""

    @abstractmethod
    def delete_by_id(self, task_id: str) -> None:
        """Delete one record. Missing ids are not an error."""

    @abstractmethod
    def delete_by_ids(self, task_ids: Iterable[str]) -> None:
        """Delete several records. An empty set issues no request."""


class TaskRepository(TaskStore):
    """DuckDB implementation of the task store."""

    def __init__(
        self,
        db_connection: DatabaseConnection,
        table_name: str = "todos",
        schema_name: str = "main",
    ):
        """Initialize repository with database connection.

        Args:
            db_connection: Database connection instance.
            table_name: Name of the task table.
            schema_name: Schema that holds the task table.
        """
        self.db = db_connection
        self.table_name = table_name
        self.schema_name = schema_name

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.table_name}"

    def _translate_error(self, exc: duckdb.Error) -> StoreError:
        message = str(exc)
        if (
            isinstance(exc, duckdb.CatalogException)
            and self.table_name in message
            and "does not exist" in message
        ):
            return StoreError(
                f'relation "{self.qualified_name}" does not exist: {message}',
                code=RELATION_MISSING_CODE,
            )
        return StoreError(message, code=type(exc).__name__)

    def _execute(self, query: str, params: list[Any] | None = None):
        conn = self.db.connect()
        try:
            return conn.execute(query, params or [])
        except duckdb.Error as e:
            raise self._translate_error(e) from e

    def _row_to_model(self, row: dict[str, Any]) -> TaskRecord:
        """Convert database row to TaskRecord model."""
        return TaskRecord(**row)

    def list_all(self) -> list[TaskRecord]:
        """Get all tasks ordered by creation time, newest first.

        Returns:
            List of all tasks.

        Raises:
            StoreError: If the query fails, including when the table is missing.
        """
        cursor = self._execute(
            f"SELECT * FROM {self.qualified_name} ORDER BY created_at DESC"
        )
        results = cursor.fetchall()

        if not results:
            return []

        column_names = [desc[0] for desc in cursor.description]

        tasks = []
        for row in results:
            try:
                tasks.append(self._row_to_model(dict(zip(column_names, row))))
            except ValueError as e:
                # Rows with an empty title cannot be represented
                logger.warning("Skipping invalid task row: %s", e)
        return tasks

    def insert(self, record: NewTaskRecord) -> TaskRecord:
        """Create a new task.

        Args:
            record: Fully enriched insert candidate.

        Returns:
            Created task with its generated id and created_at.
        """
        cursor = self._execute(
            f"""
            INSERT INTO {self.qualified_name}
                (title, is_completed, priority, created_at, sub_tasks)
            VALUES (?, ?, ?, ?, CAST(? AS VARCHAR[]))
            RETURNING *
        """,
            [
                record.title,
                record.is_completed,
                record.priority.value,
                record.created_at,
                list(record.sub_tasks),
            ],
        )
        result = cursor.fetchone()
        if not result:
            raise StoreError("Insert returned no row")

        return self._row_to_model(_row_to_dict(result, cursor))

    def update_completion(self, task_id: str, is_completed: bool) -> None:
        """Set the completion flag of a task.

        Args:
            task_id: ID of the task.
            is_completed: New completion state.
        """
        self._execute(
            f"UPDATE {self.qualified_name} SET is_completed = ? "
            "WHERE id = CAST(? AS UUID)",
            [is_completed, task_id],
        )

    def delete_by_id(self, task_id: str) -> None:
        """Delete a task by ID.

        Args:
            task_id: ID of the task to delete.
        """
        self._execute(
            f"DELETE FROM {self.qualified_name} WHERE id = CAST(? AS UUID)",
            [task_id],
        )

    def delete_by_ids(self, task_ids: Iterable[str]) -> None:
        """Delete every task whose ID is in the given set.

        Args:
            task_ids: IDs of the tasks to delete.
        """
        ids = list(dict.fromkeys(task_ids))
        if not ids:
            return

        placeholders = ", ".join(["CAST(? AS UUID)" for _ in ids])
        self._execute(
            f"DELETE FROM {self.qualified_name} WHERE id IN ({placeholders})",
            ids,
        )
