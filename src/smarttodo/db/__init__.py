"""Database layer for the smarttodo application."""

from .connection import DatabaseConnection
from .repository import TaskRepository, TaskStore
from .schema import SETUP_SQL, SchemaManager

__all__ = [
    "DatabaseConnection",
    "SchemaManager",
    "SETUP_SQL",
    "TaskRepository",
    "TaskStore",
]
