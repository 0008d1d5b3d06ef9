"""Provisioning of the task table.

The table is never created implicitly. A store without it reports the
relation-missing condition so the user can run ``smarttodo setup``.
"""

import logging

import duckdb

from ..errors import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def build_setup_sql(table_name: str = "todos", schema_name: str = "main") -> str:
    """Return the DDL that provisions the task table."""
    qualified = f"{schema_name}.{table_name}"
    return f"""CREATE SCHEMA IF NOT EXISTS {schema_name};

CREATE TABLE IF NOT EXISTS {qualified} (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    title VARCHAR NOT NULL,
    is_completed BOOLEAN DEFAULT FALSE,
    priority VARCHAR DEFAULT 'medium' CHECK (priority IN ('low', 'medium', 'high')),
    created_at TIMESTAMP DEFAULT current_timestamp,
    sub_tasks VARCHAR[]
);"""


SETUP_SQL = build_setup_sql()


class SchemaManager:
    """Checks for and creates the task table."""

    def __init__(
        self,
        db_connection: DatabaseConnection,
        table_name: str = "todos",
        schema_name: str = "main",
    ):
        self.db = db_connection
        self.table_name = table_name
        self.schema_name = schema_name

    @property
    def setup_sql(self) -> str:
        return build_setup_sql(self.table_name, self.schema_name)

    def is_provisioned(self) -> bool:
        """Check whether the task table exists."""
        conn = self.db.connect()
        result = conn.execute(
            """
            SELECT COUNT(*)
            FROM information_schema.tables
            WHERE table_schema = ? AND table_name = ?
        """,
            [self.schema_name, self.table_name],
        ).fetchone()
        return bool(result and result[0])

    def provision(self) -> None:
        """Create the task table if it does not exist.

        Raises:
            StoreError: If any DDL statement fails.
        """
        conn = self.db.connect()
        statements = [
            stmt.strip() for stmt in self.setup_sql.split(";") if stmt.strip()
        ]

        for statement in statements:
            try:
                conn.execute(statement)
            except duckdb.Error as e:
                logger.error("Error executing statement: %s...", statement[:100])
                raise StoreError(str(e), code=type(e).__name__) from e

        logger.info("Provisioned table %s.%s", self.schema_name, self.table_name)
