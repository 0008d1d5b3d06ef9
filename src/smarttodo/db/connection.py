"""DuckDB connection handling for the task store."""

from pathlib import Path
from typing import Any

import duckdb

DEFAULT_DATABASE_PATH = "~/.local/share/smarttodo/todos.db"


class DatabaseConnection:
    """Lazily opened DuckDB connection shared by the store and schema manager."""

    def __init__(self, db_path: str | None = None):
        """
        Args:
            db_path: Database file. Defaults to the XDG data directory.
        """
        self.db_path = Path(db_path or DEFAULT_DATABASE_PATH).expanduser()
        self._connection: duckdb.DuckDBPyConnection | None = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        """Return the open connection, creating the file's directory on first use."""
        if self._connection is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = duckdb.connect(str(self.db_path))
        return self._connection

    def close(self) -> None:
        if self._connection:
            self._connection.close()
            self._connection = None

    @property
    def size_bytes(self) -> int:
        return self.db_path.stat().st_size if self.db_path.exists() else 0

    def get_database_info(self) -> dict[str, Any]:
        """
        Describe the database file and the row count of every base table.

        Tables are keyed by ``schema.table``. A table that cannot be counted
        is reported as ``"Error"``.
        """
        conn = self.connect()

        rows = conn.execute("""
            SELECT table_schema, table_name
            FROM information_schema.tables
            WHERE table_type = 'BASE TABLE'
            ORDER BY table_schema, table_name
        """).fetchall()
        tables = [f"{schema}.{name}" for schema, name in rows]

        table_counts: dict[str, int | str] = {}
        for qualified_name in tables:
            try:
                count = conn.execute(f"SELECT COUNT(*) FROM {qualified_name}").fetchone()
            except duckdb.Error:
                table_counts[qualified_name] = "Error"
            else:
                table_counts[qualified_name] = count[0] if count else 0

        return {
            "database_path": str(self.db_path),
            "database_exists": self.db_path.exists(),
            "database_size_bytes": self.size_bytes,
            "tables": tables,
            "table_counts": table_counts,
        }

    def __enter__(self) -> "DatabaseConnection":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
