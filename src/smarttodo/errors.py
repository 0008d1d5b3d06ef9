"""Exception types shared across the application."""

# Postgres SQLSTATE for "undefined_table"; reused for DuckDB catalog misses.
RELATION_MISSING_CODE = "42P01"


class SmartTodoError(Exception):
    """Base class for application errors."""


class StoreError(SmartTodoError):
    """A task store operation failed."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"StoreError(code={self.code!r}, message={self.message!r})"


def is_relation_missing(error: StoreError, qualified_name: str) -> bool:
    """Check whether a store error means the task table does not exist.

    Args:
        error: Error raised by the store.
        qualified_name: Schema-qualified table name, e.g. ``public.todos``.

    Returns:
        True if the error carries the relation-missing code or names the table.
    """
    if error.code == RELATION_MISSING_CODE:
        return True
    return bool(error.message) and qualified_name in error.message
