"""Tests for database components."""

import tempfile
from pathlib import Path

import pytest

from smarttodo.db.connection import DatabaseConnection
from smarttodo.db.schema import SETUP_SQL, SchemaManager, build_setup_sql


@pytest.fixture
def temp_db_path():
    """Create a temporary database path for testing."""
    temp_dir = tempfile.mkdtemp()
    db_path = Path(temp_dir) / "test_db.db"

    yield str(db_path)

    # Cleanup
    for path in Path(temp_dir).iterdir():
        path.unlink()
    Path(temp_dir).rmdir()


@pytest.fixture
def temp_db(temp_db_path):
    """Create a temporary database connection for testing."""
    db = DatabaseConnection(temp_db_path)

    yield db

    db.close()


class TestDatabaseConnection:
    """Test DatabaseConnection functionality."""

    def test_connection_creation(self, temp_db_path):
        db = DatabaseConnection(temp_db_path)

        assert str(db.db_path) == temp_db_path
        assert db._connection is None

        db.close()

    def test_connect(self, temp_db):
        conn = temp_db.connect()

        assert conn is not None
        assert temp_db.connect() is conn

    def test_close(self, temp_db):
        temp_db.connect()
        temp_db.close()

        assert temp_db._connection is None

    def test_context_manager(self, temp_db_path):
        with DatabaseConnection(temp_db_path) as db:
            conn = db.connect()
            assert conn is not None

        assert db._connection is None

    def test_database_info(self, temp_db):
        SchemaManager(temp_db).provision()

        info = temp_db.get_database_info()

        assert info["database_exists"] is True
        assert "main.todos" in info["tables"]
        assert info["table_counts"]["main.todos"] == 0


class TestSchemaManager:
    """Test task table provisioning."""

    def test_setup_sql_defines_columns(self):
        columns = ["id", "title", "is_completed", "priority", "created_at", "sub_tasks"]
        for column in columns:
            assert column in SETUP_SQL
        assert "'low', 'medium', 'high'" in SETUP_SQL

    def test_setup_sql_uses_names(self):
        sql = build_setup_sql("tasks", "app")

        assert "CREATE TABLE IF NOT EXISTS app.tasks" in sql
        assert "CREATE SCHEMA IF NOT EXISTS app" in sql

    def test_not_provisioned_initially(self, temp_db):
        assert SchemaManager(temp_db).is_provisioned() is False

    def test_provision(self, temp_db):
        manager = SchemaManager(temp_db)

        manager.provision()

        assert manager.is_provisioned() is True

    def test_provision_is_idempotent(self, temp_db):
        manager = SchemaManager(temp_db)

        manager.provision()
        manager.provision()

        assert manager.is_provisioned() is True

    def test_custom_schema(self, temp_db):
        manager = SchemaManager(temp_db, "tasks", "app")

        manager.provision()

        assert manager.is_provisioned() is True
        assert SchemaManager(temp_db).is_provisioned() is False
