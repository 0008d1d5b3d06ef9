"""End-to-end CLI workflow against an isolated database."""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from smarttodo.ai.analysis import AnalysisClient
from smarttodo.cli.main import app
from smarttodo.core.config import AIConfig, AppConfig
from smarttodo.core.controller import TaskController
from smarttodo.db.connection import DatabaseConnection
from smarttodo.db.repository import TaskRepository
from smarttodo.db.schema import SchemaManager
from smarttodo.models import Priority


@pytest.fixture
def e2e_temp_dir():
    """Create a temporary directory for E2E test."""
    temp_dir = tempfile.mkdtemp(prefix="smarttodo_e2e_")
    yield Path(temp_dir)

    # Cleanup
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def e2e_services(e2e_temp_dir):
    """Wire the CLI to an isolated database with AI analysis switched off."""
    db = DatabaseConnection(str(e2e_temp_dir / "e2e_test.db"))
    config = AppConfig(ai=AIConfig(enable_analysis=False))
    repo = TaskRepository(db)
    analysis_client = AnalysisClient(config)

    with (
        patch("smarttodo.cli.main.setup_logging"),
        patch("smarttodo.cli.main.db", db),
        patch("smarttodo.cli.main.store", repo),
        patch("smarttodo.cli.main.schema_manager", SchemaManager(db)),
        patch("smarttodo.cli.main.analysis_client", analysis_client),
        patch(
            "smarttodo.cli.main.controller", TaskController(repo, analysis_client)
        ),
    ):
        yield repo

    db.close()


class TestWorkflowE2E:
    """Run a full session through the CLI."""

    def test_full_session(self, e2e_services):
        runner = CliRunner()
        repo = e2e_services

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "setup required" in result.stdout

        assert runner.invoke(app, ["setup"]).exit_code == 0

        for title in ["Renew passport", "Call the dentist", "Plan trip to Jeju"]:
            result = runner.invoke(app, ["add", title])
            assert result.exit_code == 0, result.stdout

        tasks = repo.list_all()
        assert [t.title for t in tasks] == [
            "Plan trip to Jeju",
            "Call the dentist",
            "Renew passport",
        ]
        assert all(t.priority == Priority.MEDIUM for t in tasks)
        assert all(t.sub_tasks == [] for t in tasks)

        assert runner.invoke(app, ["done", tasks[1].id[:8]]).exit_code == 0
        assert runner.invoke(app, ["done", tasks[2].id[:8]]).exit_code == 0

        result = runner.invoke(app, ["list"])
        assert "3 total" in result.stdout
        assert "1 pending" in result.stdout
        assert "2 completed" in result.stdout

        result = runner.invoke(app, ["clear"])
        assert "Cleared 2 completed task" in result.stdout

        result = runner.invoke(app, ["delete", tasks[0].id])
        assert result.exit_code == 0

        result = runner.invoke(app, ["list"])
        assert "0 total" in result.stdout
        assert repo.list_all() == []
