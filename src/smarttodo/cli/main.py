"""Main CLI application entry point."""

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .. import __version__
from ..ai.analysis import AnalysisClient
from ..core.config import get_app_config
from ..core.controller import TaskController
from ..core.logging_setup import setup_logging
from ..core.state import ViewMode
from ..db.connection import DatabaseConnection
from ..db.repository import TaskRepository
from ..db.schema import SchemaManager
from ..errors import StoreError
from ..models import Priority, TaskRecord

console = Console()
app = typer.Typer(
    name="smarttodo",
    help="Task list with AI-suggested priorities and sub-tasks",
    add_completion=False,
    no_args_is_help=True,
)

# Initialize services
config = get_app_config()
db = DatabaseConnection(config.database.database_path)
store = TaskRepository(db, config.database.table_name, config.database.schema_name)
schema_manager = SchemaManager(
    db, config.database.table_name, config.database.schema_name
)
analysis_client = AnalysisClient(config)
controller = TaskController(store, analysis_client)

PRIORITY_STYLES = {
    Priority.LOW: "bold blue",
    Priority.MEDIUM: "bold yellow",
    Priority.HIGH: "bold red",
}


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    setup_logging("DEBUG" if debug or config.debug else config.log_level)


def _print_setup_required() -> None:
    """Explain how to provision the task table."""
    console.print(
        Panel(
            f"The [bold]{store.qualified_name}[/bold] table does not exist.\n\n"
            "1. Run [cyan]smarttodo setup[/cyan] to create it, or\n"
            "2. Run the SQL below against the database yourself, then retry.",
            title="⚠ Database setup required",
            border_style="yellow",
        )
    )
    console.print(Syntax(schema_manager.setup_sql, "sql", theme="monokai"))


def _load_tasks() -> None:
    """Fetch tasks, exiting with a message if the list cannot be shown."""
    asyncio.run(controller.fetch())

    if controller.state.mode == ViewMode.SETUP_REQUIRED:
        _print_setup_required()
        raise typer.Exit(1)
    if controller.state.mode == ViewMode.ERROR:
        console.print(f"[red]✗ {escape(controller.state.error or '')}[/red]")
        console.print("[dim]Run the command again to retry[/dim]")
        raise typer.Exit(1)


def _resolve_task_id(task_id: str) -> str:
    """Match a full ID or a unique ID prefix against the loaded tasks."""
    matches = [
        task.id for task in controller.state.tasks if task.id.startswith(task_id)
    ]
    if task_id in matches:
        return task_id
    if len(matches) == 1:
        return matches[0]

    if not matches:
        console.print(f"[red]✗ No task matches ID '{task_id}'[/red]")
    else:
        console.print(
            f"[red]✗ ID prefix '{task_id}' matches {len(matches)} tasks[/red]"
        )
    raise typer.Exit(1)


def _format_priority(priority: Priority) -> str:
    style = PRIORITY_STYLES.get(priority, "white")
    return f"[{style}]{priority.value.upper()}[/{style}]"


def _print_stats() -> None:
    stats = controller.stats
    console.print(
        f"[bold]{stats.total}[/bold] total  "
        f"[bold cyan]{stats.pending}[/bold cyan] pending  "
        f"[bold green]{stats.completed}[/bold green] completed"
    )


def _print_sub_tasks(task: TaskRecord) -> None:
    for step in task.sub_tasks:
        console.print(f"   [dim]•[/dim] {escape(step)}")


@app.command("version")
def version() -> None:
    """Show application version."""
    console.print(f"smarttodo version {__version__}")


@app.command("list")
@app.command("ls")
def list_tasks(
    steps: bool = typer.Option(False, "--steps", "-s", help="Show sub-tasks"),
) -> None:
    """List tasks, newest first."""
    _load_tasks()

    _print_stats()

    if not controller.state.tasks:
        console.print(
            "[yellow]No tasks yet.[/yellow] "
            "[dim]Add one with 'smarttodo add \"<task>\"'[/dim]"
        )
        return

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("", justify="center")
    table.add_column("Task", style="white")
    table.add_column("Priority", justify="center")
    table.add_column("Steps", justify="right")
    table.add_column("Created", style="dim")

    for task in controller.state.tasks:
        title = (
            f"[strike dim]{escape(task.title)}[/strike dim]"
            if task.is_completed
            else escape(task.title)
        )
        if steps and task.sub_tasks:
            title += "".join(
                f"\n  [dim]• {escape(step)}[/dim]" for step in task.sub_tasks
            )
        table.add_row(
            task.id[:8],
            "[green]✓[/green]" if task.is_completed else "○",
            title,
            _format_priority(task.priority),
            str(len(task.sub_tasks)) if task.sub_tasks else "-",
            task.created_at.strftime("%Y-%m-%d"),
        )

    console.print(table)


@app.command("add")
def add_task(task: str) -> None:
    """Add a task; AI suggests its priority and sub-tasks."""
    if not task or not task.strip():
        console.print("[red]✗ Task title cannot be empty[/red]")
        raise typer.Exit(1)

    _load_tasks()

    with console.status("[blue]🤖 AI analyzing task...[/blue]"):
        record = asyncio.run(controller.add_task(task))

    if record is None:
        console.print(f"[red]✗ {escape(controller.state.error or '')}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]✓ Added task:[/green] {escape(record.title)} "
        f"{_format_priority(record.priority)}"
    )
    console.print(f"[dim]Task ID: {record.id}[/dim]")
    _print_sub_tasks(record)


@app.command("done")
@app.command("toggle")
def toggle_task(task_id: str) -> None:
    """Toggle a task between pending and completed."""
    _load_tasks()
    resolved = _resolve_task_id(task_id)

    if not asyncio.run(controller.toggle(resolved)):
        console.print("[red]✗ Could not update task[/red]")
        raise typer.Exit(1)

    task = controller.state.find(resolved)
    state = "completed" if task and task.is_completed else "pending"
    title = escape(task.title) if task else resolved
    console.print(f"[green]✓ Marked as {state}:[/green] {title}")


@app.command("delete")
@app.command("rm")
def delete_task(task_id: str) -> None:
    """Delete a task."""
    _load_tasks()
    resolved = _resolve_task_id(task_id)
    task = controller.state.find(resolved)

    if not asyncio.run(controller.delete(resolved)):
        console.print("[red]✗ Could not delete task[/red]")
        raise typer.Exit(1)

    title = escape(task.title) if task else resolved
    console.print(f"[green]✓ Deleted:[/green] {title}")


@app.command("clear")
def clear_completed() -> None:
    """Delete all completed tasks."""
    _load_tasks()

    if controller.stats.completed == 0:
        console.print("[yellow]No completed tasks to clear[/yellow]")
        return

    removed = asyncio.run(controller.clear_completed())
    if not removed:
        console.print("[red]✗ Could not clear completed tasks[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Cleared {removed} completed task(s)[/green]")


@app.command("setup")
def setup_database(
    sql: bool = typer.Option(False, "--sql", help="Only print the setup SQL"),
) -> None:
    """Create the task table."""
    if sql:
        console.print(schema_manager.setup_sql, markup=False, highlight=False)
        return

    if schema_manager.is_provisioned():
        console.print(f"[green]✓ {store.qualified_name} already exists[/green]")
        return

    try:
        schema_manager.provision()
    except StoreError as e:
        console.print(f"[red]✗ Setup failed: {escape(e.message)}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Created {store.qualified_name}[/green]")


@app.command("providers")
def show_providers() -> None:
    """Show configured AI providers and whether they respond."""
    manager = analysis_client.provider_manager
    if not manager.providers:
        console.print("[yellow]No AI providers configured[/yellow]")
        console.print(
            "[dim]Set OPENAI_API_KEY or ANTHROPIC_API_KEY; "
            "tasks are added with medium priority until then[/dim]"
        )
        return

    results = asyncio.run(manager.check_providers())

    table = Table(title="🤖 AI Providers", show_header=True, header_style="bold blue")
    table.add_column("Provider", style="cyan")
    table.add_column("Model", style="white")
    table.add_column("Default", justify="center")
    table.add_column("Status", justify="center")

    for kind, provider in manager.providers.items():
        table.add_row(
            kind.value,
            provider.model_name,
            "✓" if kind == config.ai.default_provider else "",
            "[green]available[/green]"
            if results.get(kind)
            else "[red]unavailable[/red]",
        )

    console.print(table)


@app.command("db")
def database_info() -> None:
    """Show database information."""
    info = db.get_database_info()

    table = Table(title="📊 Database", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Path", info["database_path"])
    table.add_row("Size", f"{info['database_size_bytes']:,} bytes")
    provisioned = schema_manager.is_provisioned()
    table.add_row("Task table", "present" if provisioned else "missing")
    for name, count in info["table_counts"].items():
        table.add_row(name, str(count))

    console.print(table)


if __name__ == "__main__":
    app()
