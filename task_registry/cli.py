#!/usr/bin/env python3
"""Task Registry CLI.

Command-line interface for the persistent task registry. Provides one command
per registry operation plus raw request dispatch and database setup.
"""

from datetime import datetime
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_settings
from .core.errors import DispatchError, TaskNotFoundError
from .database import Database
from .dispatcher import RequestDispatcher
from .logging_setup import setup_logging
from .schemas.unified_models import Absent, Stamped, TaskCore, TaskPayload
from .services.task_service import TaskService


# Initialize CLI and console
app = typer.Typer(help="Persistent task registry CLI")
console = Console()


class RegistryCLI:
    """CLI wiring: owns the database and the service for one invocation."""

    def __init__(self):
        """Initialize CLI without an open database."""
        self.database: Database | None = None
        self.service: TaskService | None = None

    def open(self, db_path: Path | None = None) -> None:
        """Open the database at ``db_path`` or the configured default."""
        self.close()
        settings = get_settings()
        if db_path is None:
            self.database = Database.from_settings(settings.database)
        else:
            self.database = Database.from_path(
                db_path,
                echo=settings.database.echo_sql,
                busy_timeout=settings.database.busy_timeout,
            )
        self.database.create_all()
        self.service = TaskService(self.database)

    def close(self) -> None:
        """Dispose the database if one is open."""
        if self.database is not None:
            self.database.dispose()
        self.database = None
        self.service = None

    def require_service(self) -> TaskService:
        if self.service is None:
            self.open()
        return self.service


# Global CLI instance
cli_instance = RegistryCLI()


def format_timestamp(value: int | Absent | Stamped) -> str:
    """Render nanosecond timestamps for display."""
    match value:
        case Absent():
            return "-"
        case Stamped(at=at):
            value = at
    return datetime.fromtimestamp(value / 1e9).isoformat(sep=" ", timespec="seconds")


def render_tasks(tasks: list[TaskCore], title: str) -> None:
    """Print tasks as a table."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    task_table = Table(title=title, show_header=True, header_style="bold magenta")
    task_table.add_column("ID", style="cyan", no_wrap=True)
    task_table.add_column("Title", style="white", max_width=40)
    task_table.add_column("Done", style="green")
    task_table.add_column("Created", style="yellow")
    task_table.add_column("Updated", style="blue")

    for task in tasks:
        title_text = task.title
        if len(title_text) > 37:
            title_text = title_text[:34] + "..."

        task_table.add_row(
            task.id,
            title_text,
            "yes" if task.completed else "no",
            format_timestamp(task.created_at),
            format_timestamp(task.updated_at),
        )

    console.print(task_table)


def render_task(task: TaskCore, heading: str) -> None:
    """Print one task as a panel."""
    console.print(
        Panel.fit(
            f"[bold blue]ID:[/bold blue] {task.id}\n"
            f"[bold blue]Title:[/bold blue] {task.title}\n"
            f"[bold blue]Description:[/bold blue] {task.description}\n"
            f"[bold blue]Completed:[/bold blue] {task.completed}\n"
            f"[bold blue]Created:[/bold blue] {format_timestamp(task.created_at)}\n"
            f"[bold blue]Updated:[/bold blue] {format_timestamp(task.updated_at)}",
            title=heading,
        )
    )


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[bold red]{message}[/bold red]")
    raise typer.Exit(code=1)


@app.command("list")
def list_tasks():
    """List all tasks."""
    render_tasks(cli_instance.require_service().get_tasks(), "Tasks")


@app.command("get")
def get_task(task_id: str = typer.Argument(..., help="ID of the task to show")):
    """Show a single task."""
    try:
        task = cli_instance.require_service().get_task(task_id)
    except TaskNotFoundError as e:
        fail(str(e))
    render_task(task, "Task")


@app.command("add")
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    completed: bool = typer.Option(
        False, "--completed", help="Create the task already completed"
    ),
):
    """Create a task."""
    payload = TaskPayload(title=title, description=description, completed=completed)
    task = cli_instance.require_service().add_task(payload)
    render_task(task, "Task added")


@app.command("update")
def update_task(
    task_id: str = typer.Argument(..., help="ID of the task to update"),
    title: str = typer.Argument(..., help="New title"),
    description: str = typer.Option(
        ..., "--description", "-d", help="New description (replaces the old one)"
    ),
    completed: bool | None = typer.Option(
        None, "--completed/--incomplete", help="New completion state (required)"
    ),
):
    """Replace a task's title, description and completion state.

    Every field is replaced, so the description and completion state must be
    given explicitly.
    """
    if completed is None:
        fail("Pass --completed or --incomplete")
    payload = TaskPayload(title=title, description=description, completed=completed)
    try:
        task = cli_instance.require_service().update_task(task_id, payload)
    except TaskNotFoundError as e:
        fail(str(e))
    render_task(task, "Task updated")


@app.command("complete")
def complete_task(task_id: str = typer.Argument(..., help="ID of the task")):
    """Mark a task completed."""
    try:
        task = cli_instance.require_service().complete_task(task_id)
    except TaskNotFoundError as e:
        fail(str(e))
    render_task(task, "Task completed")


@app.command("delete")
def delete_task(task_id: str = typer.Argument(..., help="ID of the task")):
    """Delete a task."""
    try:
        task = cli_instance.require_service().delete_task(task_id)
    except TaskNotFoundError as e:
        fail(str(e))
    render_task(task, "Task deleted")


@app.command("completed")
def list_completed():
    """List completed tasks."""
    render_tasks(cli_instance.require_service().list_completed_tasks(), "Completed")


@app.command("incomplete")
def list_incomplete():
    """List tasks that are not completed."""
    render_tasks(cli_instance.require_service().list_incomplete_tasks(), "Incomplete")


@app.command("count")
def count_tasks():
    """Show the number of tasks."""
    console.print(
        f"[bold]Total tasks:[/bold] {cli_instance.require_service().count_total_tasks()}"
    )


@app.command("archive")
def archive_completed():
    """Remove all completed tasks."""
    archived = cli_instance.require_service().archive_completed_tasks()
    console.print(f"[green]Archived {len(archived)} completed task(s)[/green]")
    if archived:
        render_tasks(archived, "Archived")


@app.command("clear")
def clear_tasks(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Remove all tasks."""
    if not yes and not typer.confirm("Delete every task?"):
        console.print("[yellow]Aborted[/yellow]")
        raise typer.Exit(code=1)
    message = cli_instance.require_service().clear_all_tasks()
    console.print(f"[green]{message}[/green]")


@app.command("call")
def call(
    operation: str = typer.Argument(..., help="Operation name, e.g. getTasks"),
    args: str = typer.Argument("[]", help="JSON array of arguments"),
):
    """Dispatch a raw request and print the JSON result envelope."""
    dispatcher = RequestDispatcher(cli_instance.require_service())
    try:
        response = dispatcher.dispatch_json(operation, args)
    except DispatchError as e:
        fail(str(e))
    typer.echo(response)


@app.command("init-db")
def init_db():
    """Create the database and verify it."""
    service = cli_instance.require_service()
    if not service.database.verify():
        fail("Database verification failed")
    console.print(f"[green]Database ready at {service.database.engine.url}[/green]")


@app.callback()
def main(
    ctx: typer.Context,
    db: Path | None = typer.Option(
        None, "--db", help="Database file (defaults to DATABASE_PATH)"
    ),
):
    """Persistent task registry.

    Create, inspect, update and archive tasks stored in a local database.
    """
    settings = get_settings()
    setup_logging(settings.logging, echo_sql=settings.database.echo_sql)
    cli_instance.open(db)
    ctx.call_on_close(cli_instance.close)


if __name__ == "__main__":
    app()
