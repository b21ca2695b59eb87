"""CLI commands for the tutoring center API.

Commands:
- serve: Run the Web API with uvicorn
- init-db: Create the database schema
- seed: Insert sample users, students, a tutor and sessions
- tables: List tables in the configured database
- students: Print the students list
"""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from tutorcenter.config.app_config import load_app_config
from tutorcenter.core.views import attendance_level, student_row
from tutorcenter.db import repository
from tutorcenter.db.database import get_db, init_db, list_table_names
from tutorcenter.db.seed import seed_database

app = typer.Typer(
    name="tutorcenter",
    help="Administrative backend for a tutoring center.",
    no_args_is_help=True,
)

console = Console()

_ATTENDANCE_STYLE = {"high": "green", "medium": "yellow", "low": "red"}


def _init_configured_db(database_url: str | None) -> str:
    """Initialize the database from --database-url or config, or exit."""
    config = load_app_config()
    url = database_url or config.database.url
    try:
        init_db(url, echo=config.database.echo)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Could not open database: {e}[/red]")
        raise typer.Exit(code=1)
    return url


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the Web API."""
    config = load_app_config()
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    console.print(f"[green]Backend server running on http://{bind_host}:{bind_port}[/green]")
    console.print(f"  [dim]database:[/dim] {config.database.url}")

    uvicorn.run(
        "tutorcenter.web.api:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
    )


@app.command(name="init-db")
def init_db_command(
    database_url: str | None = typer.Option(None, "--database-url", help="SQLAlchemy URL"),
) -> None:
    """Create all tables if they don't exist."""
    url = _init_configured_db(database_url)
    console.print(f"[green]✓ Database initialized[/green] [dim]{url}[/dim]")


@app.command()
def seed(
    database_url: str | None = typer.Option(None, "--database-url", help="SQLAlchemy URL"),
) -> None:
    """Insert sample data. Safe to run more than once."""
    _init_configured_db(database_url)

    console.print("Start seeding...")
    try:
        with get_db() as db:
            result = seed_database(db)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✓ Seeding finished.[/green]")
    console.print(f"  [dim]users:[/dim]    {result.users_created}")
    console.print(f"  [dim]students:[/dim] {result.students_created}")
    console.print(f"  [dim]tutors:[/dim]   {result.tutors_created}")
    console.print(f"  [dim]sessions:[/dim] {result.sessions_created}")


@app.command()
def tables(
    database_url: str | None = typer.Option(None, "--database-url", help="SQLAlchemy URL"),
) -> None:
    """List tables in the database."""
    _init_configured_db(database_url)
    for name in list_table_names():
        console.print(f"  - {name}")


@app.command(name="students")
def list_students(
    database_url: str | None = typer.Option(None, "--database-url", help="SQLAlchemy URL"),
) -> None:
    """Print all students with grade, attendance and session count."""
    _init_configured_db(database_url)

    with get_db() as db:
        rows = [student_row(s) for s in repository.list_students(db)]

    if not rows:
        console.print("[yellow]No students found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Grade")
    table.add_column("Attendance %", justify="right")
    table.add_column("Sessions", justify="right")

    for row in rows:
        style = _ATTENDANCE_STYLE[attendance_level(row.attendance)]
        table.add_row(
            row.name,
            row.grade,
            f"[{style}]{row.attendance:g}%[/{style}]",
            str(row.sessions),
        )

    console.print(table)


if __name__ == "__main__":
    app()
