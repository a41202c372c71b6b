"""
Field Operations CLI.

Command-line interface for common operations.
"""

import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="field-ops",
    help="Field Operations back-office CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_create():
    """Create all tables that do not exist yet."""
    from shared.infrastructure.db import engine
    from rest_api.models import Base

    console.print("[blue]Creating tables...[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ {len(Base.metadata.tables)} tables created/verified[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding production"),
):
    """Seed database with the demo fields."""
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context
    from rest_api.seed import seed_fields

    console.print(f"[blue]Seeding database for: {settings.environment}[/blue]")

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    try:
        with get_db_context() as db:
            created = seed_fields(db)
            rows = [(f.id, f.abbreviation, f.designation) for f in created]
    except Exception as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(1)

    if not rows:
        console.print("[yellow]Fields already seeded[/yellow]")
        return

    table = Table(title="Seeded fields")
    table.add_column("ID", style="cyan")
    table.add_column("Abbreviation", style="green")
    table.add_column("Designation")
    for row in rows:
        table.add_row(*row)
    console.print(table)


@app.command()
def logs_purge(
    months: int = typer.Option(
        None, "--months", "-m", min=1, help="Retention in months (default: LOG_RETENTION_MONTHS)"
    ),
):
    """Delete request log rows older than the retention window. Meant for a daily cron."""
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context
    from rest_api.services.domain import LogService

    months = months or settings.log_retention_months
    console.print(f"[blue]Purging request logs older than {months} month(s)...[/blue]")

    try:
        with get_db_context() as db:
            count = LogService(db).purge_older_than(months)
    except Exception as e:
        console.print(f"[red]✗ Purge failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ {count} log row(s) removed[/green]")


# =============================================================================
# Resource Commands
# =============================================================================

@app.command()
def resources():
    """List the resource types served under /api."""
    from rest_api.services.crud.registry import RESOURCES

    table = Table(title="Registered resources")
    table.add_column("Key", style="cyan")
    table.add_column("Table")
    table.add_column("Name")
    table.add_column("Field scoped", justify="center")
    table.add_column("WEB_MASTER only", justify="center")
    table.add_column("Search keys")

    for config in RESOURCES.values():
        table.add_row(
            config.key,
            config.model.__tablename__,
            f"{config.singular} / {config.plural}",
            "✓" if config.field_scoped else "-",
            "✓" if config.web_master_only else "-",
            ", ".join(config.search_keys),
        )

    console.print(table)


# =============================================================================
# Auth Commands
# =============================================================================

@app.command()
def issue_token(
    subject: str = typer.Argument(..., help="Principal id (sub claim)"),
    role: str = typer.Option("VOLUNTEER", "--role", "-r", help="VOLUNTEER, ADMIN or WEB_MASTER"),
    field_id: str = typer.Option(None, "--field", help="Field id (required unless WEB_MASTER)"),
    restricted: bool = typer.Option(False, "--restricted", help="Read-only principal"),
    ttl: int = typer.Option(3600, "--ttl", help="Lifetime in seconds"),
):
    """Issue a development bearer token."""
    from shared.config.constants import Role
    from shared.config.settings import settings
    from shared.security.auth import sign_jwt

    if settings.environment == "production":
        console.print("[red]Token issuance is disabled in production[/red]")
        raise typer.Exit(1)

    try:
        role_value = Role(role.upper())
    except ValueError:
        console.print(f"[red]Unknown role: {role}[/red]")
        raise typer.Exit(1)

    if role_value != Role.WEB_MASTER and not field_id:
        console.print("[red]--field is required unless role is WEB_MASTER[/red]")
        raise typer.Exit(1)

    claims = {"sub": subject, "role": role_value.value, "restricted": restricted}
    if field_id:
        claims["field_id"] = field_id

    console.print(sign_jwt(claims, ttl_seconds=ttl))


# =============================================================================
# Diagnostics
# =============================================================================

@app.command()
def health():
    """Check database connectivity."""
    import time

    from sqlalchemy import text

    from shared.infrastructure.db import get_db_context

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status")
    table.add_column("Latency")

    try:
        start = time.time()
        with get_db_context() as db:
            db.execute(text("SELECT 1"))
        elapsed = (time.time() - start) * 1000
        table.add_row("Database", "✓ Healthy", f"{elapsed:.0f}ms")
    except Exception as e:
        table.add_row("Database", f"✗ {type(e).__name__}", "-")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Field Operations Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
