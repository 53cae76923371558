"""
Command-line interface for Nepal Guide Connect.
Database management, admin accounts and a statistics summary with Rich output.
"""

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from guideconnect import __app_name__, __version__
from guideconnect.config import settings
from guideconnect.database import check_db_connection, get_async_session_context

# Create Typer app
app = typer.Typer(
    name="guideconnect",
    help="Nepal Guide Connect - travel bookings and admin dashboard",
    add_completion=False,
)

# Create sub-commands
db_app = typer.Typer(help="Database management")
user_app = typer.Typer(help="Manage accounts")

app.add_typer(db_app, name="db")
app.add_typer(user_app, name="user")

console = Console()
logger = logging.getLogger(__name__)


# ============================================================================
# Utility Functions
# ============================================================================

def handle_error(e: Exception, message: str = "An error occurred"):
    """Handle errors with nice formatting."""
    console.print(f"\n[bold red]✗ {message}[/bold red]")
    console.print(f"[red]{type(e).__name__}: {str(e)}[/red]\n")
    if settings.debug:
        console.print_exception()
    raise typer.Exit(code=1)


def success(message: str):
    console.print(f"[bold green]✓ {message}[/bold green]")


def info(message: str):
    console.print(f"[blue]{message}[/blue]")


def warning(message: str):
    console.print(f"[yellow]⚠ {message}[/yellow]")


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(Panel(
            f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]",
            title="Nepal Guide Connect",
            border_style="blue",
        ))
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    Nepal Guide Connect CLI.

    Use 'guideconnect COMMAND --help' for command-specific help.
    """


@app.command("version")
def version_command():
    """Show version information."""
    console.print(f"{__app_name__} {__version__} ({settings.environment})")


# ============================================================================
# DB Commands
# ============================================================================

@db_app.command("init")
def db_init():
    """
    Initialize database (create all tables).

    In production, use Alembic migrations instead.
    """
    try:
        asyncio.run(_db_init())
    except Exception as e:
        handle_error(e, "Database initialization failed")


async def _db_init():
    from guideconnect.database import init_db

    with console.status("[bold yellow]Creating database tables..."):
        await init_db()

    success("Database initialized successfully")
    info("Use 'guideconnect db seed' to populate with sample data")


@db_app.command("seed")
def db_seed():
    """Seed database with sample destinations, guides and bookings."""
    console.print(Panel(
        "[bold]Database Seeding[/bold]\n\n"
        "This will add sample destinations, guides and bookings.",
        border_style="blue",
    ))

    try:
        asyncio.run(_db_seed())
    except Exception as e:
        handle_error(e, "Database seeding failed")


async def _db_seed():
    from guideconnect.utils.seed_data import seed_all

    with console.status("[bold yellow]Seeding database..."):
        async with get_async_session_context() as db:
            await seed_all(db)

    success("Database seeded successfully")


@db_app.command("reset")
def db_reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """
    Reset database (drop all tables and recreate).

    WARNING: This will delete ALL data!
    """
    console.print(Panel(
        "[bold red]⚠ DANGER ZONE ⚠[/bold red]\n\n"
        "This will DELETE ALL DATA and recreate tables.\n"
        "This action cannot be undone!",
        border_style="red",
    ))

    if not yes and not typer.confirm("Are you absolutely sure?"):
        warning("Operation cancelled")
        raise typer.Exit()

    try:
        asyncio.run(_db_reset())
    except Exception as e:
        handle_error(e, "Database reset failed")


async def _db_reset():
    from guideconnect.database import drop_db, init_db

    with console.status("[bold red]Dropping all tables..."):
        await drop_db()
    info("All tables dropped")

    with console.status("[bold yellow]Creating tables..."):
        await init_db()

    success("Database reset complete")


# ============================================================================
# User Commands
# ============================================================================

@user_app.command("create-admin")
def create_admin(
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    name: str = typer.Option("Administrator", help="Display name"),
):
    """Create the administrator account (ADMIN_EMAIL)."""
    try:
        asyncio.run(_create_user(name, settings.admin_email, password))
    except Exception as e:
        handle_error(e, "Could not create administrator")


async def _create_user(name: str, email: str, password: str):
    from guideconnect.services.user_service import UserService

    async with get_async_session_context() as db:
        user = await UserService.register(db, name=name, email=email, password=password, notify=False)

    success(f"Account created: {user.email}")


# ============================================================================
# Stats / Health
# ============================================================================

@app.command()
def stats():
    """Print the dashboard overview."""
    try:
        asyncio.run(_stats())
    except Exception as e:
        handle_error(e, "Could not compute statistics")


async def _stats():
    from guideconnect.services.statistics_service import get_dashboard_stats

    async with get_async_session_context() as db:
        overview = await get_dashboard_stats(db)

    table = Table(title="Dashboard overview", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Growth", justify="right")

    table.add_row("Bookings", str(overview.bookings.total), f"{overview.bookings.growth:+.1f}%")
    table.add_row("  pending", str(overview.bookings.pending), "")
    table.add_row("  confirmed", str(overview.bookings.confirmed), "")
    table.add_row("  completed", str(overview.bookings.completed), "")
    table.add_row("  cancelled", str(overview.bookings.cancelled), "")
    table.add_row("Revenue", f"{overview.revenue.total:,.2f}", f"{overview.revenue.growth:+.1f}%")
    table.add_row("Customers", str(overview.customers.total), f"{overview.customers.growth:+.1f}%")
    table.add_row("Travelers", str(overview.travelers.total), f"{overview.travelers.growth:+.1f}%")
    table.add_row("Destinations", str(overview.destinations.total), "")
    table.add_row("Active guides", f"{overview.guides.active}/{overview.guides.total}", "")

    console.print(table)

    if overview.charts.top_destinations:
        top = Table(title="Top destinations", header_style="bold magenta")
        top.add_column("Destination", style="cyan")
        top.add_column("Location")
        top.add_column("Bookings", justify="right")
        for item in overview.charts.top_destinations:
            top.add_row(item.name, item.location, str(item.booking_count))
        console.print(top)


@app.command()
def health():
    """Check application health status."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Details", style="white")

    db_status = asyncio.run(check_db_connection())
    table.add_row(
        "Database",
        "[green]✓ Healthy[/green]" if db_status else "[red]✗ Unhealthy[/red]",
        settings.database_url.split("://", 1)[0],
    )
    table.add_row("Configuration", "[green]✓ Loaded[/green]", f"Environment: {settings.environment}")
    table.add_row(
        "Redis cache",
        "[green]✓[/green]" if settings.redis_url else "[yellow]✗[/yellow]",
        "Statistics cache",
    )
    table.add_row(
        "Brave Search",
        "[green]✓[/green]" if settings.brave_search_api_key else "[yellow]✗[/yellow]",
        "Web search proxy",
    )

    console.print(table)

    if not db_status:
        console.print("[red]⚠ Database connection failed[/red]\n")
        raise typer.Exit(code=1)

    success("All systems operational")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the web application with uvicorn."""
    import uvicorn

    uvicorn.run("guideconnect.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
