"""
Database Commands.

Commands for setting up and inspecting the note store.
"""

import asyncio

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from keepnotes.backend.core.config import get_app_config, get_database_url
from keepnotes.backend.core.database import close_database, init_models

app = typer.Typer(help="Note store commands")
console = Console()


def _masked_url() -> str:
    """Database URL with any password hidden."""
    return make_url(get_database_url()).render_as_string(hide_password=True)


@app.command()
def init() -> None:
    """
    Create the note tables if they do not exist.

    Examples:
        cli.py db init
    """
    async def _init() -> None:
        try:
            await init_models()
        finally:
            await close_database()

    try:
        asyncio.run(_init())
    except SQLAlchemyError as e:
        console.print(f"[red]Error: Cannot create tables: {e}[/red]")
        raise typer.Exit(1)

    console.print("[green]Note store ready[/green]")


@app.command()
def info() -> None:
    """Show the configured note store."""
    db = get_app_config().database

    table = Table(title="Note Store", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Driver", db.driver)
    table.add_row("URL", _masked_url())
    table.add_row("Echo SQL", str(db.echo))
    console.print(table)
