#!/usr/bin/env python3
"""
Keepnotes CLI.

Command-line client for creating and triaging notes.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                              # Show help

    # Notes
    python cli.py notes list                          # Active notes, pinned first
    python cli.py notes list --search meeting         # Search title and content
    python cli.py notes add Groceries -c "milk, eggs" --color green
    python cli.py notes pin 3f2a                      # Toggle pin (id prefix is enough)
    python cli.py notes archive 3f2a                  # Move to archive
    python cli.py notes delete 3f2a                   # Move to trash
    python cli.py notes restore 3f2a                  # Back from trash
    python cli.py notes purge 3f2a                    # Delete forever
    python cli.py notes archived                      # Archive view
    python cli.py notes trash                         # Trash view

    # Labels
    python cli.py labels list
    python cli.py labels add 3f2a work
    python cli.py labels rename work office

    # Reminders
    python cli.py reminders list
    python cli.py reminders set 3f2a 2026-12-24T09:00
    python cli.py reminders clear 3f2a

    # Note store
    python cli.py db init
    python cli.py db info

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from keepnotes.backend.core.config import find_project_root
from keepnotes.backend.core.logging import setup_logging
from keepnotes.cli.commands import db_app, labels_app, notes_app, reminders_app

# Create main app
app = typer.Typer(
    name="keepnotes",
    help="Keepnotes CLI - pin, colour, label, archive, and remind yourself of short notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(notes_app, name="notes")
app.add_typer(labels_app, name="labels")
app.add_typer(reminders_app, name="reminders")
app.add_typer(db_app, name="db")


def _validate_project_root() -> None:
    """Validate that we're running inside the project."""
    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Keepnotes CLI.

    Notes, labels, reminders, and note store setup.
    Built with Typer for type-safe commands and Rich for formatted output.
    """
    _validate_project_root()

    # Configure logging based on flags
    if debug:
        setup_logging(level="DEBUG", format_type="console", enable_console=True)
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console", enable_console=True)
    else:
        setup_logging()


if __name__ == "__main__":
    app()
