"""
CLI Commands.

Organized by domain/feature area.
"""

from keepnotes.cli.commands.db import app as db_app
from keepnotes.cli.commands.labels import app as labels_app
from keepnotes.cli.commands.notes import app as notes_app
from keepnotes.cli.commands.reminders import app as reminders_app

__all__ = [
    "db_app",
    "labels_app",
    "notes_app",
    "reminders_app",
]
