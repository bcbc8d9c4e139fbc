"""
CLI Client Module.

Command-line client built with Typer for working with notes.

Architecture:
- CLI is a thin presentation layer
- Every command loads a NoteState and goes through it
- Only the note service touches the store

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py reminders list
"""
