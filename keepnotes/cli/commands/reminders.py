"""
Reminder Commands.

Set, clear, and review note reminders.
"""

from datetime import datetime

import typer
from rich.console import Console

from keepnotes.backend.services.note_state import NoteState
from keepnotes.cli.formatting import describe_reminder, notes_table, short_id
from keepnotes.cli.state import resolve_note, run_with_state

app = typer.Typer(help="Reminder commands")
console = Console()


def parse_when(value: str) -> datetime:
    """
    Parse an ISO 8601 date or datetime.

    Values without an offset are read as local time.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"'{value}' is not an ISO 8601 date or datetime")
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


@app.command("list")
def list_reminders() -> None:
    """Show active notes with reminders, soonest first."""
    async def action(state: NoteState) -> None:
        notes = await state.get_notes_with_reminders()
        if not notes:
            console.print("[dim]No reminders yet[/dim]")
            return
        console.print(notes_table("Reminders", notes, show_reminder=True))

    run_with_state(action)


@app.command("set")
def set_reminder(
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    when: str = typer.Argument(..., help="ISO 8601 date or datetime, e.g. 2026-12-24T09:00"),
) -> None:
    """Set or move the reminder on a note."""
    due = parse_when(when)

    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        await state.set_reminder(note.id, due)
        console.print(f"[green]Reminder for note {short_id(note)}: {describe_reminder(due)}[/green]")

    run_with_state(action)


@app.command()
def clear(note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Remove the reminder from a note."""
    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        await state.remove_reminder(note.id)
        console.print(f"[green]Cleared reminder on note {short_id(note)}[/green]")

    run_with_state(action)
