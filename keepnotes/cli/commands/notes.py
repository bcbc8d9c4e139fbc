"""
Note Commands.

Create, view, and triage notes: the home, archive, and trash views.
"""

from typing import Optional

import typer
from rich.console import Console

from keepnotes.backend.schemas.note import NoteColor, NoteCreate, NoteStatus, NoteUpdate
from keepnotes.backend.services.note_state import NoteState
from keepnotes.cli.formatting import note_panel, notes_table, short_id
from keepnotes.cli.state import resolve_note, run_with_state

app = typer.Typer(help="Note commands")
console = Console()


@app.command("list")
def list_notes(
    search: str = typer.Option("", "--search", "-s", help="Only notes whose title or content contains this"),
) -> None:
    """
    Show active notes, pinned first.

    Examples:
        cli.py notes list
        cli.py notes list -s meeting
    """
    async def action(state: NoteState) -> None:
        matching = [
            note for note in state.search_notes(search)
            if note.status is NoteStatus.ACTIVE
        ]
        if not matching:
            message = "No notes match your search" if search.strip() else "Notes you add appear here"
            console.print(f"[dim]{message}[/dim]")
            return

        pinned, others = state.partition_pinned(matching)
        if pinned:
            console.print(notes_table("Pinned", pinned, show_reminder=True))
        if others:
            console.print(notes_table("Others" if pinned else "Notes", others, show_reminder=True))

    run_with_state(action)


@app.command()
def archived() -> None:
    """Show archived notes."""
    async def action(state: NoteState) -> None:
        notes = await state.get_notes_by_status(NoteStatus.ARCHIVED)
        if not notes:
            console.print("[dim]Your archived notes appear here[/dim]")
            return
        console.print(notes_table("Archive", notes))

    run_with_state(action)


@app.command()
def trash() -> None:
    """Show notes in the trash."""
    async def action(state: NoteState) -> None:
        notes = await state.get_notes_by_status(NoteStatus.DELETED)
        if not notes:
            console.print("[dim]No notes in Trash[/dim]")
            return
        console.print(notes_table("Trash", notes))
        console.print("[dim]Restore notes with 'notes restore' or remove them with 'notes purge'.[/dim]")

    run_with_state(action)


@app.command()
def show(note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Show one note in full."""
    async def action(state: NoteState) -> None:
        console.print(note_panel(resolve_note(state, note_id)))

    run_with_state(action)


@app.command()
def add(
    title: str = typer.Argument("", help="Note title"),
    content: str = typer.Option("", "--content", "-c", help="Note body"),
    color: NoteColor = typer.Option(NoteColor.YELLOW, "--color", help="Note colour"),
    source: Optional[str] = typer.Option(None, "--source", help="Where the note came from"),
    pin: bool = typer.Option(False, "--pin", help="Pin the note"),
    label: list[str] = typer.Option([], "--label", "-l", help="Label to attach (repeatable)"),
) -> None:
    """
    Create a note. Needs a title or content.

    Examples:
        cli.py notes add Groceries -c "milk, eggs" --color green
        cli.py notes add -c "call the bank" -l errands
    """
    if not title.strip() and not content.strip():
        console.print("[red]Error: A note needs a title or content[/red]")
        raise typer.Exit(1)

    data = NoteCreate(
        title=title.strip(),
        content=content.strip(),
        source=source,
        color=color,
        is_pinned=pin,
        labels=[item.strip() for item in label if item.strip()],
    )

    async def action(state: NoteState) -> None:
        note = await state.create(data)
        console.print(f"[green]Created note {short_id(note)}[/green]")

    run_with_state(action)


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New body"),
    source: Optional[str] = typer.Option(None, "--source", help="New source"),
) -> None:
    """Change the title, content, or source of a note."""
    changes = {
        key: value
        for key, value in {"title": title, "content": content, "source": source}.items()
        if value is not None
    }
    if not changes:
        console.print("[yellow]Nothing to change[/yellow]")
        raise typer.Exit(1)

    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        await state.update(note.id, NoteUpdate(**changes))
        console.print(f"[green]Updated note {short_id(note)}[/green]")

    run_with_state(action)


@app.command()
def pin(note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Pin a note, or unpin it if already pinned."""
    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        updated = await state.toggle_pin(note.id)
        verb = "Pinned" if updated and updated.is_pinned else "Unpinned"
        console.print(f"[green]{verb} note {short_id(note)}[/green]")

    run_with_state(action)


@app.command()
def color(
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    value: NoteColor = typer.Argument(..., help="New colour"),
) -> None:
    """Change the colour of a note."""
    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        await state.change_color(note.id, value)
        console.print(f"[green]Note {short_id(note)} is now {value.value}[/green]")

    run_with_state(action)


def _transition(note_id: str, method: str, done: str) -> None:
    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        await getattr(state, method)(note.id)
        console.print(f"[green]{done} note {short_id(note)}[/green]")

    run_with_state(action)


@app.command()
def archive(note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Move a note to the archive."""
    _transition(note_id, "archive", "Archived")


@app.command()
def unarchive(note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Bring a note back from the archive."""
    _transition(note_id, "unarchive", "Unarchived")


@app.command()
def delete(note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Move a note to the trash."""
    _transition(note_id, "soft_delete", "Trashed")


@app.command()
def restore(note_id: str = typer.Argument(..., help="Note id or id prefix")) -> None:
    """Restore a note from the trash."""
    _transition(note_id, "restore", "Restored")


@app.command()
def purge(
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a note forever. This cannot be undone."""
    if not yes:
        typer.confirm("Delete this note forever?", abort=True)
    _transition(note_id, "permanent_delete", "Deleted")


@app.command("empty-trash")
def empty_trash(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every note in the trash forever."""
    if not yes:
        typer.confirm("Delete all notes in the trash forever?", abort=True)

    async def action(state: NoteState) -> None:
        count = await state.empty_trash()
        console.print(f"[green]Deleted {count} note{'' if count == 1 else 's'}[/green]")

    run_with_state(action)
