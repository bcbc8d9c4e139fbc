"""
Label Commands.

Attach, detach, rename, and delete labels.
"""

import typer
from rich.console import Console
from rich.table import Table

from keepnotes.backend.services.note_state import NoteState
from keepnotes.cli.formatting import short_id
from keepnotes.cli.state import resolve_note, run_with_state

app = typer.Typer(help="Label commands")
console = Console()


def _clean(label: str) -> str:
    cleaned = label.strip()
    if not cleaned:
        console.print("[red]Error: Label cannot be empty[/red]")
        raise typer.Exit(1)
    return cleaned


@app.command("list")
def list_labels() -> None:
    """Show every label in use and how many notes carry it."""
    async def action(state: NoteState) -> None:
        labels = await state.get_all_labels()
        if not labels:
            console.print("[dim]No labels yet[/dim]")
            return

        table = Table(title="Labels", show_header=True)
        table.add_column("Label", style="cyan")
        table.add_column("Notes", justify="right")
        for label in labels:
            count = sum(1 for note in state.notes if label in note.labels)
            table.add_row(label, str(count))
        console.print(table)

    run_with_state(action)


@app.command()
def add(
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    label: str = typer.Argument(..., help="Label to attach"),
) -> None:
    """Attach a label to a note."""
    label = _clean(label)

    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        await state.add_label(note.id, label)
        console.print(f"[green]Labelled note {short_id(note)} '{label}'[/green]")

    run_with_state(action)


@app.command()
def remove(
    note_id: str = typer.Argument(..., help="Note id or id prefix"),
    label: str = typer.Argument(..., help="Label to detach"),
) -> None:
    """Detach a label from a note."""
    label = _clean(label)

    async def action(state: NoteState) -> None:
        note = resolve_note(state, note_id)
        await state.remove_label(note.id, label)
        console.print(f"[green]Removed '{label}' from note {short_id(note)}[/green]")

    run_with_state(action)


@app.command()
def rename(
    old: str = typer.Argument(..., help="Current label"),
    new: str = typer.Argument(..., help="New label"),
) -> None:
    """Rename a label on every note."""
    old, new = _clean(old), _clean(new)

    async def action(state: NoteState) -> None:
        changed = await state.rename_label(old, new)
        console.print(f"[green]Renamed '{old}' to '{new}' on {len(changed)} note(s)[/green]")

    run_with_state(action)


@app.command()
def delete(label: str = typer.Argument(..., help="Label to delete")) -> None:
    """Remove a label from every note."""
    label = _clean(label)

    async def action(state: NoteState) -> None:
        changed = await state.delete_label(label)
        console.print(f"[green]Removed '{label}' from {len(changed)} note(s)[/green]")

    run_with_state(action)
