"""
Output Formatting.

Rich tables and short human-readable descriptions for notes.
"""

import math
from datetime import datetime

from rich.panel import Panel
from rich.table import Table

from keepnotes.backend.core.utils import aware_utc_now
from keepnotes.backend.schemas.note import Note, NoteColor

COLOR_STYLES = {
    NoteColor.YELLOW: "yellow",
    NoteColor.PINK: "pink1",
    NoteColor.BLUE: "blue",
    NoteColor.GREEN: "green",
    NoteColor.ORANGE: "dark_orange",
    NoteColor.PURPLE: "purple",
}

PREVIEW_LENGTH = 60
SHORT_ID_LENGTH = 8
SECONDS_PER_DAY = 24 * 60 * 60


def short_id(note: Note) -> str:
    return note.id[:SHORT_ID_LENGTH]


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """First line of text, cut to length."""
    first_line = text.strip().splitlines()[0] if text.strip() else ""
    if len(first_line) <= length:
        return first_line
    return first_line[: length - 1] + "…"


def is_overdue(when: datetime, now: datetime | None = None) -> bool:
    return when < (now or aware_utc_now())


def describe_reminder(when: datetime, now: datetime | None = None) -> str:
    """
    Describe when a reminder is due relative to now.

    Days are counted by rounding the remaining time up, so anything
    due later today reads "Today" and anything past reads "Overdue".

    Examples:
        "Overdue by 2 days", "Today", "Tomorrow", "In 5 days", "2026-12-24"
    """
    now = now or aware_utc_now()
    days = math.ceil((when - now).total_seconds() / SECONDS_PER_DAY)

    if days < 0:
        overdue = abs(days)
        return f"Overdue by {overdue} day{'' if overdue == 1 else 's'}"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days <= 7:
        return f"In {days} days"
    return when.date().isoformat()


def notes_table(title: str, notes: list[Note], show_reminder: bool = False) -> Table:
    """Build a table with one row per note."""
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Content")
    table.add_column("Color")
    table.add_column("Labels", style="cyan")
    if show_reminder:
        table.add_column("Reminder")

    for note in notes:
        style = COLOR_STYLES[note.color]
        row = [
            short_id(note),
            preview(note.title, 30),
            preview(note.content),
            f"[{style}]{note.color.value}[/{style}]",
            ", ".join(note.labels),
        ]
        if show_reminder:
            row.append(_reminder_cell(note))
        table.add_row(*row)

    return table


def _reminder_cell(note: Note) -> str:
    if note.reminder_date is None:
        return ""
    text = describe_reminder(note.reminder_date)
    if is_overdue(note.reminder_date):
        return f"[red]{text}[/red]"
    return text


def note_panel(note: Note) -> Panel:
    """Full view of a single note."""
    lines = [
        f"[dim]id:[/dim] {note.id}",
        f"[dim]status:[/dim] {note.status.value}",
        f"[dim]color:[/dim] {note.color.value}",
        f"[dim]pinned:[/dim] {'yes' if note.is_pinned else 'no'}",
    ]
    if note.labels:
        lines.append(f"[dim]labels:[/dim] {', '.join(note.labels)}")
    if note.source:
        lines.append(f"[dim]source:[/dim] {note.source}")
    if note.reminder_date is not None:
        lines.append(
            f"[dim]reminder:[/dim] {note.reminder_date.isoformat()} "
            f"({describe_reminder(note.reminder_date)})"
        )
    lines.append(f"[dim]created:[/dim] {note.created_at.isoformat()}")
    lines.append(f"[dim]updated:[/dim] {note.updated_at.isoformat()}")
    if note.content:
        lines.extend(["", note.content])

    return Panel(
        "\n".join(lines),
        title=note.title or "(untitled)",
        border_style=COLOR_STYLES[note.color],
    )
