"""
CLI Session Helpers.

Every command builds its own NoteState, runs one action against it,
and disposes of the engine before the event loop closes.
"""

import asyncio
from collections.abc import Awaitable, Callable

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from keepnotes.backend.core.database import close_database, get_session_factory, init_models
from keepnotes.backend.core.exceptions import StoreError, StoreReadError
from keepnotes.backend.core.logging import get_logger, log_with_source
from keepnotes.backend.schemas.note import Note
from keepnotes.backend.services.note import NoteService
from keepnotes.backend.services.note_state import NoteState

logger = get_logger(__name__)
console = Console()


class NoteLookupError(Exception):
    """Raised when a note reference matches no note or more than one."""


def resolve_note(state: NoteState, ref: str) -> Note:
    """
    Find a note by full id or unique id prefix.

    Raises:
        NoteLookupError: If nothing or more than one note matches
    """
    exact = state.get(ref)
    if exact is not None:
        return exact

    matches = [note for note in state.notes if note.id.startswith(ref)]
    if not matches:
        raise NoteLookupError(f"No note matches '{ref}'")
    if len(matches) > 1:
        raise NoteLookupError(f"'{ref}' matches {len(matches)} notes, use more characters")
    return matches[0]


async def _run(action: Callable[[NoteState], Awaitable[None]]) -> None:
    try:
        await init_models()
        state = NoteState(NoteService(get_session_factory()))
        await state.refresh()
        if state.error:
            raise StoreReadError(state.error)
        await action(state)
    finally:
        await close_database()


def run_with_state(action: Callable[[NoteState], Awaitable[None]]) -> None:
    """
    Run an async action against a freshly loaded NoteState.

    Store and lookup failures are printed and end the command with exit code 1.
    """
    try:
        asyncio.run(_run(action))
    except (StoreError, NoteLookupError) as e:
        message = e.message if isinstance(e, StoreError) else str(e)
        log_with_source(logger, "cli", "warning", "Command failed", error=message)
        console.print(f"[red]Error: {message}[/red]")
        raise typer.Exit(1)
    except SQLAlchemyError as e:
        log_with_source(logger, "cli", "error", "Note store unavailable", error=str(e))
        console.print("[red]Error: Cannot open the note store[/red]")
        console.print("[dim]Check config/settings/database.yaml[/dim]")
        raise typer.Exit(1)
