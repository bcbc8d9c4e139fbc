"""
Note State.

In-memory session state for one user of the note store. Holds the note
list every view is derived from, plus loading and error flags.

A mutation is mirrored locally only after the note service confirms it,
so the list never shows an unconfirmed change. It can go stale if the
store is changed elsewhere; refresh() is the only way to catch up.

Usage:
    state = NoteState(NoteService(get_session_factory()))
    await state.refresh()
    await state.archive(note_id)
    pinned, others = state.partition_pinned(state.search_notes("milk"))
"""

from collections.abc import Awaitable
from datetime import datetime
from typing import TypeVar

from keepnotes.backend.core.exceptions import StoreError, StoreReadError
from keepnotes.backend.core.logging import get_logger
from keepnotes.backend.schemas.note import (
    Note,
    NoteColor,
    NoteCreate,
    NoteStatus,
    NoteUpdate,
)
from keepnotes.backend.services.note import NoteService

logger = get_logger(__name__)

T = TypeVar("T")


class NoteState:
    """
    Owned note list with optimistic-after-confirmation updates.

    Attributes:
        notes: Notes as last known, most recently created first
        loading: True while refresh() is fetching
        error: Message of the last failed operation, cleared by the next one
    """

    def __init__(self, service: NoteService) -> None:
        self.service = service
        self.notes: list[Note] = []
        self.loading = False
        self.error: str | None = None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def refresh(self) -> None:
        """
        Replace the local list with the store's.

        On failure the previous list is kept and error is set; nothing is raised.
        """
        self.loading = True
        self.error = None
        try:
            self.notes = await self.service.list_notes()
        except StoreReadError as e:
            self.error = e.message
            logger.warning("Refresh failed, keeping stale notes", extra={"error": e.message})
        finally:
            self.loading = False

    def get(self, note_id: str) -> Note | None:
        """Find a note in the local list."""
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    # -------------------------------------------------------------------------
    # Local patching
    # -------------------------------------------------------------------------

    async def _run(self, operation: str, call: Awaitable[T]) -> T:
        """Await a service call, recording and re-raising store errors."""
        self.error = None
        try:
            return await call
        except StoreError as e:
            self.error = e.message
            logger.error(
                "Note operation failed",
                extra={"operation": operation, "error": e.message},
            )
            raise

    def _replace(self, updated: Note) -> Note:
        self.notes = [updated if note.id == updated.id else note for note in self.notes]
        return updated

    def _remove(self, note_id: str) -> None:
        self.notes = [note for note in self.notes if note.id != note_id]

    async def _mutate(self, operation: str, call: Awaitable[Note]) -> Note:
        return self._replace(await self._run(operation, call))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create(self, data: NoteCreate) -> Note:
        note = await self._run("create", self.service.create_note(data))
        self.notes = [note, *self.notes]
        return note

    async def update(self, note_id: str, data: NoteUpdate) -> Note:
        return await self._mutate("update", self.service.update_note(note_id, data))

    async def delete(self, note_id: str) -> None:
        await self._run("delete", self.service.delete_note(note_id))
        self._remove(note_id)

    async def permanent_delete(self, note_id: str) -> None:
        await self._run("permanent_delete", self.service.permanent_delete_note(note_id))
        self._remove(note_id)

    async def toggle_pin(self, note_id: str) -> Note | None:
        """
        Flip the pin of a locally known note.

        Returns:
            The updated note, or None if the id is not in the local list
        """
        note = self.get(note_id)
        if note is None:
            return None
        return await self._mutate(
            "toggle_pin", self.service.toggle_pin(note_id, not note.is_pinned),
        )

    async def change_color(self, note_id: str, color: NoteColor) -> Note:
        return await self._mutate("change_color", self.service.change_color(note_id, color))

    async def archive(self, note_id: str) -> Note:
        return await self._mutate("archive", self.service.archive_note(note_id))

    async def unarchive(self, note_id: str) -> Note:
        return await self._mutate("unarchive", self.service.unarchive_note(note_id))

    async def soft_delete(self, note_id: str) -> Note:
        return await self._mutate("soft_delete", self.service.soft_delete_note(note_id))

    async def restore(self, note_id: str) -> Note:
        return await self._mutate("restore", self.service.restore_note(note_id))

    async def add_label(self, note_id: str, label: str) -> Note:
        return await self._mutate("add_label", self.service.add_label(note_id, label))

    async def remove_label(self, note_id: str, label: str) -> Note:
        return await self._mutate("remove_label", self.service.remove_label(note_id, label))

    async def set_reminder(self, note_id: str, when: datetime) -> Note:
        return await self._mutate("set_reminder", self.service.set_reminder(note_id, when))

    async def remove_reminder(self, note_id: str) -> Note:
        return await self._mutate("remove_reminder", self.service.remove_reminder(note_id))

    async def rename_label(self, old: str, new: str) -> list[Note]:
        changed = await self._run("rename_label", self.service.rename_label(old, new))
        for note in changed:
            self._replace(note)
        return changed

    async def delete_label(self, label: str) -> list[Note]:
        changed = await self._run("delete_label", self.service.delete_label(label))
        for note in changed:
            self._replace(note)
        return changed

    async def empty_trash(self) -> int:
        """
        Permanently delete every note in the local trash.

        Stops at the first failure; notes deleted before it stay deleted.

        Returns:
            Number of notes deleted
        """
        trashed = [note.id for note in self.notes if note.is_deleted]
        for note_id in trashed:
            await self.permanent_delete(note_id)
        return len(trashed)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def search_notes(self, query: str) -> list[Note]:
        """
        Filter the local list by a case-insensitive substring of title or content.

        A blank query returns the whole list.
        """
        if not query.strip():
            return list(self.notes)

        needle = query.lower()
        return [
            note for note in self.notes
            if needle in note.title.lower() or needle in note.content.lower()
        ]

    def partition_pinned(self, notes: list[Note] | None = None) -> tuple[list[Note], list[Note]]:
        """Split notes (default: the local list) into pinned and the rest, keeping order."""
        source = self.notes if notes is None else notes
        pinned = [note for note in source if note.is_pinned]
        others = [note for note in source if not note.is_pinned]
        return pinned, others

    async def get_notes_by_status(self, status: NoteStatus) -> list[Note]:
        """Fetch a lifecycle view from the store, bypassing the local list."""
        return await self._run(
            "get_notes_by_status", self.service.get_notes_by_status(status),
        )

    async def get_notes_with_reminders(self) -> list[Note]:
        """Fetch active notes with reminders from the store, bypassing the local list."""
        return await self._run(
            "get_notes_with_reminders", self.service.get_notes_with_reminders(),
        )

    async def get_all_labels(self) -> list[str]:
        """Fetch every label in use from the store, bypassing the local list."""
        return await self._run("get_all_labels", self.service.get_all_labels())
