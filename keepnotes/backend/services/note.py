"""
Note Service.

The only component that talks to the note store. Translates note
operations into repository calls, converts datetimes between the
application and the store, and assembles Note projections.

Every failure surfaces as StoreReadError or StoreWriteError with a fixed
message for the operation.
"""

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from keepnotes.backend.core.exceptions import StoreReadError, StoreWriteError
from keepnotes.backend.core.utils import (
    from_store_timestamp,
    to_store_timestamp,
    utc_now,
)
from keepnotes.backend.models.note import NoteDocument
from keepnotes.backend.repositories.note import NoteRepository
from keepnotes.backend.schemas.note import (
    Note,
    NoteColor,
    NoteCreate,
    NoteStatus,
    NoteUpdate,
)
from keepnotes.backend.services.base import BaseService


def to_note(document: NoteDocument) -> Note:
    """Build a Note from a stored document, filling in missing fields."""
    reminder = document.reminder_date
    return Note(
        id=document.id,
        title=document.title or "",
        content=document.content or "",
        source=document.source,
        color=_to_color(document.color),
        is_pinned=bool(document.is_pinned),
        labels=list(document.labels or []),
        is_archived=bool(document.is_archived),
        is_deleted=bool(document.is_deleted),
        reminder_date=from_store_timestamp(reminder) if reminder is not None else None,
        created_at=from_store_timestamp(document.created_at),
        updated_at=from_store_timestamp(document.updated_at),
    )


def _to_color(value: str | None) -> NoteColor:
    """Stored colour as a NoteColor; unknown or missing values read as yellow."""
    try:
        return NoteColor(value)
    except ValueError:
        return NoteColor.YELLOW


def _to_store_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Convert patch values into their stored form."""
    stored = dict(fields)
    if "color" in stored and stored["color"] is not None:
        stored["color"] = NoteColor(stored["color"]).value
    if stored.get("reminder_date") is not None:
        stored["reminder_date"] = to_store_timestamp(stored["reminder_date"])
    return stored


class NoteService(BaseService):
    """
    Service for note persistence.

    Each public method runs in its own transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory)

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note.

        Args:
            data: Note creation data

        Returns:
            Created note, including its store-assigned id

        Raises:
            StoreWriteError: If the note could not be written
        """
        self._log_operation("Creating note", title=data.title)
        now = utc_now()
        fields = _to_store_fields(data.model_dump())

        async def work(session: AsyncSession) -> Note:
            document = await NoteRepository(session).create(
                **fields,
                created_at=now,
                updated_at=now,
            )
            return to_note(document)

        note = await self._execute_db_operation(
            "create_note", work, error=StoreWriteError, message="Failed to create note",
        )
        self._log_debug("Note created", note_id=note.id)
        return note

    async def list_notes(self) -> list[Note]:
        """
        List every note, most recently created first.

        Raises:
            StoreReadError: If the notes could not be fetched
        """
        async def work(session: AsyncSession) -> list[Note]:
            documents = await NoteRepository(session).get_all_newest_first()
            return [to_note(document) for document in documents]

        return await self._execute_db_operation(
            "list_notes", work, error=StoreReadError, message="Failed to fetch notes",
        )

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            StoreReadError: If the note does not exist or could not be fetched
        """
        async def work(session: AsyncSession) -> Note:
            return to_note(await NoteRepository(session).get_by_id(note_id))

        return await self._execute_db_operation(
            "get_note", work, error=StoreReadError, message="Failed to fetch note",
        )

    async def _patch(
        self,
        note_id: str,
        fields: dict[str, Any],
        operation: str,
        message: str,
    ) -> Note:
        """Write explicitly set fields and stamp updated_at."""
        stored = _to_store_fields(fields)
        stored["updated_at"] = utc_now()

        async def work(session: AsyncSession) -> Note:
            return to_note(await NoteRepository(session).update(note_id, **stored))

        return await self._execute_db_operation(
            operation, work, error=StoreWriteError, message=message,
        )

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Update an existing note.

        Args:
            note_id: Note ID to update
            data: Patch; only explicitly set fields are written

        Returns:
            Updated note

        Raises:
            StoreWriteError: If the note does not exist or could not be written
        """
        update_data = data.model_dump(exclude_unset=True)
        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(update_data.keys()),
        )
        return await self._patch(note_id, update_data, "update_note", "Failed to update note")

    async def delete_note(self, note_id: str) -> None:
        """
        Permanently delete a note.

        Raises:
            StoreWriteError: If the note does not exist or could not be deleted
        """
        self._log_operation("Deleting note", note_id=note_id)

        async def work(session: AsyncSession) -> None:
            await NoteRepository(session).delete(note_id)

        await self._execute_db_operation(
            "delete_note", work, error=StoreWriteError, message="Failed to delete note",
        )

    permanent_delete_note = delete_note

    async def toggle_pin(self, note_id: str, pinned: bool) -> Note:
        self._log_operation("Setting pin", note_id=note_id, pinned=pinned)
        return await self._patch(
            note_id, {"is_pinned": pinned}, "toggle_pin", "Failed to toggle pin",
        )

    async def change_color(self, note_id: str, color: NoteColor) -> Note:
        self._log_operation("Changing color", note_id=note_id, color=NoteColor(color).value)
        return await self._patch(
            note_id, {"color": color}, "change_color", "Failed to change color",
        )

    async def archive_note(self, note_id: str) -> Note:
        self._log_operation("Archiving note", note_id=note_id)
        return await self._patch(
            note_id, {"is_archived": True}, "archive_note", "Failed to archive note",
        )

    async def unarchive_note(self, note_id: str) -> Note:
        self._log_operation("Unarchiving note", note_id=note_id)
        return await self._patch(
            note_id, {"is_archived": False}, "unarchive_note", "Failed to unarchive note",
        )

    async def soft_delete_note(self, note_id: str) -> Note:
        self._log_operation("Moving note to trash", note_id=note_id)
        return await self._patch(
            note_id, {"is_deleted": True}, "soft_delete_note", "Failed to move note to trash",
        )

    async def restore_note(self, note_id: str) -> Note:
        self._log_operation("Restoring note", note_id=note_id)
        return await self._patch(
            note_id, {"is_deleted": False}, "restore_note", "Failed to restore note",
        )

    async def set_reminder(self, note_id: str, when: datetime) -> Note:
        self._log_operation("Setting reminder", note_id=note_id, when=when.isoformat())
        return await self._patch(
            note_id, {"reminder_date": when}, "set_reminder", "Failed to set reminder",
        )

    async def remove_reminder(self, note_id: str) -> Note:
        self._log_operation("Removing reminder", note_id=note_id)
        return await self._patch(
            note_id, {"reminder_date": None}, "remove_reminder", "Failed to remove reminder",
        )

    async def add_label(self, note_id: str, label: str) -> Note:
        """
        Add a label to a note. Adding a label it already has changes nothing
        but updated_at.

        Raises:
            StoreWriteError: If the note does not exist or could not be written
        """
        self._log_operation("Adding label", note_id=note_id, label=label)
        now = utc_now()

        async def work(session: AsyncSession) -> Note:
            return to_note(await NoteRepository(session).add_label(note_id, label, now))

        return await self._execute_db_operation(
            "add_label", work, error=StoreWriteError, message="Failed to add label",
        )

    async def remove_label(self, note_id: str, label: str) -> Note:
        """
        Remove a label from a note.

        Raises:
            StoreWriteError: If the note does not exist or could not be written
        """
        self._log_operation("Removing label", note_id=note_id, label=label)
        now = utc_now()

        async def work(session: AsyncSession) -> Note:
            return to_note(await NoteRepository(session).remove_label(note_id, label, now))

        return await self._execute_db_operation(
            "remove_label", work, error=StoreWriteError, message="Failed to remove label",
        )

    async def rename_label(self, old: str, new: str) -> list[Note]:
        """
        Rename a label on every note carrying it.

        Returns:
            The notes that changed
        """
        self._log_operation("Renaming label", old=old, new=new)
        now = utc_now()

        async def work(session: AsyncSession) -> list[Note]:
            changed = await NoteRepository(session).rename_label(old, new, now)
            return [to_note(document) for document in changed]

        return await self._execute_db_operation(
            "rename_label", work, error=StoreWriteError, message="Failed to rename label",
        )

    async def delete_label(self, label: str) -> list[Note]:
        """
        Remove a label from every note carrying it.

        Returns:
            The notes that changed
        """
        self._log_operation("Deleting label", label=label)
        now = utc_now()

        async def work(session: AsyncSession) -> list[Note]:
            changed = await NoteRepository(session).delete_label(label, now)
            return [to_note(document) for document in changed]

        return await self._execute_db_operation(
            "delete_label", work, error=StoreWriteError, message="Failed to delete label",
        )

    async def get_all_labels(self) -> list[str]:
        """
        Get every label in use, sorted ascending.

        Raises:
            StoreReadError: If the notes could not be fetched
        """
        async def work(session: AsyncSession) -> list[str]:
            return await NoteRepository(session).get_all_labels()

        return await self._execute_db_operation(
            "get_all_labels", work, error=StoreReadError, message="Failed to fetch labels",
        )

    async def get_notes_by_status(self, status: NoteStatus) -> list[Note]:
        """
        Get the notes in one lifecycle view.

        Raises:
            StoreReadError: If the notes could not be fetched
        """
        status = NoteStatus(status)
        self._log_debug("Fetching notes by status", status=status.value)

        async def work(session: AsyncSession) -> list[Note]:
            documents = await NoteRepository(session).get_by_status(status)
            return [to_note(document) for document in documents]

        return await self._execute_db_operation(
            "get_notes_by_status",
            work,
            error=StoreReadError,
            message="Failed to fetch notes by status",
        )

    async def get_notes_with_reminders(self) -> list[Note]:
        """
        Get active notes with a reminder, soonest first.

        Raises:
            StoreReadError: If the notes could not be fetched
        """
        async def work(session: AsyncSession) -> list[Note]:
            documents = await NoteRepository(session).get_with_reminders()
            return [to_note(document) for document in documents]

        return await self._execute_db_operation(
            "get_notes_with_reminders",
            work,
            error=StoreReadError,
            message="Failed to fetch notes with reminders",
        )
