"""
Note Repository.

Data access layer for notes. Handles all database operations
for the NoteDocument model.
"""

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from keepnotes.backend.models.note import NoteDocument
from keepnotes.backend.repositories.base import BaseRepository
from keepnotes.backend.schemas.note import NoteStatus


def _is_set(column):
    return column == True  # noqa: E712


def _is_unset(column):
    return or_(column == False, column.is_(None))  # noqa: E712


class NoteRepository(BaseRepository[NoteDocument]):
    """
    Repository for NoteDocument.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries and label edits.
    """

    model = NoteDocument

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_all_newest_first(self) -> list[NoteDocument]:
        """Get every note, most recently created first."""
        result = await self.session.execute(
            select(NoteDocument).order_by(NoteDocument.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_status(self, status: NoteStatus) -> list[NoteDocument]:
        """
        Get notes in one lifecycle view.

        Args:
            status: active (neither flag), archived (archived, not deleted),
                or deleted (deleted, archived or not)

        Returns:
            Matching notes, most recently created first
        """
        statement = select(NoteDocument)
        if status is NoteStatus.DELETED:
            statement = statement.where(_is_set(NoteDocument.is_deleted))
        elif status is NoteStatus.ARCHIVED:
            statement = statement.where(
                _is_set(NoteDocument.is_archived),
                _is_unset(NoteDocument.is_deleted),
            )
        else:
            statement = statement.where(
                _is_unset(NoteDocument.is_archived),
                _is_unset(NoteDocument.is_deleted),
            )

        result = await self.session.execute(
            statement.order_by(NoteDocument.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_with_reminders(self) -> list[NoteDocument]:
        """Get active notes that carry a reminder, soonest first."""
        result = await self.session.execute(
            select(NoteDocument)
            .where(NoteDocument.reminder_date.is_not(None))
            .where(_is_unset(NoteDocument.is_archived))
            .where(_is_unset(NoteDocument.is_deleted))
            .order_by(NoteDocument.reminder_date.asc())
        )
        return list(result.scalars().all())

    async def get_all_labels(self) -> list[str]:
        """Get the distinct labels used across all notes, sorted."""
        result = await self.session.execute(select(NoteDocument.labels))
        labels: set[str] = set()
        for row_labels in result.scalars().all():
            labels.update(row_labels or [])
        return sorted(labels)

    async def add_label(self, id: str, label: str, updated_at: datetime) -> NoteDocument:
        """
        Add a label to one note.

        The row is locked for the rest of the transaction, so concurrent
        label edits on the same note cannot overwrite each other.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.get_by_id(id, for_update=True)
        labels = list(note.labels or [])
        if label not in labels:
            labels.append(label)
        note.labels = labels
        note.updated_at = updated_at

        await self.session.flush()
        await self.session.refresh(note)
        return note

    async def remove_label(self, id: str, label: str, updated_at: datetime) -> NoteDocument:
        """
        Remove a label from one note, under the same row lock as add_label.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.get_by_id(id, for_update=True)
        note.labels = [existing for existing in (note.labels or []) if existing != label]
        note.updated_at = updated_at

        await self.session.flush()
        await self.session.refresh(note)
        return note

    async def _notes_with_label(self, label: str) -> list[NoteDocument]:
        result = await self.session.execute(
            select(NoteDocument)
            .where(NoteDocument.labels.is_not(None))
            .with_for_update()
        )
        return [note for note in result.scalars().all() if label in (note.labels or [])]

    async def rename_label(self, old: str, new: str, updated_at: datetime) -> list[NoteDocument]:
        """
        Replace a label on every note that carries it.

        Returns:
            The notes that changed
        """
        changed = await self._notes_with_label(old)
        for note in changed:
            renamed = [new if existing == old else existing for existing in note.labels]
            note.labels = list(dict.fromkeys(renamed))
            note.updated_at = updated_at

        await self.session.flush()
        return changed

    async def delete_label(self, label: str, updated_at: datetime) -> list[NoteDocument]:
        """
        Remove a label from every note that carries it.

        Returns:
            The notes that changed
        """
        changed = await self._notes_with_label(label)
        for note in changed:
            note.labels = [existing for existing in note.labels if existing != label]
            note.updated_at = updated_at

        await self.session.flush()
        return changed
