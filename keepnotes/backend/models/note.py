"""
Note Model.

Stored form of a note in the "notes" collection.

Optional columns are nullable: rows written by older clients may lack
them, and the note service fills in defaults when reading.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from keepnotes.backend.models.base import Base, TimestampMixin, UUIDMixin


class NoteDocument(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Archived and deleted are independent flags; readers apply the
    priority deleted > archived > active.
    """

    __tablename__ = "notes"

    title: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    source: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    color: Mapped[str | None] = mapped_column(
        String(16),
        default="yellow",
        nullable=True,
    )
    is_pinned: Mapped[bool | None] = mapped_column(
        default=False,
        nullable=True,
    )
    labels: Mapped[list[str] | None] = mapped_column(
        JSON,
        default=list,
        nullable=True,
    )
    is_archived: Mapped[bool | None] = mapped_column(
        default=False,
        nullable=True,
        index=True,
    )
    is_deleted: Mapped[bool | None] = mapped_column(
        default=False,
        nullable=True,
        index=True,
    )
    reminder_date: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<NoteDocument(id={self.id}, title={self.title!r})>"
