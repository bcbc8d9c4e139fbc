"""
Note Schemas.

Pydantic schemas for the note projection and note write requests.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class NoteColor(str, Enum):
    """Background colour of a note."""

    YELLOW = "yellow"
    PINK = "pink"
    BLUE = "blue"
    GREEN = "green"
    ORANGE = "orange"
    PURPLE = "purple"


class NoteStatus(str, Enum):
    """Lifecycle view a note belongs to."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    DELETED = "deleted"


def _unique_labels(labels: list[str]) -> list[str]:
    """Drop repeated labels, keeping the first occurrence."""
    return list(dict.fromkeys(labels))


class Note(BaseModel):
    """
    Typed projection of a stored note.

    All datetimes are timezone-aware UTC.
    """

    id: str = Field(description="Note unique identifier")
    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note body")
    source: str | None = Field(default=None, description="Where the note came from")
    color: NoteColor = Field(default=NoteColor.YELLOW, description="Note colour")
    is_pinned: bool = Field(default=False, description="Shown above other notes")
    labels: list[str] = Field(default_factory=list, description="Labels on the note")
    is_archived: bool = Field(default=False, description="Whether the note is archived")
    is_deleted: bool = Field(default=False, description="Whether the note is in the trash")
    reminder_date: datetime | None = Field(default=None, description="Reminder time")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    @property
    def status(self) -> NoteStatus:
        """Deleted wins over archived, archived wins over active."""
        if self.is_deleted:
            return NoteStatus.DELETED
        if self.is_archived:
            return NoteStatus.ARCHIVED
        return NoteStatus.ACTIVE

    @property
    def has_reminder(self) -> bool:
        return self.reminder_date is not None


class NoteCreate(BaseModel):
    """
    Schema for creating a new note.

    A note with neither title nor content is accepted here;
    callers decide whether to allow it.
    """

    title: str = Field(
        default="",
        description="Note title",
        examples=["Groceries"],
    )
    content: str = Field(
        default="",
        description="Note content",
        examples=["milk, eggs"],
    )
    source: str | None = None
    color: NoteColor = NoteColor.YELLOW
    is_pinned: bool = False
    labels: list[str] = Field(default_factory=list)
    is_archived: bool = False
    is_deleted: bool = False
    reminder_date: datetime | None = None

    @field_validator("labels")
    @classmethod
    def _dedupe_labels(cls, value: list[str]) -> list[str]:
        return _unique_labels(value)


class NoteUpdate(BaseModel):
    """
    Schema for patching an existing note.

    Only fields that were explicitly set are written. Setting
    reminder_date to None clears the reminder; leaving it out keeps it.
    """

    title: str | None = None
    content: str | None = None
    source: str | None = None
    color: NoteColor | None = None
    is_pinned: bool | None = None
    labels: list[str] | None = None
    is_archived: bool | None = None
    is_deleted: bool | None = None
    reminder_date: datetime | None = None

    @field_validator("labels")
    @classmethod
    def _dedupe_labels(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return _unique_labels(value)
