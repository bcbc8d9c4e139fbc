# Pydantic schemas package
from keepnotes.backend.schemas.note import (
    Note,
    NoteColor,
    NoteCreate,
    NoteStatus,
    NoteUpdate,
)

__all__ = [
    "Note",
    "NoteColor",
    "NoteCreate",
    "NoteStatus",
    "NoteUpdate",
]
