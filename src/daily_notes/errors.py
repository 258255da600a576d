"""Exceptions raised by the note stores and the command boundary."""

from __future__ import annotations


class NotesError(RuntimeError):
    """Base class for every error the notes core raises."""


class ValidationError(NotesError):
    """Raised when note content is empty after trimming."""


class NotFoundError(NotesError):
    """Raised when an operation references a note id that does not exist."""

    def __init__(self, note_id: int) -> None:
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id


class StoreUnavailableError(NotesError):
    """Raised when the database or notes directory cannot be used."""


class UnknownCommandError(NotesError):
    """Raised when a view invokes a command that is not registered."""


__all__ = [
    "NotesError",
    "ValidationError",
    "NotFoundError",
    "StoreUnavailableError",
    "UnknownCommandError",
]
