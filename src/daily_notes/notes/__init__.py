"""Notes subsystem for Daily Notes."""

from .daily import DailyNoteStore
from .debounce import Debouncer
from .models import DayNote, NoteEntry, NotePage
from .store import ListFilter, NoteStore
from .sync import ViewState, ViewSync

__all__ = [
    "DailyNoteStore",
    "Debouncer",
    "DayNote",
    "NoteEntry",
    "NotePage",
    "ListFilter",
    "NoteStore",
    "ViewState",
    "ViewSync",
]
