"""Named commands the windows invoke instead of touching the stores.

The set of commands mirrors what the host process exposes to its windows:
``get_today_note``, ``save_today_note``, ``append_to_today_note``,
``get_recent_notes`` and ``create_note`` plus the list maintenance commands
of the main window. Which store answers depends on the configured backend.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from . import config
from .errors import UnknownCommandError, ValidationError
from .logger import configure_logging
from .notes.daily import DailyNoteStore
from .notes.models import DayNote, NoteEntry
from .notes.store import ListFilter, NoteStore

_LOG = configure_logging()


class NoteCommands:
    """Dispatch table over a :class:`NoteStore` and a :class:`DailyNoteStore`."""

    def __init__(
        self,
        notes: NoteStore,
        daily: DailyNoteStore,
        *,
        backend: str = config.STORE_BACKEND,
        recent_days: int = config.RECENT_DAYS,
    ) -> None:
        self.notes = notes
        self.daily = daily
        self.backend = backend
        self.recent_days = recent_days
        self._commands: Dict[str, Callable[..., Any]] = {
            "get_today_note": self.get_today_note,
            "get_current_note": self.get_current_note,
            "save_today_note": self.save_today_note,
            "append_to_today_note": self.append_to_today_note,
            "get_recent_notes": self.get_recent_notes,
            "create_note": self.create_note,
            "update_note": self.update_note,
            "delete_note": self.delete_note,
            "list_notes": self.list_notes,
        }

    @property
    def uses_daily_files(self) -> bool:
        return self.backend == config.BACKEND_DAILY_FILES

    def invoke(self, name: str, **kwargs: Any) -> Any:
        try:
            command = self._commands[name]
        except KeyError:
            raise UnknownCommandError(f"Unknown command: {name}") from None
        _LOG.debug("Invoking %s", name)
        return command(**kwargs)

    # ------------------------------------------------------------------
    # Today's note
    # ------------------------------------------------------------------
    def get_today_note(self) -> str:
        if self.uses_daily_files:
            return self.daily.get_today_note()
        return self.notes.today_note()

    def get_current_note(self) -> str:
        if self.uses_daily_files:
            return self.daily.current_note()
        return self.notes.today_note()

    def save_today_note(self, content: str) -> None:
        if not self.uses_daily_files:
            raise ValidationError("Whole-note saving needs the daily-files backend")
        self.daily.save_today_note(content)

    def append_to_today_note(self, content: str) -> None:
        if self.uses_daily_files:
            self.daily.append_to_today(content)
        else:
            self.notes.append_to_today(content)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    def get_recent_notes(self) -> List[DayNote] | List[NoteEntry]:
        if self.uses_daily_files:
            return self.daily.get_recent_notes(self.recent_days)
        return self.notes.list_notes(ListFilter.RECENT)

    def create_note(self, content: str, is_quick_capture: bool = False) -> Optional[NoteEntry]:
        if self.uses_daily_files:
            self.daily.append_to_today(content)
            return None
        return self.notes.create_note(content, is_quick_capture)

    def update_note(self, note_id: int, content: str) -> NoteEntry:
        return self.notes.update_note(note_id, content)

    def delete_note(self, note_id: int) -> None:
        self.notes.delete_note(note_id)

    def list_notes(self, note_filter: str = ListFilter.ALL.value) -> List[NoteEntry]:
        return self.notes.list_notes(note_filter)


__all__ = ["NoteCommands"]
