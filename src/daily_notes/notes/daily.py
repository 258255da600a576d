"""Per-day plain text notes stored as ``YYYY-MM-DD.txt`` files."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .. import config
from ..data_paths import daily_notes_dir
from ..errors import StoreUnavailableError, ValidationError
from ..events import NOTE_UPDATED, ChangeNotifier
from ..logger import configure_logging
from .models import DayNote

_LOG = configure_logging()

LocalClock = Callable[[], datetime]


def format_line(moment: datetime, content: str) -> str:
    return f"[{moment:%H:%M}] {content}"


def split_lines(content: str) -> List[str]:
    return [line for line in content.splitlines() if line.strip()]


class DailyNoteStore:
    """Flat-file store with one free-form text note per calendar day.

    Today's content is cached on the instance and reloaded from disk whenever
    the calendar date moves on.
    """

    def __init__(
        self,
        directory: Optional[Path] = None,
        notifier: Optional[ChangeNotifier] = None,
        *,
        clock: LocalClock = datetime.now,
    ) -> None:
        self.directory = directory or daily_notes_dir()
        self.notifier = notifier or ChangeNotifier()
        self._clock = clock
        self._current: Optional[Tuple[date, str]] = None

    def path_for(self, day: date) -> Path:
        return self.directory / f"{day.isoformat()}.txt"

    def today(self) -> date:
        return self._clock().date()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_today_note(self) -> str:
        today = self.today()
        content = self._read(today)
        self._current = (today, content)
        return content

    def current_note(self) -> str:
        today = self.today()
        if self._current is None or self._current[0] != today:
            return self.get_today_note()
        return self._current[1]

    def get_note(self, day: date) -> Optional[DayNote]:
        path = self.path_for(day)
        if not path.exists():
            return None
        content = self._read(day)
        return DayNote(day=day, content=content, lines=split_lines(content))

    def get_recent_notes(self, window_days: int = config.RECENT_DAYS) -> List[DayNote]:
        today = self.today()
        notes: List[DayNote] = []
        for offset in range(max(window_days, 0)):
            note = self.get_note(today - timedelta(days=offset))
            # A note cleared in the editor leaves an empty file behind.
            if note is not None and note.lines:
                notes.append(note)
        return notes

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save_today_note(self, content: str) -> None:
        today = self.today()
        self._write(today, content)
        self._current = (today, content)
        _LOG.info("Saved note for %s (%s chars)", today.isoformat(), len(content))
        self.notifier.publish(NOTE_UPDATED, content)

    def append_to_today(self, content: str) -> str:
        text = (content or "").strip()
        if not text:
            raise ValidationError("Note content must not be empty")
        now = self._clock()
        today = now.date()
        existing = self._read(today)
        line = format_line(now, text)
        updated = f"{existing}\n{line}" if existing else line
        self._write(today, updated)
        self._current = (today, updated)
        _LOG.info("Appended line to %s", today.isoformat())
        self.notifier.publish(NOTE_UPDATED, updated)
        return updated

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _read(self, day: date) -> str:
        path = self.path_for(day)
        if not path.exists():
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {path}: {exc}") from exc

    def _write(self, day: date, content: str) -> None:
        path = self.path_for(day)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {path}: {exc}") from exc


__all__ = ["DailyNoteStore", "format_line", "split_lines"]
