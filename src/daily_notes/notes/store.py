"""Relational note persistence backed by the ``notes`` table."""

from __future__ import annotations

import enum
import sqlite3
from datetime import UTC, datetime, time, timedelta
from typing import Callable, List, Optional

from .. import config
from ..db import Database
from ..errors import NotFoundError, StoreUnavailableError, ValidationError
from ..events import NOTE_CREATED, NOTE_UPDATED, NOTES_UPDATED, ChangeNotifier
from ..logger import configure_logging
from .models import NoteEntry, NotePage

_LOG = configure_logging()

_COLUMNS = "id, content, created_at, updated_at, is_quick_capture"
_NON_EMPTY = "content IS NOT NULL AND TRIM(content) != ''"

Clock = Callable[[], datetime]


class ListFilter(enum.Enum):
    ALL = "all"
    RECENT = "recent"


def utc_now() -> datetime:
    return datetime.now(UTC)


def _timestamp(value: datetime) -> str:
    # Fixed-width UTC strings keep lexical order equal to time order.
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def _require_content(content: Optional[str]) -> str:
    text = (content or "").strip()
    if not text:
        raise ValidationError("Note content must not be empty")
    return text


class NoteStore:
    """High-level API over the notes table.

    Every mutating call commits first and then publishes exactly one event on
    ``notifier`` before returning.
    """

    def __init__(
        self,
        database: Optional[Database] = None,
        notifier: Optional[ChangeNotifier] = None,
        *,
        clock: Clock = utc_now,
        recent_window: timedelta = timedelta(hours=config.RECENT_WINDOW_HOURS),
        recent_limit: int = config.RECENT_LIMIT,
    ) -> None:
        self.db = database or Database()
        try:
            self.db.initialise()
        except StoreUnavailableError:
            # Retried on first use; the windows show an empty list meanwhile.
            _LOG.exception("Database initialisation failed at %s", self.db.path)
        self.notifier = notifier or ChangeNotifier()
        self._clock = clock
        self.recent_window = recent_window
        self.recent_limit = recent_limit

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create_note(self, content: str, is_quick_capture: bool = False) -> NoteEntry:
        text = _require_content(content)
        now = _timestamp(self._clock())
        with self._cursor() as cur:
            cur.execute(
                "INSERT INTO notes (content, created_at, updated_at, is_quick_capture) VALUES (?, ?, ?, ?)",
                (text, now, now, int(bool(is_quick_capture))),
            )
            note_id = cur.lastrowid
        if note_id is None:  # pragma: no cover - sqlite always reports lastrowid
            raise RuntimeError("Failed to create note")
        note = self.get_note(int(note_id))
        _LOG.info("Created note %s (quick_capture=%s)", note.id, note.is_quick_capture)
        self.notifier.publish(NOTE_CREATED, note)
        return note

    def update_note(self, note_id: int, content: str) -> NoteEntry:
        text = _require_content(content)
        now = _timestamp(self._clock())
        with self._cursor() as cur:
            # A clock stepping backwards must not put updated_at before created_at.
            cur.execute(
                "UPDATE notes SET content = ?, updated_at = MAX(?, created_at) WHERE id = ?",
                (text, now, note_id),
            )
            changed = cur.rowcount
        if not changed:
            raise NotFoundError(note_id)
        note = self.get_note(note_id)
        _LOG.info("Updated note %s", note_id)
        self.notifier.publish(NOTE_UPDATED, note)
        return note

    def delete_note(self, note_id: int) -> None:
        with self._cursor() as cur:
            cur.execute("DELETE FROM notes WHERE id = ?", (note_id,))
            removed = cur.rowcount
        if removed:
            _LOG.info("Deleted note %s", note_id)
        else:
            _LOG.debug("Delete requested for missing note %s", note_id)
        self.notifier.publish(NOTES_UPDATED, note_id)

    def append_to_today(self, content: str) -> NoteEntry:
        return self.create_note(content, is_quick_capture=False)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_note(self, note_id: int) -> NoteEntry:
        with self._cursor() as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM notes WHERE id = ?", (note_id,))
            row = cur.fetchone()
        if row is None:
            raise NotFoundError(note_id)
        return self._row_to_note(row)

    def list_notes(self, note_filter: ListFilter | str = ListFilter.ALL) -> List[NoteEntry]:
        note_filter = ListFilter(note_filter)
        if note_filter is ListFilter.RECENT:
            cutoff = _timestamp(self._clock() - self.recent_window)
            sql = (
                f"SELECT {_COLUMNS} FROM notes WHERE created_at >= ? AND {_NON_EMPTY} "
                "ORDER BY created_at DESC, id DESC LIMIT ?"
            )
            params: tuple = (cutoff, self.recent_limit)
        else:
            sql = f"SELECT {_COLUMNS} FROM notes WHERE {_NON_EMPTY} ORDER BY created_at DESC, id DESC"
            params = ()
        with self._cursor() as cur:
            cur.execute(sql, params)
            rows = cur.fetchall()
        return [self._row_to_note(row) for row in rows]

    def page_notes(
        self,
        *,
        limit: int = config.RECENT_LIMIT,
        offset: int = 0,
        is_quick_capture: Optional[bool] = None,
    ) -> NotePage:
        where = f"WHERE {_NON_EMPTY}"
        params: List[object] = []
        if is_quick_capture is not None:
            where += " AND is_quick_capture = ?"
            params.append(int(is_quick_capture))
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM notes {where} ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?",
                (*params, max(limit, 0), max(offset, 0)),
            )
            rows = cur.fetchall()
            cur.execute(f"SELECT COUNT(*) AS count FROM notes {where}", params)
            total = cur.fetchone()["count"]
        return NotePage(notes=[self._row_to_note(row) for row in rows], total_count=int(total))

    def today_note(self) -> str:
        """Render today's entries oldest first as ``[HH:MM] content`` lines."""
        local_now = self._clock().astimezone()
        start = datetime.combine(local_now.date(), time.min, tzinfo=local_now.tzinfo)
        end = start + timedelta(days=1)
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM notes WHERE created_at >= ? AND created_at < ? AND {_NON_EMPTY} "
                "ORDER BY created_at ASC, id ASC",
                (_timestamp(start), _timestamp(end)),
            )
            rows = cur.fetchall()
        lines = []
        for row in rows:
            note = self._row_to_note(row)
            lines.append(f"[{note.created_at.astimezone():%H:%M}] {note.content}")
        return "\n".join(lines)

    def count(self) -> int:
        with self._cursor() as cur:
            cur.execute("SELECT COUNT(*) FROM notes")
            return int(cur.fetchone()[0])

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _cursor(self):
        self.db.initialise()
        return self.db.cursor()

    def _row_to_note(self, row: sqlite3.Row) -> NoteEntry:
        return NoteEntry(
            id=row["id"],
            content=row["content"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            is_quick_capture=bool(row["is_quick_capture"]),
        )


__all__ = ["NoteStore", "ListFilter", "utc_now"]
