"""SQLite database wrapper for the notes table."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .data_paths import db_path
from .errors import StoreUnavailableError
from .logger import configure_logging

_LOG = configure_logging()

SCHEMA_VERSION = 2

BASE_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS meta (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    is_quick_capture INTEGER NOT NULL DEFAULT 0
);
"""

INDEX_SQL = """
CREATE INDEX IF NOT EXISTS idx_notes_created_at ON notes(created_at);
CREATE INDEX IF NOT EXISTS idx_notes_is_quick_capture ON notes(is_quick_capture);
"""


class Database:
    """SQLite manager with schema migrations.

    A connection is opened for every :meth:`cursor` block and closed when the
    block exits, so no handle stays open across the lifetime of a window.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or db_path()
        self._initialised = False

    def connect(self) -> sqlite3.Connection:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(self.path)
        except (OSError, sqlite3.Error) as exc:
            msg = f"Cannot open database at {self.path}: {exc}"
            raise StoreUnavailableError(msg) from exc
        connection.row_factory = sqlite3.Row
        return connection

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        conn = self.connect()
        cur = conn.cursor()
        try:
            yield cur
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreUnavailableError(f"Database operation failed: {exc}") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            cur.close()
            conn.close()

    def initialise(self) -> None:
        if self._initialised:
            return
        _LOG.info("Opening database at %s", self.path)
        with self.cursor() as cur:
            cur.executescript(BASE_SQL)
            cur.execute(
                "INSERT OR IGNORE INTO meta (key, value) VALUES (?, ?)",
                ("schema_version", "0"),
            )
            version = self._schema_version(cur) or 0
            if version < 1:
                self._migrate_to_v1(cur)
            if version < 2:
                self._migrate_to_v2(cur)
            cur.execute(
                "INSERT OR REPLACE INTO meta (key, value) VALUES (?, ?)",
                ("schema_version", str(SCHEMA_VERSION)),
            )
        self._initialised = True

    def schema_version(self) -> Optional[int]:
        with self.cursor() as cur:
            return self._schema_version(cur)

    def clear(self) -> None:
        with self.cursor() as cur:
            cur.execute("DELETE FROM notes")

    # ------------------------------------------------------------------
    # Schema helpers
    # ------------------------------------------------------------------
    def _schema_version(self, cur: sqlite3.Cursor) -> Optional[int]:
        cur.execute("SELECT value FROM meta WHERE key = 'schema_version'")
        row = cur.fetchone()
        if row is None:
            return None
        try:
            return int(row["value"])
        except (TypeError, ValueError):  # pragma: no cover - corrupt meta row
            return None

    def _migrate_to_v1(self, cur: sqlite3.Cursor) -> None:
        _LOG.info("Creating notes table (schema version 1)")
        cur.executescript(SCHEMA_SQL)

    def _migrate_to_v2(self, cur: sqlite3.Cursor) -> None:
        _LOG.info("Upgrading database schema to version 2")
        cur.executescript(SCHEMA_SQL)
        cur.executescript(INDEX_SQL)
