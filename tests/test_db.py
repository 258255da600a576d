from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from daily_notes.db import SCHEMA_VERSION, Database
from daily_notes.errors import StoreUnavailableError
from daily_notes.notes.store import NoteStore


def test_initialise_creates_schema(tmp_path: Path) -> None:
    db = Database(tmp_path / "nested" / "notes.db")
    db.initialise()
    assert db.path.exists()
    assert db.schema_version() == SCHEMA_VERSION

    with db.cursor() as cur:
        cur.execute("SELECT name FROM sqlite_master WHERE type = 'index' AND tbl_name = 'notes'")
        indexes = {row["name"] for row in cur.fetchall()}
        cur.execute("PRAGMA table_info(notes)")
        columns = [row["name"] for row in cur.fetchall()]

    assert {"idx_notes_created_at", "idx_notes_is_quick_capture"} <= indexes
    assert columns == ["id", "content", "created_at", "updated_at", "is_quick_capture"]


def test_initialise_is_idempotent_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "notes.db"
    first = Database(path)
    first.initialise()
    with first.cursor() as cur:
        cur.execute(
            "INSERT INTO notes (content, created_at, updated_at) VALUES (?, ?, ?)",
            ("kept", "2026-10-19T09:00:00.000000+00:00", "2026-10-19T09:00:00.000000+00:00"),
        )

    second = Database(path)
    second.initialise()
    with second.cursor() as cur:
        cur.execute("SELECT content, is_quick_capture FROM notes")
        rows = [tuple(row) for row in cur.fetchall()]
    assert rows == [("kept", 0)]


def test_upgrades_version_one_database(tmp_path: Path) -> None:
    path = tmp_path / "notes.db"
    db = Database(path)
    with db.cursor() as cur:
        cur.executescript(
            """
            CREATE TABLE meta (key TEXT PRIMARY KEY, value TEXT NOT NULL);
            INSERT INTO meta (key, value) VALUES ('schema_version', '1');
            CREATE TABLE notes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                content TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                is_quick_capture INTEGER NOT NULL DEFAULT 0
            );
            """
        )
    db.initialise()
    assert db.schema_version() == SCHEMA_VERSION


def test_failed_statement_rolls_back(tmp_path: Path) -> None:
    db = Database(tmp_path / "notes.db")
    db.initialise()
    with pytest.raises(StoreUnavailableError):
        with db.cursor() as cur:
            cur.execute(
                "INSERT INTO notes (content, created_at, updated_at) VALUES ('x', 'now', 'now')"
            )
            cur.execute("INSERT INTO missing_table VALUES (1)")
    with db.cursor() as cur:
        cur.execute("SELECT COUNT(*) FROM notes")
        assert cur.fetchone()[0] == 0


def test_unusable_location_raises_store_unavailable(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    db = Database(blocker / "notes.db")
    with pytest.raises(StoreUnavailableError):
        db.initialise()


def test_store_survives_unavailable_database_at_startup(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    store = NoteStore(Database(blocker / "notes.db"))
    with pytest.raises(StoreUnavailableError):
        store.count()


def test_clear_removes_every_note(tmp_path: Path) -> None:
    store = NoteStore(Database(tmp_path / "notes.db"))
    store.create_note("one")
    store.create_note("two")
    store.db.clear()
    assert store.count() == 0
