from __future__ import annotations

import sys
import tempfile
import unittest
from datetime import UTC, datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from daily_notes.db import Database
from daily_notes.errors import NotFoundError, ValidationError
from daily_notes.events import NOTE_CREATED, NOTE_UPDATED, NOTES_UPDATED, ChangeNotifier
from daily_notes.notes.store import ListFilter, NoteStore


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


class NoteStoreTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.clock = FakeClock(datetime(2026, 10, 19, 9, 0, tzinfo=UTC))
        self.notifier = ChangeNotifier()
        self.events: list[tuple[str, object]] = []
        for name in (NOTE_CREATED, NOTE_UPDATED, NOTES_UPDATED):
            self.notifier.subscribe(name, lambda event, payload: self.events.append((event, payload)))
        self.store = NoteStore(
            Database(Path(self.tmpdir.name) / "notes.db"),
            self.notifier,
            clock=self.clock,
        )

    def test_create_update_delete_scenario(self) -> None:
        t0 = self.clock.now
        note = self.store.create_note("Standup done")
        listing = self.store.list_notes("all")
        self.assertEqual([n.content for n in listing], ["Standup done"])

        t1 = self.clock.advance(minutes=30)
        self.store.update_note(note.id, "Standup done, reviewed PR")
        (updated,) = self.store.list_notes(ListFilter.ALL)
        self.assertEqual(updated.content, "Standup done, reviewed PR")
        self.assertEqual(updated.created_at, t0)
        self.assertEqual(updated.updated_at, t1)

        self.store.delete_note(note.id)
        self.assertEqual(self.store.list_notes(), [])

    def test_created_entry_has_matching_timestamps_and_flag(self) -> None:
        quick = self.store.create_note("Buy milk", is_quick_capture=True)
        regular = self.store.create_note("Write report")
        self.assertEqual(quick.created_at, quick.updated_at)
        self.assertTrue(quick.is_quick_capture)
        self.assertFalse(regular.is_quick_capture)
        self.assertGreater(regular.id, quick.id)

    def test_update_never_moves_updated_at_before_created_at(self) -> None:
        note = self.store.create_note("Standup done")
        self.clock.advance(minutes=-5)
        updated = self.store.update_note(note.id, "Standup moved")
        self.assertEqual(updated.content, "Standup moved")
        self.assertEqual(updated.created_at, note.created_at)
        self.assertGreaterEqual(updated.updated_at, updated.created_at)

        self.clock.advance(minutes=10)
        later = self.store.update_note(note.id, "Standup moved again")
        self.assertEqual(later.updated_at, self.clock.now)

    def test_content_is_trimmed(self) -> None:
        note = self.store.create_note("   padded  \n")
        self.assertEqual(note.content, "padded")

    def test_blank_content_is_rejected_without_writing(self) -> None:
        note = self.store.create_note("keep me")
        self.events.clear()
        for blank in ("", "   ", "\n\t"):
            with self.assertRaises(ValidationError):
                self.store.create_note(blank)
            with self.assertRaises(ValidationError):
                self.store.update_note(note.id, blank)
        self.assertEqual(self.store.count(), 1)
        self.assertEqual(self.store.get_note(note.id).content, "keep me")
        self.assertEqual(self.events, [])

    def test_update_missing_note_raises(self) -> None:
        with self.assertRaises(NotFoundError):
            self.store.update_note(999, "anything")
        self.assertEqual(self.store.count(), 0)

    def test_delete_is_idempotent(self) -> None:
        note = self.store.create_note("short lived")
        other = self.store.create_note("survivor")
        self.store.delete_note(note.id)
        self.store.delete_note(note.id)
        self.assertEqual([n.id for n in self.store.list_notes()], [other.id])

    def test_every_mutation_publishes_once(self) -> None:
        note = self.store.create_note("first")
        self.store.update_note(note.id, "second")
        self.store.delete_note(note.id)
        self.assertEqual([event for event, _ in self.events], [NOTE_CREATED, NOTE_UPDATED, NOTES_UPDATED])
        self.assertEqual(self.events[0][1].id, note.id)
        self.assertEqual(self.events[2][1], note.id)

    def test_notification_follows_commit(self) -> None:
        seen: list[int] = []
        self.notifier.subscribe(NOTE_CREATED, lambda _event, _payload: seen.append(self.store.count()))
        self.store.create_note("visible to listeners")
        self.assertEqual(seen, [1])

    def test_listing_is_newest_first_with_id_tiebreak(self) -> None:
        first = self.store.create_note("a")
        second = self.store.create_note("b")
        self.clock.advance(minutes=1)
        third = self.store.create_note("c")
        ids = [n.id for n in self.store.list_notes()]
        self.assertEqual(ids, [third.id, second.id, first.id])
        listing = self.store.list_notes()
        for earlier, later in zip(listing, listing[1:]):
            self.assertGreaterEqual(earlier.created_at, later.created_at)

    def test_recent_window_excludes_old_notes(self) -> None:
        self.store.create_note("three days ago")
        self.clock.advance(hours=24)
        kept = self.store.create_note("two days ago")
        self.clock.advance(hours=47)
        fresh = self.store.create_note("now")
        recent = self.store.list_notes(ListFilter.RECENT)
        self.assertEqual([n.id for n in recent], [fresh.id, kept.id])
        cutoff = self.clock.now - timedelta(hours=48)
        self.assertTrue(all(n.created_at >= cutoff for n in recent))
        self.assertEqual(len(self.store.list_notes(ListFilter.ALL)), 3)

    def test_recent_listing_is_capped(self) -> None:
        for index in range(55):
            self.store.create_note(f"note {index}")
            self.clock.advance(seconds=1)
        recent = self.store.list_notes("recent")
        self.assertEqual(len(recent), 50)
        self.assertEqual(recent[0].content, "note 54")

    def test_blank_rows_are_hidden_from_listings(self) -> None:
        self.store.create_note("visible")
        with self.store.db.cursor() as cur:
            cur.execute(
                "INSERT INTO notes (content, created_at, updated_at, is_quick_capture) VALUES (?, ?, ?, 0)",
                ("   ", "2026-10-19T09:00:00.000000+00:00", "2026-10-19T09:00:00.000000+00:00"),
            )
        self.assertEqual([n.content for n in self.store.list_notes()], ["visible"])
        self.assertEqual([n.content for n in self.store.list_notes("recent")], ["visible"])

    def test_page_notes_filters_and_counts(self) -> None:
        for index in range(4):
            self.store.create_note(f"quick {index}", is_quick_capture=True)
            self.clock.advance(seconds=1)
        self.store.create_note("typed in main window")
        page = self.store.page_notes(limit=2, offset=1, is_quick_capture=True)
        self.assertEqual(page.total_count, 4)
        self.assertEqual([n.content for n in page.notes], ["quick 2", "quick 1"])
        self.assertEqual(self.store.page_notes().total_count, 5)

    def test_today_note_renders_time_prefixed_lines(self) -> None:
        self.clock.now = datetime(2026, 10, 19, 9, 0).astimezone()
        self.store.create_note("wrote draft")
        self.clock.advance(minutes=90)
        self.store.append_to_today("reviewed code")
        self.assertEqual(self.store.today_note().splitlines(), ["[09:00] wrote draft", "[10:30] reviewed code"])


if __name__ == "__main__":
    unittest.main()
