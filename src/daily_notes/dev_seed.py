"""Development fixtures for offline UI testing."""

from __future__ import annotations

from datetime import datetime

from . import config
from .logger import configure_logging
from .notes.store import NoteStore

_LOG = configure_logging()

SAMPLE_NOTES = (
    ("Standup done", False),
    ("Reviewed the release checklist", False),
    ("Call back about the invoice", True),
)


def seed_if_requested(notes: NoteStore) -> int:
    if not config.DEV_PROFILE_ENABLED:
        return 0
    if notes.count():
        _LOG.info("Dev profile requested but database already populated; skipping seed")
        return 0

    for content, quick in SAMPLE_NOTES:
        notes.create_note(content, is_quick_capture=quick)
    _LOG.info("Seeded %s development notes at %s", len(SAMPLE_NOTES), datetime.now().isoformat())
    return len(SAMPLE_NOTES)
