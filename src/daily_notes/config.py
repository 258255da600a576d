"""Runtime configuration read from the environment.

Values are resolved once at import time.
"""

from __future__ import annotations

import logging
import os


def _truthy_env(name: str, default: str = "0") -> bool:
    value = os.getenv(name, default)
    return value not in {"0", "false", "False", ""}


def _level_env(name: str, default: str) -> int:
    raw = os.getenv(name) or default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


BACKEND_SQLITE = "sqlite"
BACKEND_DAILY_FILES = "daily-files"

APP_ID = "io.github.dailynotes.DailyNotes"
APP_NAME = "Daily Notes"
APP_VERSION = "0.5.0"

DEV_PROFILE_ENABLED: bool = _truthy_env("DAILY_NOTES_DEV_PROFILE", "0")

STORE_BACKEND: str = os.getenv("DAILY_NOTES_BACKEND", BACKEND_SQLITE)
if STORE_BACKEND not in {BACKEND_SQLITE, BACKEND_DAILY_FILES}:
    STORE_BACKEND = BACKEND_SQLITE

AUTOSAVE_DELAY_MS: int = _int_env("DAILY_NOTES_AUTOSAVE_MS", 1000)
VISIBILITY_POLL_MS: int = _int_env("DAILY_NOTES_POLL_MS", 500)

# The dev profile also turns on debug logging unless a level is given.
LOG_LEVEL: int = _level_env("DAILY_NOTES_LOG_LEVEL", "DEBUG" if DEV_PROFILE_ENABLED else "INFO")

RECENT_WINDOW_HOURS = 48
RECENT_LIMIT = 50
RECENT_DAYS = 3
QUICK_CAPTURE_TAIL = 10
