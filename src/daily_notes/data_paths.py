"""Helpers for resolving XDG data locations."""

from __future__ import annotations

import importlib
import os
from pathlib import Path

GLib = None
try:  # pragma: no cover - fallback for test environments without GTK
    gi_repository = importlib.import_module("gi.repository")
    GLib = getattr(gi_repository, "GLib")
except (ImportError, AttributeError, ValueError):  # pragma: no cover - test fallback
    GLib = None

APP_NAMESPACE = "daily-notes"


def _ensure(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _xdg_base(name: str, fallback: str) -> Path:
    env_var = f"XDG_{name.upper()}_HOME"
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAMESPACE
    if GLib is not None:
        getter = getattr(GLib, f"get_user_{name}_dir")
        return Path(getter()) / APP_NAMESPACE
    return Path.home() / fallback / APP_NAMESPACE


def user_data_dir() -> Path:
    return _ensure(_xdg_base("data", ".local/share"))


def log_dir() -> Path:
    return _ensure(user_data_dir() / "logs")


def db_path() -> Path:
    return user_data_dir() / "daily-notes.db"


def daily_notes_dir() -> Path:
    """Directory holding one ``YYYY-MM-DD.txt`` file per day."""
    return _ensure(user_data_dir() / "daily-notes")
