"""Text helpers shared by the windows; free of GTK so they test headless."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional


def truncate(text: str, limit: int = 60) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "…"


def entry_timestamp(created_at: datetime, now: Optional[datetime] = None) -> str:
    """``HH:MM`` for the last 24 hours, ``DD.MM HH:MM`` before that."""
    local = created_at.astimezone()
    current = (now or datetime.now().astimezone()).astimezone()
    if current - local < timedelta(hours=24):
        return f"{local:%H:%M}"
    return f"{local:%d.%m %H:%M}"


def entry_date(created_at: datetime) -> str:
    return f"{created_at.astimezone():%d.%m}"


def entry_time(created_at: datetime) -> str:
    return f"{created_at.astimezone():%H:%M}"


def long_date(value: datetime) -> str:
    return f"{value:%A, %d %B %Y}"
