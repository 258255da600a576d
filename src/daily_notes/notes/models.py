"""Data models for note entries and per-day notes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List


@dataclass(slots=True)
class NoteEntry:
    id: int
    content: str
    created_at: datetime
    updated_at: datetime
    is_quick_capture: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "is_quick_capture": self.is_quick_capture,
        }


@dataclass(slots=True)
class NotePage:
    notes: List[NoteEntry]
    total_count: int


@dataclass(slots=True)
class DayNote:
    """One calendar day of the flat-file store."""

    day: date
    content: str
    lines: List[str] = field(default_factory=list)

    @property
    def iso_date(self) -> str:
        return self.day.isoformat()

    def tail(self, count: int) -> List[str]:
        if count <= 0:
            return []
        return self.lines[-count:]

    def to_dict(self) -> dict:
        return {"date": self.iso_date, "content": self.content, "lines": list(self.lines)}
