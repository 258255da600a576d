"""Per-window synchronisation with the note stores.

Change events, focus changes and the visibility poll all end up in
:meth:`ViewSync.refresh`. Fetches are tagged with increasing request ids and
a result that arrives after a newer request was issued is dropped.
"""

from __future__ import annotations

import enum
import sqlite3
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ..errors import NotesError, ValidationError
from ..events import inline_dispatch
from ..logger import configure_logging

_LOG = configure_logging()

T = TypeVar("T")

Dispatcher = Callable[[Callable[[], None]], None]


class ViewState(enum.Enum):
    LOADING = "loading"
    READY = "ready"
    EDITING = "editing"


class ViewSync(Generic[T]):
    """State machine driving one window's view of the store."""

    def __init__(
        self,
        fetch: Callable[[], List[T]],
        render: Callable[[List[T]], None],
        *,
        dispatch: Optional[Dispatcher] = None,
        name: str = "view",
    ) -> None:
        self._fetch = fetch
        self._render = render
        self._dispatch = dispatch or inline_dispatch
        self.name = name
        self.state = ViewState.LOADING
        self.items: List[T] = []
        self.editing_id: Optional[int] = None
        self.editing_content = ""
        self._last_issued = 0
        self._scheduled: Optional[int] = None

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------
    def refresh(self, *_args: Any) -> int:
        """Request a re-fetch; returns the id of the fetch that will serve it."""
        if self._scheduled is not None:
            return self._scheduled
        self._last_issued += 1
        request_id = self._last_issued
        self._scheduled = request_id
        if self.editing_id is None:
            self.state = ViewState.LOADING
        self._dispatch(lambda: self._run_fetch(request_id))
        return request_id

    def _run_fetch(self, request_id: int) -> None:
        if self._scheduled == request_id:
            self._scheduled = None
        try:
            result = list(self._fetch())
        except (NotesError, OSError, sqlite3.Error):
            _LOG.exception("Failed to load notes for %s", self.name)
            result = []
        self.deliver(request_id, result)

    def deliver(self, request_id: int, result: List[T]) -> bool:
        """Apply a fetch result unless a newer request has been issued."""
        if request_id < self._last_issued:
            _LOG.debug("Discarding stale result %s for %s", request_id, self.name)
            return False
        self.items = list(result)
        self.state = ViewState.EDITING if self.editing_id is not None else ViewState.READY
        self._render(self.items)
        return True

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def begin_edit(self, note_id: int, content: str) -> None:
        self.editing_id = note_id
        self.editing_content = content
        self.state = ViewState.EDITING

    def edit_draft(self, content: str) -> None:
        """Track text typed into the open editor so re-renders keep it."""
        if self.editing_id is not None:
            self.editing_content = content

    def commit_edit(self, content: str, update: Callable[[int, str], Any]) -> bool:
        if self.editing_id is None:
            return False
        try:
            update(self.editing_id, content)
        except ValidationError:
            self.editing_content = content
            return False
        except NotesError:
            _LOG.exception("Failed to update note %s", self.editing_id)
            self._end_edit()
            self.refresh()
            return False
        self._end_edit()
        self.refresh()
        return True

    def cancel_edit(self) -> None:
        if self.editing_id is None:
            return
        self._end_edit()

    def _end_edit(self) -> None:
        self.editing_id = None
        self.editing_content = ""
        if self.state is ViewState.EDITING:
            self.state = ViewState.READY


__all__ = ["ViewSync", "ViewState"]
