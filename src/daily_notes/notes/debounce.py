"""Debounced autosave for editors."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Tuple

from .. import config
from ..logger import configure_logging

_LOG = configure_logging()


class Timers(Protocol):
    """One-shot timer source, implemented over GLib in the application."""

    def add(self, delay_ms: int, callback: Callable[[], None]) -> int:
        ...

    def remove(self, source_id: int) -> None:
        ...


class Debouncer:
    """Run ``callback`` once input has been quiet for ``delay_ms``.

    Every :meth:`trigger` cancels the pending timer and arms a new one, so
    only the timer armed by the last call ever fires.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        timers: Timers,
        delay_ms: int = config.AUTOSAVE_DELAY_MS,
    ) -> None:
        self._callback = callback
        self._timers = timers
        self.delay_ms = delay_ms
        self._source_id = 0
        self._generation = 0
        self._pending_args: Optional[Tuple[Any, ...]] = None

    @property
    def pending(self) -> bool:
        return self._pending_args is not None

    def trigger(self, *args: Any) -> None:
        self._cancel_timer()
        self._pending_args = args
        self._generation += 1
        generation = self._generation
        self._source_id = self._timers.add(self.delay_ms, lambda: self._fire(generation))

    def flush(self) -> bool:
        """Run a pending callback now; returns whether one was pending."""
        if self._pending_args is None:
            return False
        self._cancel_timer()
        self._run()
        return True

    def cancel(self) -> None:
        self._cancel_timer()
        self._pending_args = None

    def _fire(self, generation: int) -> None:
        # A timer that was replaced but could not be removed in time.
        if generation != self._generation or self._pending_args is None:
            return
        self._source_id = 0
        self._run()

    def _run(self) -> None:
        args = self._pending_args or ()
        self._pending_args = None
        try:
            self._callback(*args)
        except Exception:
            _LOG.exception("Debounced save failed")

    def _cancel_timer(self) -> None:
        if self._source_id:
            self._timers.remove(self._source_id)
            self._source_id = 0
