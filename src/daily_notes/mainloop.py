"""GLib main loop adapters for the notifier, view sync and debouncer."""

from __future__ import annotations

from typing import Callable

from gi.repository import GLib  # type: ignore[import]


def idle_dispatch(delivery: Callable[[], None]) -> None:
    """Queue ``delivery`` on the main loop instead of running it inline."""

    def _once() -> bool:
        delivery()
        return GLib.SOURCE_REMOVE

    GLib.idle_add(_once)


class GLibTimers:
    """One-shot timers over ``GLib.timeout_add``."""

    def add(self, delay_ms: int, callback: Callable[[], None]) -> int:
        def _once() -> bool:
            callback()
            return GLib.SOURCE_REMOVE

        return GLib.timeout_add(delay_ms, _once)

    def remove(self, source_id: int) -> None:
        GLib.source_remove(source_id)


def every(interval_ms: int, callback: Callable[[], None]) -> int:
    """Run ``callback`` every ``interval_ms`` until the source is removed."""

    def _tick() -> bool:
        callback()
        return GLib.SOURCE_CONTINUE

    return GLib.timeout_add(interval_ms, _tick)
