"""In-process broadcast of note change events between windows."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from .logger import configure_logging

_LOG = configure_logging()

NOTE_UPDATED = "note-updated"
NOTES_UPDATED = "notes-updated"
NOTE_CREATED = "note-created"
REFRESH_DATA = "refresh-data"
FORCE_REFRESH = "force-refresh"
WINDOW_SHOWN = "window-shown"

# Every event after which a window should re-query its store.
SYNC_EVENTS = (NOTE_UPDATED, NOTES_UPDATED, NOTE_CREATED, REFRESH_DATA, FORCE_REFRESH)

Handler = Callable[[str, Any], None]
Dispatcher = Callable[[Callable[[], None]], None]


def inline_dispatch(delivery: Callable[[], None]) -> None:
    delivery()


@dataclass(slots=True)
class Subscription:
    event_name: str
    handler: Handler
    active: bool = True


class ChangeNotifier:
    """Fan out named events to every handler subscribed at publish time.

    Deliveries are handed to ``dispatcher``; the application passes one that
    queues them on the GLib main loop so :meth:`publish` never waits on a
    handler. Events are not buffered: a handler subscribed after ``publish``
    returns does not see that event.
    """

    def __init__(self, dispatcher: Optional[Dispatcher] = None) -> None:
        self._dispatch = dispatcher or inline_dispatch
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_name: str, handler: Handler) -> Callable[[], None]:
        subscription = Subscription(event_name, handler)
        with self._lock:
            self._subscriptions.setdefault(event_name, []).append(subscription)

        def unsubscribe() -> None:
            self._remove(subscription)

        return unsubscribe

    def subscribe_many(self, event_names: Iterable[str], handler: Handler) -> Callable[[], None]:
        tokens = [self.subscribe(name, handler) for name in event_names]

        def unsubscribe_all() -> None:
            for token in tokens:
                token()

        return unsubscribe_all

    def publish(self, event_name: str, payload: Any = None) -> None:
        with self._lock:
            targets = list(self._subscriptions.get(event_name, ()))
        _LOG.debug("Publishing %s to %s listener(s)", event_name, len(targets))
        for subscription in targets:
            self._dispatch(self._delivery(subscription, payload))

    def _remove(self, subscription: Subscription) -> None:
        subscription.active = False
        with self._lock:
            listeners = self._subscriptions.get(subscription.event_name)
            if not listeners:
                return
            try:
                listeners.remove(subscription)
            except ValueError:
                return
            if not listeners:
                del self._subscriptions[subscription.event_name]

    def _delivery(self, subscription: Subscription, payload: Any) -> Callable[[], None]:
        def deliver() -> None:
            # Unsubscribed between publish and dispatch.
            if not subscription.active:
                return
            try:
                subscription.handler(subscription.event_name, payload)
            except Exception:
                _LOG.exception("Listener for %s failed", subscription.event_name)

        return deliver


__all__ = [
    "ChangeNotifier",
    "Subscription",
    "inline_dispatch",
    "NOTE_UPDATED",
    "NOTES_UPDATED",
    "NOTE_CREATED",
    "REFRESH_DATA",
    "FORCE_REFRESH",
    "WINDOW_SHOWN",
    "SYNC_EVENTS",
]
