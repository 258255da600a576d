from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from daily_notes.events import (
    NOTE_CREATED,
    NOTES_UPDATED,
    REFRESH_DATA,
    SYNC_EVENTS,
    ChangeNotifier,
)


class QueueDispatcher:
    """Collects deliveries the way the main loop would queue them."""

    def __init__(self) -> None:
        self.queue: List[Callable[[], None]] = []

    def __call__(self, delivery: Callable[[], None]) -> None:
        self.queue.append(delivery)

    def drain(self) -> None:
        while self.queue:
            self.queue.pop(0)()


def test_publish_reaches_every_subscriber() -> None:
    notifier = ChangeNotifier()
    seen: list[tuple[str, str, object]] = []
    notifier.subscribe(NOTE_CREATED, lambda event, payload: seen.append(("a", event, payload)))
    notifier.subscribe(NOTE_CREATED, lambda event, payload: seen.append(("b", event, payload)))
    notifier.subscribe(NOTES_UPDATED, lambda event, payload: seen.append(("c", event, payload)))

    notifier.publish(NOTE_CREATED, 7)

    assert sorted(seen) == [("a", NOTE_CREATED, 7), ("b", NOTE_CREATED, 7)]


def test_unsubscribe_stops_delivery() -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []
    unsubscribe = notifier.subscribe(REFRESH_DATA, lambda event, _payload: calls.append(event))
    notifier.publish(REFRESH_DATA)
    unsubscribe()
    unsubscribe()
    notifier.publish(REFRESH_DATA)
    assert calls == [REFRESH_DATA]


def test_publish_does_not_wait_for_handlers() -> None:
    dispatcher = QueueDispatcher()
    notifier = ChangeNotifier(dispatcher)
    calls: list[str] = []
    notifier.subscribe(REFRESH_DATA, lambda event, _payload: calls.append(event))

    notifier.publish(REFRESH_DATA)
    assert calls == []
    dispatcher.drain()
    assert calls == [REFRESH_DATA]


def test_unsubscribe_drops_queued_deliveries() -> None:
    dispatcher = QueueDispatcher()
    notifier = ChangeNotifier(dispatcher)
    calls: list[str] = []
    unsubscribe = notifier.subscribe(REFRESH_DATA, lambda event, _payload: calls.append(event))

    notifier.publish(REFRESH_DATA)
    unsubscribe()
    dispatcher.drain()
    assert calls == []


def test_late_subscriber_gets_no_replay() -> None:
    dispatcher = QueueDispatcher()
    notifier = ChangeNotifier(dispatcher)
    early: list[str] = []
    late: list[str] = []
    notifier.subscribe(NOTE_CREATED, lambda event, _payload: early.append(event))
    notifier.publish(NOTE_CREATED)
    notifier.subscribe(NOTE_CREATED, lambda event, _payload: late.append(event))
    dispatcher.drain()
    assert early == [NOTE_CREATED]
    assert late == []


def test_failing_handler_does_not_block_others() -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []

    def broken(_event: str, _payload: object) -> None:
        raise RuntimeError("boom")

    notifier.subscribe(NOTE_CREATED, broken)
    notifier.subscribe(NOTE_CREATED, lambda event, _payload: calls.append(event))
    notifier.publish(NOTE_CREATED)
    assert calls == [NOTE_CREATED]


def test_subscribe_many_covers_all_sync_events() -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []
    unsubscribe = notifier.subscribe_many(SYNC_EVENTS, lambda event, _payload: calls.append(event))
    for name in SYNC_EVENTS:
        notifier.publish(name)
    unsubscribe()
    notifier.publish(NOTE_CREATED)
    assert calls == list(SYNC_EVENTS)


def test_handler_may_publish_reentrantly() -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []

    def relay(event: str, _payload: object) -> None:
        calls.append(event)
        if event == NOTE_CREATED:
            notifier.publish(REFRESH_DATA)

    notifier.subscribe_many((NOTE_CREATED, REFRESH_DATA), relay)
    notifier.publish(NOTE_CREATED)
    assert calls == [NOTE_CREATED, REFRESH_DATA]
