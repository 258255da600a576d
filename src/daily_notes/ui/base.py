"""Shared wiring for windows that mirror the note stores."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional

import gi  # type: ignore[import]

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, GLib, Gtk  # type: ignore[import]

from .. import config
from ..events import SYNC_EVENTS
from ..logger import configure_logging
from ..mainloop import every, idle_dispatch
from ..notes.sync import ViewSync

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..application import DailyNotesApplication

_LOG = configure_logging()


def clear_listbox(listbox: Gtk.ListBox) -> None:
    child = listbox.get_first_child()
    while child is not None:
        next_child = child.get_next_sibling()
        listbox.remove(child)
        child = next_child


class SyncedWindow:
    """Base controller: change events, focus and the visibility poll all call
    :meth:`refresh`, which feeds a single :class:`ViewSync`."""

    name = "window"

    def __init__(self, app: "DailyNotesApplication", window: Gtk.Window) -> None:
        self.app = app
        self.window = window
        self.sync: ViewSync[Any] = ViewSync(
            self.fetch,
            self.render,
            dispatch=idle_dispatch,
            name=self.name,
        )
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._poll_source = 0
        self._was_visible = False

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------
    def fetch(self) -> List[Any]:
        raise NotImplementedError

    def render(self, items: List[Any]) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def attach(self) -> None:
        self._unsubscribe = self.app.notifier.subscribe_many(SYNC_EVENTS, self._on_change_event)
        self.window.connect("notify::is-active", self._on_active_changed)
        self.window.connect("notify::visible", self._on_visible_changed)
        self._poll_source = every(config.VISIBILITY_POLL_MS, self._poll_visibility)
        self.refresh()

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._poll_source:
            GLib.source_remove(self._poll_source)
            self._poll_source = 0

    def present(self) -> None:
        self.window.present()
        self.refresh()

    def hide(self) -> None:
        self.window.set_visible(False)

    def toggle(self) -> None:
        if self.window.get_visible():
            self.hide()
        else:
            self.present()

    def refresh(self, *_args: Any) -> None:
        self.sync.refresh()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------
    def _on_change_event(self, event_name: str, _payload: Any) -> None:
        _LOG.debug("%s received %s", self.name, event_name)
        self.refresh()

    def _on_active_changed(self, window: Gtk.Window, _param: Any) -> None:
        if window.is_active():
            self.refresh()

    def _on_visible_changed(self, window: Gtk.Window, _param: Any) -> None:
        self._was_visible = window.get_visible()
        if self._was_visible:
            self.refresh()

    def _poll_visibility(self) -> None:
        # Backstop for show events that never reached the window.
        visible = self.window.get_visible()
        if visible and not self._was_visible:
            self.refresh()
        self._was_visible = visible

    def show_toast(self, message: str, timeout: int = 3) -> None:
        overlay = getattr(self, "toast_overlay", None)
        if overlay is None:
            return
        toast = Adw.Toast.new(message)
        toast.set_timeout(timeout)
        overlay.add_toast(toast)
