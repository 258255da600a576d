"""Quick capture popup with a read-only preview of recent notes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from gi.repository import Adw, Gdk, GLib, Gtk, Pango  # type: ignore[import]

from .. import config
from ..errors import NotesError, ValidationError
from ..logger import configure_logging
from ..notes.models import DayNote, NoteEntry
from .base import SyncedWindow, clear_listbox
from .formatting import entry_timestamp, truncate

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..application import DailyNotesApplication

_LOG = configure_logging()

_HIDE_DELAY_MS = 100


class QuickCaptureWindow(SyncedWindow):
    """Enter saves the input as a quick-capture note and hides the popup."""

    name = "quick-capture"

    def __init__(self, app: "DailyNotesApplication") -> None:
        window = Adw.ApplicationWindow(application=app)
        window.set_title("Quick Capture")
        window.set_default_size(680, 440)
        window.set_resizable(False)
        super().__init__(app, window)
        self.window.connect("close-request", self._on_close_request)

        self.toast_overlay = Adw.ToastOverlay()
        self.window.set_content(self.toast_overlay)

        root = Gtk.Box(
            orientation=Gtk.Orientation.VERTICAL,
            spacing=8,
            margin_top=12,
            margin_bottom=12,
            margin_start=12,
            margin_end=12,
        )
        self.toast_overlay.set_child(root)

        self.entry = Gtk.Entry(placeholder_text="What are you working on?")
        self.entry.add_css_class("quick-capture-entry")
        self.entry.connect("activate", self._on_submit)
        root.append(self.entry)

        title = "Recent days" if app.commands.uses_daily_files else f"Last {config.RECENT_WINDOW_HOURS}h"
        heading = Gtk.Label(label=title, xalign=0)
        heading.add_css_class("recent-notes-title")
        root.append(heading)

        self.listbox = Gtk.ListBox()
        self.listbox.set_selection_mode(Gtk.SelectionMode.NONE)
        self.listbox.set_placeholder(Gtk.Label(label="No recent notes", margin_top=12))
        scroller = Gtk.ScrolledWindow()
        scroller.set_vexpand(True)
        scroller.set_child(self.listbox)
        root.append(scroller)

        footer = Gtk.Label(label="Enter save • Esc close • Editing only in the main window", xalign=0)
        footer.add_css_class("dim-label")
        footer.add_css_class("footer-hint")
        root.append(footer)

        keys = Gtk.EventControllerKey()
        keys.connect("key-pressed", self._on_key_pressed)
        self.window.add_controller(keys)

        self.attach()

    def present(self) -> None:
        super().present()
        self.entry.grab_focus()

    # ------------------------------------------------------------------
    # Sync hooks
    # ------------------------------------------------------------------
    def fetch(self) -> List[Any]:
        return self.app.commands.invoke("get_recent_notes")

    def render(self, items: List[Any]) -> None:
        clear_listbox(self.listbox)
        for item in items:
            if isinstance(item, DayNote):
                self._append_day(item)
            else:
                self._append_entry(item)

    def _append_entry(self, note: NoteEntry) -> None:
        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=10, margin_top=2, margin_bottom=2)
        stamp = Gtk.Label(label=entry_timestamp(note.created_at))
        stamp.add_css_class("note-time")
        stamp.add_css_class("dim-label")
        box.append(stamp)
        content = Gtk.Label(label=truncate(note.content), xalign=0, hexpand=True)
        content.set_ellipsize(Pango.EllipsizeMode.END)
        box.append(content)
        if note.is_quick_capture:
            badge = Gtk.Label(label="Quick")
            badge.add_css_class("note-badge")
            box.append(badge)
        self.listbox.append(box)

    def _append_day(self, note: DayNote) -> None:
        header = Gtk.Label(label=note.day.strftime("%A, %d.%m."), xalign=0, margin_top=6)
        header.add_css_class("heading")
        self.listbox.append(header)
        for line in note.tail(config.QUICK_CAPTURE_TAIL):
            label = Gtk.Label(label=truncate(line, 80), xalign=0)
            label.set_ellipsize(Pango.EllipsizeMode.END)
            self.listbox.append(label)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _on_submit(self, entry: Gtk.Entry) -> None:
        text = entry.get_text()
        try:
            self.app.commands.invoke("create_note", content=text, is_quick_capture=True)
        except ValidationError:
            return
        except NotesError as exc:
            _LOG.error("Failed to save quick capture note: %s", exc)
            self.show_toast("Could not save note")
            return
        entry.set_text("")
        GLib.timeout_add(_HIDE_DELAY_MS, self._hide_once)

    def _hide_once(self) -> bool:
        self.hide()
        return GLib.SOURCE_REMOVE

    def _on_key_pressed(self, _controller, keyval: int, _keycode: int, _state: Gdk.ModifierType) -> bool:
        if keyval != Gdk.KEY_Escape:
            return False
        self.entry.set_text("")
        self.hide()
        return True

    def _on_close_request(self, _window: Adw.ApplicationWindow) -> bool:
        self.entry.set_text("")
        self.hide()
        return True
