"""Main window: every note with inline editing, or today's note editor."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, List

from gi.repository import Adw, Gdk, Gtk, Pango  # type: ignore[import]

from .. import config
from ..errors import NotesError
from ..logger import configure_logging
from ..mainloop import GLibTimers
from ..notes.debounce import Debouncer
from ..notes.models import NoteEntry
from ..notes.sync import ViewState
from .base import SyncedWindow, clear_listbox
from .formatting import entry_date, entry_time, long_date

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..application import DailyNotesApplication

_LOG = configure_logging()


class MainWindow(SyncedWindow):
    """Controller for the main notes window.

    With the SQLite backend the window lists all notes newest first and lets
    the user edit or delete them; Enter commits an edit and Escape discards
    it. With the daily-files backend it edits today's note as one text blob
    and saves it one second after the last keystroke.
    """

    name = "main"

    def __init__(self, app: "DailyNotesApplication") -> None:
        window = Adw.ApplicationWindow(application=app)
        window.set_title(config.APP_NAME)
        window.set_default_size(420, 620)
        super().__init__(app, window)
        self.editor_mode = app.commands.uses_daily_files
        self.edit_entry: Gtk.Entry | None = None
        self.autosave = Debouncer(self._save_today, GLibTimers(), config.AUTOSAVE_DELAY_MS)
        self.window.connect("close-request", self._on_close_request)

        self.toast_overlay = Adw.ToastOverlay()
        self.window.set_content(self.toast_overlay)

        root = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        self.toast_overlay.set_child(root)
        self._build_header(root)
        if self.editor_mode:
            self._build_editor(root)
        else:
            self._build_list(root)
        self._build_footer(root)

        keys = Gtk.EventControllerKey()
        keys.connect("key-pressed", self._on_key_pressed)
        self.window.add_controller(keys)

        self.attach()

    # ------------------------------------------------------------------
    # UI construction helpers
    # ------------------------------------------------------------------
    def _build_header(self, root: Gtk.Box) -> None:
        header = Adw.HeaderBar()
        self.title_widget = Adw.WindowTitle(title=config.APP_NAME, subtitle=long_date(datetime.now()))
        header.set_title_widget(self.title_widget)

        settings_button = Gtk.Button(icon_name="emblem-system-symbolic")
        settings_button.set_tooltip_text("Settings")
        settings_button.set_action_name("app.settings")
        header.pack_start(settings_button)

        refresh_button = Gtk.Button(icon_name="view-refresh-symbolic")
        refresh_button.set_tooltip_text("Refresh")
        refresh_button.connect("clicked", self.refresh)
        header.pack_end(refresh_button)

        root.append(header)

    def _build_list(self, root: Gtk.Box) -> None:
        self.stack = Gtk.Stack()
        self.stack.set_vexpand(True)

        loading = Gtk.Spinner(spinning=True, halign=Gtk.Align.CENTER, valign=Gtk.Align.CENTER)
        self.stack.add_named(loading, "loading")

        empty = Adw.StatusPage(title="No notes yet", icon_name="accessories-text-editor-symbolic")
        empty.set_description("Press Ctrl+Shift+Space to capture one.")
        self.stack.add_named(empty, "empty")

        self.listbox = Gtk.ListBox()
        self.listbox.set_selection_mode(Gtk.SelectionMode.NONE)
        self.listbox.add_css_class("boxed-list")
        scroller = Gtk.ScrolledWindow(margin_top=8, margin_bottom=8, margin_start=8, margin_end=8)
        scroller.set_child(self.listbox)
        self.stack.add_named(scroller, "list")

        self.stack.set_visible_child_name("loading")
        root.append(self.stack)

    def _build_editor(self, root: Gtk.Box) -> None:
        self.editor = Gtk.TextView()
        self.editor.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
        self.editor.add_css_class("today-editor")
        self.editor.get_buffer().connect("changed", self._on_editor_changed)
        scroller = Gtk.ScrolledWindow()
        scroller.set_vexpand(True)
        scroller.set_child(self.editor)
        root.append(scroller)

    def _build_footer(self, root: Gtk.Box) -> None:
        hint = "Esc close • Ctrl+S save • Ctrl+Shift+Space quick capture"
        footer = Gtk.Label(label=f"{hint} • v{config.APP_VERSION}", margin_top=4, margin_bottom=6)
        footer.add_css_class("dim-label")
        footer.add_css_class("footer-hint")
        root.append(footer)

    def _build_row(self, note: NoteEntry) -> Gtk.ListBoxRow:
        row = Gtk.ListBoxRow()
        row.set_activatable(False)
        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=10)
        box.add_css_class("note-row")

        stamp = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        date_label = Gtk.Label(label=entry_date(note.created_at), xalign=0)
        date_label.add_css_class("note-date")
        date_label.add_css_class("dim-label")
        time_label = Gtk.Label(label=entry_time(note.created_at), xalign=0)
        time_label.add_css_class("note-time")
        stamp.append(date_label)
        stamp.append(time_label)
        box.append(stamp)

        if self.sync.editing_id == note.id:
            entry = Gtk.Entry(text=self.sync.editing_content, hexpand=True)
            entry.add_css_class("note-edit-entry")
            entry.connect("activate", lambda _entry: self.commit_edit())
            entry.connect("changed", lambda e: self.sync.edit_draft(e.get_text()))
            box.append(entry)
            self.edit_entry = entry
            box.append(self._action_button("object-select-symbolic", "Save", lambda _b: self.commit_edit()))
            box.append(self._action_button("window-close-symbolic", "Cancel", lambda _b: self.cancel_edit()))
            entry.grab_focus_without_selecting()
            entry.set_position(-1)
        else:
            content = Gtk.Label(label=note.content, xalign=0, hexpand=True, wrap=True)
            content.set_wrap_mode(Pango.WrapMode.WORD_CHAR)
            content.set_tooltip_text(note.content)
            content.add_css_class("note-content")
            box.append(content)
            box.append(
                self._action_button("document-edit-symbolic", "Edit", lambda _b, n=note: self.begin_edit(n))
            )
            box.append(
                self._action_button("user-trash-symbolic", "Delete", lambda _b, n=note: self.delete_note(n.id))
            )

        row.set_child(box)
        return row

    def _action_button(self, icon: str, tooltip: str, callback) -> Gtk.Button:
        button = Gtk.Button(icon_name=icon, valign=Gtk.Align.CENTER)
        button.add_css_class("flat")
        button.add_css_class("circular")
        button.set_tooltip_text(tooltip)
        button.connect("clicked", callback)
        return button

    # ------------------------------------------------------------------
    # Sync hooks
    # ------------------------------------------------------------------
    def fetch(self) -> List[Any]:
        if self.editor_mode:
            return [self.app.commands.invoke("get_today_note")]
        return self.app.commands.invoke("list_notes", note_filter="all")

    def render(self, items: List[Any]) -> None:
        self.title_widget.set_subtitle(long_date(datetime.now()))
        if self.editor_mode:
            self._render_editor(items[0] if items else "")
            return
        self.edit_entry = None
        clear_listbox(self.listbox)
        if not items:
            self.stack.set_visible_child_name("empty")
            return
        for note in items:
            self.listbox.append(self._build_row(note))
        self.stack.set_visible_child_name("list")

    def _render_editor(self, content: str) -> None:
        # Never overwrite text the user is still typing.
        if self.autosave.pending:
            return
        buffer = self.editor.get_buffer()
        start, end = buffer.get_bounds()
        if buffer.get_text(start, end, True) == content:
            return
        buffer.handler_block_by_func(self._on_editor_changed)
        buffer.set_text(content)
        buffer.handler_unblock_by_func(self._on_editor_changed)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def begin_edit(self, note: NoteEntry) -> None:
        self.sync.begin_edit(note.id, note.content)
        self.render(self.sync.items)

    def commit_edit(self) -> None:
        if self.edit_entry is None:
            return
        content = self.edit_entry.get_text()
        if not self.sync.commit_edit(content, self._update_note):
            if self.sync.state is ViewState.EDITING:
                self.show_toast("A note cannot be empty")

    def cancel_edit(self) -> None:
        self.sync.cancel_edit()
        self.render(self.sync.items)

    def _update_note(self, note_id: int, content: str) -> None:
        self.app.commands.invoke("update_note", note_id=note_id, content=content)

    def delete_note(self, note_id: int) -> None:
        try:
            self.app.commands.invoke("delete_note", note_id=note_id)
        except NotesError as exc:
            _LOG.error("Failed to delete note %s: %s", note_id, exc)
            self.show_toast("Could not delete note")

    # ------------------------------------------------------------------
    # Autosave
    # ------------------------------------------------------------------
    def _on_editor_changed(self, buffer: Gtk.TextBuffer) -> None:
        start, end = buffer.get_bounds()
        self.autosave.trigger(buffer.get_text(start, end, True))

    def save_now(self) -> None:
        """Manual save: commits an open edit or writes pending editor text."""
        if self.editor_mode:
            if self.autosave.flush():
                self.show_toast("Saved")
        elif self.sync.editing_id is not None:
            self.commit_edit()

    def _save_today(self, content: str) -> None:
        try:
            self.app.commands.invoke("save_today_note", content=content)
        except NotesError as exc:
            _LOG.error("Failed to save today's note: %s", exc)
            self.show_toast("Could not save note")

    # ------------------------------------------------------------------
    # Window events
    # ------------------------------------------------------------------
    def _on_key_pressed(self, _controller, keyval: int, _keycode: int, _state: Gdk.ModifierType) -> bool:
        if keyval != Gdk.KEY_Escape:
            return False
        if self.sync.editing_id is not None:
            self.cancel_edit()
        else:
            self.hide()
        return True

    def hide(self) -> None:
        self.autosave.flush()
        super().hide()

    def _on_close_request(self, _window: Adw.ApplicationWindow) -> bool:
        self.hide()
        return True
