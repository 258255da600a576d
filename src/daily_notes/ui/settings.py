"""Settings panel: storage details, shortcuts and version information."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from gi.repository import Adw, Gdk, Gtk  # type: ignore[import]

from .. import config
from .base import SyncedWindow

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..application import DailyNotesApplication

SHORTCUTS = (
    ("Ctrl + Shift + N", "Show or hide the notes window"),
    ("Ctrl + Shift + Space", "Quick capture"),
    ("Ctrl + R", "Refresh notes"),
    ("Ctrl + S", "Save note now"),
    ("Enter", "Save note or edit"),
    ("Esc", "Discard edit or close window"),
)


class SettingsWindow(SyncedWindow):
    name = "settings"

    def __init__(self, app: "DailyNotesApplication") -> None:
        window = Adw.PreferencesWindow()
        window.set_title("Settings")
        window.set_default_size(480, 600)
        window.set_hide_on_close(True)
        super().__init__(app, window)

        page = Adw.PreferencesPage()
        page.set_title("General")
        page.set_icon_name("emblem-system-symbolic")

        info_group = Adw.PreferencesGroup()
        info_group.set_title("App Information")
        info_group.add(self._row("Version", config.APP_VERSION))
        backend = "Daily text files" if app.commands.uses_daily_files else "SQLite database"
        info_group.add(self._row("Storage", backend))
        info_group.add(self._row("Storage Location", str(app.storage_location())))
        self.count_row = self._row("Stored Notes", "…")
        info_group.add(self.count_row)
        page.add(info_group)

        shortcuts_group = Adw.PreferencesGroup()
        shortcuts_group.set_title("Keyboard Shortcuts")
        for keys, description in SHORTCUTS:
            shortcuts_group.add(self._row(description, keys))
        page.add(shortcuts_group)

        features_group = Adw.PreferencesGroup()
        features_group.set_title("Features")
        features_group.add(self._row("Autosave", f"{config.AUTOSAVE_DELAY_MS} ms after the last keystroke"))
        features_group.add(self._row("Quick capture preview", f"Last {config.RECENT_WINDOW_HOURS} hours"))
        page.add(features_group)

        window.add(page)

        keys = Gtk.EventControllerKey()
        keys.connect("key-pressed", self._on_key_pressed)
        window.add_controller(keys)

        self.attach()

    def _row(self, title: str, subtitle: str) -> Adw.ActionRow:
        row = Adw.ActionRow()
        row.set_title(title)
        row.set_subtitle(subtitle)
        return row

    def fetch(self) -> List[Any]:
        if self.app.commands.uses_daily_files:
            return [len(self.app.commands.invoke("get_recent_notes"))]
        return [len(self.app.commands.invoke("list_notes", note_filter="all"))]

    def render(self, items: List[Any]) -> None:
        count = items[0] if items else 0
        label = f"{count} day(s) in the last {config.RECENT_DAYS} days" if self.app.commands.uses_daily_files else str(count)
        self.count_row.set_subtitle(label)

    def _on_key_pressed(self, _controller, keyval: int, _keycode: int, _state: Gdk.ModifierType) -> bool:
        if keyval != Gdk.KEY_Escape:
            return False
        self.hide()
        return True
