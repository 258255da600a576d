"""Primary application entry point for Daily Notes."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import gi  # type: ignore[import]

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, Gdk, Gio, Gtk  # type: ignore[import]

from . import config
from .commands import NoteCommands
from .db import Database
from .dev_seed import seed_if_requested
from .errors import NotesError
from .events import FORCE_REFRESH, REFRESH_DATA, WINDOW_SHOWN, ChangeNotifier
from .logger import configure_logging
from .mainloop import idle_dispatch
from .notes.daily import DailyNoteStore
from .notes.store import NoteStore
from .resources import Resources
from .ui.main_window import MainWindow
from .ui.quick_capture import QuickCaptureWindow
from .ui.settings import SettingsWindow

_LOG = configure_logging()


class DailyNotesApplication(Adw.Application):
    def __init__(self) -> None:
        super().__init__(application_id=config.APP_ID, flags=Gio.ApplicationFlags.FLAGS_NONE)
        self.resources = Resources()
        self.notifier = ChangeNotifier(idle_dispatch)
        self.database = Database()
        self.note_store = NoteStore(self.database, self.notifier)
        self.daily_store = DailyNoteStore(notifier=self.notifier)
        self.commands = NoteCommands(self.note_store, self.daily_store, backend=config.STORE_BACKEND)
        self.main_window: Optional[MainWindow] = None
        self.quick_capture: Optional[QuickCaptureWindow] = None
        self.settings_window: Optional[SettingsWindow] = None

    def do_startup(self) -> None:  # type: ignore[override]
        Adw.Application.do_startup(self)
        self._install_actions()
        self._register_css()
        # Stay alive with every window hidden, like a menu-bar app.
        self.hold()
        _LOG.info("Started %s %s with %s backend", config.APP_NAME, config.APP_VERSION, config.STORE_BACKEND)

    def do_activate(self) -> None:  # type: ignore[override]
        if not self.main_window:
            try:
                seed_if_requested(self.note_store)
            except NotesError as exc:
                _LOG.error("Dev seed failed: %s", exc)
            self.main_window = MainWindow(self)
        self.main_window.present()

    def do_shutdown(self) -> None:  # type: ignore[override]
        _LOG.info("Shutting down application")
        for controller in (self.main_window, self.quick_capture, self.settings_window):
            if controller is not None:
                controller.detach()
        if self.main_window is not None:
            self.main_window.autosave.flush()
        Adw.Application.do_shutdown(self)

    def _install_actions(self) -> None:
        self._add_simple_action("toggle_main", self.toggle_main)
        self._add_simple_action("quick_capture", self.show_quick_capture)
        self._add_simple_action("settings", self.show_settings)
        self._add_simple_action("refresh", self.request_refresh)
        self._add_simple_action("save", self.save_now)
        self._add_simple_action("quit", self.quit)
        self.set_accels_for_action("app.toggle_main", ["<Primary><Shift>n"])
        self.set_accels_for_action("app.quick_capture", ["<Primary><Shift>space"])
        self.set_accels_for_action("app.refresh", ["<Primary>r"])
        self.set_accels_for_action("app.save", ["<Primary>s"])
        self.set_accels_for_action("app.settings", ["<Primary>comma"])
        self.set_accels_for_action("app.quit", ["<Primary>q"])

    def _add_simple_action(self, name: str, callback) -> None:
        action = Gio.SimpleAction.new(name, None)
        action.connect("activate", lambda _a, _p: callback())
        self.add_action(action)

    def _register_css(self) -> None:
        provider = self.resources.css_provider()
        display = Gdk.Display.get_default()
        if display is None:
            return
        Gtk.StyleContext.add_provider_for_display(display, provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION)

    # ------------------------------------------------------------------
    # Window actions
    # ------------------------------------------------------------------
    def toggle_main(self) -> None:
        if not self.main_window:
            self.activate()
            return
        self.main_window.toggle()

    def show_quick_capture(self) -> None:
        if self.quick_capture is None:
            self.quick_capture = QuickCaptureWindow(self)
        self.quick_capture.present()
        self.notifier.publish(REFRESH_DATA)
        self.notifier.publish(WINDOW_SHOWN, "quick-capture")
        self.notifier.publish(FORCE_REFRESH)

    def show_settings(self) -> None:
        if self.settings_window is None:
            self.settings_window = SettingsWindow(self)
        if self.main_window is not None:
            self.settings_window.window.set_transient_for(self.main_window.window)
        self.settings_window.present()

    def save_now(self) -> None:
        if self.main_window is not None:
            self.main_window.save_now()

    def request_refresh(self) -> None:
        self.notifier.publish(REFRESH_DATA)

    def storage_location(self) -> Path:
        if self.commands.uses_daily_files:
            return self.daily_store.directory
        return self.database.path


def run() -> None:
    app = DailyNotesApplication()
    app.run(None)
