"""Access to packaged UI resources."""

from __future__ import annotations

from importlib import resources
from typing import Any, TYPE_CHECKING

try:  # pragma: no cover - optional dependency
    from gi.repository import Gtk  # type: ignore[import]
except (ImportError, ValueError):  # pragma: no cover - headless tests
    Gtk = None  # type: ignore[assignment]

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from gi.repository import Gtk as GtkType  # type: ignore[import]
else:
    GtkType = Any  # type: ignore[misc]


class Resources:
    """Packaged stylesheets for the windows."""

    def __init__(self) -> None:
        self._ui_pkg = 'daily_notes.ui'

    def ui_data(self, name: str) -> str:
        return (resources.files(self._ui_pkg) / name).read_text(encoding='utf-8')

    def css_data(self) -> str:
        return self.ui_data('style.css')

    def css_provider(self) -> GtkType.CssProvider:
        gtk = _require_gtk()
        provider = gtk.CssProvider()
        provider.load_from_data(self.css_data().encode('utf-8'))
        return provider


def _require_gtk() -> Any:
    if Gtk is None:
        raise RuntimeError('GTK is required to build UI resources')
    return Gtk
