from __future__ import annotations

import importlib
import logging
import os
import sys
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


class ResourcesTest(unittest.TestCase):
    def test_stylesheet_is_packaged(self) -> None:
        from daily_notes.resources import Resources

        css = Resources().css_data()
        for selector in (".note-row", ".quick-capture-entry", ".today-editor"):
            self.assertIn(selector, css)


class DataPathsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.prev_data = os.environ.get("XDG_DATA_HOME")
        os.environ["XDG_DATA_HOME"] = self.tmpdir.name
        self.data_paths = importlib.import_module("daily_notes.data_paths")

    def tearDown(self) -> None:
        if self.prev_data is None:
            os.environ.pop("XDG_DATA_HOME", None)
        else:
            os.environ["XDG_DATA_HOME"] = self.prev_data

    def test_paths_live_under_the_data_home(self) -> None:
        root = Path(self.tmpdir.name) / "daily-notes"
        self.assertEqual(self.data_paths.user_data_dir(), root)
        self.assertEqual(self.data_paths.db_path(), root / "daily-notes.db")
        notes_dir = self.data_paths.daily_notes_dir()
        self.assertEqual(notes_dir, root / "daily-notes")
        self.assertTrue(notes_dir.is_dir())
        self.assertTrue(self.data_paths.log_dir().is_dir())


class ConfigTest(unittest.TestCase):
    def _reload(self, **env: str):
        previous = {name: os.environ.get(name) for name in env}
        os.environ.update(env)
        try:
            return importlib.reload(importlib.import_module("daily_notes.config"))
        finally:
            for name, value in previous.items():
                if value is None:
                    os.environ.pop(name, None)
                else:
                    os.environ[name] = value

    def tearDown(self) -> None:
        importlib.reload(importlib.import_module("daily_notes.config"))

    def test_backend_selection(self) -> None:
        config = self._reload(DAILY_NOTES_BACKEND="daily-files")
        self.assertEqual(config.STORE_BACKEND, config.BACKEND_DAILY_FILES)

    def test_unknown_backend_falls_back_to_sqlite(self) -> None:
        config = self._reload(DAILY_NOTES_BACKEND="postgres")
        self.assertEqual(config.STORE_BACKEND, config.BACKEND_SQLITE)

    def test_numeric_overrides(self) -> None:
        config = self._reload(DAILY_NOTES_AUTOSAVE_MS="250", DAILY_NOTES_POLL_MS="soon")
        self.assertEqual(config.AUTOSAVE_DELAY_MS, 250)
        self.assertEqual(config.VISIBILITY_POLL_MS, 500)

    def test_dev_profile_flag(self) -> None:
        self.assertTrue(self._reload(DAILY_NOTES_DEV_PROFILE="1").DEV_PROFILE_ENABLED)
        self.assertFalse(self._reload(DAILY_NOTES_DEV_PROFILE="false").DEV_PROFILE_ENABLED)

    def test_log_level_override(self) -> None:
        self.assertEqual(self._reload(DAILY_NOTES_LOG_LEVEL="warning").LOG_LEVEL, logging.WARNING)
        self.assertEqual(self._reload(DAILY_NOTES_LOG_LEVEL="chatty").LOG_LEVEL, logging.INFO)

    def test_dev_profile_defaults_to_debug_logging(self) -> None:
        config = self._reload(DAILY_NOTES_DEV_PROFILE="1", DAILY_NOTES_LOG_LEVEL="")
        self.assertEqual(config.LOG_LEVEL, logging.DEBUG)


class LoggerTest(unittest.TestCase):
    def test_shared_logger_writes_to_rotating_file(self) -> None:
        from daily_notes.logger import LOG_FILE_NAME, configure_logging

        logger = configure_logging()
        self.assertEqual(logger.name, "daily_notes")
        self.assertIs(configure_logging(), logger)
        file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        self.assertEqual(len(file_handlers), 1)
        self.assertTrue(file_handlers[0].baseFilename.endswith(LOG_FILE_NAME))


if __name__ == "__main__":
    unittest.main()
