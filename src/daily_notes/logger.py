"""Logging for the notes core and the windows.

Every module binds ``_LOG = configure_logging()`` at import time; the first
call attaches the handlers and later calls return the same logger.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from . import config
from .data_paths import log_dir

LOGGER_NAME = "daily_notes"
LOG_FILE_NAME = "daily-notes.log"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        log_dir() / LOG_FILE_NAME,
        maxBytes=1_048_576,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def configure_logging() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(config.LOG_LEVEL)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    file_handler = _file_handler(formatter)
    logger.addHandler(file_handler)

    # The terminal only shows problems unless debug logging was asked for.
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console.setLevel(logging.DEBUG if config.LOG_LEVEL <= logging.DEBUG else logging.WARNING)
    logger.addHandler(console)

    logger.info(
        "Logging at %s to %s",
        logging.getLevelName(config.LOG_LEVEL),
        file_handler.baseFilename,
    )
    return logger
