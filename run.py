#!/usr/bin/env python3
"""Helper entry point to run Daily Notes from a source checkout."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from daily_notes.application import run  # type: ignore[import]


if __name__ == "__main__":  # pragma: no cover - manual entry point
    run()
