from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

# Keep the rotating log file out of the real home directory.
os.environ.setdefault("XDG_DATA_HOME", tempfile.mkdtemp(prefix="daily-notes-tests-"))
