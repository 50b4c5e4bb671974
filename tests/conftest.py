from __future__ import annotations

import os
import sys
from pathlib import Path

# Make the src/ layout importable without an editable install.
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.pop("JSEMBED_TRACE", None)
os.environ.pop("JSEMBED_UNUSED", None)
os.environ.pop("JSEMBED_JSON_LOGS", None)
