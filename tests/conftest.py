"""Pytest configuration for repository test runs."""

import os
import sys
from pathlib import Path

# Settings are read at import time; seed what they require first.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("ALLOWED_ORIGIN", "http://localhost:3000")
os.environ.setdefault("STORE_BACKEND", "memory")

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))
