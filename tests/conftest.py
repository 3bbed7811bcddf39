"""
Test bootstrap: put the repo root on sys.path so the top-level modules import
without an editable install, and select a non-interactive matplotlib backend.
"""
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
