"""Global pytest configuration.

Tests run from the project root without an installed package, so the root
directory is put on ``sys.path`` before collection.
"""

from __future__ import annotations

import sys
from pathlib import Path


def pytest_configure() -> None:
    root_dir = Path(__file__).resolve().parents[1]

    raw = str(root_dir)
    if raw not in sys.path:
        sys.path.insert(0, raw)
