"""Test configuration helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    """Add ``src/`` to ``sys.path`` when running tests without installing."""

    src = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_src_on_path()

# Fixed reference time: 2023-11-14T22:13:20Z, in milliseconds
NOW_MS = 1_700_000_000_000


@pytest.fixture
def now_ms() -> int:
    return NOW_MS


@pytest.fixture
def sample_payload() -> dict:
    return {"sub": "1234567890", "name": "John Doe", "admin": True}
