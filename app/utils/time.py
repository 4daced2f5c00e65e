"""Time helpers."""
from __future__ import annotations

import time


def now_ms() -> float:
    """Monotonic clock reading in milliseconds."""

    return time.monotonic() * 1000.0
