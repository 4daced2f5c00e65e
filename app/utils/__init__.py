"""Utility helpers."""
from .addresses import is_valid_address, normalize_address  # noqa: F401
from .time import now_ms  # noqa: F401
