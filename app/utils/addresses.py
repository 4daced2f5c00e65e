"""Ethereum address helpers."""
from __future__ import annotations

import re

_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")


def is_valid_address(address: object) -> bool:
    """Return ``True`` when ``address`` is ``0x`` followed by 40 hex characters."""

    if not isinstance(address, str):
        return False
    return _ADDRESS_RE.fullmatch(address) is not None


def normalize_address(address: str) -> str:
    """Lowercase an address so checksummed and plain forms share a key."""

    return address.lower()
