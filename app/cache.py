"""TTL cache for PoH verification results."""
from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict

from app.models import Verdict, VerificationResult
from app.utils import normalize_address, now_ms


@dataclass
class CacheEntry:
    value: Verdict
    created_at: float


class VerificationCache:
    """Thread-safe per-address cache with lazy expiry on read.

    Entries are never swept in the background; an expired entry is dropped by
    the ``get`` that finds it or replaced by the next ``put``.
    """

    def __init__(self, ttl_ms: int, clock: Callable[[], float] = now_ms) -> None:
        self._ttl = ttl_ms
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, address: str) -> Verdict | None:
        key = normalize_address(address)
        with self._lock:
            entry = self._store.get(key)
            if not entry:
                return None
            if self._clock() - entry.created_at >= self._ttl:
                self._store.pop(key, None)
                return None
            return entry.value

    def put(self, address: str, result: VerificationResult) -> None:
        if not isinstance(result, Verdict):
            return
        key = normalize_address(address)
        with self._lock:
            self._store[key] = CacheEntry(value=result, created_at=self._clock())

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
