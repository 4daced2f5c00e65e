"""Simple in-memory client rate limiter."""
from __future__ import annotations

from collections import deque
from threading import Lock
from typing import Callable, Deque, Dict

from app.utils import now_ms


class RateLimiter:
    """Tracks requests per client id within a sliding window.

    State is kept for every client ever seen; nothing evicts idle clients.
    """

    def __init__(self, limit: int, window_ms: int, clock: Callable[[], float] = now_ms) -> None:
        self.limit = limit
        self.window = window_ms
        self._clock = clock
        self._requests: Dict[str, Deque[float]] = {}
        self._lock = Lock()

    def allow(self, client_id: str) -> bool:
        now = self._clock()
        with self._lock:
            q = self._requests.setdefault(client_id, deque())
            while q and now - q[0] >= self.window:
                q.popleft()
            if len(q) >= self.limit:
                return False
            q.append(now)
            return True
