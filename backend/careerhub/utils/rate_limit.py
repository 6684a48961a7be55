"""In-memory sliding-window rate limiter, keyed per user and endpoint."""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Tuple


class InMemoryRateLimiter:
    """Allow at most `max_requests` hits per key within `window_seconds`.

    State lives in process memory, so limits are per worker. Keys whose
    hits have all expired are dropped, either when the key is next used
    or by a sweep that runs at most once per window.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._last_sweep = clock()

    @staticmethod
    def _prune(hits: Deque[float], cutoff: float) -> None:
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def _sweep(self, cutoff: float) -> None:
        for key in list(self._hits):
            hits = self._hits[key]
            self._prune(hits, cutoff)
            if not hits:
                del self._hits[key]

    def allow(self, key: str, max_requests: int, window_seconds: int) -> Tuple[bool, int]:
        """Record a hit for `key`; return (allowed, retry_after_seconds)."""
        now = self._clock()
        cutoff = now - window_seconds
        with self._lock:
            if now - self._last_sweep >= window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now
            hits = self._hits.get(key)
            if hits is not None:
                self._prune(hits, cutoff)
                if not hits:
                    del self._hits[key]
                    hits = None
            if hits is not None and len(hits) >= max_requests:
                return False, max(1, int(window_seconds - (now - hits[0])))
            self._hits.setdefault(key, deque()).append(now)
        return True, 0

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self, key: str = None) -> None:
        with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)
