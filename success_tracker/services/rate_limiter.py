"""
rate_limiter.py — Per-key request limiting
Fixed-window counters keyed by caller (e.g. "mutation:42"). Expired windows
are dropped lazily on access and in bulk by sweep(). Instances are created by
the application and injected; nothing here is process-global.

hit() is called from sync dependencies on the threadpool while sweep() runs
on the event loop, so every access to the window table holds the lock.
"""

import math
import threading
import time
from typing import Callable, NamedTuple


class RateLimitResult(NamedTuple):
    allowed: bool
    remaining: int
    reset_at: float  # clock value at which the window ends

    def retry_after(self, now: float) -> int:
        return max(1, math.ceil(self.reset_at - now))


class RateLimiter:
    """Fixed-window request counter with TTL eviction."""

    def __init__(self, window_seconds: float, max_requests: int, clock: Callable[[], float] = time.monotonic):
        if window_seconds <= 0 or max_requests <= 0:
            raise ValueError("window_seconds and max_requests must be positive")
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.clock = clock
        # key → {count, reset_at}
        self._windows: dict[str, dict] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    def hit(self, key: str) -> RateLimitResult:
        """Count one request for key and report whether it is allowed."""
        with self._lock:
            now = self.clock()
            entry = self._windows.get(key)

            if entry is None or entry["reset_at"] <= now:
                entry = {"count": 1, "reset_at": now + self.window_seconds}
                self._windows[key] = entry
                return RateLimitResult(True, self.max_requests - 1, entry["reset_at"])

            if entry["count"] >= self.max_requests:
                return RateLimitResult(False, 0, entry["reset_at"])

            entry["count"] += 1
            return RateLimitResult(True, self.max_requests - entry["count"], entry["reset_at"])

    # ------------------------------------------------------------------
    def sweep(self) -> int:
        """Evict all windows that have ended. Returns how many were removed."""
        with self._lock:
            now = self.clock()
            expired = [k for k, v in self._windows.items() if v["reset_at"] <= now]
            for k in expired:
                del self._windows[k]
            return len(expired)

    # ------------------------------------------------------------------
    def reset(self):
        with self._lock:
            self._windows.clear()

    def size(self) -> int:
        """Number of windows currently tracked, expired or not."""
        with self._lock:
            return len(self._windows)
