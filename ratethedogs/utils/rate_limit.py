"""
Sliding-window rate limiting.
"""

import asyncio
import threading
import time
from typing import Dict, List
from loguru import logger


class RateLimiter:
    """Rate limiter for outgoing API calls."""

    def __init__(self, calls_per_minute: int = 60):
        self.calls_per_minute = calls_per_minute
        self.calls: List[float] = []

    async def acquire(self):
        """Wait if necessary to respect rate limit."""
        now = time.time()
        # Remove calls older than 1 minute
        self.calls = [call_time for call_time in self.calls if now - call_time < 60]

        if len(self.calls) >= self.calls_per_minute:
            sleep_time = 60 - (now - self.calls[0])
            if sleep_time > 0:
                logger.debug(f"Rate limit reached, sleeping for {sleep_time:.2f}s")
                await asyncio.sleep(sleep_time)
                return await self.acquire()

        self.calls.append(now)


class KeyedRateLimiter:
    """
    Per-key limiter for incoming requests.

    Each key (an anonymous ID) may make `limit` calls per `window` seconds.
    Calls over the limit are rejected rather than delayed. Safe to share
    between the worker threads that run sync endpoints.
    """

    def __init__(self, limit: int, window: float = 60.0):
        self.limit = limit
        self.window = window
        self._hits: Dict[str, List[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = time.time()

    def _sweep(self, now: float) -> None:
        """Drop keys with no calls left in the window."""
        stale = [key for key, hits in self._hits.items() if not hits or now - hits[-1] >= self.window]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> bool:
        """
        Record a call for a key.

        Args:
            key: Caller identity

        Returns:
            True if the call is allowed, False if over the limit
        """
        with self._lock:
            now = time.time()
            if now - self._last_sweep >= self.window:
                self._sweep(now)

            recent = [t for t in self._hits.get(key, []) if now - t < self.window]
            if len(recent) >= self.limit:
                self._hits[key] = recent
                logger.warning(f"Rate limit exceeded for {key}")
                return False

            recent.append(now)
            self._hits[key] = recent
            return True

    def reset(self, key: str = None) -> None:
        """Forget recorded calls for one key or for all keys."""
        with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)
