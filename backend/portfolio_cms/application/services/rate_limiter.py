"""Windowed rate limiter shared by all remote record store operations."""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from portfolio_cms.domain.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    attempts: int
    reset_at: float


class RateLimiter:
    """Counts attempts per key inside a fixed window.

    Each key has its own counter and reset time. Expiry is lazy: a window is
    only reset when the key is next checked. ``start_sweeper`` adds a periodic
    full clear as a safety net. State is in-memory only and never persisted.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._sweeper: asyncio.Task | None = None

    def hit(self, key: str, max_attempts: int, window_seconds: float) -> bool:
        """Record an attempt. Returns False when the attempt exceeds the limit."""
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now > window.reset_at:
            window = _Window(attempts=0, reset_at=now + window_seconds)
            self._windows[key] = window

        window.attempts += 1
        if window.attempts > max_attempts:
            logger.warning("Rate limit exceeded for: %s", key)
            return False
        return True

    def check(self, key: str, max_attempts: int, window_seconds: float) -> None:
        """Record an attempt, raising RateLimitExceededError when over the limit."""
        if not self.hit(key, max_attempts, window_seconds):
            raise RateLimitExceededError(key, max_attempts, window_seconds)

    def attempts(self, key: str) -> int:
        window = self._windows.get(key)
        return window.attempts if window else 0

    def clear(self, key: str) -> None:
        self._windows.pop(key, None)

    def clear_all(self) -> None:
        self._windows.clear()

    # ── Periodic sweep ──────────────────────────────────────────────

    async def start_sweeper(self, interval_seconds: float) -> None:
        """Start the background task that clears every counter periodically."""
        if self._sweeper is not None:
            return
        self._sweeper = asyncio.create_task(self._sweep_loop(interval_seconds))
        logger.info("RateLimiter sweeper started (every %.0fs)", interval_seconds)

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
        logger.info("RateLimiter sweeper stopped")

    async def _sweep_loop(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            count = len(self._windows)
            self.clear_all()
            logger.debug("RateLimiter sweep cleared %d keys", count)
