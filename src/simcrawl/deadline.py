"""Wall-clock budget shared by every step of one crawl."""

import time
from typing import Callable

from .constants import MIN_STEP_TIMEOUT_MS


class Deadline:
    """
    Monotonic deadline started at construction.

    Usage:
        deadline = Deadline(180)
        await page.goto(url, timeout=deadline.clip_ms(30000))
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            seconds: Budget in seconds
            clock: Monotonic clock, injectable for tests
        """
        self.seconds = seconds
        self._clock = clock
        self.started_at = clock()
        self.expires_at = self.started_at + seconds

    def remaining(self) -> float:
        """Seconds left, never negative."""
        return max(0.0, self.expires_at - self._clock())

    def elapsed(self) -> float:
        return self._clock() - self.started_at

    @property
    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def clip_ms(self, timeout_ms: int) -> int:
        """Bound a per-step Playwright timeout by the time left."""
        remaining_ms = int(self.remaining() * 1000)
        return max(MIN_STEP_TIMEOUT_MS, min(timeout_ms, remaining_ms))

    def __repr__(self) -> str:
        return f"Deadline(seconds={self.seconds}, remaining={self.remaining():.2f})"
