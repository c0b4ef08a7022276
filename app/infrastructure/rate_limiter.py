"""Process-local request rate limiting.

Counters live in the memory of the current process. Every worker process or
serverless instance keeps its own counters, so the effective limit grows with
the number of instances. Swap in a shared backend behind the same ``check``
interface when that matters.

Usage:
    limiter = InMemoryRateLimiter(limit=30, window_seconds=60)
    decision = limiter.check("203.0.113.7:/attendance/check-in")
    if not decision.allowed:
        ...  # reply 429 and honour decision.retry_after
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL_SECONDS = 5 * 60


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of checking one request against the limiter."""

    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0

    def headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimiter:
    """Fixed-window counters keyed by an arbitrary string.

    Entries are created on the first request for a key, dropped by a sweep
    that runs at most once per ``sweep_interval_seconds``, and lost when the
    process restarts.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def check(self, key: str) -> RateLimitDecision:
        """Count one request for ``key`` and report whether it is allowed."""

        with self._lock:
            now = self._clock()
            self._sweep_if_due(now)

            window = self._windows.get(key)
            if window is None or window.reset_at <= now:
                window = _Window(count=0, reset_at=now + self.window_seconds)
                self._windows[key] = window

            if window.count >= self.limit:
                retry_after = max(1, math.ceil(window.reset_at - now))
                return RateLimitDecision(
                    allowed=False,
                    limit=self.limit,
                    remaining=0,
                    retry_after=retry_after,
                )

            window.count += 1
            return RateLimitDecision(
                allowed=True,
                limit=self.limit,
                remaining=self.limit - window.count,
            )

    def clear(self) -> None:
        """Forget every counter."""

        with self._lock:
            self._windows.clear()
            self._last_sweep = self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def _sweep_if_due(self, now: float) -> None:
        if now - self._last_sweep < self.sweep_interval_seconds:
            return
        expired = [key for key, window in self._windows.items() if window.reset_at <= now]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now
        if expired:
            logger.debug("Swept %s expired rate limit entries", len(expired))


__all__ = [
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "InMemoryRateLimiter",
    "RateLimitDecision",
]
