# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import threading
import time
from collections import deque
from collections.abc import Callable
from functools import wraps

from flask import jsonify, request

from sharelink.shared.config import SecurityConfig


class InMemoryRateLimiter:
    """Sliding-window counter per key, held in process memory."""

    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = max(1, int(limit))
        self.window = max(0.1, float(window_seconds))
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def retry_after(self, key: str) -> float:
        """Record a hit and return 0, or return seconds until the oldest hit ages out."""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep > self.window:
                self._sweep(now)
            hits = self._hits.setdefault(key, deque())
            self._expire(hits, now)
            if len(hits) >= self.limit:
                return max(self.window - (now - hits[0]), 0.001)
            hits.append(now)
            return 0

    def _expire(self, hits: deque[float], now: float) -> None:
        while hits and now - hits[0] > self.window:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        # Callers lock; drops keys with no hit left inside the window
        for key in list(self._hits):
            self._expire(self._hits[key], now)
            if not self._hits[key]:
                del self._hits[key]
        self._last_sweep = now


def _caller() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def rate_limit(config: SecurityConfig, limit: int | None = None, window_seconds: float | None = None):
    """Throttle a view per endpoint and caller; a no-op when ``ENABLE_RATE_LIMIT`` is off."""
    limiter = InMemoryRateLimiter(
        limit or config.rate_limit_requests,
        window_seconds or config.rate_limit_window,
    )

    def decorator(view: Callable):
        if not config.enable_rate_limit:
            return view

        @wraps(view)
        def limited(*args, **kwargs):
            wait = limiter.retry_after(f"{request.endpoint}:{_caller()}")
            if wait:
                response = jsonify({"error": "rate_limited"})
                response.status_code = 429
                response.headers["Retry-After"] = str(math.ceil(wait))
                return response
            return view(*args, **kwargs)

        return limited

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
