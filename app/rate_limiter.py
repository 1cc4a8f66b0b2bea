# app/rate_limiter.py
"""
In-memory rolling-window limit on public booking attempts, per client IP.
Runs before admission so rejected floods never reach the database.
"""

import logging
import time
from collections import defaultdict, deque
from threading import Lock

from fastapi import HTTPException, Request, status

from app.config import settings

logger = logging.getLogger(__name__)


class RollingWindowLimiter:
    def __init__(self, limit: int, window_seconds: int, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock
        self._hits: dict[str, deque] = defaultdict(deque)
        self._lock = Lock()
        self._last_sweep = clock()

    def _prune(self, key: str, now: float) -> deque:
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()
        return hits

    def _sweep(self, now: float) -> None:
        # Drop clients whose attempts have all aged out
        for key in list(self._hits):
            if not self._prune(key, now):
                del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> bool:
        """Record an attempt for `key`; False when the window is already full."""
        now = self.clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            hits = self._prune(key, now)
            if len(hits) >= self.limit:
                return False
            hits.append(now)
            return True

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self.clock()


booking_limiter = RollingWindowLimiter(
    settings.booking_rate_limit,
    settings.booking_rate_window_seconds,
)


def client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


# Dependency
def limit_booking_attempts(request: Request) -> None:
    key = client_key(request)
    if not booking_limiter.hit(key):
        logger.warning("Booking rate limit exceeded for %s", key)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Muitas tentativas de agendamento. Tente novamente mais tarde.",
        )
