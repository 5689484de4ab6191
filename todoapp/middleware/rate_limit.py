# todoapp/middleware/rate_limit.py
import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from todoapp.errors import RateLimitExceededError
from todoapp.middleware.exceptions import problem_response

logger = logging.getLogger(__name__)

# Drop idle client windows once the table grows past this
MAX_TRACKED_CLIENTS = 10_000


class Decision(NamedTuple):
    allowed: bool
    # Seconds to wait before proceeding when allowed, or until the window resets when rejected
    delay: float


@dataclass
class _Window:
    reset_at: float
    count: int = 0
    # Permits already promised to queued requests in the following window
    queued: int = 0


class FixedWindowRateLimiter:
    """
    Fixed-window limiter keyed by client.

    Up to ``limit`` requests are admitted per window. Once a window is full,
    up to ``queue_limit`` further requests are queued: each is granted a
    permit in the next window and told how long to wait for it, so queued
    requests go through in arrival order before new arrivals. Anything
    beyond that is rejected.
    """

    def __init__(
        self,
        limit: int = 60,
        window_seconds: float = 60.0,
        queue_limit: int = 10,
        clock: Callable[[], float] = time.monotonic,
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.window_seconds = window_seconds
        self.queue_limit = max(0, min(queue_limit, limit))
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def reserve(self, key: str) -> Decision:
        now = self._clock()
        window = self._windows.get(key)

        if window is None:
            window = self._windows[key] = _Window(reset_at=now + self.window_seconds)
            self._prune(now)
        elif now >= window.reset_at:
            if now < window.reset_at + self.window_seconds:
                # Next window, already holding the queued requests' permits
                window.count, window.queued = window.queued, 0
                window.reset_at += self.window_seconds
            else:
                window.count, window.queued = 0, 0
                window.reset_at = now + self.window_seconds

        if window.count < self.limit:
            window.count += 1
            return Decision(True, 0.0)

        if window.queued < self.queue_limit:
            window.queued += 1
            return Decision(True, window.reset_at - now)

        return Decision(False, window.reset_at - now)

    def _prune(self, now: float) -> None:
        if len(self._windows) <= MAX_TRACKED_CLIENTS:
            return
        stale = [
            key for key, window in self._windows.items()
            if now >= window.reset_at + self.window_seconds
        ]
        for key in stale:
            del self._windows[key]


def client_key(request: Request) -> str:
    return request.client.host if request.client else "anonymous"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: FixedWindowRateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next):
        key = client_key(request)
        decision = self.limiter.reserve(key)

        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s", key)
            exc = RateLimitExceededError("Rate limit exceeded. Try again later.")
            return problem_response(
                request,
                exc.status_code,
                exc.title,
                exc.message,
                headers={"Retry-After": str(max(1, math.ceil(decision.delay)))},
            )

        if decision.delay > 0:
            logger.debug("Queued request from %s for %.1f s", key, decision.delay)
            await asyncio.sleep(decision.delay)

        return await call_next(request)
