from typing import Set

from fastapi import Request
from fastapi.responses import JSONResponse
from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

from core.config import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS

RATE_LIMIT_MESSAGE = "Too many requests, please try again later"
EXEMPT_PATHS = ("/health",)


class SlidingWindowRateLimiter:
    """
    Per-client sliding window limiter on the `limits` moving-window strategy.

    A request is rejected when `max_requests` requests from the same
    identifier already fall inside the trailing `window_seconds`. Rejected
    requests are not recorded. Timestamps come from `time.time()` inside
    the in-memory storage.
    """

    def __init__(
        self,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.item = RateLimitItemPerSecond(max_requests, int(window_seconds), namespace="tapolio")
        self.strategy = MovingWindowRateLimiter(MemoryStorage())
        self._clients: Set[str] = set()

    def hit(self, identifier: str) -> bool:
        """Return True when the request is admitted, recording it."""
        self._clients.add(identifier)
        return self.strategy.hit(self.item, identifier)

    def remaining(self, identifier: str) -> int:
        return self.strategy.get_window_stats(self.item, identifier).remaining

    def sweep(self) -> int:
        """Forget clients with no requests left in their window. Returns clients removed."""
        idle = [c for c in self._clients if self.remaining(c) >= self.max_requests]
        for identifier in idle:
            self.strategy.clear(self.item, identifier)
            self._clients.discard(identifier)
        return len(idle)

    def __len__(self) -> int:
        return len(self._clients)


def get_identifier(request: Request) -> str:
    """
    Get identifier for rate limiting.
    Uses the first X-Forwarded-For hop when behind a proxy, otherwise the peer address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limit_exceeded_response() -> JSONResponse:
    return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE})
