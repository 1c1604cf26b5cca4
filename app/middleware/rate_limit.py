"""Per-client fixed-window rate limiting."""

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/", "/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}
EXEMPT_PREFIXES = ("/static/",)


class RateLimiter:
    """In-process fixed-window counter keyed by client."""

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: int = 900,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.max_requests = max_requests
        self.window = window_seconds
        self._clock = clock or time.monotonic
        self._windows: Dict[str, Tuple[float, int]] = {}

    def check_rate_limit(self, key: str) -> bool:
        """Count a request for ``key``. Returns False once the window is exhausted."""
        now = self._clock()
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window:
            started, count = now, 0

        if count >= self.max_requests:
            self._windows[key] = (started, count)
            return False

        self._windows[key] = (started, count + 1)
        self._evict(now)
        return True

    def retry_after(self, key: str) -> int:
        """Seconds until the window for ``key`` resets."""
        started, _ = self._windows.get(key, (self._clock(), 0))
        return max(1, int(self.window - (self._clock() - started)))

    def reset(self) -> None:
        self._windows.clear()

    def _evict(self, now: float) -> None:
        if len(self._windows) < 10_000:
            return
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window]
        for k in expired:
            del self._windows[k]


def is_exempt(path: str) -> bool:
    return path in EXEMPT_PATHS or path.startswith(EXEMPT_PREFIXES)


async def rate_limit_middleware(request: Request, call_next):
    """Global rate limiting middleware"""
    if is_exempt(request.url.path):
        return await call_next(request)

    limiter: RateLimiter = request.app.state.rate_limiter
    client_ip = request.client.host if request.client else "unknown"
    key = f"ratelimit:global:{client_ip}"

    if not limiter.check_rate_limit(key):
        logger.warning(f"Rate limit exceeded for {client_ip}")
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "error": "Too many requests",
                "message": "Too many requests, please try again later",
            },
            headers={"Retry-After": str(limiter.retry_after(key))},
        )

    return await call_next(request)
