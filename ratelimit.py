"""
Per-client request limits.

Each limiter keeps a log of request timestamps per client address and
rejects a request once ``limit`` of them fall inside the trailing window.
State lives in process memory, so limits only hold for a single instance.
"""

import threading
from collections import defaultdict
from datetime import datetime, timedelta, timezone

from fastapi import Request

import config
from errors import RateLimitError
from log import get_logger

logger = get_logger(__name__)

GLOBAL_RATE_LIMIT = 100  # max requests per window per IP
GLOBAL_RATE_WINDOW = timedelta(minutes=15)

LOGIN_RATE_LIMIT = 5
LOGIN_RATE_WINDOW = timedelta(hours=1)


def client_ip(request: Request) -> str:
    """Return the client IP used as the rate-limit key.

    X-Forwarded-For is client controlled, so it only counts when
    TRUST_PROXY says a reverse proxy in front of us sets it.
    """
    if config.TRUST_PROXY:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimiter:
    def __init__(self, name: str, limit: int, window: timedelta, message: str):
        self.name = name
        self.limit = limit
        self.window = window
        self.message = message
        self._lock = threading.Lock()
        self._log: dict[str, list[datetime]] = defaultdict(list)
        self._last_sweep = datetime.now(timezone.utc)

    def hit(self, key: str) -> None:
        """Record one request for ``key`` or raise RateLimitError."""
        now = datetime.now(timezone.utc)
        window_start = now - self.window
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(window_start)
                self._last_sweep = now
            recent = [t for t in self._log[key] if t > window_start]
            if len(recent) >= self.limit:
                self._log[key] = recent
                logger.warning("%s rate limit hit for IP %s", self.name, key)
                raise RateLimitError(self.message)
            recent.append(now)
            self._log[key] = recent

    def _sweep(self, window_start: datetime) -> None:
        """Drop clients with no request inside the window.  Caller holds the lock."""
        stale = [
            key
            for key, times in self._log.items()
            if not times or times[-1] <= window_start
        ]
        for key in stale:
            del self._log[key]

    def reset(self) -> None:
        with self._lock:
            self._log.clear()


def global_limiter() -> RateLimiter:
    return RateLimiter(
        "Global",
        GLOBAL_RATE_LIMIT,
        GLOBAL_RATE_WINDOW,
        "Too many requests from this IP, please try again after 15 minutes.",
    )


def login_limiter() -> RateLimiter:
    return RateLimiter(
        "Login",
        LOGIN_RATE_LIMIT,
        LOGIN_RATE_WINDOW,
        "Too many login attempts from this IP, please try again after an hour.",
    )
