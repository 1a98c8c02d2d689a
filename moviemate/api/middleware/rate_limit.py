"""
Rate limiting per client IP.

Auth: 10/min per IP for login/register. Chat: 60/min per IP.
"""

import time
from typing import Callable, Optional, Tuple

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from moviemate.api.deps import get_client_ip
from moviemate.config import Settings
from moviemate.logging_config import get_logger

logger = get_logger(__name__)

WINDOW_SECONDS = 60


class InMemoryRateLimitStore:
    """Fixed-window in-memory store. Key -> (count, window_start_ts)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._data: dict[str, Tuple[int, float]] = {}
        self._clock = clock

    def check_and_incr(
        self,
        scope: str,
        identifier: str,
        limit: int,
        window_seconds: int,
    ) -> bool:
        """Returns True if under limit (and increments). False if over limit (no increment)."""
        key = f"{scope}:{identifier}"
        now = self._clock()
        count, start = self._data.get(key, (0, now))
        if now - start >= window_seconds:
            count, start = 0, now
        if count >= limit:
            return False
        self._data[key] = (count + 1, start)
        return True

    def cleanup_old(self, max_age_seconds: int = 3600) -> None:
        """Remove entries older than max_age_seconds to avoid unbounded growth."""
        now = self._clock()
        stale = [k for k, (_, start) in self._data.items() if now - start > max_age_seconds]
        for k in stale:
            self._data.pop(k, None)

    def __len__(self) -> int:
        return len(self._data)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rate limit by scope:
    - auth: POST {prefix}/auth/* -> per IP
    - chat: POST {prefix}/chat -> per IP
    Everything else passes through.
    """

    def __init__(self, app, settings: Settings, store: Optional[InMemoryRateLimitStore] = None):
        super().__init__(app)
        self.settings = settings
        self.store = store or InMemoryRateLimitStore()

    def _scope_for(self, request: Request) -> Optional[Tuple[str, int]]:
        if request.method != "POST":
            return None
        prefix = self.settings.api_prefix
        path = request.url.path or ""
        if path.startswith(f"{prefix}/auth/"):
            return "auth", self.settings.rate_limit_auth_per_minute
        if path == f"{prefix}/chat":
            return "chat", self.settings.rate_limit_chat_per_minute
        return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.settings.rate_limit_enabled:
            return await call_next(request)

        scoped = self._scope_for(request)
        if scoped is None:
            return await call_next(request)

        scope, limit = scoped
        self.store.cleanup_old(max_age_seconds=2 * WINDOW_SECONDS)
        identifier = get_client_ip(request) or "unknown"
        if not self.store.check_and_incr(scope, identifier, limit, WINDOW_SECONDS):
            logger.warning("Rate limit exceeded", extra={"scope": scope})
            return Response(
                content='{"detail":"Too many requests. Please try again later."}',
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                media_type="application/json",
                headers={"Retry-After": str(WINDOW_SECONDS)},
            )
        return await call_next(request)
