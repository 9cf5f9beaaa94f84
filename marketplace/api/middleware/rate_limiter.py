"""
Rate limiting middleware.
"""

import time
from typing import Callable, Dict, List

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from marketplace.config.logging import get_logger
from marketplace.config.settings import settings
from marketplace.infrastructure.monitoring.metrics import record_rate_limit_hit

logger = get_logger(__name__)


class RateLimiterMiddleware:
    """Sliding-window rate limiting per client address.

    State lives in this instance, so each app (and each worker process) keeps
    its own window.
    """

    def __init__(
        self,
        app: FastAPI,
        max_requests: int = None,
        window_seconds: int = None,
        exempt_prefixes: tuple = (),
    ):
        self.app = app
        self.requests: Dict[str, List[float]] = {}
        self._last_sweep = time.monotonic()
        self.max_requests = max_requests or settings.RATE_LIMIT_REQUESTS
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW
        self.exempt_prefixes = exempt_prefixes
        self.add_rate_limiter()

    def add_rate_limiter(self) -> None:
        """Add rate limiting middleware."""

        @self.app.middleware("http")
        async def rate_limit_middleware(request: Request, call_next: Callable) -> Response:
            if request.url.path.startswith(self.exempt_prefixes):
                return await call_next(request)

            client_ip = request.client.host if request.client else "unknown"

            if not self._is_allowed(client_ip):
                logger.warning("Rate limit exceeded", client_ip=client_ip)
                record_rate_limit_hit()
                return JSONResponse(
                    status_code=429,
                    content={
                        "error": "Rate Limit Exceeded",
                        "message": "Too many requests. Please try again later.",
                        "type": "rate_limited",
                        "retry_after": self.window_seconds,
                    },
                    headers={"Retry-After": str(self.window_seconds)},
                )

            return await call_next(request)

    def _is_allowed(self, client_ip: str) -> bool:
        """Check if client is within rate limit."""
        now = time.monotonic()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        recent = [
            req_time
            for req_time in self.requests.get(client_ip, [])
            if now - req_time < self.window_seconds
        ]
        if len(recent) >= self.max_requests:
            self.requests[client_ip] = recent
            return False

        recent.append(now)
        self.requests[client_ip] = recent
        return True

    def _sweep(self, now: float) -> None:
        """Forget addresses with no request inside the current window."""
        stale = [
            client_ip
            for client_ip, times in self.requests.items()
            if not times or now - times[-1] >= self.window_seconds
        ]
        for client_ip in stale:
            del self.requests[client_ip]
        self._last_sweep = now
        if stale:
            logger.debug("Rate limiter swept idle clients", count=len(stale))
