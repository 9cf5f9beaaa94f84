"""
Request/Response logging middleware.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response

from marketplace.config.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)
from marketplace.infrastructure.monitoring.metrics import record_api_request

logger = get_logger(__name__)

# Health probes and scrapes would drown out real traffic at info level
QUIET_PATH_SUFFIXES = ("/health/live", "/health/ready", "/health/metrics")


class LoggingMiddleware:
    """Request/Response logging middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        """Add request/response logging middleware."""

        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
            request.state.request_id = request_id

            clear_request_context()
            bind_request_context(
                request_id=request_id, method=request.method, path=request.url.path
            )
            log = logger.debug if request.url.path.endswith(QUIET_PATH_SUFFIXES) else logger.info

            start_time = time.perf_counter()
            log(
                "Request started",
                query_params=str(request.query_params),
                client_host=request.client.host if request.client else None,
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Request failed",
                    error=str(e),
                    process_time=f"{time.perf_counter() - start_time:.4f}s",
                )
                raise

            process_time = time.perf_counter() - start_time
            log(
                "Request completed",
                status_code=response.status_code,
                process_time=f"{process_time:.4f}s",
            )

            # Route template keeps metric label cardinality bounded
            route = request.scope.get("route")
            endpoint = getattr(route, "path", request.url.path)
            record_api_request(
                request.method, endpoint, response.status_code, process_time
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"
            return response
