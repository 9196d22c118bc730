"""
Access logging middleware.

One INFO line per request with method, path, status and duration, plus
``Server-Timing``/``X-Response-Time`` headers carrying the same duration.
Health probes get the headers but no log line.
"""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable

logger = logging.getLogger("org_hierarchy.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    EXCLUDED_PATHS = {
        "/health",
        "/ready",
        "/favicon.ico",
    }

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        path = request.url.path
        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - start_time) * 1000
            response.headers["Server-Timing"] = f'total;dur={duration_ms:.1f};desc="Server Processing"'
            response.headers["X-Response-Time"] = f"{duration_ms:.1f}ms"
            return response
        finally:
            if path not in self.EXCLUDED_PATHS:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(
                    "%s %s -> %d (%.1fms)", request.method, path, status_code, duration_ms
                )
