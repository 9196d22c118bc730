"""
Per-request context: gateway correlation id, request id and acting user.

The gateway forwards ``X-Correlation-ID`` (session-wide), ``X-Request-ID``
and the verified ``X-User-Id``. Missing ids are generated here. The context
lives in a ContextVar for log records and on ``request.state`` so error
handlers running outside this middleware can still echo the ids back.
"""

import logging
import uuid
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

UNKNOWN = "-"


@dataclass(frozen=True)
class RequestContext:
    correlation_id: str
    request_id: str
    actor: Optional[str] = None

    def headers(self) -> Dict[str, str]:
        return {"X-Correlation-ID": self.correlation_id, "X-Request-ID": self.request_id}


_context: ContextVar[Optional[RequestContext]] = ContextVar("request_context", default=None)


def _short_id() -> str:
    return uuid.uuid4().hex[:12]


def current_context() -> Optional[RequestContext]:
    return _context.get()


def context_of(request: Request) -> Optional[RequestContext]:
    """The context stored on the request, if the middleware has seen it."""
    return getattr(request.state, "context", None)


class RequestContextMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        context = RequestContext(
            correlation_id=request.headers.get("X-Correlation-ID") or _short_id(),
            request_id=request.headers.get("X-Request-ID") or _short_id(),
            actor=request.headers.get("X-User-Id") or None,
        )
        request.state.context = context
        token = _context.set(context)
        try:
            response = await call_next(request)
        finally:
            _context.reset(token)
        response.headers.update(context.headers())
        return response


class RequestContextLogFilter(logging.Filter):
    """Adds ``correlation_id``, ``request_id`` and ``actor`` to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = current_context()
        record.correlation_id = context.correlation_id if context else UNKNOWN
        record.request_id = context.request_id if context else UNKNOWN
        record.actor = (context.actor if context else None) or UNKNOWN
        return True
