"""
Middleware modules for the service.

Provides request processing middleware for:
- Request context (correlation id, request id, acting user) for log records
- Access logging with Server-Timing headers
"""

from .context import (
    RequestContext,
    RequestContextLogFilter,
    RequestContextMiddleware,
    context_of,
    current_context,
)
from .request_log import RequestLoggingMiddleware

__all__ = [
    "RequestContext",
    "RequestContextLogFilter",
    "RequestContextMiddleware",
    "context_of",
    "current_context",
    "RequestLoggingMiddleware",
]
