"""
Service exceptions and their JSON envelope.

Every failure leaves the API as ``{"success": false, "error": "<message>"}``.
Service code raises the ServiceError subclasses below; the handlers built by
``create_exception_handlers`` map them, request validation failures, store
errors and anything unexpected to that envelope.
"""

from typing import Any, Dict, List, Optional
from enum import Enum
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback

from org_hierarchy.middleware.context import context_of

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"
STORE_ERROR_MESSAGE = "Database operation failed"


class ErrorCode(str, Enum):
    """Machine-readable error codes, logged alongside every handled failure."""

    UNAUTHORIZED = "AUTH_001"

    VALIDATION_ERROR = "VAL_001"

    NOT_FOUND = "RES_001"
    CONFLICT = "RES_003"

    QUOTA_EXCEEDED = "BIZ_002"

    DATABASE_ERROR = "EXT_004"

    INTERNAL_ERROR = "SRV_001"


class ServiceError(HTTPException):
    """
    Base exception for the service.

    Usage:
        raise ServiceError(status_code=404, code=ErrorCode.NOT_FOUND, detail="Brand not found")
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: Optional[List[str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.code = code
        self.errors = errors or []
        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @property
    def public_message(self) -> str:
        return str(self.detail)


class ValidationError(ServiceError):
    """Missing or invalid field (400)."""

    def __init__(self, detail: str, errors: Optional[List[str]] = None):
        super().__init__(
            status_code=400,
            code=ErrorCode.VALIDATION_ERROR,
            detail=detail,
            errors=errors,
        )


class NotFoundError(ServiceError):
    """Resource not found (404)."""

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            detail=f"{resource} not found",
        )


class ConflictError(ServiceError):
    """Request conflicts with the current state of a resource (409)."""

    def __init__(self, detail: str, code: ErrorCode = ErrorCode.CONFLICT):
        super().__init__(status_code=409, code=code, detail=detail)


class QuotaExceededError(ConflictError):
    """A parent's configured limit is already used up (409)."""

    def __init__(self, resource: str, limit_type: str, limit: Optional[int]):
        self.limit_type = limit_type
        self.limit = limit
        super().__init__(
            detail=f"{resource} limit reached for {limit_type} (limit: {limit})",
            code=ErrorCode.QUOTA_EXCEEDED,
        )


class UnauthorizedError(ServiceError):
    """No authenticated principal on the request (401)."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(status_code=401, code=ErrorCode.UNAUTHORIZED, detail=detail)


class StoreError(ServiceError):
    """The document store failed (500). The cause is logged, never returned."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(
            status_code=500,
            code=ErrorCode.DATABASE_ERROR,
            detail=f"Failed to {action}",
        )


def error_response(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def _format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return messages


def create_exception_handlers() -> Dict[str, Any]:
    """
    Create the exception handlers.

    Usage in main.py:
        handlers = create_exception_handlers()
        app.add_exception_handler(ServiceError, handlers["service"])
        app.add_exception_handler(RequestValidationError, handlers["validation"])
        app.add_exception_handler(Exception, handlers["generic"])
    """

    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                f"{exc.code.value} on {request.method} {request.url.path}: {exc.detail}"
            )
        else:
            logger.warning(
                f"{exc.code.value} on {request.method} {request.url.path}: {exc.detail}",
                extra={"status_code": exc.status_code},
            )
        return error_response(exc.status_code, exc.public_message, headers=exc.headers)

    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Routing-level errors raised by Starlette itself (unknown path, wrong method)."""
        if exc.status_code == 404:
            message = "Route not found"
        elif exc.status_code == 405:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    async def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = _format_validation_errors(exc.errors())
        logger.warning(f"Request validation failed on {request.url.path}: {messages}")
        return error_response(400, "; ".join(messages) or "Invalid request")

    async def handle_store_exception(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            f"Store error on {request.method} {request.url.path}: {type(exc).__name__}"
        )
        logger.error(traceback.format_exc())
        return error_response(500, STORE_ERROR_MESSAGE)

    async def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
        """
        Runs in the outermost error middleware, after the request context
        middleware has returned; ids are read back from ``request.state``.
        """
        context = context_of(request)
        request_id = context.request_id if context else "-"
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path} "
            f"(request {request_id}): {exc!r}"
        )
        logger.error(traceback.format_exc())
        return error_response(500, GENERIC_ERROR_MESSAGE, headers=context.headers() if context else None)

    return {
        "service": handle_service_error,
        "http": handle_http_exception,
        "validation": handle_validation_exception,
        "store": handle_store_exception,
        "generic": handle_generic_exception,
    }
