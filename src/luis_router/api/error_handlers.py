"""
FastAPI exception handlers for structured error responses.

Maps router exceptions to HTTP status codes. The orchestrator absorbs
transport errors itself, so RouterTransportError only reaches these
handlers if a host calls the clients directly.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from luis_router.exceptions import (
    RouterConfigurationError,
    RouterTimeoutError,
    RouterTransportError,
)

logger = structlog.get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def configuration_error_handler(
    request: Request, exc: RouterConfigurationError
) -> JSONResponse:
    """Router credentials or settings are unusable: 500."""
    logger.error("Router configuration error", error=exc.message, details=exc.details)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "configuration_error",
            "message": exc.message,
            "timestamp": _now(),
        },
    )


async def transport_error_handler(request: Request, exc: RouterTransportError) -> JSONResponse:
    """Router unreachable: 502, or 504 for timeouts."""
    is_timeout = isinstance(exc, RouterTimeoutError)
    logger.error(
        "Router transport error",
        error=exc.message,
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=(
            status.HTTP_504_GATEWAY_TIMEOUT if is_timeout else status.HTTP_502_BAD_GATEWAY
        ),
        content={
            "error": "router_timeout" if is_timeout else "router_unreachable",
            "message": exc.message,
            "timestamp": _now(),
        },
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Invalid request body: 400."""
    logger.warning("Invalid request format", errors=exc.errors())

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": "Request validation failed",
            "details": [
                {"loc": list(err.get("loc", [])), "msg": err.get("msg"), "type": err.get("type")}
                for err in exc.errors()
            ],
            "timestamp": _now(),
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unexpected errors: 500."""
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "timestamp": _now(),
        },
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RouterConfigurationError: configuration_error_handler,
    RouterTransportError: transport_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
