"""Error Handlers: every failure leaves the app as a WirebindError envelope.

Invariants:
    - WirebindError -> its own http_status and to_response(), cause chain included
    - RequestValidationError -> 400 VALIDATION_ERROR with one detail per bad field
    - Any other exception -> 500 INTERNAL_ERROR; the message never reaches the client

Design Decisions:
    - Validation and unexpected failures are wrapped into WirebindError first, so
      clients parse a single envelope shape whatever went wrong
    - Conversion failures are client errors: logged at warning with the property
      context, unexpected ones at error with the traceback
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wirebind.core.errors import ErrorCategory, ErrorSeverity, WirebindError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WirebindError, handle_wirebind_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_wirebind_error(request: Request, exc: WirebindError) -> JSONResponse:
    ctx = exc.context
    logger.warning(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "property_name": ctx.property_name,
            "source_type": ctx.source_type,
            "target_type": ctx.target_type,
            "representation": ctx.representation,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"rejected request on {request.url.path}: {len(details)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    error = WirebindError(
        "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
        http_status=status.HTTP_400_BAD_REQUEST,
    )
    body = error.to_response()
    body["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=body)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    error = WirebindError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        severity=ErrorSeverity.CRITICAL,
    )
    return JSONResponse(status_code=error.http_status, content=error.to_response())
