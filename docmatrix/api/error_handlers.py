"""Error Handlers — map exceptions raised under a route onto JSON error envelopes.

Invariants:
    - DocMatrixError → exc.http_status with exc.to_response(); logged at its severity
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per offending field
    - Any other Exception → 500 INTERNAL_ERROR with a fixed message (no internals)
    - Every envelope has the same top-level shape: {"error": {code, message, category, severity, ...}}

Design Decisions:
    - Severity decides the log level, so client mistakes do not page anyone
    - Kept out of main.py so the app factory stays a list of registrations
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docmatrix.core.errors import DocMatrixError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}

# Leading loc entries that name the request part rather than a field
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocMatrixError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_domain_error(request: Request, exc: DocMatrixError) -> JSONResponse:
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "sample": exc.context.sample,
            "operation": exc.context.operation,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_field_detail(error) for error in exc.errors()]
    logger.info(
        f"Rejected request to {request.url.path}: "
        f"{', '.join(d['field'] or d['location'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Request does not match the expected schema",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _field_detail(error: dict) -> dict:
    loc = [str(part) for part in error.get("loc", ())]
    location = loc[0] if loc and loc[0] in _REQUEST_PARTS else ""
    field = loc[1:] if location else loc
    return {
        "location": location,
        "field": ".".join(field),
        "message": error["msg"],
        "type": error["type"],
    }


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }
