"""Error Handlers: map NostrCount errors and request validation onto JSON envelopes.

Invariants:
    - Every error body has the same envelope: {"error": {code, message, category, severity, ...}}
    - Both validation paths (pydantic and CounterValidationError) report `details`
      as a list of {field, message} entries, fields named the way clients send them
    - Relay failures (503/504) carry a Retry-After header; nothing else does
    - Caller errors log at WARNING, relay and internal errors at ERROR
    - The catch-all never leaks exception text to the client
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nostrcount.core.errors import (
    CounterValidationError, ErrorCategory, ErrorSeverity, NostrCountError,
    RelayTimeoutError,
)

logger = logging.getLogger(__name__)

# Seconds a client should wait before retrying when no relay is reachable
RELAY_RETRY_AFTER_SECONDS = 5

# Request locations stripped from pydantic error paths ("body.title" → "title")
_LOCATIONS = frozenset({"body", "query", "path", "header"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NostrCountError, handle_nostrcount_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected_error)


def retry_after(exc: NostrCountError) -> int | None:
    """Retry-After seconds for relay failures, None for everything else."""
    if isinstance(exc, RelayTimeoutError):
        return max(1, math.ceil(exc.timeout_seconds))
    if exc.category == ErrorCategory.EXTERNAL_API:
        return RELAY_RETRY_AFTER_SECONDS
    return None


async def handle_nostrcount_error(request: Request, exc: NostrCountError):
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{request.method} {request.url.path} failed: {exc.message}",
        extra={
            "error_code": exc.code,
            "record_id": exc.context.record_id,
            "pubkey": exc.context.pubkey,
            "path": request.url.path,
        },
    )
    body = exc.to_response()
    if isinstance(exc, CounterValidationError):
        body["error"]["details"] = [{"field": exc.field, "message": exc.message}]

    headers = None
    wait = retry_after(exc)
    if wait is not None:
        headers = {"Retry-After": str(wait)}
    return JSONResponse(status_code=exc.http_status, content=body, headers=headers)


def field_name(loc: tuple) -> str:
    """('body', 'title') → 'title'; ('header', 'x-pubkey') → 'X-Pubkey'."""
    if loc and loc[0] == "header":
        return "-".join(part.capitalize() for part in str(loc[-1]).split("-"))
    parts = list(loc[1:]) if loc and loc[0] in _LOCATIONS else list(loc)
    return ".".join(str(part) for part in parts) or "request"


async def handle_request_validation(request: Request, exc: RequestValidationError):
    details = [
        {"field": field_name(tuple(e["loc"])), "message": e["msg"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
