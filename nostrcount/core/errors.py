"""Error Hierarchy: typed, categorized exceptions for caller-level failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Record-level problems are NEVER raised; the core skips malformed records silently
    - These errors belong to the shell: missing identity, missing counter, relay failures
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with NostrCountError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    record_id: str | None = None
    pubkey: str | None = None
    relay_url: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class NostrCountError(Exception):
    """Base exception for all NostrCount errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "record_id": self.context.record_id,
                    "pubkey": self.context.pubkey,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class CounterValidationError(NostrCountError):
    """Counter form data rejected before publishing."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class IdentityRequiredError(NostrCountError):
    """Publishing requires an authenticated author pubkey."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An author pubkey is required to publish records",
            "IDENTITY_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )


class ResourceNotFoundError(NostrCountError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class InvalidCounterError(NostrCountError):
    """A counter record exists but does not normalize into a Counter."""
    def __init__(self, record_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.record_id = record_id
        super().__init__(
            f"Record '{record_id}' is not a valid counter",
            "INVALID_COUNTER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 422,
        )


class NotAuthorError(NostrCountError):
    """Only the author of a counter may edit or delete it."""
    def __init__(self, record_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.record_id = record_id
        super().__init__(
            f"Counter '{record_id}' belongs to another author",
            "NOT_AUTHOR", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, ctx, 403,
        )


# ─── Transport Errors (500-level) ───────────────────────────────

class RelayUnavailableError(NostrCountError):
    """No relay connection to fetch from or publish to."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Relay unavailable: {message}",
            "RELAY_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )


class RelayTimeoutError(NostrCountError):
    """Relay query did not complete in time."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Relay query timed out after {timeout_seconds}s",
            "RELAY_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 504,
        )
        self.timeout_seconds = timeout_seconds
