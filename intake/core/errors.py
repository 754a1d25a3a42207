"""Error Hierarchy — typed, categorized exceptions for every intake failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the public envelope: {"error": "<message>"}
    - DependencyError keeps the internal detail for logs only; the public
      message never contains it
    - InvalidOtpError has one message for wrong, expired and never-issued codes

Design Decisions:
    - Single hierarchy with IntakeError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    CACHE = "cache"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs (never sent to clients)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class IntakeError(Exception):
    """Base exception for all intake errors."""

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
        """Convert to the public REST error body."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(IntakeError):
    """Malformed or missing request input."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class InvalidOtpError(IntakeError):
    """Submitted code is wrong, expired, already used, or was never issued."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or expired OTP", "INVALID_OTP",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 400,
        )


class ConflictError(IntakeError):
    """A uniqueness constraint in the document store rejected the write."""
    def __init__(
        self, message: str = "Data already exists",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Dependency Errors (500-level) ──────────────────────────────

class DependencyError(IntakeError):
    """An external system failed. `detail` is for logs, `message` for clients."""

    default_message = "An external service failed"
    default_code = "DEPENDENCY_ERROR"
    default_category = ErrorCategory.EXTERNAL_API

    def __init__(
        self,
        detail: str,
        public_message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            public_message or self.default_message, self.default_code,
            self.default_category, ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail

    def with_public_message(self, public_message: str) -> "DependencyError":
        """Same failure, re-labelled for the operation the client asked for."""
        return type(self)(self.detail, public_message, self.context)


class DatabaseError(DependencyError):
    """Document store operation failed."""
    default_message = "Database operation failed"
    default_code = "DATABASE_ERROR"
    default_category = ErrorCategory.DATABASE


class CacheError(DependencyError):
    """Ephemeral cache operation failed."""
    default_message = "Cache operation failed"
    default_code = "CACHE_ERROR"
    default_category = ErrorCategory.CACHE


class EmailDeliveryError(DependencyError):
    """Transactional email provider rejected or failed the send."""
    default_message = "Email delivery failed"
    default_code = "EMAIL_DELIVERY_ERROR"
