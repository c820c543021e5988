"""Error Hierarchy — typed, categorized exceptions for all GDP records failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the {success: false, ...} envelope
    - No internal details leaked in user-facing messages (detail goes to `error` only
      for validation failures, where it names the offending field)

Design Decisions:
    - Single hierarchy with GdpRecordsError base: FastAPI global handler catches all
    - `message` is the user-facing summary; handlers may replace it with an
      operation-specific one via with_message()
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from gdp_records.core.envelope import error_envelope


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    record_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class GdpRecordsError(Exception):
    """Base exception for all GDP records errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.detail = detail

    def with_message(self, message: str) -> "GdpRecordsError":
        """Replace the user-facing summary, keeping code and detail."""
        self.message = message
        self.args = (message,)
        return self

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        return error_envelope(self.message, error=self.detail, code=self.code)


# ─── Domain Errors (400-level) ──────────────────────────────────

class RecordValidationError(GdpRecordsError):
    """Schema, range or enum violation in record input."""
    def __init__(
        self,
        detail: str,
        message: str = "Invalid GDP record",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400, detail,
        )


class RecordConflictError(GdpRecordsError):
    """Another record already holds this (country, year) pair."""
    def __init__(
        self, country: str, year: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            "GDP record for this country and year already exists",
            "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
            f"duplicate (country, year): ({country!r}, {year})",
        )
        self.country = country
        self.year = year


class RecordNotFoundError(GdpRecordsError):
    """Requested record does not exist."""
    def __init__(self, record_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.record_id = record_id
        super().__init__(
            "GDP record not found",
            "RECORD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )
        self.record_id = record_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(GdpRecordsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.cause = message
