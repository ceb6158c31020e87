"""Error Hierarchy — typed, categorized exceptions for every incident API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries its own http_status; handlers never guess a status
    - to_response() produces the plain-text body sent to the client

Design Decisions:
    - Single hierarchy with CrimeApiError base: one global handler catches all
    - IncidentNotFoundError answers 500, not 404: existing clients see the same
      status they always did (see DESIGN.md, open questions)
    - StoreError keeps the engine's raw message: clients receive sqlite's own text
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for log records."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    case_number: str | None = None
    operation: str | None = None


class CrimeApiError(Exception):
    """Base exception for all incident API errors."""

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

    def to_response(self) -> str:
        """Plain-text response body."""
        return self.message

    def to_log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "case_number": self.context.case_number,
            "operation": self.context.operation,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class IncidentValidationError(CrimeApiError):
    """Request query or body failed its validation schema."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"Validation Error: {message}", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Handler Errors (500-level) ─────────────────────────────────

class IncidentNotFoundError(CrimeApiError):
    """No incident carries the requested case number."""
    def __init__(self, case_number: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.case_number = case_number
        super().__init__(
            "Case Number Not Found", "INCIDENT_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 500,
        )
        self.case_number = case_number


class StoreError(CrimeApiError):
    """The relational store rejected or failed a statement."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


def validation_error_from(errors: list[dict]) -> IncidentValidationError:
    """Build an IncidentValidationError from the first pydantic violation.

    Location prefixes added by the request parser ("query", "body") are
    dropped so the message names the client-facing field only.
    """
    if not errors:
        return IncidentValidationError("Invalid request", field="")
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())]
    if loc and loc[0] in ("query", "body"):
        loc = loc[1:]
    field_name = ".".join(loc)
    msg = first.get("msg", "Invalid value")
    message = f"{field_name}: {msg}" if field_name else msg
    return IncidentValidationError(message, field=field_name)
