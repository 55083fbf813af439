"""Error Hierarchy — typed, categorized exceptions for every account store failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) carry no state change; store errors (500-level) are critical
    - to_response() produces the REST envelope
    - No store diagnostics in user-facing messages (those stay in logs)
    - InvalidCredentialsError never says which of email/password was wrong

Design Decisions:
    - Single hierarchy with AccountStoreError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability without coupling to logging
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
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class AccountStoreError(Exception):
    """Base exception for all account store errors."""

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
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class MissingFieldsError(AccountStoreError):
    """A required field is missing or blank."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            "Please fill all fields", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields


class AccountExistsError(AccountStoreError):
    """An account with this email is already registered."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User already exists", "ACCOUNT_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 400,
        )


class AccountNotFoundError(AccountStoreError):
    """No account matches the given email."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User not found", "ACCOUNT_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, context, 404,
        )


class InvalidCredentialsError(AccountStoreError):
    """Sign-in failed. Same message for unknown email and wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email or password", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class WrongPasswordError(AccountStoreError):
    """Password re-confirmation failed for an existing account."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Wrong password", "WRONG_PASSWORD",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(AccountStoreError):
    """Store connectivity or transaction failure."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            "Internal server error", "STORE_ERROR",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
