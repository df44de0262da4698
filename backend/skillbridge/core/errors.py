"""Error Hierarchy — typed, categorized exceptions for all SkillBridge failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope: {"error": {...}} plus optional "data"
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SkillBridgeError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - details carried as a list of {field, message}: same shape as pydantic violations,
      so clients parse one format for request and persistence validation
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class SkillBridgeError(Exception):
    """Base exception for all SkillBridge errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: list[dict[str, str]] | None = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details
        self.data = data

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.details:
            error["details"] = self.details
        response: dict[str, Any] = {"success": False, "error": error}
        if self.data is not None:
            response["data"] = self.data
        return response


# ─── Client Errors (400-level) ──────────────────────────────────

class MissingFieldError(SkillBridgeError):
    """A required request field is absent or empty."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"Missing required field: {field}",
            "MISSING_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details=[{"field": field, "message": "Field required"}],
        )
        self.field = field


class InvalidFieldError(SkillBridgeError):
    """A request field is present but malformed."""
    def __init__(self, field: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details=[{"field": field, "message": message}],
        )
        self.field = field


class SchemaValidationError(SkillBridgeError):
    """Persistence layer rejected the document shape."""
    def __init__(
        self, details: list[dict[str, str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            "Validation Error", "SCHEMA_VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, context, 400,
            details=details,
        )


class ResourceNotFoundError(SkillBridgeError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class BusinessRuleError(SkillBridgeError):
    """Request is well-formed but violates a domain rule."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class ConnectionExistsError(SkillBridgeError):
    """A blockchain connection already exists for the student proposal."""
    def __init__(
        self, student_proposal_id: str, existing: dict,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "Connection already exists for this student proposal",
            "CONNECTION_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409, data=existing,
        )
        self.student_proposal_id = student_proposal_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SkillBridgeError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class DatabaseConnectionError(SkillBridgeError):
    """Database handshake failed after every allowed attempt."""
    def __init__(self, attempts: int, context: ErrorContext | None = None):
        super().__init__(
            f"Database unavailable after {attempts} connection attempt(s)",
            "DATABASE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.attempts = attempts


class PriceQuoteError(SkillBridgeError):
    """A single price provider failed; never surfaced past the price client."""
    def __init__(self, provider: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"{provider} price quote failed: {message}",
            "PRICE_QUOTE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 502,
        )
        self.provider = provider
