"""Error Hierarchy - typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST envelope {"error": "<short fixed message>"}
    - Public messages are fixed strings; driver text only travels in `detail` (logs)

Design Decisions:
    - Single hierarchy with GatewayError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - StoreError separate from the HTTP-facing errors: the adapter reports what
      happened, handlers decide the status code (500 for data routes, 503 for health)
"""

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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.detail = detail

    def to_response(self) -> dict:
        """Convert to the public REST error body."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(GatewayError):
    """Path, query or body input rejected."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class CredentialMissingError(GatewayError):
    """Protected route called without an Authorization header."""
    def __init__(self):
        super().__init__(
            "authorization token required",
            "CREDENTIAL_MISSING", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, 401,
        )


class CredentialInvalidError(GatewayError):
    """Authorization header present but the token does not match."""
    def __init__(self):
        super().__init__(
            "invalid authorization token",
            "CREDENTIAL_INVALID", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, 401,
        )


class KeyNotFoundError(GatewayError):
    """Key absent from the store, or a delete removed nothing."""
    def __init__(self, key: str):
        super().__init__(
            "key not found",
            "KEY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, 404,
        )
        self.key = key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamUnavailableError(GatewayError):
    """Store unreachable or too slow to answer a liveness probe."""
    def __init__(self, detail: str | None = None):
        super().__init__(
            "store connection failed",
            "UPSTREAM_UNAVAILABLE", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, 503, detail,
        )


class InternalFailureError(GatewayError):
    """Any store, transport or timeout failure on a data route."""
    def __init__(
        self, detail: str | None = None,
        category: ErrorCategory = ErrorCategory.INTERNAL,
    ):
        super().__init__(
            "internal server error",
            "INTERNAL_ERROR", category,
            ErrorSeverity.CRITICAL, 500, detail,
        )


class StoreError(GatewayError):
    """Store command failed (connection, protocol or server error reply)."""
    def __init__(self, operation: str, detail: str):
        super().__init__(
            "internal server error",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, 500, detail,
        )
        self.operation = operation
