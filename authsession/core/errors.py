"""Error Hierarchy — typed, categorized exceptions for every session failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Backend rejections and stale tokens are warnings; transport and storage
      failures are logged with a traceback
    - Tokens and passwords never appear in messages or context
    - SessionManager catches every AuthSessionError; only InvalidSessionStateError
      (a programming error) may escape

Design Decisions:
    - Single hierarchy with AuthSessionError base: the manager maps all of them
      to AuthResult in one place
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    BACKEND_REJECTED = "backend_rejected"
    STALE_TOKEN = "stale_token"
    TRANSPORT = "transport"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    path: str | None = None
    status_code: int | None = None


class AuthSessionError(Exception):
    """Base exception for all authsession errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_log_extra(self) -> dict:
        """Fields for logger.*(extra=...): never includes credentials."""
        return {
            "error_code": self.code,
            "category": self.category.value,
            "operation": self.context.operation,
            "status_code": self.context.status_code,
        }


# ─── Backend Errors ────────────────────────────────────────────

class BackendRejectedError(AuthSessionError):
    """Authenticate or register call answered with a non-2xx status.

    The raw body is kept so the caller can decode the backend's message
    with its own fallback (core/error_decoding.py).
    """
    def __init__(
        self,
        status_code: int,
        body: bytes = b"",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            f"Backend rejected request with status {status_code}",
            "BACKEND_REJECTED", ErrorCategory.BACKEND_REJECTED,
            ErrorSeverity.WARNING, ctx,
        )
        self.status_code = status_code
        self.body = body


class StaleTokenError(AuthSessionError):
    """Verification call answered with a non-2xx status: the token is not usable."""
    def __init__(self, status_code: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            f"Token verification failed with status {status_code}",
            "STALE_TOKEN", ErrorCategory.STALE_TOKEN,
            ErrorSeverity.WARNING, ctx,
        )
        self.status_code = status_code


# ─── Infrastructure Errors ──────────────────────────────────────

class TransportFailureError(AuthSessionError):
    """Network, timeout or protocol failure talking to the backend."""
    def __init__(
        self,
        message: str,
        code: str = "TRANSPORT_FAILURE",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.TRANSPORT,
            ErrorSeverity.ERROR, context,
        )


class MalformedResponseError(TransportFailureError):
    """2xx response whose body could not be parsed or lacks a required field."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "MALFORMED_RESPONSE", context)


class TokenStorageError(AuthSessionError):
    """Durable token slot could not be read or written."""
    def __init__(self, message: str, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Token storage {action} failed: {message}",
            "TOKEN_STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context,
        )
        self.action = action


# ─── Programming Errors ─────────────────────────────────────────

class InvalidSessionStateError(AuthSessionError):
    """Attempt to build a SessionState that breaks the tagged-union invariant."""
    def __init__(self, message: str):
        super().__init__(
            message, "INVALID_SESSION_STATE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
        )
