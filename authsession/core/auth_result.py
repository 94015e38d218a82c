"""Auth Result — value returned by every manager operation.

Invariants:
    - success=True ⇔ error is None
    - destination is set only on success paths that navigated
"""

from dataclasses import dataclass

from authsession.core.errors import AuthSessionError


@dataclass(frozen=True)
class AuthResult:
    success: bool
    error: str | None = None
    error_code: str | None = None
    destination: str | None = None

    @classmethod
    def ok(cls, destination: str | None = None) -> "AuthResult":
        return cls(success=True, destination=destination)

    @classmethod
    def failed(cls, message: str, error: AuthSessionError | None = None) -> "AuthResult":
        return cls(
            success=False,
            error=message,
            error_code=error.code if error else None,
        )
