"""Session State — immutable tagged union observed by every consumer.

Invariants:
    - Exactly one status holds: loading | anonymous | authenticated
    - user is not None iff status is AUTHENTICATED
    - Instances are frozen: a transition produces a new value, never a mutation

Design Decisions:
    - Frozen dataclass with named constructors: pure, deterministic, testable
      without mocks
    - Validation in __post_init__ so no code path can build an illegal value
"""

from dataclasses import dataclass

from authsession.core.domain_types import SessionStatus, UserRecord
from authsession.core.errors import InvalidSessionStateError


@dataclass(frozen=True)
class SessionState:
    """Current session: pure value, no IO."""

    status: SessionStatus = SessionStatus.LOADING
    user: UserRecord | None = None

    def __post_init__(self) -> None:
        if self.status is SessionStatus.AUTHENTICATED and self.user is None:
            raise InvalidSessionStateError("authenticated state requires a user record")
        if self.status is not SessionStatus.AUTHENTICATED and self.user is not None:
            raise InvalidSessionStateError(
                f"{self.status.value} state cannot carry a user record",
            )

    @classmethod
    def loading(cls) -> "SessionState":
        return cls(SessionStatus.LOADING)

    @classmethod
    def anonymous(cls) -> "SessionState":
        return cls(SessionStatus.ANONYMOUS)

    @classmethod
    def authenticated(cls, user: UserRecord) -> "SessionState":
        return cls(SessionStatus.AUTHENTICATED, user)

    @property
    def is_loading(self) -> bool:
        return self.status is SessionStatus.LOADING

    @property
    def is_anonymous(self) -> bool:
        return self.status is SessionStatus.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED
