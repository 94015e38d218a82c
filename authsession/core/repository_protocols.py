"""Boundary Protocols — contracts between the session core and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by the application root via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - TokenStore and IdentityBackend are async because their implementations do IO;
      Navigator is sync: requesting a route change does not suspend
"""

from collections.abc import Mapping
from typing import Any, Protocol

from authsession.core.domain_types import Token, UserRecord


class TokenStore(Protocol):
    """Single durable slot holding the bearer token."""
    async def read(self) -> Token | None: ...
    async def write(self, token: Token) -> None: ...
    async def clear(self) -> None: ...


class IdentityBackend(Protocol):
    """Remote identity service. Raises AuthSessionError subclasses on failure."""
    async def fetch_current_user(self, token: Token) -> UserRecord: ...
    async def authenticate(self, username: str, password: str) -> Token: ...
    async def register(self, profile: Mapping[str, Any]) -> None: ...


class Navigator(Protocol):
    """Routing collaborator: the core only requests transitions."""
    def navigate(self, route: str) -> None: ...
