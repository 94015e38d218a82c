"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Token wraps str: never pass a bare credential string through domain logic
    - UserRecord is opaque: nothing in the package reads its fields
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON (logs, results) without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType


# ─── Value Types ─────────────────────────────────────────────────

Token = NewType("Token", str)
UserRecord = dict[str, Any]


# ─── Enums ───────────────────────────────────────────────────────

class SessionStatus(str, Enum):
    """Tri-state observed by consumers."""
    LOADING = "loading"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class Operation(str, Enum):
    """Operations and remote calls: used for log fields and default messages."""
    RESTORE = "restore"
    LOGIN = "login"
    LOGOUT = "logout"
    REGISTER = "register"
    VERIFY = "verify"


# ─── Routing ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class SessionRoutes:
    """Navigation targets requested after successful transitions."""
    post_login: str = "/profile"
    post_register: str = "/success"
    post_logout: str = "/"
