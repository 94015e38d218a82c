"""Auth Schemas — Pydantic models for the identity backend's wire format.

Invariants:
    - TokenResponse.token is a non-empty run of visible ASCII characters, so it
      can always be sent back in an Authorization header
    - CurrentUserResponse.user is a JSON object (opaque to the package)
    - RegisterRequest forwards unknown fields unchanged

Design Decisions:
    - Response models ignore extra fields: the backend may add data freely
    - RegisterRequest fields are optional: validation belongs to the backend
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """POST /login body."""
    username: str
    password: str


class RegisterRequest(BaseModel):
    """POST /register body: forwarded as-is, extra fields included."""
    model_config = ConfigDict(extra="allow")

    username: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    """POST /login success body."""
    token: str = Field(min_length=1, pattern=r"^[\x21-\x7e]+$")


class CurrentUserResponse(BaseModel):
    """GET /user/me success body."""
    user: dict[str, Any]
