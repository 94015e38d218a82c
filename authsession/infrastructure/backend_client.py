"""Identity Backend Client — wraps httpx.AsyncClient with error mapping.

Invariants:
    - Every httpx failure (connect, timeout, protocol) maps to TransportFailureError,
      and so does a request that cannot be encoded (non-ASCII header, non-JSON body)
    - 2xx bodies validated by schemas/auth.py; failures map to MalformedResponseError
    - Non-2xx from /user/me maps to StaleTokenError; from /login and /register
      to BackendRejectedError carrying the raw response body
    - Exactly one HTTP request per method call: no retries
    - The bearer token is sent only in the Authorization header, never logged

Design Decisions:
    - Wrapper over raw client: isolates HTTP details from SessionManager
    - Optional transport injection: tests serve a FastAPI app in-process
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from authsession.core.domain_types import Operation, Token, UserRecord
from authsession.core.errors import (
    BackendRejectedError,
    ErrorContext,
    MalformedResponseError,
    StaleTokenError,
    TransportFailureError,
)
from authsession.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

VERIFY_PATH = "/user/me"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"


class IdentityBackendClient:
    """IdentityBackend implementation over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def fetch_current_user(self, token: Token) -> UserRecord:
        """GET /user/me with the token as bearer credential."""
        context = ErrorContext(operation=Operation.VERIFY.value, path=VERIFY_PATH)
        response = await self._send(
            "GET", VERIFY_PATH, context,
            headers={"Authorization": f"Bearer {token}"},
        )
        if not response.is_success:
            raise StaleTokenError(response.status_code, context=context)
        body = self._parse(response, CurrentUserResponse, context)
        return body.user

    async def authenticate(self, username: str, password: str) -> Token:
        """POST /login with credentials; returns the issued token."""
        context = ErrorContext(operation=Operation.LOGIN.value, path=LOGIN_PATH)
        payload = LoginRequest(username=username, password=password)
        response = await self._send(
            "POST", LOGIN_PATH, context, json=payload.model_dump(),
        )
        if not response.is_success:
            raise BackendRejectedError(
                response.status_code, response.content,
                context=context,
            )
        body = self._parse(response, TokenResponse, context)
        return Token(body.token)

    async def register(self, profile: Mapping[str, Any]) -> None:
        """POST /register; the success body is ignored.

        The profile is forwarded unchanged; the backend owns field validation.
        """
        context = ErrorContext(operation=Operation.REGISTER.value, path=REGISTER_PATH)
        response = await self._send(
            "POST", REGISTER_PATH, context, json=dict(profile),
        )
        if not response.is_success:
            raise BackendRejectedError(
                response.status_code, response.content,
                context=context,
            )
        if response.status_code != httpx.codes.CREATED:
            logger.info(
                "Registration accepted with non-201 status",
                extra={"status_code": response.status_code},
            )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _send(
        self, method: str, path: str, context: ErrorContext, **kwargs,
    ) -> httpx.Response:
        """Issue one request; httpx errors become TransportFailureError."""
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportFailureError(
                f"Timeout calling {method} {path}: {e}",
                "TRANSPORT_TIMEOUT", context=context,
            )
        except httpx.HTTPError as e:
            raise TransportFailureError(
                f"HTTP transport error calling {method} {path}: {e}",
                context=context,
            )
        except (TypeError, ValueError) as e:
            # Header or JSON body could not be encoded; nothing was sent.
            raise TransportFailureError(
                f"Could not encode request for {method} {path}: {type(e).__name__}",
                "REQUEST_ENCODING", context=context,
            )
        context.status_code = response.status_code
        logger.debug(
            f"{method} {path} -> {response.status_code}",
            extra={"operation": context.operation, "status_code": response.status_code},
        )
        return response

    def _parse(
        self, response: httpx.Response, model: type[BaseModel], context: ErrorContext,
    ):
        """Validate a 2xx body against its schema."""
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected response body from {context.path}: "
                f"{e.error_count()} validation error(s)",
                context=context,
            )
