"""Session Manager — owns the session state machine and the token slot.

Invariants:
    - state starts LOADING; restore() resolves it to ANONYMOUS or AUTHENTICATED
    - AUTHENTICATED is only ever set after the token is persisted
    - Every slot mutation is followed by the matching state update before return
    - login() navigates on exactly one path (authenticate ok → persist ok → verify ok)
    - register() never touches state or the slot
    - No AuthSessionError escapes: failures become AuthResult(success=False)
    - Listeners see a state only after its transition is complete

Design Decisions:
    - Restore on transport failure keeps the stored token unless
      clear_token_on_restore_failure is set (a later restore retries verification)
    - Post-login verification failure of any kind is a degraded success:
      slot cleared, ANONYMOUS, distinct message
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from authsession.core import user_messages
from authsession.core.auth_result import AuthResult
from authsession.core.domain_types import Operation, SessionRoutes, SessionStatus, UserRecord
from authsession.core.error_decoding import decode_error_message
from authsession.core.errors import (
    BackendRejectedError,
    StaleTokenError,
    TokenStorageError,
    TransportFailureError,
)
from authsession.core.repository_protocols import IdentityBackend, Navigator, TokenStore
from authsession.core.session_state import SessionState
from authsession.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


class SessionManager:
    """Explicit session container created by the application root."""

    def __init__(
        self,
        backend: IdentityBackend,
        token_store: TokenStore,
        navigator: Navigator,
        routes: SessionRoutes | None = None,
        clear_token_on_restore_failure: bool = False,
    ):
        self._backend = backend
        self._tokens = token_store
        self._navigator = navigator
        self._routes = routes or SessionRoutes()
        self._clear_on_restore_failure = clear_token_on_restore_failure
        self._state = SessionState.loading()
        self._listeners: list[StateListener] = []

    # ─── Consumer surface ────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def user(self) -> UserRecord | None:
        return self._state.user

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─── Transitions ─────────────────────────────────────────────

    async def restore(self) -> SessionState:
        """Re-derive the session from the durable slot. Never navigates."""
        try:
            token = await self._tokens.read()
        except TokenStorageError as e:
            logger.error(
                "Token slot unreadable, starting anonymous",
                extra=e.to_log_extra(), exc_info=True,
            )
            return self._set_state(SessionState.anonymous())

        if not token:
            return self._set_state(SessionState.anonymous())

        try:
            user = await self._backend.fetch_current_user(token)
        except StaleTokenError as e:
            logger.info("Stored token rejected, clearing session", extra=e.to_log_extra())
            await self._discard_token(Operation.RESTORE)
            return self._set_state(SessionState.anonymous())
        except TransportFailureError as e:
            logger.error(
                "Failed to fetch /user/me",
                extra=e.to_log_extra(), exc_info=True,
            )
            if self._clear_on_restore_failure:
                await self._discard_token(Operation.RESTORE)
            return self._set_state(SessionState.anonymous())

        return self._set_state(SessionState.authenticated(user))

    async def login(self, username: str, password: str) -> AuthResult:
        """Exchange credentials for a token, persist it and load the profile."""
        try:
            token = await self._backend.authenticate(username, password)
        except BackendRejectedError as e:
            logger.info("Login rejected by backend", extra=e.to_log_extra())
            message = decode_error_message(
                e.body, user_messages.rejected_default(Operation.LOGIN),
            )
            return AuthResult.failed(message, e)
        except TransportFailureError as e:
            logger.error("Login error", extra=e.to_log_extra(), exc_info=True)
            return AuthResult.failed(user_messages.network_error(Operation.LOGIN), e)

        try:
            await self._tokens.write(token)
        except TokenStorageError as e:
            logger.error(
                "Could not persist login token",
                extra=e.to_log_extra(), exc_info=True,
            )
            return AuthResult.failed(user_messages.LOGIN_STORAGE_ERROR, e)

        try:
            user = await self._backend.fetch_current_user(token)
        except (StaleTokenError, TransportFailureError) as e:
            logger.warning(
                "Login succeeded but profile fetch failed",
                extra=e.to_log_extra(),
            )
            await self._discard_token(Operation.LOGIN)
            self._set_state(SessionState.anonymous())
            return AuthResult.failed(user_messages.LOGIN_PROFILE_FETCH_FAILED, e)

        self._set_state(SessionState.authenticated(user))
        self._navigate(self._routes.post_login)
        return AuthResult.ok(self._routes.post_login)

    async def logout(self) -> AuthResult:
        """Clear the slot and the session, then go home. Always succeeds."""
        await self._discard_token(Operation.LOGOUT)
        self._set_state(SessionState.anonymous())
        self._navigate(self._routes.post_logout)
        return AuthResult.ok(self._routes.post_logout)

    async def register(self, profile: Mapping[str, Any] | RegisterRequest) -> AuthResult:
        """Create an account. Does not log in."""
        if isinstance(profile, RegisterRequest):
            payload: Mapping[str, Any] = profile.model_dump(exclude_none=True)
        else:
            payload = profile

        try:
            await self._backend.register(payload)
        except BackendRejectedError as e:
            logger.info("Registration rejected by backend", extra=e.to_log_extra())
            message = decode_error_message(
                e.body, user_messages.rejected_default(Operation.REGISTER),
            )
            return AuthResult.failed(message, e)
        except TransportFailureError as e:
            logger.error("Register error", extra=e.to_log_extra(), exc_info=True)
            return AuthResult.failed(user_messages.network_error(Operation.REGISTER), e)

        self._navigate(self._routes.post_register)
        return AuthResult.ok(self._routes.post_register)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _discard_token(self, operation: Operation) -> None:
        """Clear the slot; a storage failure is logged, not raised."""
        try:
            await self._tokens.clear()
        except TokenStorageError as e:
            extra = e.to_log_extra()
            extra["operation"] = operation.value
            logger.error("Could not clear token slot", extra=extra, exc_info=True)

    def _set_state(self, new_state: SessionState) -> SessionState:
        previous = self._state
        self._state = new_state
        if new_state != previous:
            logger.info(
                f"Session {previous.status.value} -> {new_state.status.value}",
                extra={"session_status": new_state.status.value},
            )
            self._notify(new_state)
        return new_state

    def _notify(self, state: SessionState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.error("Session listener failed", exc_info=True)

    def _navigate(self, route: str) -> None:
        try:
            self._navigator.navigate(route)
        except Exception:
            logger.error(
                f"Navigation to {route} failed", extra={"route": route}, exc_info=True,
            )
