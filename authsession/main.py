"""Application Root — builds the session stack from settings and owns its lifecycle.

Invariants:
    - open_session() yields a SessionManager whose restore() has already resolved
    - Every resource created here (HTTP client, DB engine) is released on exit
    - Collaborators wired explicitly (no auto-discovery)

Design Decisions:
    - Lifespan as an async context manager: the host enters it once at startup
      and passes the yielded manager to its UI layer
    - Schema creation failure is logged, not raised: restore then falls back to
      anonymous and the host still starts
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from authsession.config import Settings, get_settings
from authsession.core.domain_types import SessionRoutes
from authsession.core.errors import TokenStorageError
from authsession.core.repository_protocols import Navigator
from authsession.infrastructure.backend_client import IdentityBackendClient
from authsession.infrastructure.database import DatabaseSessionManager
from authsession.infrastructure.navigation import HistoryNavigator
from authsession.infrastructure.observability import setup_logging
from authsession.infrastructure.token_store import SqlTokenStore
from authsession.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


def routes_from_settings(settings: Settings) -> SessionRoutes:
    return SessionRoutes(
        post_login=settings.post_login_route,
        post_register=settings.post_register_route,
        post_logout=settings.post_logout_route,
    )


@asynccontextmanager
async def open_session(
    settings: Settings | None = None,
    *,
    navigator: Navigator | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[SessionManager]:
    """Startup/shutdown lifecycle for the session stack."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db = DatabaseSessionManager(settings.database_url)
    backend = IdentityBackendClient(
        settings.backend_url,
        timeout_seconds=settings.request_timeout_seconds,
        transport=transport,
    )
    try:
        if settings.auto_create_schema:
            try:
                await db.create_schema()
            except TokenStorageError as e:
                logger.error(
                    f"Token storage unavailable: {e.message}",
                    extra=e.to_log_extra(),
                )

        manager = SessionManager(
            backend,
            SqlTokenStore(db, key=settings.token_key),
            navigator or HistoryNavigator(),
            routes=routes_from_settings(settings),
            clear_token_on_restore_failure=settings.clear_token_on_restore_failure,
        )
        await manager.restore()
        logger.info(
            "Session ready",
            extra={"session_status": manager.status.value},
        )
        yield manager
    finally:
        await backend.aclose()
        await db.dispose()
        logger.info("Session stack shut down")
