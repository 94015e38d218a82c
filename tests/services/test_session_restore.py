"""SessionManager.restore — re-deriving the session at process start.

Invariants:
    - No token → zero remote calls → ANONYMOUS
    - Token + 2xx user → AUTHENTICATED, slot kept
    - Token + non-2xx → slot cleared → ANONYMOUS
    - Token + transport failure → ANONYMOUS; slot kept unless
      clear_token_on_restore_failure is set
    - restore never navigates
"""

from unittest.mock import AsyncMock

from authsession.core.domain_types import SessionStatus, Token
from authsession.core.errors import TokenStorageError
from authsession.infrastructure.token_store import SqlTokenStore
from authsession.services.session_manager import SessionManager


async def test_starts_loading(session_manager):
    assert session_manager.status is SessionStatus.LOADING
    assert session_manager.user is None


async def test_no_token_makes_no_calls(session_manager, transport, navigator):
    state = await session_manager.restore()

    assert state.is_anonymous
    assert transport.requests == []
    assert list(navigator.history) == ["/"]


async def test_valid_token_restores_user(session_manager, fake_backend, token_store, transport):
    token = fake_backend.issue_token("alice")
    await token_store.write(Token(token))

    state = await session_manager.restore()

    assert state.is_authenticated
    assert session_manager.user == {"id": 2, "username": "alice"}
    assert await token_store.read() == token
    assert transport.paths == ["/user/me"]


async def test_rejected_token_is_cleared(session_manager, token_store):
    await token_store.write(Token("expired"))

    state = await session_manager.restore()

    assert state.is_anonymous
    assert await token_store.read() is None


async def test_server_error_on_verify_also_clears(session_manager, fake_backend, token_store):
    await token_store.write(Token("T"))
    fake_backend.respond("/user/me", 500, {"message": "boom"})

    state = await session_manager.restore()

    assert state.is_anonymous
    assert await token_store.read() is None


async def test_transport_failure_keeps_token_by_default(session_manager, transport, token_store):
    await token_store.write(Token("T"))
    transport.failing_paths.add("/user/me")

    state = await session_manager.restore()

    assert state.is_anonymous
    assert await token_store.read() == "T"


async def test_transport_failure_clears_token_when_configured(
    backend_client, token_store, navigator, transport,
):
    manager = SessionManager(
        backend_client, token_store, navigator, clear_token_on_restore_failure=True,
    )
    await token_store.write(Token("T"))
    transport.failing_paths.add("/user/me")

    state = await manager.restore()

    assert state.is_anonymous
    assert await token_store.read() is None


async def test_malformed_verify_body_keeps_token_by_default(
    session_manager, fake_backend, token_store,
):
    await token_store.write(Token("T"))
    fake_backend.respond("/user/me", 200, {"profile": {}})

    state = await session_manager.restore()

    assert state.is_anonymous
    assert await token_store.read() == "T"


async def test_retry_after_transport_failure_recovers(session_manager, fake_backend, transport, token_store):
    token = fake_backend.issue_token("bob")
    await token_store.write(Token(token))
    transport.failing_paths.add("/user/me")
    await session_manager.restore()

    transport.failing_paths.clear()
    state = await session_manager.restore()

    assert state.is_authenticated
    assert state.user == {"id": 1}


async def test_unreadable_slot_resolves_anonymous(backend_client, navigator, transport):
    store = AsyncMock()
    store.read.side_effect = TokenStorageError("locked", "read")
    manager = SessionManager(backend_client, store, navigator)

    state = await manager.restore()

    assert state.is_anonymous
    assert transport.requests == []


async def test_session_survives_restart(db, backend_client, fake_backend, navigator):
    first = SessionManager(backend_client, SqlTokenStore(db), navigator)
    await first.restore()
    result = await first.login("alice", "pw")
    assert result.success

    restarted = SessionManager(backend_client, SqlTokenStore(db), navigator)
    state = await restarted.restore()

    assert state.is_authenticated
    assert state.user == {"id": 2, "username": "alice"}


async def test_unsendable_stored_token_resolves_anonymous(session_manager, token_store, transport):
    await token_store.write(Token("tök"))

    state = await session_manager.restore()

    assert state.is_anonymous
    assert transport.requests == []
