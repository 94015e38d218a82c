"""SQL Token Store — durable single-slot token storage over SQLAlchemy.

Invariants:
    - write() overwrites: at most one row per key ever exists
    - clear() on an empty slot is a no-op, not an error
    - Each call is one committed transaction; failures raise TokenStorageError
    - Empty tokens are rejected before touching the database
"""

import logging

from sqlalchemy import delete

from authsession.core.domain_types import Token
from authsession.core.errors import TokenStorageError
from authsession.infrastructure.database import DatabaseSessionManager
from authsession.models.stored_slot import StoredSlot

logger = logging.getLogger(__name__)


class SqlTokenStore:
    """TokenStore implementation backed by the auth_slots table."""

    def __init__(self, db: DatabaseSessionManager, key: str = "token"):
        self._db = db
        self._key = key

    async def read(self) -> Token | None:
        async with self._db.session() as session:
            row = await session.get(StoredSlot, self._key)
            if row is None or not row.value:
                return None
            return Token(row.value)

    async def write(self, token: Token) -> None:
        if not token:
            raise TokenStorageError("refusing to store an empty token", "write")
        async with self._db.session() as session:
            row = await session.get(StoredSlot, self._key)
            if row is None:
                session.add(StoredSlot(key=self._key, value=token))
            else:
                row.value = token
            await session.commit()
        logger.debug("Token slot written", extra={"slot": self._key})

    async def clear(self) -> None:
        async with self._db.session() as session:
            await session.execute(
                delete(StoredSlot).where(StoredSlot.key == self._key),
            )
            await session.commit()
        logger.debug("Token slot cleared", extra={"slot": self._key})
