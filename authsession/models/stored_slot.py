"""Stored Slot ORM — durable key/value row holding the session token.

Invariants:
    - key is the primary key: one row per slot, writes overwrite
    - A missing row means "no prior session"
    - value is never empty (TokenStore rejects empty tokens before writing)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from authsession.db.base import Base


class StoredSlot(Base):
    """Single durable slot: the token lives under settings.token_key."""
    __tablename__ = "auth_slots"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )
