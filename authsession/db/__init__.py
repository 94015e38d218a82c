"""Database Infrastructure — SQLAlchemy Base for the token slot table.

Invariants:
    - One async engine per open_session() (infrastructure/database.py)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite driver: the slot lives in a local file next to the client
"""
