"""
Simple Notes — Database Engine & Session Factories
===================================================

What:  Async SQLAlchemy engine factory, session factory, and declarative Base.
How:   `create_engine_for(settings)` builds an aiosqlite engine with NullPool,
       so every gateway operation opens its own connection and closes it when
       done. No module-level engine exists; the NoteGateway owns the one built
       for the running application.
Who:   Used by NoteGateway (services/note_gateway.py) and the ORM models.

SQLite specifics:
    - The database is one local file; SQLite serializes concurrent writers
      and readers see either the pre- or post-state of a write.
    - A missing parent directory or an unwritable file surfaces as an
      OperationalError on first connect, not at engine creation.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from notes_app.config import Settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata drives schema creation (`Base.metadata.create_all`).
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def create_engine_for(app_settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured SQLite file.

    NullPool: connections are opened per operation and closed right after,
    which is all a single request needs.
    """
    return create_async_engine(
        app_settings.database_url,
        poolclass=NullPool,
        echo=app_settings.sql_echo,
    )


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit without a
# new round-trip (the gateway reads `note.id` after committing)
def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the AsyncSession factory bound to `engine`."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
