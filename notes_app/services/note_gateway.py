"""
Simple Notes — Persistence Gateway
===================================

What:  The only component that talks to the notes database.
How:   Wraps an async SQLAlchemy engine (aiosqlite, NullPool) and exposes three
       operations: ensure_schema(), insert_note(), list_notes(). Driver
       errors are translated into the application's exception types; the
       technical detail is logged here and never handed to the page.
Who:   Built once in create_app() and injected into the request handler via
       the `get_note_gateway` dependency.
When:  ensure_schema() runs at the start of every request, before any read
       or write.

Operation → failure mapping:
    ensure_schema()  → StorageUnavailableError
    insert_note()    → WriteFailedError
    list_notes()     → ReadFailedError
"""

import logging
from typing import List

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateIndex, CreateTable
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from notes_app.config import Settings
from notes_app.database import Base, create_engine_for, create_session_factory
from notes_app.exceptions import (
    ReadFailedError,
    StorageUnavailableError,
    WriteFailedError,
)
from notes_app.models.note import Note
from notes_app.schemas.note import NoteItem

logger = logging.getLogger(__name__)


class NoteGateway:
    """
    Durable storage of notes behind three operations.

    The gateway holds no per-request state; concurrent requests share it and
    rely on SQLite's own transaction guarantees. There are deliberately no
    update or delete operations.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "NoteGateway":
        """Build a gateway for the database configured in `app_settings`."""
        return cls(create_engine_for(app_settings))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    async def ensure_schema(self) -> None:
        """
        Create the `notes` table (and its index) if absent.

        Emits CREATE TABLE / CREATE INDEX ... IF NOT EXISTS, so concurrent
        first requests on a fresh file cannot trip over each other and the
        call is safe on every request.

        Raises:
            StorageUnavailableError: The database file cannot be opened or
                the schema cannot be written.
        """
        try:
            async with self._engine.begin() as conn:
                for table in Base.metadata.sorted_tables:
                    await conn.execute(CreateTable(table, if_not_exists=True))
                    for index in table.indexes:
                        await conn.execute(CreateIndex(index, if_not_exists=True))
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "Notes database unavailable (%s): %s",
                self._engine.url.render_as_string(hide_password=True),
                str(e),
                exc_info=True,
            )
            raise StorageUnavailableError(
                context={"error_type": type(e).__name__},
            ) from e

    async def insert_note(self, content: str) -> int:
        """
        Append a new note and return its store-assigned id.

        The caller is responsible for trimming and rejecting blank content;
        the store only enforces NOT NULL. `created_at` is filled in by SQLite.

        Raises:
            WriteFailedError: Constraint violation, I/O error or lock contention.
        """
        async with self._session_factory() as session:
            try:
                note = Note(content=content)
                session.add(note)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Failed to insert note: %s", str(e), exc_info=True)
                raise WriteFailedError(
                    context={"error_type": type(e).__name__},
                ) from e

        logger.info("Note %d stored (%d chars)", note.id, len(content))
        return note.id

    async def list_notes(self) -> List[NoteItem]:
        """
        Return every note, newest first.

        Query plan:
            SELECT id, content, created_at FROM notes
            ORDER BY created_at DESC, id DESC

        Notes sharing the same timestamp come out by id descending, i.e. the
        later insert first. An empty table yields an empty list.

        Raises:
            ReadFailedError: The query could not be executed.
        """
        query = select(Note).order_by(Note.created_at.desc(), Note.id.desc())
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                notes = result.scalars().all()
                return [NoteItem.model_validate(note) for note in notes]
        except SQLAlchemyError as e:
            logger.error("Failed to list notes: %s", str(e), exc_info=True)
            raise ReadFailedError(
                context={"error_type": type(e).__name__},
            ) from e

    async def dispose(self) -> None:
        """Close all connections held by the engine (called on shutdown)."""
        await self._engine.dispose()


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_note_gateway(request: Request) -> NoteGateway:
    """Return the gateway created by create_app() for this application."""
    return request.app.state.note_gateway
