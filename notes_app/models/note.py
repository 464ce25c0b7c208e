"""
Simple Notes — Note SQLAlchemy Model
=====================================

What:  ORM model representing the `notes` table in the SQLite file.
How:   Inherits from the declarative Base; `Base.metadata.create_all` creates
       the table and its index when they are missing.
Who:   Used by NoteGateway for inserts and the ordered listing.

Table Design:
    - id: INTEGER PRIMARY KEY AUTOINCREMENT, strictly increasing per insert
    - content: TEXT NOT NULL, trimmed and non-blank (checked before the write)
    - created_at: assigned by SQLite (CURRENT_TIMESTAMP, UTC, second precision)

    The created_at index backs the only read query:
    SELECT ... ORDER BY created_at DESC, id DESC
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from notes_app.database import Base


class Note(Base):
    """
    A user-submitted note.

    Lifecycle:
        Created exactly once per successful submission; never updated or
        deleted by the application.
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
    )

    # ── Indexes ───────────────────────────────────────────────────────────
    # sqlite_autoincrement: ids never get reused, even after out-of-band deletes
    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, created_at='{self.created_at}')>"
