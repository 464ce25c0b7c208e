"""
Simple Notes — Persistence Gateway Tests
=========================================

What:  Tests NoteGateway against real SQLite files.

What we test:
    ✅ Schema creation is idempotent
    ✅ Inserts return strictly increasing ids
    ✅ Listing is newest first, ties broken by id descending
    ✅ Driver errors become StorageUnavailable / WriteFailed / ReadFailed
"""

import asyncio
from datetime import datetime

import pytest

from notes_app.config import Settings
from notes_app.exceptions import (
    ReadFailedError,
    StorageUnavailableError,
    WriteFailedError,
)
from notes_app.models.note import Note
from notes_app.services.note_gateway import NoteGateway


class TestEnsureSchema:

    @pytest.mark.asyncio
    async def test_ensure_schema_is_idempotent(self, gateway):
        await gateway.ensure_schema()
        await gateway.ensure_schema()

        assert await gateway.list_notes() == []

    @pytest.mark.asyncio
    async def test_concurrent_first_calls_on_fresh_file(self, tmp_path):
        for attempt in range(10):
            fresh = NoteGateway.from_settings(
                Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / f'fresh-{attempt}.db'}")
            )
            try:
                await asyncio.gather(*(fresh.ensure_schema() for _ in range(8)))
                assert await fresh.list_notes() == []
            finally:
                await fresh.dispose()

    @pytest.mark.asyncio
    async def test_missing_directory_raises_storage_unavailable(self, unavailable_settings):
        broken = NoteGateway.from_settings(unavailable_settings)
        try:
            with pytest.raises(StorageUnavailableError) as exc_info:
                await broken.ensure_schema()
            assert "error_type" in exc_info.value.context
        finally:
            await broken.dispose()


class TestInsertNote:

    @pytest.mark.asyncio
    async def test_insert_returns_increasing_ids(self, gateway):
        await gateway.ensure_schema()

        first = await gateway.insert_note("first")
        second = await gateway.insert_note("second")

        assert second > first

    @pytest.mark.asyncio
    async def test_inserted_note_is_listed_with_timestamp(self, gateway):
        await gateway.ensure_schema()

        note_id = await gateway.insert_note("Buy milk")
        notes = await gateway.list_notes()

        assert len(notes) == 1
        assert notes[0].id == note_id
        assert notes[0].content == "Buy milk"
        assert isinstance(notes[0].created_at, datetime)

    @pytest.mark.asyncio
    async def test_content_is_stored_verbatim(self, gateway):
        await gateway.ensure_schema()
        payload = "<script>alert(1)</script>"

        await gateway.insert_note(payload)

        assert (await gateway.list_notes())[0].content == payload

    @pytest.mark.asyncio
    async def test_null_content_raises_write_failed(self, gateway):
        await gateway.ensure_schema()

        with pytest.raises(WriteFailedError):
            await gateway.insert_note(None)

        assert await gateway.list_notes() == []

    @pytest.mark.asyncio
    async def test_insert_without_table_raises_write_failed(self, gateway):
        with pytest.raises(WriteFailedError):
            await gateway.insert_note("orphan")


class TestListNotes:

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, gateway):
        await gateway.ensure_schema()

        assert await gateway.list_notes() == []

    @pytest.mark.asyncio
    async def test_notes_ordered_newest_first(self, gateway):
        await gateway.ensure_schema()
        async with gateway.session_factory() as session:
            session.add_all([
                Note(content="middle", created_at=datetime(2024, 1, 15, 10, 0, 0)),
                Note(content="newest", created_at=datetime(2024, 1, 15, 12, 0, 0)),
                Note(content="oldest", created_at=datetime(2024, 1, 14, 9, 30, 0)),
            ])
            await session.commit()

        notes = await gateway.list_notes()

        assert [n.content for n in notes] == ["newest", "middle", "oldest"]

    @pytest.mark.asyncio
    async def test_identical_timestamps_ordered_by_id_descending(self, gateway):
        await gateway.ensure_schema()
        same_time = datetime(2024, 1, 15, 12, 0, 0)
        async with gateway.session_factory() as session:
            for content in ("a", "b", "c"):
                session.add(Note(content=content, created_at=same_time))
                await session.flush()
            await session.commit()

        notes = await gateway.list_notes()

        assert [n.content for n in notes] == ["c", "b", "a"]
        assert [n.id for n in notes] == sorted((n.id for n in notes), reverse=True)

    @pytest.mark.asyncio
    async def test_rapid_inserts_listed_latest_first(self, gateway):
        await gateway.ensure_schema()
        ids = [await gateway.insert_note(f"note {i}") for i in range(3)]

        notes = await gateway.list_notes()

        assert [n.id for n in notes] == list(reversed(ids))

    @pytest.mark.asyncio
    async def test_list_without_table_raises_read_failed(self, gateway):
        with pytest.raises(ReadFailedError):
            await gateway.list_notes()
