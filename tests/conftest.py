"""
Simple Notes — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the test suite.
How:   Every test that touches storage gets its own SQLite file under
       pytest's tmp_path; HTTP tests talk to a fresh app over httpx's
       ASGITransport (no server, no lifespan).

Fixtures:
    ├── app_settings:   Settings pointing at a per-test SQLite file
    ├── gateway:        NoteGateway on that file (schema not yet created)
    ├── mock_gateway:   AsyncMock standing in for NoteGateway
    ├── test_app:       FastAPI app built with app_settings
    └── test_client:    HTTPX AsyncClient bound to test_app
"""

import os
import tempfile
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="notes_test_"), "notes.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notes_app.config import Settings
from notes_app.main import create_app
from notes_app.services.note_gateway import NoteGateway


@pytest.fixture
def app_settings(tmp_path):
    """Settings whose database lives in this test's temporary directory."""
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")


@pytest.fixture
def unavailable_settings(tmp_path):
    """Settings pointing into a directory that does not exist."""
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'notes.db'}")


@pytest_asyncio.fixture
async def gateway(app_settings):
    """A real gateway on an empty SQLite file."""
    note_gateway = NoteGateway.from_settings(app_settings)
    yield note_gateway
    await note_gateway.dispose()


@pytest.fixture
def mock_gateway():
    """
    A NoteGateway double whose schema check succeeds and whose store is empty.

    Usage:
        mock_gateway.list_notes.side_effect = ReadFailedError()
    """
    note_gateway = AsyncMock(spec=NoteGateway)
    note_gateway.ensure_schema = AsyncMock(return_value=None)
    note_gateway.insert_note = AsyncMock(return_value=1)
    note_gateway.list_notes = AsyncMock(return_value=[])
    return note_gateway


@pytest_asyncio.fixture
async def test_app(app_settings):
    app = create_app(app_settings)
    yield app
    await app.state.note_gateway.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Async HTTP client talking directly to the app.

    Redirects are not followed, so tests can inspect the 303 itself.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
