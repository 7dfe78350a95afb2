"""
AgentDesk Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── database:        Database handle on a fresh temporary SQLite file
    ├── app:             FastAPI app built around that database
    ├── test_client:     HTTPX AsyncClient talking to the app over ASGI
    ├── mock_conn:       AsyncMock connection for service unit tests
    └── sample_agent:    A valid agent payload (API field names)
"""

import os

# Settings are read at import time; point them at throwaway values first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOOKUP_API_URL"] = "https://lookup.test/Prod/say"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agentdesk.database import Base, Database
import agentdesk.models  # noqa: F401


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a Database backed by an empty SQLite file with both tables created.

    A file (not :memory:) keeps data visible across the separate pooled
    connections each request borrows.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'agentdesk.db'}")
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.dispose()


@pytest.fixture
def app(database):
    from agentdesk.main import create_app
    return create_app(database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_conn():
    """
    Provides a mock AsyncConnection.

    Usage:
        mock_conn.execute.return_value = make_result(rows=[...])
        await agent_service.list_agents(mock_conn)
    """
    conn = AsyncMock()
    conn.execute = AsyncMock()
    conn.commit = AsyncMock()
    conn.rollback = AsyncMock()
    conn.close = AsyncMock()
    return conn


@pytest.fixture
def make_result():
    """Factory for fake CursorResult objects returned by mock_conn.execute."""

    def _make(rows=None, first=None, rowcount=0):
        result = MagicMock()
        result.mappings.return_value.all.return_value = rows or []
        result.mappings.return_value.first.return_value = first
        result.first.return_value = first
        result.rowcount = rowcount
        return result

    return _make


@pytest.fixture
def sample_agent():
    return {
        "agentCode": "A007",
        "agentName": "John Doe",
        "workingArea": "New York",
        "commission": "0.05",
        "phoneNumber": "077-25814763",
        "country": "USA",
    }
