"""
AgentDesk Backend - Connection Pool Tests
===========================================

What:  Database.connection() lifecycle and how pool failures reach clients.
How:   The engine is replaced by a mock so connect/rollback/close calls can be
       asserted directly.

What we test:
    ✅ Connection closed after success and after failure
    ✅ Rollback only on failure
    ✅ Pool exhaustion / unreachable database → DatabaseError → 500
    ✅ Query failure inside a request still releases the connection
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError

from agentdesk.database import Database
from agentdesk.exceptions import DatabaseError
from agentdesk.main import create_app


def _mock_database(conn=None, connect_error=None) -> Database:
    database = Database("sqlite+aiosqlite:///:memory:")
    database.engine = MagicMock()
    database.engine.dispose = AsyncMock()
    if connect_error is not None:
        database.engine.connect = AsyncMock(side_effect=connect_error)
    else:
        database.engine.connect = AsyncMock(return_value=conn)
    return database


class TestConnectionLifecycle:

    @pytest.mark.asyncio
    async def test_connection_closed_after_success(self, mock_conn):
        database = _mock_database(conn=mock_conn)

        async with database.connection() as conn:
            assert conn is mock_conn

        mock_conn.close.assert_awaited_once()
        mock_conn.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_connection_rolled_back_and_closed_after_error(self, mock_conn):
        database = _mock_database(conn=mock_conn)

        with pytest.raises(RuntimeError):
            async with database.connection():
                raise RuntimeError("boom")

        mock_conn.rollback.assert_awaited_once()
        mock_conn.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_pool_timeout_becomes_database_error(self):
        database = _mock_database(connect_error=PoolTimeoutError("QueuePool limit reached"))

        with pytest.raises(DatabaseError) as exc_info:
            async with database.connection():
                pass

        assert "QueuePool" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "TimeoutError"

    @pytest.mark.asyncio
    async def test_ping_reports_failure_without_raising(self):
        database = _mock_database(
            connect_error=OperationalError("connect", {}, Exception("refused"))
        )
        assert await database.ping() is False

    @pytest.mark.asyncio
    async def test_ping_against_sqlite(self, database):
        assert await database.ping() is True


class TestPoolFailuresOverHttp:

    @pytest.mark.asyncio
    async def test_query_failure_releases_connection(self, mock_conn):
        mock_conn.execute.side_effect = OperationalError("SELECT", {}, Exception("Lost connection"))
        app = create_app(database=_mock_database(conn=mock_conn))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/agents")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "Lost connection" not in body["message"]
        mock_conn.rollback.assert_awaited_once()
        mock_conn.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unavailable_database_is_500(self):
        app = create_app(database=_mock_database(connect_error=PoolTimeoutError("pool full")))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/foods")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
