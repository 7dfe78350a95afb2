"""
AgentDesk Backend - Database Connection Management
====================================================

What:  Async SQLAlchemy engine wrapper, declarative base, and FastAPI dependencies.
How:   A `Database` object owns one bounded connection pool. Each request borrows
       exactly one connection through `Database.connection()`, which rolls back on
       error and always returns the connection to the pool.
Who:   Constructed by the application factory (main.create_app) and stored on
       `app.state.database`; handlers receive connections via Depends().
When:  Engine is created with the app; connections are borrowed per request.

Connection Pooling:
    pool_size:     Persistent connections (DB_POOL_SIZE, default 10)
    max_overflow:  Burst connections above pool_size (DB_MAX_OVERFLOW, default 0)
    pool_timeout:  Seconds to wait for a free connection (DB_POOL_TIMEOUT)
    pool_pre_ping: Validates connections before use
    pool_recycle:  Recycles connections every hour

    SQLite URLs (used by the test suite) skip the pool arguments because the
    aiosqlite dialect does not accept them.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from agentdesk.config import settings
from agentdesk.exceptions import DatabaseError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register their tables on `Base.metadata`, which Alembic and the
    test suite use to create the schema.
    """
    pass


# ── Pool Handle ───────────────────────────────────────────────────────────
class Database:
    """
    Owns the async engine (and therefore the connection pool).

    One instance per application. Nothing else in the codebase creates
    engines, so pool limits configured here are the only limits in effect.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
        pool_timeout: Optional[float] = None,
        pool_pre_ping: Optional[bool] = None,
        echo: bool = False,
    ):
        self.url = url or settings.database_url

        engine_kwargs = {"echo": echo}
        if make_url(self.url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size if pool_size is not None else settings.db_pool_size,
                max_overflow=(
                    max_overflow if max_overflow is not None else settings.db_max_overflow
                ),
                pool_timeout=(
                    pool_timeout if pool_timeout is not None else settings.db_pool_timeout
                ),
                pool_pre_ping=(
                    pool_pre_ping if pool_pre_ping is not None else settings.db_pool_pre_ping
                ),
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """
        Borrow one pooled connection for the duration of the block.

        How it works:
            1. Acquire a connection (waits up to pool_timeout when the pool is full)
            2. Yield it to the caller
            3. On error: roll back whatever the failed statement left open
            4. Always: close the connection (returns it to the pool)

        Raises:
            DatabaseError: The pool could not hand out a connection (database
                unreachable or pool exhausted). Errors raised inside the block
                propagate unchanged after rollback.
        """
        try:
            conn = await self.engine.connect()
        except SQLAlchemyError as e:
            logger.error("Could not acquire database connection: %s", str(e))
            raise DatabaseError(
                message="The database is currently unavailable. Please try again later.",
                context={"error_type": type(e).__name__},
            ) from e

        try:
            yield conn
        except Exception:
            try:
                await conn.rollback()
            except SQLAlchemyError:
                logger.warning("Rollback failed while releasing connection", exc_info=True)
            raise
        finally:
            await conn.close()

    async def ping(self) -> bool:
        """Runs SELECT 1 through the pool. Returns False instead of raising."""
        try:
            async with self.connection() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Closes every pooled connection. Called during application shutdown."""
        await self.engine.dispose()


# ── Request Dependencies ──────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """Returns the Database handle created by the application factory."""
    return request.app.state.database


async def get_db_connection(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncConnection, None]:
    """
    FastAPI dependency that provides one pooled connection per request.

    The connection is released when the request finishes, whether the
    handler returned normally or raised.

    Example usage in a route:
        @router.get("")
        async def list_agents(conn: AsyncConnection = Depends(get_db_connection)):
            return await agent_service.list_agents(conn)
    """
    async with database.connection() as conn:
        yield conn
