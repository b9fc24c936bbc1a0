"""
MovieNotes Backend: Database Engine & Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory, schema initialization and
       the per-request session dependency.
How:   The application lifespan builds one engine (the shared connection pool)
       and one session factory, and stores both on `app.state`. Route handlers
       receive a fresh AsyncSession per request through get_db_session().
Who:   Used by main.py (lifespan) and by route handlers via Depends().
When:  Engine is created once at startup; sessions are created per request.

Driver:
    aiosqlite runs SQLite calls on a worker thread, so a slow statement
    suspends only the request that issued it, never the event loop.

Connection Pooling:
    File databases get an AsyncAdaptedQueuePool sized from settings, shared
    by every request.
    In-memory databases (tests only) use SQLAlchemy's default StaticPool,
    which takes no sizing arguments.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool

from movienotes.config import settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata,
    which init_database() uses to create missing tables.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the async engine that owns the shared connection pool.

    Args:
        database_url: Override for settings.database_url (tests use a temp file)

    Returns:
        AsyncEngine bound to the movie notes database
    """
    url = database_url or settings.database_url
    kwargs = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL in DEBUG mode only; it is noisy otherwise
        "echo": settings.log_level == "DEBUG",
    }
    if make_url(url).database not in (None, "", ":memory:"):
        # Explicit: older aiosqlite dialects default file databases to NullPool
        kwargs["poolclass"] = AsyncAdaptedQueuePool
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow
    return create_async_engine(url, **kwargs)


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes (including the assigned primary key)
# stay readable after commit without another round trip
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the factory that hands out one AsyncSession per request."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Schema Initialization ─────────────────────────────────────────────────
async def init_database(engine: AsyncEngine) -> None:
    """
    Open (creating if absent) the database file and ensure all tables exist.

    What:    Runs CREATE TABLE IF NOT EXISTS for every registered model.
    When:    Once during application startup, before any request is served.

    Idempotent: existing tables are left untouched, so re-running against a
    populated file is a no-op. Errors propagate; the caller treats them as fatal.
    """
    # Models must be imported so they register with Base.metadata
    from movienotes.models import movie  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready: %s", engine.url.render_as_string(hide_password=True))


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory stored on app.state
        2. Yields it to the route handler
        3. On error: rolls back the transaction (discards changes)
        4. Always: closes the session (returns connection to pool)

    Services commit their own writes, so a handler's response is only sent
    once its change is durable.

    Example usage in a route:
        @router.get("/movies")
        async def list_movies(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
