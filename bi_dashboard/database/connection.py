"""
Database Connection Management

Async connection pool for the classicmodels store with SQLAlchemy 2.0.
A single shared engine holds a bounded queue pool; each request borrows one
session and hands it back on every exit path.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from bi_dashboard.config import get_settings
from bi_dashboard.exceptions import DatabaseNotInitializedError, StoreError

logger = structlog.get_logger(__name__)

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options() -> dict:
    """Engine keyword arguments for the configured store."""
    db_settings = get_settings().database
    options = {
        "echo": db_settings.echo,
        "pool_pre_ping": True,  # Verify connections before use
    }

    if db_settings.is_sqlite:
        # One shared connection so in-memory databases survive across sessions
        options.update({
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        })
    else:
        # Requests beyond pool_size + max_overflow wait up to pool_timeout
        options.update({
            "pool_size": db_settings.pool_size,
            "max_overflow": db_settings.max_overflow,
            "pool_timeout": db_settings.pool_timeout,
        })

    return options


async def init_database() -> AsyncEngine:
    """
    Initialize the database connection pool.

    Returns:
        AsyncEngine: The initialized database engine

    Raises:
        StoreError: If the store cannot be reached
    """
    global _engine, _async_session_factory

    if _engine is not None:
        logger.warning("Database already initialized")
        return _engine

    db_settings = get_settings().database

    _engine = create_async_engine(db_settings.async_url, **_engine_options())

    _async_session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    # Verify connection
    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info(
            "Database connection established",
            host=db_settings.host,
            database=db_settings.name,
            pool_size=db_settings.pool_size,
        )
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        await close_database()
        raise StoreError(f"Failed to connect to database: {e}") from e

    return _engine


async def close_database() -> None:
    """
    Close the database connection pool.

    Gracefully closes all connections in the pool.
    """
    global _engine, _async_session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        logger.info("Database connection pool closed")


def get_engine() -> AsyncEngine:
    """
    Get the database engine.

    Raises:
        DatabaseNotInitializedError: If database is not initialized
    """
    if _engine is None:
        raise DatabaseNotInitializedError()
    return _engine


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Borrow a read-only database session from the pool.

    The session is rolled back on error and always closed, returning its
    connection to the pool.

    Example:
        async with get_db() as db:
            result = await db.execute(query)
    """
    if _async_session_factory is None:
        logger.error("Database not initialized when get_db() called")
        raise DatabaseNotInitializedError()

    logger.debug("Creating new database session")
    session = _async_session_factory()
    try:
        yield session
    except Exception as e:
        logger.error("Database session error, rolling back", error=str(e), error_type=type(e).__name__)
        await session.rollback()
        raise
    finally:
        await session.close()
        logger.debug("Database session closed")


async def get_db_dependency() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Example:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_dependency)):
            ...
    """
    async with get_db() as session:
        yield session


async def check_database_health(session_scope: Optional[Callable[[], Any]] = None) -> dict:
    """
    Check database health status.

    Args:
        session_scope: Opens a session as an async context manager.
            Defaults to the shared pool (``get_db``).

    Returns:
        dict: Health status with latency information
    """
    session_scope = session_scope or get_db
    try:
        start = time.perf_counter()
        async with session_scope() as db:
            await db.execute(text("SELECT 1"))
        latency_ms = (time.perf_counter() - start) * 1000

        return {
            "status": "healthy",
            "latency_ms": round(latency_ms, 2),
            "pool_size": get_settings().database.pool_size,
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }
