"""Database session configuration"""

import logging
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from taskboard import config

logger = logging.getLogger(__name__)

DATABASE_URL = config.DATABASE_URL

if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is not set")


def to_async_url(url: str) -> str:
    """
    Convert a database URL to the async driver format.

    - postgresql://            -> postgresql+psycopg://
    - postgresql+asyncpg://    -> postgresql+psycopg:// (legacy)
    - postgresql+psycopg://    -> unchanged
    - sqlite+aiosqlite://      -> unchanged (local runs and tests)
    """
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql+psycopg://"):
        return url
    if url.startswith("postgresql+asyncpg://"):
        return url.replace("postgresql+asyncpg://", "postgresql+psycopg://", 1)
    if url.startswith("sqlite+aiosqlite://"):
        return url
    raise ValueError(f"Unsupported database URL format: {url}")


ASYNC_DATABASE_URL = to_async_url(DATABASE_URL)

POOL_SIZE = config.DB_POOL_SIZE
MAX_OVERFLOW = config.DB_MAX_OVERFLOW

# Pool utilization thresholds, in percent of size + max_overflow
POOL_WARNING_PERCENT = 80
POOL_CRITICAL_PERCENT = 90


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"echo": False}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": POOL_SIZE,
        "max_overflow": MAX_OVERFLOW,
        "pool_timeout": config.DB_POOL_TIMEOUT,
        "pool_recycle": config.DB_POOL_RECYCLE,
        "echo": False,  # Set to True to see SQL queries in logs
    }


engine = create_async_engine(ASYNC_DATABASE_URL, **_engine_options(ASYNC_DATABASE_URL))

SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI routes.

    Usage:
        @router.get("/example")
        async def example(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_models() -> None:
    """Create the tables that don't exist yet."""
    from taskboard.db.base import Base
    from taskboard.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


def get_pool_stats() -> dict:
    """
    Get current connection pool statistics.

    Returns:
        Dictionary with pool statistics:
        - size: Total pool size
        - checked_in: Connections currently checked in (available)
        - checked_out: Connections currently checked out (in use)
        - overflow: Overflow connections
        - max_overflow: Allowed overflow connections
    """
    try:
        # For async engines, access the underlying sync pool
        sync_pool = engine.sync_engine.pool

        size_func = getattr(sync_pool, "size", None)
        checkedin_func = getattr(sync_pool, "checkedin", None)
        checkedout_func = getattr(sync_pool, "checkedout", None)
        overflow_func = getattr(sync_pool, "overflow", None)

        size_val = size_func() if callable(size_func) else POOL_SIZE
        checked_in_val = checkedin_func() if callable(checkedin_func) else 0
        checked_out_val = checkedout_func() if callable(checkedout_func) else 0
        overflow_val = overflow_func() if callable(overflow_func) else 0
        max_overflow_val = getattr(sync_pool, "_max_overflow", MAX_OVERFLOW)

        return {
            "size": int(size_val),
            "checked_in": int(checked_in_val),
            "checked_out": int(checked_out_val),
            # Overflow is reported negative while the pool is not full
            "overflow": max(0, int(overflow_val)),
            "max_overflow": max(0, int(max_overflow_val)),
        }
    except Exception as e:
        logger.warning(f"Error getting pool stats: {e}")
        return {
            "size": POOL_SIZE,
            "checked_in": 0,
            "checked_out": 0,
            "overflow": 0,
            "max_overflow": MAX_OVERFLOW,
        }


def pool_utilization(stats: dict) -> float:
    """Percentage of total pool capacity (size + max_overflow) checked out."""
    total_capacity = stats["size"] + stats["max_overflow"]
    if total_capacity <= 0:
        return 0.0
    return stats["checked_out"] / total_capacity * 100


def log_pool_stats(context: str = "") -> dict:
    """Log the current pool statistics and return them."""
    stats = get_pool_stats()
    utilization = pool_utilization(stats)

    context_str = f" [{context}]" if context else ""
    logger.info(
        f"Connection pool stats{context_str}: "
        f"available={stats['checked_in']}, in_use={stats['checked_out']}, "
        f"overflow={stats['overflow']}, utilization={utilization:.1f}%"
    )

    if utilization >= POOL_WARNING_PERCENT:
        logger.warning(f"Connection pool utilization is high ({utilization:.1f}%)")

    return stats


# Note: For async engines, we listen to the sync_engine
from sqlalchemy import event  # noqa: E402


@event.listens_for(engine.sync_engine, "connect")
def on_connect(dbapi_conn, connection_record):
    """Log when a new connection is created"""
    logger.debug("New database connection created")


@event.listens_for(engine.sync_engine, "invalidate")
def on_invalidate(dbapi_conn, connection_record, exception):
    """Log when a connection is invalidated"""
    logger.warning(
        f"Database connection invalidated: {exception}",
        exc_info=exception
    )
