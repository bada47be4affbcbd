"""
Async SQLAlchemy engine and session factory for PostgreSQL.

The engine owns a bounded connection pool.  Route handlers never touch the
engine directly: they receive an ``AsyncSession`` through ``get_db_session``,
which commits on success, rolls back on any exception and always returns the
connection to the pool.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings, config
from database.models import Base

logger = logging.getLogger(__name__)


def _connect_args(settings: Settings) -> Dict[str, Any]:
    """asyncpg-level timeouts (and TLS for hosted databases)."""
    if not settings.database_url.startswith("postgresql+asyncpg"):
        return {}
    args: Dict[str, Any] = {
        "timeout": settings.db_connect_timeout,
        "command_timeout": settings.db_command_timeout,
    }
    if settings.db_ssl:
        args["ssl"] = "require"
    return args


def build_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=3600,
        pool_pre_ping=True,
        connect_args=_connect_args(settings),
    )


engine = build_engine(config)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def check_database(db_engine: AsyncEngine | None = None, timeout: float | None = None) -> bool:
    """Run ``SELECT 1``; True when the store answered within ``timeout``."""
    db_engine = db_engine or engine
    timeout = timeout if timeout is not None else config.db_connect_timeout

    async def _probe() -> None:
        async with db_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    try:
        await asyncio.wait_for(_probe(), timeout=timeout)
        return True
    except Exception as exc:
        logger.warning("Database health probe failed: %s", exc)
        return False


async def wait_for_database(
    db_engine: AsyncEngine | None = None,
    attempts: int | None = None,
    delay: float | None = None,
) -> None:
    """
    Startup reconnect loop: try ``attempts`` times, ``delay`` seconds apart.

    Raises ``RuntimeError`` once every attempt has failed so the process
    refuses to start against an unreachable store.
    """
    db_engine = db_engine or engine
    attempts = attempts if attempts is not None else config.db_connect_attempts
    delay = delay if delay is not None else config.db_connect_retry_delay

    last_exc: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            async with db_engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connected successfully (attempt %d/%d)", attempt, attempts)
            return
        except Exception as exc:
            last_exc = exc
            logger.warning(
                "Database connection attempt %d/%d failed: %s", attempt, attempts, exc,
            )
            if attempt < attempts:
                await asyncio.sleep(delay)

    raise RuntimeError(
        f"Database unreachable after {attempts} attempts"
    ) from last_exc


async def create_tables(db_engine: AsyncEngine | None = None) -> None:
    """Create missing tables and indexes (no migrations)."""
    db_engine = db_engine or engine
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(db_engine: AsyncEngine | None = None) -> None:
    await (db_engine or engine).dispose()
