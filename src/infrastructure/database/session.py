"""Async engine, per-request sessions and schema bootstrap for the item store.

The engine and its session factory are created together, lazily, the first
time either is requested, and live until ``close_database`` disposes them at
application shutdown. Pool sizing comes from ``DatabaseConfig``; callers may
pass their own config or URL instead of the process settings.
"""

import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import DatabaseConfig, get_settings
from src.infrastructure.constants import COMMAND_TIMEOUT_SECONDS, POOL_RECYCLE_SECONDS
from src.infrastructure.database.models import Item


def create_database_engine(
    database_url: str | None = None, *, config: DatabaseConfig | None = None
) -> AsyncEngine:
    """Create the asyncpg-backed engine for the item store.

    Args:
        database_url: URL overriding the configured one.
        config: Pool settings; defaults to the application's database config.

    Returns:
        AsyncEngine: Engine with a bounded connection pool.
    """
    config = config or get_settings().database_config

    engine = create_async_engine(
        database_url or config.database_url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_pre_ping=config.pool_pre_ping,
        pool_recycle=POOL_RECYCLE_SECONDS,
        echo=config.echo,
        connect_args={
            "command_timeout": COMMAND_TIMEOUT_SECONDS,
            # Short CRUD statements gain nothing from JIT compilation
            "server_settings": {"jit": "off"},
        },
    )
    logger.info(
        "Database engine ready",
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
    )
    return engine


class _DatabaseManager:
    """Process-wide owner of the engine and the session factory bound to it."""

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = threading.Lock()

    def _ensure_started(self) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        with self._lock:
            if self._engine is None or self._session_factory is None:
                self._engine = create_database_engine()
                self._session_factory = async_sessionmaker(
                    self._engine, class_=AsyncSession, expire_on_commit=False
                )
            return self._engine, self._session_factory

    def get_engine(self) -> AsyncEngine:
        """Return the engine, creating it on first use."""
        return self._engine or self._ensure_started()[0]

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Return the session factory, creating the engine on first use."""
        return self._session_factory or self._ensure_started()[1]

    async def close(self) -> None:
        """Dispose the engine; the next request for it starts a new one."""
        engine = self._engine
        self.reset()
        if engine is not None:
            await engine.dispose()
            logger.info("Database engine disposed")

    def reset(self) -> None:
        """Forget the engine without disposing it."""
        self._engine = None
        self._session_factory = None


_db_manager = _DatabaseManager()


def get_engine() -> AsyncEngine:
    """Get the process-wide engine."""
    return _db_manager.get_engine()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory bound to the process-wide engine."""
    return _db_manager.get_session_factory()


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Open a session that commits when the block succeeds.

    Yields:
        AsyncSession: Session scoped to the block.

    Raises:
        Exception: Whatever the block raised, after the session is rolled back.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception as exc:
            await session.rollback()
            logger.debug("Session rolled back after {}", type(exc).__name__)
            raise
        finally:
            await session.close()


async def close_database() -> None:
    """Dispose the process-wide engine."""
    await _db_manager.close()


async def create_schema() -> None:
    """Create the items table (and any other mapped table) if it is missing."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Item.metadata.create_all)
    logger.info("Database schema verified", tables=sorted(Item.metadata.tables))


async def check_database_connection() -> tuple[bool, str | None]:
    """Run ``SELECT 1`` against the database.

    Returns:
        tuple[bool, str | None]: Whether the database answered, and the
            driver error when it did not.
    """
    try:
        async with get_engine().connect() as conn:
            await conn.scalar(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Database connectivity check failed: {}", exc)
        return False, str(exc)
    return True, None
