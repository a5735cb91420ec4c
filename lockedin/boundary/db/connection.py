"""
Database connection management.

Owns the two store capability handles used by the service:

* the ordinary handle, bound to the application role and used for every
  request session;
* the privileged handle, bound to the service role and used only for
  schema management and operator jobs.

Both are created once per process (application lifespan) and disposed on
shutdown.

Dependencies: sqlalchemy, lockedin.configs, lockedin.core
System role: Database connection lifecycle management
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lockedin.configs import get_settings
from lockedin.configs.database import DatabaseSettings
from lockedin.core.authorization import AuthorizationGuard

logger = logging.getLogger(__name__)


def get_async_engine(url: str, db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early.

    Args:
        url: SQLAlchemy async database URL
        db_config: Pool and echo settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine(settings.database.async_database_url, settings.database)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autocommit=False and
    autoflush=False for explicit transaction control and predictable behavior.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


class StoreHandles:
    """Ordinary and privileged store handles for the process lifetime."""

    def __init__(
        self,
        ordinary_engine: AsyncEngine,
        privileged_engine: AsyncEngine,
    ) -> None:
        self.ordinary_engine = ordinary_engine
        self.privileged_engine = privileged_engine
        self.ordinary = get_async_session_factory(ordinary_engine)
        self._privileged = get_async_session_factory(privileged_engine)

    @classmethod
    def from_settings(cls, db_config: DatabaseSettings | None = None) -> "StoreHandles":
        """Build both handles from database settings."""
        db_config = db_config or get_settings().database
        ordinary = get_async_engine(db_config.async_database_url, db_config)
        if db_config.privileged_database_url == db_config.async_database_url:
            privileged = ordinary
        else:
            privileged = get_async_engine(db_config.privileged_database_url, db_config)
        return cls(ordinary, privileged)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.ordinary_engine.dispose()
        if self.privileged_engine is not self.ordinary_engine:
            await self.privileged_engine.dispose()


_handles: StoreHandles | None = None


def init_store_handles(handles: StoreHandles | None = None) -> StoreHandles:
    """
    Install the process-wide store handles.

    Args:
        handles: Prebuilt handles (tests); built from settings when None

    Returns:
        StoreHandles: The installed handles
    """
    global _handles
    _handles = handles or StoreHandles.from_settings()
    logger.info("Store handles initialized")
    return _handles


async def dispose_store_handles() -> None:
    """Dispose and forget the process-wide store handles."""
    global _handles
    if _handles is not None:
        await _handles.dispose()
        _handles = None
        logger.info("Store handles disposed")


def get_store_handles() -> StoreHandles:
    """
    Return the installed store handles.

    Raises:
        RuntimeError: If init_store_handles() has not run
    """
    if _handles is None:
        raise RuntimeError("Store handles not initialized. Did the application lifespan start?")
    return _handles


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Opens a session on the ordinary handle for each request and closes it
    after the route completes, even if exceptions occur.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @app.get("/study-sessions/{id}")
        async def get_session(id: UUID, db: AsyncSession = Depends(get_async_db)):
            ...
    """
    async with get_store_handles().ordinary() as session:
        yield session


@asynccontextmanager
async def operator_scope() -> AsyncIterator[tuple[AsyncSession, AuthorizationGuard]]:
    """
    Open a privileged session together with the operator guard.

    Only trusted operator code (maintenance scripts) should use this; it is
    never wired into HTTP routes.

    Yields:
        tuple[AsyncSession, AuthorizationGuard]: Privileged session and bypass guard
    """
    handles = get_store_handles()
    async with handles._privileged() as session:
        yield session, AuthorizationGuard.operator()
