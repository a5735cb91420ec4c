"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, fixed clock, principals and guards,
service instances bound to the test database
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest


class FixedClock:
    """Clock pinned to a settable instant."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def set(self, now: datetime) -> None:
        self.current = now

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from lockedin.boundary.db.base import Base
    from lockedin.boundary.db import models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 2025-01-01T10:00:00Z."""
    return FixedClock(datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def other_owner_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def guard(owner_id):
    from lockedin.core.authorization import AuthorizationGuard

    return AuthorizationGuard.for_principal(owner_id)


@pytest.fixture
def other_guard(other_owner_id):
    from lockedin.core.authorization import AuthorizationGuard

    return AuthorizationGuard.for_principal(other_owner_id)


@pytest.fixture
def session_service(test_async_db, guard, clock):
    from lockedin.application.services import StudySessionService

    return StudySessionService(test_async_db, guard, clock)


@pytest.fixture
def other_session_service(test_async_db, other_guard, clock):
    from lockedin.application.services import StudySessionService

    return StudySessionService(test_async_db, other_guard, clock)


@pytest.fixture
def tag_service(test_async_db, guard):
    from lockedin.application.services import SessionTagService

    return SessionTagService(test_async_db, guard)


@pytest.fixture
def other_tag_service(test_async_db, other_guard):
    from lockedin.application.services import SessionTagService

    return SessionTagService(test_async_db, other_guard)


@pytest.fixture
def analytics_service(test_async_db, guard, clock):
    from lockedin.application.services import AnalyticsService

    return AnalyticsService(test_async_db, guard, clock)


@pytest.fixture
def task_service(test_async_db, guard, clock):
    from lockedin.application.services import TaskService

    return TaskService(test_async_db, guard, clock)


@pytest.fixture
def other_task_service(test_async_db, other_guard, clock):
    from lockedin.application.services import TaskService

    return TaskService(test_async_db, other_guard, clock)
