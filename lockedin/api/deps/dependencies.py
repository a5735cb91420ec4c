"""
Dependency injection container.

Factory functions for FastAPI dependencies: settings, clock, the
authenticated principal, its authorization guard, and services bound to
the request's database session.

Dependencies: fastapi, python-jose, lockedin.configs, lockedin.application, lockedin.boundary
System role: DI container for service injection
"""

import logging
from functools import lru_cache
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.application.services import (
    AnalyticsService,
    SessionTagService,
    StudySessionService,
    TaskService,
)
from lockedin.boundary.db import get_async_db
from lockedin.configs import Settings, get_settings
from lockedin.core.authorization import AuthorizationGuard
from lockedin.core.clock import Clock, SystemClock
from lockedin.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_system_clock = SystemClock()


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_clock() -> Clock:
    """Time source for services; overridden in tests."""
    return _system_clock


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_dependency),
) -> UUID:
    """
    Verify the bearer token and return its subject as the principal id.

    Raises:
        UnauthorizedError: Missing, malformed, expired, or badly signed token
    """
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    auth = settings.auth
    try:
        payload = jwt.decode(
            credentials.credentials,
            auth.jwt_secret,
            algorithms=[auth.jwt_algorithm],
            audience=auth.jwt_audience,
            options={"verify_aud": auth.jwt_audience is not None},
        )
    except JWTError as e:
        logger.warning("Rejected bearer token", extra={"error": str(e)})
        raise UnauthorizedError("Could not validate credentials") from e

    subject = payload.get("sub")
    if subject is None:
        raise UnauthorizedError("Token has no subject")
    try:
        return UUID(str(subject))
    except ValueError as e:
        raise UnauthorizedError("Token subject is not a valid principal id") from e


def get_guard(principal_id: UUID = Depends(get_current_principal)) -> AuthorizationGuard:
    """Authorization guard for the authenticated principal."""
    return AuthorizationGuard.for_principal(principal_id)


def get_study_session_service(
    db: AsyncSession = Depends(get_async_db),
    guard: AuthorizationGuard = Depends(get_guard),
    clock: Clock = Depends(get_clock),
) -> StudySessionService:
    """
    Get study session service instance.

    Args:
        db: Async database session (injected via Depends)
        guard: Caller's authorization guard
        clock: Time source

    Returns:
        StudySessionService: Service bound to this request
    """
    return StudySessionService(db, guard, clock)


def get_session_tag_service(
    db: AsyncSession = Depends(get_async_db),
    guard: AuthorizationGuard = Depends(get_guard),
) -> SessionTagService:
    return SessionTagService(db, guard)


def get_analytics_service(
    db: AsyncSession = Depends(get_async_db),
    guard: AuthorizationGuard = Depends(get_guard),
    clock: Clock = Depends(get_clock),
) -> AnalyticsService:
    return AnalyticsService(db, guard, clock)


def get_task_service(
    db: AsyncSession = Depends(get_async_db),
    guard: AuthorizationGuard = Depends(get_guard),
    clock: Clock = Depends(get_clock),
) -> TaskService:
    return TaskService(db, guard, clock)
