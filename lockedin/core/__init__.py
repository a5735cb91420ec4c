"""
Core business rules module.

Contains the exception hierarchy, the authorization guard, the clock
abstraction, and the duration and normalization rules shared by services.
"""

from lockedin.core.authorization import AuthorizationGuard, authorize
from lockedin.core.clock import Clock, SystemClock, end_of_day, ensure_aware_utc, start_of_day, utc_date
from lockedin.core.exceptions import (
    ConflictError,
    LockedInException,
    NotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    # Exceptions
    "LockedInException",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "ConflictError",
    "StoreUnavailableError",
    # Authorization
    "AuthorizationGuard",
    "authorize",
    # Time
    "Clock",
    "SystemClock",
    "ensure_aware_utc",
    "utc_date",
    "start_of_day",
    "end_of_day",
]
