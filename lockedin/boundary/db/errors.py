"""
Store error translation.

Maps integrity violations and connection-level driver failures onto the
domain exception hierarchy.

Dependencies: sqlalchemy, lockedin.core.exceptions
System role: Failure boundary between services and the relational store
"""

import asyncio
import functools
import logging
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from lockedin.core.exceptions import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


async def _rollback(db: Any, operation: str) -> None:
    """Roll back the request session; a failing rollback never masks the original error."""
    try:
        await db.rollback()
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        logger.warning(
            "Rollback failed",
            extra={"operation": operation, "error_type": type(e).__name__},
        )


def translate_store_errors(operation: str) -> Callable[[F], F]:
    """
    Decorate a service coroutine method so store failures surface as domain errors.

    The decorated method's instance must expose the request session as
    ``self.db``; it is rolled back before the translated error is raised.
    Only connection-level failures become StoreUnavailableError; any other
    SQLAlchemyError is a defect and propagates unchanged after rollback.
    No retry is attempted.

    Args:
        operation: Operation name recorded in the error details and logs
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            try:
                return await func(self, *args, **kwargs)
            except IntegrityError as e:
                await _rollback(self.db, operation)
                logger.warning(
                    "Store rejected write",
                    extra={"operation": operation, "error": str(e.orig)},
                )
                raise ConflictError(
                    "Write conflicts with existing data",
                    details={"operation": operation},
                ) from e
            except (OperationalError, InterfaceError, PoolTimeoutError, asyncio.TimeoutError) as e:
                await _rollback(self.db, operation)
                logger.error(
                    "Store unavailable",
                    extra={"operation": operation, "error_type": type(e).__name__},
                )
                raise StoreUnavailableError(
                    "Data store unavailable",
                    operation=operation,
                ) from e
            except SQLAlchemyError:
                await _rollback(self.db, operation)
                raise

        return wrapper  # type: ignore

    return decorator
