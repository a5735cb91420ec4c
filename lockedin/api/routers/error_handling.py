"""
API error handling utilities.

Maps the domain exception hierarchy onto HTTP status codes and the
ErrorResponse envelope, either per endpoint (decorator) or app-wide
(exception handler, for errors raised inside dependencies).
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from lockedin.core.exceptions import (
    ConflictError,
    LockedInException,
    NotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)
from lockedin.models.common import ErrorResponse
from lockedin.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_EXCEPTION: dict[type[LockedInException], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: LockedInException) -> int:
    for exc_type, code in STATUS_BY_EXCEPTION.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: LockedInException) -> JSONResponse:
    """Build the ErrorResponse envelope for a domain exception."""
    code = status_for(exc)
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=code, content=body.model_dump(), headers=headers)


def handle_service_errors(func: F) -> F:
    """
    Decorator translating domain errors raised by an endpoint into responses.

    This centralizes:
    - Logging of errors with context
    - Mapping exception types to HTTP status codes
    - The uniform ErrorResponse envelope
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except (NotFoundError, ValidationError, ConflictError, UnauthorizedError) as e:
            logger.warning(
                "Request rejected",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            return error_response(e)

        except StoreUnavailableError as e:
            logger.error("Store unavailable", extra={"error": str(e)})
            return error_response(e)

        except LockedInException as e:
            logger.exception("Unhandled application error", extra={"error": str(e)})
            return error_response(e)

        except Exception as e:
            log_exception_with_context(
                logger,
                "Unexpected failure in endpoint",
                e,
                endpoint=func.__name__,
            )
            body = ErrorResponse(error="An internal error occurred")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=body.model_dump(),
            )

    return wrapper  # type: ignore


async def locked_in_exception_handler(request: Request, exc: LockedInException) -> JSONResponse:
    """App-level handler for domain errors raised outside endpoints (dependencies)."""
    logger.warning(
        "Request rejected before endpoint",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LockedInException, locked_in_exception_handler)
