"""
Exception hierarchy for the Locked-In study tracker.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LockedInException(Exception):
    """Base exception for all Locked-In application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(LockedInException):
    """
    Raised when a record does not exist or is not owned by the caller.

    Both cases produce the same error so that callers cannot probe for
    other owners' records.
    """

    def __init__(
        self,
        resource: str,
        resource_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Entity name (study_session, task, ...)
            resource_id: ID that was looked up
            details: Additional context
        """
        details = details or {}
        details["resource"] = resource
        details["resource_id"] = str(resource_id)
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found: {resource_id}", details)


class UnauthorizedError(LockedInException):
    """Raised when the caller's credentials are missing or invalid."""

    pass


class ValidationError(LockedInException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class ConflictError(LockedInException):
    """Raised when a write would violate a state-transition rule."""

    pass


class StoreUnavailableError(LockedInException):
    """Raised when the durable store times out or drops the connection."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store unavailable error.

        Args:
            message: Error message
            operation: Operation that failed
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
