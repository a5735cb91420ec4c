"""
Field validators shared by the session and task services.

Each validator returns the accepted value or raises ValidationError
naming the offending field.

Dependencies: lockedin.core.exceptions, lockedin.boundary.db.models
System role: Input rules applied before any store write
"""

from lockedin.boundary.db.models.study_session_model import SessionType
from lockedin.core.exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5
MIN_PRIORITY = 0
MAX_PRIORITY = 3
MAX_TITLE_LENGTH = 500


def validate_rating(value: int | None, field: str) -> int | None:
    """Accept None or an integer in 1..5."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field)
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(
            f"{field} must be between {MIN_RATING} and {MAX_RATING}",
            field=field,
            details={"value": value},
        )
    return value


def validate_session_type(value: str | SessionType) -> str:
    """
    Coerce a session type to its stored string.

    Raises:
        ValidationError: If the value is not one of the SessionType values
    """
    try:
        return SessionType(value).value
    except ValueError:
        raise ValidationError(
            f"session_type must be one of {[t.value for t in SessionType]}",
            field="session_type",
            details={"value": str(value)},
        )


def validate_target_minutes(value: int | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(
            "target_duration_minutes must be a positive integer",
            field="target_duration_minutes",
            details={"value": value},
        )
    return value


def validate_title(value: str) -> str:
    """Trim a task title and require 1-500 characters."""
    if not isinstance(value, str):
        raise ValidationError("Task title must be a string", field="title")
    if not value.strip():
        raise ValidationError("Task title cannot be empty", field="title")
    title = value.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"Task title cannot exceed {MAX_TITLE_LENGTH} characters",
            field="title",
            details={"length": len(title)},
        )
    return title


def validate_priority(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_PRIORITY <= value <= MAX_PRIORITY:
        raise ValidationError(
            f"priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}",
            field="priority",
            details={"value": value},
        )
    return value
