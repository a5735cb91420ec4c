"""
Session duration rules.

Dependencies: lockedin.core.clock, lockedin.core.exceptions
System role: Single source of the duration formula
"""

import math
from datetime import datetime

from lockedin.core.clock import ensure_aware_utc
from lockedin.core.exceptions import ValidationError


def validate_chronology(start_time: datetime, end_time: datetime | None) -> None:
    """
    Reject an end time that is not strictly after the start time.

    Raises:
        ValidationError: If end_time <= start_time
    """
    if end_time is None:
        return
    if ensure_aware_utc(end_time) <= ensure_aware_utc(start_time):
        raise ValidationError(
            "end_time must be after start_time",
            field="end_time",
            details={
                "start_time": ensure_aware_utc(start_time).isoformat(),
                "end_time": ensure_aware_utc(end_time).isoformat(),
            },
        )


def compute_duration_minutes(start_time: datetime, end_time: datetime | None) -> int | None:
    """
    Whole minutes between start and end, rounded down.

    Args:
        start_time: Session start
        end_time: Session end, or None for an active session

    Returns:
        int | None: floor((end - start) / 60s), None while active

    Raises:
        ValidationError: If end_time <= start_time
    """
    if end_time is None:
        return None
    validate_chronology(start_time, end_time)
    elapsed = ensure_aware_utc(end_time) - ensure_aware_utc(start_time)
    return math.floor(elapsed.total_seconds() / 60)
