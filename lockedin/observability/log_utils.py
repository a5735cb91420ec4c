"""
Logging utilities for safe structured logging.

Renders identifiers, timestamps, and tag lists as compact strings so they
can be passed through ``extra={...}`` without surprises.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import enum
import logging
from datetime import date, datetime
from typing import Any
from uuid import UUID

MAX_LIST_ITEMS = 10


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert a value to a string for logging.

    UUIDs and enums render as their value, timestamps as ISO-8601, short
    collections of scalars inline (e.g. tags), larger collections as a count.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, enum.Enum):
            val_str = str(value.value)
        elif isinstance(value, (datetime, date)):
            val_str = value.isoformat()
        elif isinstance(value, UUID):
            val_str = str(value)
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else list(value)
            if len(items) <= MAX_LIST_ITEMS and all(isinstance(i, (str, int, UUID)) for i in items):
                val_str = "[" + ", ".join(str(i) for i in items) + "]"
            else:
                val_str = f"{type(value).__name__}({len(items)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, converting every value.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional key-value pairs
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=safe_context)
