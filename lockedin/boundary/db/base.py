"""
Declarative base and shared column mixins for the Locked-In tables.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for study_sessions, study_session_tags and tasks."""


class UUIDMixin:
    """UUID v4 primary key; native UUID on PostgreSQL, CHAR(32) on SQLite."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    """
    Row bookkeeping timestamps, stored timezone-aware.

    Attributes:
        created_at: Set on insert, never modified afterwards
        updated_at: Refreshed by every ORM or Core UPDATE on the table
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
