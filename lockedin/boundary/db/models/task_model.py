"""
Task ORM model.

User to-do items, optionally linked to the study session they were worked
on. Used as the input to completion-rate analytics.

Dependencies: sqlalchemy, lockedin.boundary.db.base
System role: Task persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from lockedin.boundary.db.base import Base, UUIDMixin, TimestampMixin


class TaskModel(Base, UUIDMixin, TimestampMixin):
    """
    Task ORM model.

    Deleting the linked session leaves the task in place with
    session_id set to NULL.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner of the task
        session_id: Linked study session (optional)
        title: Task title (1-500 chars)
        description: Optional details
        is_completed: Completion flag
        completed_at: Set when is_completed turns true, cleared when false
        priority: 0=none, 1=low, 2=medium, 3=high
        due_date: Optional deadline
        order_index: Position in the user's list
    """

    __tablename__ = "tasks"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )
    session_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("study_sessions.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        index=True,
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("length(title) > 0", name="title_not_empty"),
        CheckConstraint("priority >= 0 AND priority <= 3", name="priority_range"),
    )
