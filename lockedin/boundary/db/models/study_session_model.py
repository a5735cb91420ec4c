"""
Study session ORM model.

Represents one timed study session owned by a user. A session is active
while end_time is NULL and ended once end_time is set.

Dependencies: sqlalchemy, lockedin.boundary.db.base
System role: Session persistence for lifecycle tracking and analytics
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lockedin.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SessionType(str, enum.Enum):
    """
    Timer styles a session can be run with.

    POMODORO: Fixed work interval followed by a break
    COUNTDOWN: Counts down from a target duration
    STOPWATCH: Open-ended, counts up
    CUSTOM: Anything else
    """

    POMODORO = "pomodoro"
    COUNTDOWN = "countdown"
    STOPWATCH = "stopwatch"
    CUSTOM = "custom"


_SESSION_TYPE_VALUES = ", ".join(f"'{t.value}'" for t in SessionType)


class StudySessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Study session ORM model.

    Deleting a session removes its tags (cascade) and detaches any linked
    tasks (tasks.session_id SET NULL). A partial unique index allows at
    most one active session per user.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner of the session
        session_type: One of SessionType values
        start_time: Session start (UTC)
        end_time: Session end (UTC), NULL while active
        duration_minutes: Whole minutes between start and end, NULL while active
        target_duration_minutes: Planned length
        session_notes: Free-text notes
        mood_rating: 1-5
        productivity_rating: 1-5
        ai_feedback: Externally generated feedback (opaque)
        ai_feedback_generated_at: When ai_feedback was produced (opaque)
        google_calendar_event_id: Linked calendar event (opaque)
        version: Write counter, incremented on every update
        created_at: Row creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        tags: One-to-many with SessionTagModel (cascade delete)
    """

    __tablename__ = "study_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning principal",
    )
    session_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        doc="pomodoro, countdown, stopwatch or custom",
    )
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    end_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    target_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    session_notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    mood_rating: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    productivity_rating: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    ai_feedback: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    ai_feedback_generated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
    google_calendar_event_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    tags = relationship(
        "SessionTagModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("end_time IS NULL OR end_time > start_time", name="valid_duration"),
        CheckConstraint(
            "mood_rating IS NULL OR (mood_rating >= 1 AND mood_rating <= 5)",
            name="mood_rating_range",
        ),
        CheckConstraint(
            "productivity_rating IS NULL OR (productivity_rating >= 1 AND productivity_rating <= 5)",
            name="productivity_rating_range",
        ),
        CheckConstraint(f"session_type IN ({_SESSION_TYPE_VALUES})", name="session_type_valid"),
    )

    @property
    def is_active(self) -> bool:
        return self.end_time is None


Index(
    "idx_study_sessions_user_start",
    StudySessionModel.user_id,
    StudySessionModel.start_time.desc(),
)
Index(
    "uq_study_sessions_one_active_per_user",
    StudySessionModel.user_id,
    unique=True,
    postgresql_where=StudySessionModel.end_time.is_(None),
    sqlite_where=StudySessionModel.end_time.is_(None),
)
