"""
Study session tag ORM model.

Free-form, normalized labels attached to a study session.

Dependencies: sqlalchemy, lockedin.boundary.db.base
System role: Tag index persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lockedin.boundary.db.base import Base, UUIDMixin, utcnow


class SessionTagModel(Base, UUIDMixin):
    """
    Tag attached to one study session.

    Ownership is inherited from the parent session; tags carry no user_id
    of their own.

    Attributes:
        id: UUID primary key (auto-generated)
        session_id: Parent session (cascade delete)
        tag: Lower-case, trimmed label (unique per session)
        created_at: Row creation timestamp (UTC)
    """

    __tablename__ = "study_session_tags"

    session_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("study_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    session = relationship("StudySessionModel", back_populates="tags")

    __table_args__ = (
        UniqueConstraint("session_id", "tag", name="uq_study_session_tags_session_tag"),
    )
