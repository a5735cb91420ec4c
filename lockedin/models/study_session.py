"""
Study session schemas.

Request/response schemas for session lifecycle operations.

Dependencies: pydantic
System role: Study session API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

SessionTypeLiteral = Literal["pomodoro", "countdown", "stopwatch", "custom"]


class StartSessionRequest(BaseModel):
    """Request schema for starting an active session."""

    session_type: SessionTypeLiteral
    start_time: datetime | None = Field(None, description="Defaults to the server clock")
    target_duration_minutes: int | None = Field(None, ge=1)
    session_notes: str | None = None


class RecordSessionRequest(BaseModel):
    """Request schema for recording a finished session."""

    session_type: SessionTypeLiteral
    start_time: datetime
    end_time: datetime
    target_duration_minutes: int | None = Field(None, ge=1)
    session_notes: str | None = None
    mood_rating: int | None = Field(None, ge=1, le=5)
    productivity_rating: int | None = Field(None, ge=1, le=5)


class UpdateSessionRequest(BaseModel):
    """
    Partial update. Only fields present in the request body are written;
    an explicit null clears a field.
    """

    session_type: SessionTypeLiteral | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    target_duration_minutes: int | None = Field(None, ge=1)
    session_notes: str | None = None
    mood_rating: int | None = Field(None, ge=1, le=5)
    productivity_rating: int | None = Field(None, ge=1, le=5)
    ai_feedback: str | None = None
    ai_feedback_generated_at: datetime | None = None
    google_calendar_event_id: str | None = Field(None, max_length=255)
    expected_version: int | None = Field(None, ge=1, description="Reject the write if the stored version differs")


class EndSessionRequest(BaseModel):
    """Request schema for ending a session."""

    mood_rating: int | None = Field(None, ge=1, le=5)
    productivity_rating: int | None = Field(None, ge=1, le=5)
    session_notes: str | None = None
    expected_version: int | None = Field(None, ge=1)


class StudySessionResponse(BaseModel):
    """Response schema for a study session."""

    id: uuid.UUID
    user_id: uuid.UUID
    session_type: str
    start_time: datetime
    end_time: datetime | None
    duration_minutes: int | None
    target_duration_minutes: int | None
    session_notes: str | None
    mood_rating: int | None
    productivity_rating: int | None
    ai_feedback: str | None
    ai_feedback_generated_at: datetime | None
    google_calendar_event_id: str | None
    is_active: bool
    version: int
    created_at: datetime
    updated_at: datetime
