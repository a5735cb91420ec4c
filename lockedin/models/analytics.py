"""
Analytics schemas.

Dependencies: pydantic
System role: Analytics API contracts
"""

import datetime

from pydantic import BaseModel, Field


class UserStatsResponse(BaseModel):
    """Totals and averages over ended sessions."""

    total_sessions: int
    total_minutes: int
    avg_duration: float | None
    avg_productivity: float | None
    avg_mood: float | None
    last_session_at: datetime.datetime | None
    sessions_last_7d: int
    sessions_last_30d: int


class DailySummaryResponse(BaseModel):
    date: datetime.date
    sessions_count: int
    total_minutes: int
    avg_productivity: float | None
    avg_mood: float | None
    session_types: list[str]


class StudyStreakResponse(BaseModel):
    streak: int = Field(..., ge=0, description="Consecutive days ending today")


class CompletionRateResponse(BaseModel):
    completion_rate: float = Field(..., ge=0, le=100, description="Percentage, two decimals")
