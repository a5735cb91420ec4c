"""
Response mapping utilities.

Transforms service dictionaries into Pydantic response models.

Dependencies: lockedin.models
System role: Response transformation
"""

from typing import Any

from lockedin.models.analytics import DailySummaryResponse, UserStatsResponse
from lockedin.models.study_session import StudySessionResponse
from lockedin.models.tag import SessionTagResponse
from lockedin.models.task import TaskResponse


def map_session_to_response(session_data: dict[str, Any]) -> StudySessionResponse:
    """
    Transform a session dictionary into StudySessionResponse.

    Args:
        session_data: Dictionary produced by StudySessionService

    Returns:
        StudySessionResponse: Pydantic model for API response
    """
    return StudySessionResponse(**session_data)


def map_sessions_to_response(sessions_data: list[dict[str, Any]]) -> list[StudySessionResponse]:
    return [map_session_to_response(s) for s in sessions_data]


def map_tags_to_response(tags_data: list[dict[str, Any]]) -> list[SessionTagResponse]:
    return [SessionTagResponse(**t) for t in tags_data]


def map_task_to_response(task_data: dict[str, Any]) -> TaskResponse:
    return TaskResponse(**task_data)


def map_tasks_to_response(tasks_data: list[dict[str, Any]]) -> list[TaskResponse]:
    return [map_task_to_response(t) for t in tasks_data]


def map_user_stats_to_response(stats: dict[str, Any]) -> UserStatsResponse:
    return UserStatsResponse(**stats)


def map_daily_summaries_to_response(rows: list[dict[str, Any]]) -> list[DailySummaryResponse]:
    return [DailySummaryResponse(**row) for row in rows]
