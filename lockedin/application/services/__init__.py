"""Service orchestrators."""

from .analytics_service import AnalyticsService
from .session_tag_service import SessionTagService
from .study_session_service import StudySessionService
from .task_service import TaskService

__all__ = [
    "AnalyticsService",
    "SessionTagService",
    "StudySessionService",
    "TaskService",
]
