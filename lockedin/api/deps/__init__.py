"""FastAPI dependency providers."""

from lockedin.api.deps.dependencies import (
    get_analytics_service,
    get_clock,
    get_current_principal,
    get_guard,
    get_session_tag_service,
    get_settings_dependency,
    get_study_session_service,
    get_task_service,
)

__all__ = [
    "get_analytics_service",
    "get_clock",
    "get_current_principal",
    "get_guard",
    "get_session_tag_service",
    "get_settings_dependency",
    "get_study_session_service",
    "get_task_service",
]
