"""API routers."""

from .analytics import router as analytics_router
from .health import router as health_router
from .study_sessions import router as study_sessions_router
from .tags import router as tags_router
from .tasks import router as tasks_router

__all__ = [
    "analytics_router",
    "health_router",
    "study_sessions_router",
    "tags_router",
    "tasks_router",
]
