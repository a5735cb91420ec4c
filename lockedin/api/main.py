"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, lockedin.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lockedin import __version__
from lockedin.boundary.db.connection import dispose_store_handles, init_store_handles
from lockedin.configs import get_settings
from lockedin.observability import configure_logging, get_logger
from lockedin.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    analytics_router,
    health_router,
    study_sessions_router,
    tags_router,
    tasks_router,
)
from .routers.error_handling import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Creates the store handles on startup and disposes them on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.observability.level, settings.observability.sql_level)
    logger = get_logger(__name__)

    # Startup
    init_store_handles()
    logger.info("Locked-In API started", extra={"environment": settings.environment})

    yield

    # Shutdown
    await dispose_store_handles()
    logger.info("Locked-In API stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Locked-In Study Tracker API",
        description="Study session tracking with per-owner analytics",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(study_sessions_router, prefix="/api/v1")
    app.include_router(tags_router, prefix="/api/v1")
    app.include_router(analytics_router, prefix="/api/v1")
    app.include_router(tasks_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    """Run the API under uvicorn."""
    uvicorn.run(
        "lockedin.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
