"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata over
the privileged store handle.

Dependencies: sqlalchemy, lockedin.configs
System role: Database schema initialization

Usage:
    python -m lockedin.boundary.db.create_tables
    python -m lockedin.boundary.db.create_tables --drop
"""

import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from lockedin.boundary.db.base import Base
from lockedin.boundary.db.connection import StoreHandles
from lockedin.configs import get_settings
from lockedin.observability.logger import configure_logging

# Import all models to register them with Base.metadata
from lockedin.boundary.db.models import SessionTagModel, StudySessionModel, TaskModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Engine bound to a role allowed to run DDL
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Args:
        engine: Engine bound to a role allowed to run DDL
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


async def _main(drop: bool) -> None:
    handles = StoreHandles.from_settings()
    try:
        if drop:
            await drop_all_tables(handles.privileged_engine)
        await create_all_tables(handles.privileged_engine)
    finally:
        await handles.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the Locked-In database schema")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.observability.level, settings.observability.sql_level)
    asyncio.run(_main(args.drop))
