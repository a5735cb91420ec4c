"""
Study session CRUD operations.

Provides owner-scoped queries for StudySessionModel: active-session lookup,
filtered listing, tag-driven lookups, and the raw rows behind analytics.

Dependencies: sqlalchemy, lockedin.boundary.db.models
System role: Session persistence operations
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.CRUD.base_crud import OwnedCRUD
from lockedin.boundary.db.models.study_session_model import StudySessionModel
from lockedin.core.authorization import AuthorizationGuard

ORDERABLE_COLUMNS = {
    "start_time": StudySessionModel.start_time,
    "created_at": StudySessionModel.created_at,
}


class StudySessionCRUD(OwnedCRUD[StudySessionModel]):
    """
    CRUD operations for StudySessionModel.

    Every query is narrowed by the caller's AuthorizationGuard so rows of
    other owners are never read or written.
    """

    def __init__(self) -> None:
        """Initialize StudySessionCRUD with StudySessionModel."""
        super().__init__(StudySessionModel)

    async def get_active(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
    ) -> StudySessionModel | None:
        """
        Retrieve the most recently started active session.

        Args:
            session: Async database session
            guard: Authorization guard for the caller

        Returns:
            Active StudySessionModel, None if every session has ended
        """
        stmt = (
            select(StudySessionModel)
            .where(
                guard.owner_clause(StudySessionModel),
                StudySessionModel.end_time.is_(None),
            )
            .order_by(StudySessionModel.start_time.desc(), StudySessionModel.id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_owner(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        limit: int | None = None,
        offset: int = 0,
        order_by: str = "start_time",
        descending: bool = True,
    ) -> Sequence[StudySessionModel]:
        """
        List the caller's sessions.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            start_date: Inclusive lower bound on start_time
            end_date: Inclusive upper bound on start_time
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip
            order_by: "start_time" or "created_at"
            descending: Sort direction; ties are broken by id ascending

        Returns:
            Sequence of StudySessionModels
        """
        column = ORDERABLE_COLUMNS[order_by]
        stmt = select(StudySessionModel).where(guard.owner_clause(StudySessionModel))
        if start_date is not None:
            stmt = stmt.where(StudySessionModel.start_time >= start_date)
        if end_date is not None:
            stmt = stmt.where(StudySessionModel.start_time <= end_date)
        stmt = stmt.order_by(column.desc() if descending else column.asc(), StudySessionModel.id)
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_many_owned(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        ids: Sequence[UUID],
    ) -> Sequence[StudySessionModel]:
        """
        Retrieve the caller's sessions among the given ids, newest first.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            ids: Candidate session ids

        Returns:
            Sequence of owned StudySessionModels ordered by start_time desc
        """
        if not ids:
            return []
        stmt = (
            select(StudySessionModel)
            .where(
                guard.owner_clause(StudySessionModel),
                StudySessionModel.id.in_(ids),
            )
            .order_by(StudySessionModel.start_time.desc(), StudySessionModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_ended(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        start_before: datetime | None = None,
        start_from: datetime | None = None,
    ) -> Sequence[StudySessionModel]:
        """
        List the caller's ended sessions, newest first.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            start_before: Exclusive upper bound on start_time
            start_from: Inclusive lower bound on start_time

        Returns:
            Sequence of ended StudySessionModels
        """
        stmt = select(StudySessionModel).where(
            guard.owner_clause(StudySessionModel),
            StudySessionModel.end_time.is_not(None),
        )
        if start_before is not None:
            stmt = stmt.where(StudySessionModel.start_time < start_before)
        if start_from is not None:
            stmt = stmt.where(StudySessionModel.start_time >= start_from)
        stmt = stmt.order_by(StudySessionModel.start_time.desc(), StudySessionModel.id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def aggregate_ended(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        week_start: datetime,
        month_start: datetime,
    ) -> dict[str, Any]:
        """
        Aggregate the caller's ended sessions in one query.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            week_start: Lower bound for the 7-day window
            month_start: Lower bound for the 30-day window

        Returns:
            dict: total_sessions, total_minutes, avg_duration, avg_productivity,
            avg_mood, last_session_at, sessions_last_7d, sessions_last_30d
        """
        stmt = select(
            func.count(StudySessionModel.id).label("total_sessions"),
            func.sum(StudySessionModel.duration_minutes).label("total_minutes"),
            func.avg(StudySessionModel.duration_minutes).label("avg_duration"),
            func.avg(StudySessionModel.productivity_rating).label("avg_productivity"),
            func.avg(StudySessionModel.mood_rating).label("avg_mood"),
            func.max(StudySessionModel.start_time).label("last_session_at"),
            func.count(case((StudySessionModel.start_time >= week_start, 1))).label("sessions_last_7d"),
            func.count(case((StudySessionModel.start_time >= month_start, 1))).label("sessions_last_30d"),
        ).where(
            guard.owner_clause(StudySessionModel),
            StudySessionModel.end_time.is_not(None),
        )
        result = await session.execute(stmt)
        return dict(result.one()._mapping)


study_session_crud = StudySessionCRUD()
