"""
Task CRUD operations.

Dependencies: sqlalchemy, lockedin.boundary.db.models
System role: Task persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.CRUD.base_crud import OwnedCRUD
from lockedin.boundary.db.base import utcnow
from lockedin.boundary.db.models.task_model import TaskModel
from lockedin.core.authorization import AuthorizationGuard


class TaskCRUD(OwnedCRUD[TaskModel]):
    """
    CRUD operations for TaskModel.

    Extends OwnedCRUD with filtered listing, session detachment, and the
    counts used by completion-rate analytics.
    """

    def __init__(self) -> None:
        """Initialize TaskCRUD with TaskModel."""
        super().__init__(TaskModel)

    async def list_for_owner(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        completed: bool | None = None,
        session_id: UUID | None = None,
        limit: int | None = None,
    ) -> Sequence[TaskModel]:
        """
        List the caller's tasks by order_index, newest first within a position.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            completed: Filter on is_completed when given
            session_id: Filter on linked session when given
            limit: Maximum number of tasks to return

        Returns:
            Sequence of TaskModels
        """
        stmt = select(TaskModel).where(guard.owner_clause(TaskModel))
        if completed is not None:
            stmt = stmt.where(TaskModel.is_completed.is_(completed))
        if session_id is not None:
            stmt = stmt.where(TaskModel.session_id == session_id)
        stmt = stmt.order_by(
            TaskModel.order_index.asc(),
            TaskModel.created_at.desc(),
            TaskModel.id,
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def detach_session(self, session: AsyncSession, session_id: UUID) -> int:
        """
        Clear the session link on every task pointing at a session.

        Returns:
            Number of tasks detached
        """
        stmt = (
            update(TaskModel)
            .where(TaskModel.session_id == session_id)
            .values(session_id=None, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def completion_counts(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
    ) -> tuple[int, int]:
        """
        Count the caller's tasks.

        Returns:
            tuple[int, int]: (completed, total)
        """
        stmt = select(
            func.count(TaskModel.id),
            func.count(TaskModel.id).filter(TaskModel.is_completed.is_(True)),
        ).where(guard.owner_clause(TaskModel))
        result = await session.execute(stmt)
        total, completed = result.one()
        return int(completed or 0), int(total or 0)


task_crud = TaskCRUD()
