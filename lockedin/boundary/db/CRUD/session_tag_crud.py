"""
Study session tag CRUD operations.

Tag rows carry no owner column. Per-session methods expect the caller to
have authorized the parent session; cross-session lookups join the parent
and apply the guard's owner clause.

Dependencies: sqlalchemy, lockedin.boundary.db.models
System role: Tag index persistence operations
"""

from typing import Sequence
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.CRUD.base_crud import BaseCRUD
from lockedin.boundary.db.base import utcnow
from lockedin.boundary.db.models.session_tag_model import SessionTagModel
from lockedin.boundary.db.models.study_session_model import StudySessionModel
from lockedin.core.authorization import AuthorizationGuard

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SessionTagCRUD(BaseCRUD[SessionTagModel]):
    """CRUD operations for SessionTagModel."""

    def __init__(self) -> None:
        """Initialize SessionTagCRUD with SessionTagModel."""
        super().__init__(SessionTagModel)

    async def insert_ignore(
        self,
        session: AsyncSession,
        session_id: UUID,
        tags: Sequence[str],
    ) -> None:
        """
        Insert tags for a session, skipping (session_id, tag) pairs that exist.

        Args:
            session: Async database session
            session_id: Parent session UUID
            tags: Already-normalized tags
        """
        if not tags:
            return
        dialect = session.get_bind().dialect.name
        try:
            insert = _DIALECT_INSERTS[dialect]
        except KeyError:
            raise NotImplementedError(f"insert-or-ignore not supported for dialect {dialect}")

        now = utcnow()
        stmt = (
            insert(SessionTagModel)
            .values([
                {"id": uuid4(), "session_id": session_id, "tag": tag, "created_at": now}
                for tag in tags
            ])
            .on_conflict_do_nothing(index_elements=["session_id", "tag"])
        )
        await session.execute(stmt)

    async def list_for_session(
        self,
        session: AsyncSession,
        session_id: UUID,
        tags: Sequence[str] | None = None,
    ) -> Sequence[SessionTagModel]:
        """
        List a session's tags ordered by tag.

        Args:
            session: Async database session
            session_id: Parent session UUID
            tags: Optional subset of tags to return

        Returns:
            Sequence of SessionTagModels
        """
        stmt = select(SessionTagModel).where(SessionTagModel.session_id == session_id)
        if tags is not None:
            stmt = stmt.where(SessionTagModel.tag.in_(tags))
        stmt = stmt.order_by(SessionTagModel.tag)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_tag(self, session: AsyncSession, session_id: UUID, tag: str) -> bool:
        """
        Remove one tag from a session.

        Returns:
            True if a row was deleted
        """
        stmt = delete(SessionTagModel).where(
            SessionTagModel.session_id == session_id,
            SessionTagModel.tag == tag,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def delete_for_session(self, session: AsyncSession, session_id: UUID) -> int:
        """
        Remove every tag of a session.

        Returns:
            Number of rows deleted
        """
        stmt = delete(SessionTagModel).where(SessionTagModel.session_id == session_id)
        result = await session.execute(stmt)
        return result.rowcount

    async def session_ids_for_tag(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        tag: str,
    ) -> list[UUID]:
        """
        Find the ids of the guard's sessions carrying a tag.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            tag: Normalized tag

        Returns:
            list[UUID]: Distinct session ids
        """
        stmt = (
            select(SessionTagModel.session_id)
            .join(StudySessionModel, StudySessionModel.id == SessionTagModel.session_id)
            .where(SessionTagModel.tag == tag, guard.owner_clause(StudySessionModel))
            .distinct()
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


session_tag_crud = SessionTagCRUD()
