"""
Session tag service orchestrator.

Tags are normalized (trimmed, lower-cased) before they touch the store.
Access to a session's tags follows access to the session itself.

Dependencies: lockedin.boundary.db.CRUD, lockedin.core
System role: Tag index use case orchestration
"""

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.application.services.study_session_service import session_to_dict
from lockedin.boundary.db.CRUD.session_tag_crud import session_tag_crud
from lockedin.boundary.db.CRUD.study_session_crud import study_session_crud
from lockedin.boundary.db.errors import translate_store_errors
from lockedin.boundary.db.models.study_session_model import StudySessionModel
from lockedin.core.authorization import AuthorizationGuard
from lockedin.core.clock import ensure_aware_utc
from lockedin.core.exceptions import NotFoundError
from lockedin.core.normalization import is_storable, lookup_key, normalize_tags
from lockedin.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class SessionTagService:
    """Session tag orchestrator."""

    def __init__(self, db: AsyncSession, guard: AuthorizationGuard) -> None:
        self.db = db
        self.guard = guard

    async def _get_owned_session(self, session_id: UUID) -> StudySessionModel:
        session = await study_session_crud.get_owned(self.db, self.guard, session_id)
        if session is None:
            raise NotFoundError("study_session", session_id)
        return session

    @translate_store_errors("session_tag.add")
    async def add_tags(self, session_id: UUID, tags: Iterable[str]) -> list[dict]:
        """
        Attach tags to a session, ignoring ones it already has.

        The batch is validated up front; one invalid tag means nothing is
        written.

        Args:
            session_id: Session UUID
            tags: Raw tags

        Returns:
            list[dict]: The requested tags as stored, sorted by tag

        Raises:
            ValidationError: A tag is empty or longer than 50 characters
            NotFoundError: Session missing or not owned
        """
        normalized = normalize_tags(tags)
        session = await self._get_owned_session(session_id)
        if not normalized:
            return []

        await session_tag_crud.insert_ignore(self.db, session.id, normalized)
        await self.db.commit()

        rows = await session_tag_crud.list_for_session(self.db, session.id, tags=normalized)
        log_with_context(
            logger,
            logging.INFO,
            "Session tags added",
            session_id=session_id,
            tags=normalized,
        )
        return [
            {
                "id": row.id,
                "session_id": row.session_id,
                "tag": row.tag,
                "created_at": ensure_aware_utc(row.created_at),
            }
            for row in rows
        ]

    @translate_store_errors("session_tag.remove")
    async def remove_tag(self, session_id: UUID, tag: str) -> bool:
        """
        Detach one tag; absent tags (including ones too long to ever have
        been stored) are a no-op.

        Returns:
            bool: True if a tag row was removed
        """
        normalized = lookup_key(tag)
        session = await self._get_owned_session(session_id)
        removed = False
        if is_storable(normalized):
            removed = await session_tag_crud.delete_tag(self.db, session.id, normalized)
            await self.db.commit()
        logger.info(
            "Session tag removed" if removed else "Session tag absent, nothing removed",
            extra={"session_id": str(session_id), "tag": normalized},
        )
        return removed

    @translate_store_errors("session_tag.list")
    async def list_tags(self, session_id: UUID) -> list[str]:
        """Sorted tags of an owned session."""
        session = await self._get_owned_session(session_id)
        rows = await session_tag_crud.list_for_session(self.db, session.id)
        return sorted({row.tag for row in rows})

    @translate_store_errors("session_tag.sessions_by_tag")
    async def sessions_by_tag(self, tag: str) -> list[dict]:
        """
        Owned sessions carrying a tag, newest first.

        Returns:
            list[dict]: Sessions; empty when none match
        """
        normalized = lookup_key(tag)
        if not is_storable(normalized):
            return []
        session_ids = await session_tag_crud.session_ids_for_tag(self.db, self.guard, normalized)
        sessions = await study_session_crud.get_many_owned(self.db, self.guard, session_ids)
        return [session_to_dict(s) for s in sessions]
