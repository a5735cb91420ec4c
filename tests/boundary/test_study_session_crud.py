"""
Test suite for StudySessionCRUD database operations.

Uses AsyncMock sessions to check statement construction and result handling.

System role: Verification of session persistence layer
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.CRUD.study_session_crud import StudySessionCRUD
from lockedin.boundary.db.models import StudySessionModel
from lockedin.core.authorization import AuthorizationGuard


@pytest.fixture
def crud() -> StudySessionCRUD:
    return StudySessionCRUD()


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def guard() -> AuthorizationGuard:
    return AuthorizationGuard.for_principal(uuid.uuid4())


def compiled(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestStudySessionCRUDInit:

    def test_init_should_set_model(self) -> None:
        assert StudySessionCRUD().model == StudySessionModel


class TestGetActive:

    @pytest.mark.asyncio
    async def test_filters_owner_and_open_sessions(self, crud, mock_session, guard) -> None:
        active = StudySessionModel(id=uuid.uuid4(), user_id=guard.principal_id)
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = active
        mock_session.execute.return_value = mock_result

        result = await crud.get_active(mock_session, guard)

        assert result is active
        sql = compiled(mock_session.execute.call_args[0][0])
        assert "study_sessions.user_id = " in sql
        assert "study_sessions.end_time IS NULL" in sql
        assert "ORDER BY study_sessions.start_time DESC" in sql
        assert "LIMIT" in sql


class TestListForOwner:

    @pytest.mark.asyncio
    async def test_applies_range_pagination_and_tiebreak(self, crud, mock_session, guard) -> None:
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_session.execute.return_value = mock_result

        await crud.list_for_owner(
            mock_session,
            guard,
            start_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
            end_date=datetime(2025, 1, 31, tzinfo=timezone.utc),
            limit=10,
            offset=20,
            order_by="created_at",
            descending=False,
        )

        sql = compiled(mock_session.execute.call_args[0][0])
        assert "study_sessions.start_time >= " in sql
        assert "study_sessions.start_time <= " in sql
        assert "ORDER BY study_sessions.created_at ASC, study_sessions.id" in sql
        assert "LIMIT" in sql and "OFFSET" in sql


class TestGetManyOwned:

    @pytest.mark.asyncio
    async def test_empty_ids_skip_query(self, crud, mock_session, guard) -> None:
        assert await crud.get_many_owned(mock_session, guard, []) == []
        mock_session.execute.assert_not_awaited()


class TestUpdateOwned:

    @pytest.mark.asyncio
    async def test_no_matching_row_returns_false(self, crud, mock_session, guard) -> None:
        instance = StudySessionModel(id=uuid.uuid4(), user_id=guard.principal_id)
        mock_result = MagicMock()
        mock_result.rowcount = 0
        mock_session.execute.return_value = mock_result

        updated = await crud.update_owned(
            mock_session,
            guard,
            instance,
            {"session_notes": "x"},
            StudySessionModel.version == 3,
        )

        assert updated is False
        mock_session.refresh.assert_not_awaited()
        sql = compiled(mock_session.execute.call_args[0][0])
        assert "study_sessions.version = " in sql

    @pytest.mark.asyncio
    async def test_matching_row_refreshes_instance(self, crud, mock_session, guard) -> None:
        instance = StudySessionModel(id=uuid.uuid4(), user_id=guard.principal_id)
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_session.execute.return_value = mock_result

        assert await crud.update_owned(mock_session, guard, instance, {"mood_rating": 4}) is True
        mock_session.refresh.assert_awaited_once_with(instance)


class TestDeleteById:

    @pytest.mark.asyncio
    async def test_reports_whether_row_deleted(self, crud, mock_session) -> None:
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_session.execute.return_value = mock_result

        assert await crud.delete_by_id(mock_session, uuid.uuid4()) is True
