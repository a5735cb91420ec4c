"""
Study session service orchestrator.

Coordinates the session lifecycle: start, record, update, end, delete,
active-session lookup, and listing. A session is ACTIVE while end_time is
NULL and ENDED once it is set; there is no way back.

Dependencies: lockedin.boundary.db.CRUD, lockedin.core
System role: Session lifecycle use case orchestration
"""

import logging
from datetime import date, datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.CRUD.session_tag_crud import session_tag_crud
from lockedin.boundary.db.CRUD.study_session_crud import ORDERABLE_COLUMNS, study_session_crud
from lockedin.boundary.db.CRUD.task_crud import task_crud
from lockedin.boundary.db.errors import translate_store_errors
from lockedin.boundary.db.models.study_session_model import StudySessionModel
from lockedin.core.authorization import AuthorizationGuard
from lockedin.core.clock import Clock, SystemClock, end_of_day, ensure_aware_utc, start_of_day
from lockedin.core.durations import compute_duration_minutes, validate_chronology
from lockedin.core.exceptions import ConflictError, NotFoundError, ValidationError
from lockedin.core.normalization import strip_or_none
from lockedin.core.validators import (
    validate_rating,
    validate_session_type,
    validate_target_minutes,
)
from lockedin.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

RESOURCE = "study_session"

UPDATABLE_FIELDS = frozenset({
    "session_type",
    "start_time",
    "end_time",
    "target_duration_minutes",
    "session_notes",
    "mood_rating",
    "productivity_rating",
    "ai_feedback",
    "ai_feedback_generated_at",
    "google_calendar_event_id",
})
IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})
ORDER_DIRECTIONS = ("desc", "asc")


def session_to_dict(session: StudySessionModel) -> dict[str, Any]:
    """Serialize a session row with aware UTC timestamps."""
    return {
        "id": session.id,
        "user_id": session.user_id,
        "session_type": session.session_type,
        "start_time": ensure_aware_utc(session.start_time),
        "end_time": ensure_aware_utc(session.end_time),
        "duration_minutes": session.duration_minutes,
        "target_duration_minutes": session.target_duration_minutes,
        "session_notes": session.session_notes,
        "mood_rating": session.mood_rating,
        "productivity_rating": session.productivity_rating,
        "ai_feedback": session.ai_feedback,
        "ai_feedback_generated_at": ensure_aware_utc(session.ai_feedback_generated_at),
        "google_calendar_event_id": session.google_calendar_event_id,
        "is_active": session.end_time is None,
        "version": session.version,
        "created_at": ensure_aware_utc(session.created_at),
        "updated_at": ensure_aware_utc(session.updated_at),
    }


class StudySessionService:
    """Study session lifecycle orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        guard: AuthorizationGuard,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize study session service.

        Args:
            db: Async SQLAlchemy session
            guard: Authorization guard for the caller
            clock: Time source (SystemClock when omitted)
        """
        self.db = db
        self.guard = guard
        self.clock = clock or SystemClock()

    async def _get_owned(self, session_id: UUID) -> StudySessionModel:
        session = await study_session_crud.get_owned(self.db, self.guard, session_id)
        if session is None:
            logger.info(
                "Study session not found or not owned",
                extra={"session_id": str(session_id), "principal_id": str(self.guard.principal_id)},
            )
            raise NotFoundError(RESOURCE, session_id)
        return session

    @translate_store_errors("study_session.start")
    async def start(
        self,
        session_type: str,
        start_time: datetime | None = None,
        target_duration_minutes: int | None = None,
        session_notes: str | None = None,
        user_id: UUID | None = None,
    ) -> dict:
        """
        Start an ACTIVE session.

        Args:
            session_type: pomodoro, countdown, stopwatch or custom
            start_time: Start instant (clock time when omitted)
            target_duration_minutes: Planned length, >= 1
            session_notes: Free-text notes
            user_id: Owner; only the operator guard may name someone else

        Returns:
            dict: Created session

        Raises:
            ValidationError: Bad type or target
            ConflictError: The owner already has an active session
        """
        owner_id = self.guard.owner_for_write(user_id)
        session_type = validate_session_type(session_type)
        target_duration_minutes = validate_target_minutes(target_duration_minutes)
        start_time = ensure_aware_utc(start_time) if start_time else self.clock.now()

        owner_guard = AuthorizationGuard.for_principal(owner_id)
        active = await study_session_crud.get_active(self.db, owner_guard)
        if active is not None:
            logger.warning(
                "Refusing to start a second active session",
                extra={"user_id": str(owner_id), "active_session_id": str(active.id)},
            )
            raise ConflictError(
                "An active study session already exists",
                details={"active_session_id": str(active.id)},
            )

        session = await study_session_crud.create(
            self.db,
            user_id=owner_id,
            session_type=session_type,
            start_time=start_time,
            target_duration_minutes=target_duration_minutes,
            session_notes=strip_or_none(session_notes),
        )
        await self.db.commit()
        logger.info(
            "Study session started",
            extra={"session_id": str(session.id), "user_id": str(owner_id), "session_type": session_type},
        )
        return session_to_dict(session)

    @translate_store_errors("study_session.record")
    async def record(
        self,
        session_type: str,
        start_time: datetime,
        end_time: datetime,
        target_duration_minutes: int | None = None,
        session_notes: str | None = None,
        mood_rating: int | None = None,
        productivity_rating: int | None = None,
        user_id: UUID | None = None,
    ) -> dict:
        """
        Record an already finished session in one step.

        Returns:
            dict: Created ENDED session with duration computed

        Raises:
            ValidationError: Bad type, rating, target, or end_time <= start_time
        """
        owner_id = self.guard.owner_for_write(user_id)
        session_type = validate_session_type(session_type)
        target_duration_minutes = validate_target_minutes(target_duration_minutes)
        mood_rating = validate_rating(mood_rating, "mood_rating")
        productivity_rating = validate_rating(productivity_rating, "productivity_rating")
        start_time = ensure_aware_utc(start_time)
        end_time = ensure_aware_utc(end_time)
        duration = compute_duration_minutes(start_time, end_time)

        session = await study_session_crud.create(
            self.db,
            user_id=owner_id,
            session_type=session_type,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration,
            target_duration_minutes=target_duration_minutes,
            session_notes=strip_or_none(session_notes),
            mood_rating=mood_rating,
            productivity_rating=productivity_rating,
        )
        await self.db.commit()
        logger.info(
            "Study session recorded",
            extra={"session_id": str(session.id), "user_id": str(owner_id), "duration_minutes": duration},
        )
        return session_to_dict(session)

    @translate_store_errors("study_session.get")
    async def get(self, session_id: UUID) -> dict:
        """
        Get one owned session.

        Raises:
            NotFoundError: Missing or not owned
        """
        return session_to_dict(await self._get_owned(session_id))

    @translate_store_errors("study_session.update")
    async def update(
        self,
        session_id: UUID,
        fields: dict[str, Any],
        expected_version: int | None = None,
    ) -> dict:
        """
        Apply a partial update.

        Setting end_time on an ACTIVE session ends it. The duration is
        recomputed whenever either timestamp is written.

        Args:
            session_id: Session UUID
            fields: Column values to change
            expected_version: When given, the write only applies if the
                stored version still matches

        Returns:
            dict: Updated session

        Raises:
            NotFoundError: Missing or not owned
            ValidationError: Immutable/unknown field or invalid value
            ConflictError: Clearing end_time of an ENDED session, or stale version
        """
        immutable = IMMUTABLE_FIELDS.intersection(fields)
        if immutable:
            raise ValidationError(
                "Field cannot be modified",
                field=sorted(immutable)[0],
            )
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                "Unknown field",
                field=sorted(unknown)[0],
            )

        session = await self._get_owned(session_id)
        values = self._validated_values(fields)

        if "end_time" in values and values["end_time"] is None and session.end_time is not None:
            raise ConflictError(
                "An ended study session cannot be reopened",
                details={"session_id": str(session_id)},
            )

        if "start_time" in values or "end_time" in values:
            start_time = values.get("start_time", session.start_time)
            end_time = values.get("end_time", session.end_time)
            values["duration_minutes"] = compute_duration_minutes(start_time, end_time)

        log_with_context(
            logger,
            logging.INFO,
            "Updating study session",
            session_id=session_id,
            fields=sorted(values),
            expected_version=expected_version,
        )
        return await self._write(session, values, expected_version)

    @translate_store_errors("study_session.end")
    async def end(
        self,
        session_id: UUID,
        mood_rating: int | None = None,
        productivity_rating: int | None = None,
        session_notes: str | None = None,
        expected_version: int | None = None,
    ) -> dict:
        """
        End an ACTIVE session at the current clock time.

        Ending an ENDED session is a no-op that returns the stored row.

        Returns:
            dict: Ended session

        Raises:
            NotFoundError: Missing or not owned
            ValidationError: Bad rating, or clock time not after start_time
            ConflictError: Stale expected_version
        """
        mood_rating = validate_rating(mood_rating, "mood_rating")
        productivity_rating = validate_rating(productivity_rating, "productivity_rating")

        session = await self._get_owned(session_id)
        if session.end_time is not None:
            logger.info(
                "Study session already ended",
                extra={"session_id": str(session_id)},
            )
            return session_to_dict(session)

        end_time = self.clock.now()
        values: dict[str, Any] = {
            "end_time": end_time,
            "duration_minutes": compute_duration_minutes(session.start_time, end_time),
        }
        if mood_rating is not None:
            values["mood_rating"] = mood_rating
        if productivity_rating is not None:
            values["productivity_rating"] = productivity_rating
        if session_notes is not None:
            values["session_notes"] = strip_or_none(session_notes)

        result = await self._write(session, values, expected_version)
        logger.info(
            "Study session ended",
            extra={"session_id": str(session_id), "duration_minutes": values["duration_minutes"]},
        )
        return result

    @translate_store_errors("study_session.delete")
    async def delete(self, session_id: UUID) -> None:
        """
        Delete a session with its tags, detaching linked tasks.

        Raises:
            NotFoundError: Missing or not owned
        """
        session = await self._get_owned(session_id)
        tags_removed = await session_tag_crud.delete_for_session(self.db, session.id)
        tasks_detached = await task_crud.detach_session(self.db, session.id)
        await study_session_crud.delete_by_id(self.db, session.id)
        await self.db.commit()
        # Bulk statements above bypass the identity map
        self.db.expire_all()
        logger.info(
            "Study session deleted",
            extra={
                "session_id": str(session_id),
                "tags_removed": tags_removed,
                "tasks_detached": tasks_detached,
            },
        )

    @translate_store_errors("study_session.get_active")
    async def get_active(self) -> dict | None:
        """Return the most recently started ACTIVE session, or None."""
        session = await study_session_crud.get_active(self.db, self.guard)
        return session_to_dict(session) if session is not None else None

    @translate_store_errors("study_session.list")
    async def list_sessions(
        self,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
        limit: int | None = None,
        offset: int = 0,
        order_by: str = "start_time",
        order_direction: str = "desc",
    ) -> list[dict]:
        """
        List sessions with start_time inside an inclusive date range.

        Args:
            start_date: Lower bound; a date means the start of that UTC day
            end_date: Upper bound; a date means the end of that UTC day
            limit: Maximum number of sessions
            offset: Number of sessions to skip
            order_by: start_time or created_at
            order_direction: desc or asc

        Returns:
            list[dict]: Sessions, ties broken by id
        """
        if order_by not in ORDERABLE_COLUMNS:
            raise ValidationError(f"Cannot order by {order_by}", field="order_by")
        if order_direction not in ORDER_DIRECTIONS:
            raise ValidationError(f"Invalid order direction {order_direction}", field="order_direction")
        if limit is not None and limit < 1:
            raise ValidationError("limit must be positive", field="limit")
        if offset < 0:
            raise ValidationError("offset cannot be negative", field="offset")

        sessions = await study_session_crud.list_for_owner(
            self.db,
            self.guard,
            start_date=start_of_day(start_date) if start_date is not None else None,
            end_date=end_of_day(end_date) if end_date is not None else None,
            limit=limit,
            offset=offset,
            order_by=order_by,
            descending=order_direction == "desc",
        )
        return [session_to_dict(s) for s in sessions]

    def _validated_values(self, fields: dict[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name, value in fields.items():
            if name == "session_type":
                if value is None:
                    raise ValidationError("session_type cannot be null", field=name)
                values[name] = validate_session_type(value)
            elif name == "start_time":
                if value is None:
                    raise ValidationError("start_time cannot be null", field=name)
                values[name] = ensure_aware_utc(value)
            elif name in ("end_time", "ai_feedback_generated_at"):
                values[name] = ensure_aware_utc(value)
            elif name == "target_duration_minutes":
                values[name] = validate_target_minutes(value)
            elif name in ("mood_rating", "productivity_rating"):
                values[name] = validate_rating(value, name)
            elif name == "session_notes":
                values[name] = strip_or_none(value)
            else:
                values[name] = value
        return values

    async def _write(
        self,
        session: StudySessionModel,
        values: dict[str, Any],
        expected_version: int | None,
    ) -> dict:
        if "start_time" in values or "end_time" in values:
            validate_chronology(
                values.get("start_time", session.start_time),
                values.get("end_time", session.end_time),
            )

        values["version"] = StudySessionModel.version + 1
        criteria = []
        if expected_version is not None:
            criteria.append(StudySessionModel.version == expected_version)

        session_id = session.id
        updated = await study_session_crud.update_owned(
            self.db, self.guard, session, values, *criteria
        )
        if not updated:
            # Rollback expires the instance; read nothing from it afterwards.
            await self.db.rollback()
            logger.warning(
                "Study session version conflict",
                extra={"session_id": str(session_id), "expected_version": expected_version},
            )
            raise ConflictError(
                "Study session was modified concurrently",
                details={"session_id": str(session_id), "expected_version": expected_version},
            )
        await self.db.commit()
        return session_to_dict(session)
