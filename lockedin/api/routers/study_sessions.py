"""
Study session API endpoints.

Routes:
- POST /study-sessions - Start an active session
- POST /study-sessions/record - Record a finished session
- GET /study-sessions - List sessions
- GET /study-sessions/active - Current active session (or null)
- GET /study-sessions/{id} - Get one session
- PATCH /study-sessions/{id} - Partial update
- POST /study-sessions/{id}/end - End a session
- DELETE /study-sessions/{id} - Delete a session

Dependencies: lockedin.application.services, lockedin.models
System role: Session lifecycle HTTP API
"""

import logging
from datetime import date
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from lockedin.api.deps.dependencies import get_study_session_service
from lockedin.application.services.study_session_service import StudySessionService
from lockedin.models.study_session import (
    EndSessionRequest,
    RecordSessionRequest,
    StartSessionRequest,
    StudySessionResponse,
    UpdateSessionRequest,
)

from .error_handling import handle_service_errors
from .responses import map_session_to_response, map_sessions_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/study-sessions", tags=["study-sessions"])


@router.post("", response_model=StudySessionResponse, status_code=201)
@handle_service_errors
async def start_session(
    request: StartSessionRequest,
    service: StudySessionService = Depends(get_study_session_service),
) -> StudySessionResponse:
    """
    Start a new active session.

    Raises:
        HTTPException(409): An active session already exists
        HTTPException(422): Invalid request
    """
    session = await service.start(
        session_type=request.session_type,
        start_time=request.start_time,
        target_duration_minutes=request.target_duration_minutes,
        session_notes=request.session_notes,
    )
    return map_session_to_response(session)


@router.post("/record", response_model=StudySessionResponse, status_code=201)
@handle_service_errors
async def record_session(
    request: RecordSessionRequest,
    service: StudySessionService = Depends(get_study_session_service),
) -> StudySessionResponse:
    """Record a session that has already finished."""
    session = await service.record(**request.model_dump())
    return map_session_to_response(session)


@router.get("", response_model=list[StudySessionResponse])
@handle_service_errors
async def list_sessions(
    start_date: date | None = Query(None, description="Inclusive, UTC"),
    end_date: date | None = Query(None, description="Inclusive, UTC"),
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    order_by: Literal["start_time", "created_at"] = "start_time",
    order_direction: Literal["desc", "asc"] = "desc",
    service: StudySessionService = Depends(get_study_session_service),
) -> list[StudySessionResponse]:
    """List the caller's sessions."""
    sessions = await service.list_sessions(
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
        order_by=order_by,
        order_direction=order_direction,
    )
    return map_sessions_to_response(sessions)


@router.get("/active", response_model=StudySessionResponse | None)
@handle_service_errors
async def get_active_session(
    service: StudySessionService = Depends(get_study_session_service),
) -> StudySessionResponse | None:
    """Most recently started active session, or null."""
    session = await service.get_active()
    return map_session_to_response(session) if session else None


@router.get("/{session_id}", response_model=StudySessionResponse)
@handle_service_errors
async def get_session(
    session_id: UUID,
    service: StudySessionService = Depends(get_study_session_service),
) -> StudySessionResponse:
    return map_session_to_response(await service.get(session_id))


@router.patch("/{session_id}", response_model=StudySessionResponse)
@handle_service_errors
async def update_session(
    session_id: UUID,
    request: UpdateSessionRequest,
    service: StudySessionService = Depends(get_study_session_service),
) -> StudySessionResponse:
    """
    Update only the fields present in the body.

    Raises:
        HTTPException(409): Reopening an ended session or stale expected_version
    """
    fields = request.model_dump(exclude_unset=True)
    expected_version = fields.pop("expected_version", None)
    session = await service.update(session_id, fields, expected_version=expected_version)
    return map_session_to_response(session)


@router.post("/{session_id}/end", response_model=StudySessionResponse)
@handle_service_errors
async def end_session(
    session_id: UUID,
    request: EndSessionRequest | None = None,
    service: StudySessionService = Depends(get_study_session_service),
) -> StudySessionResponse:
    """End a session now; ending an ended session returns it unchanged."""
    request = request or EndSessionRequest()
    session = await service.end(session_id, **request.model_dump())
    return map_session_to_response(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_service_errors
async def delete_session(
    session_id: UUID,
    service: StudySessionService = Depends(get_study_session_service),
) -> Response:
    """Delete a session and its tags; linked tasks are kept and detached."""
    await service.delete(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
