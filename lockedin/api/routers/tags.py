"""
Session tag API endpoints.

Routes:
- POST /study-sessions/{id}/tags - Attach tags
- GET /study-sessions/{id}/tags - List a session's tags
- DELETE /study-sessions/{id}/tags/{tag} - Detach a tag
- GET /tags/{tag}/study-sessions - Sessions carrying a tag

Dependencies: lockedin.application.services, lockedin.models
System role: Tag index HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from lockedin.api.deps.dependencies import get_session_tag_service
from lockedin.application.services.session_tag_service import SessionTagService
from lockedin.models.study_session import StudySessionResponse
from lockedin.models.tag import AddTagsRequest, SessionTagResponse

from .error_handling import handle_service_errors
from .responses import map_sessions_to_response, map_tags_to_response

router = APIRouter(tags=["tags"])


@router.post(
    "/study-sessions/{session_id}/tags",
    response_model=list[SessionTagResponse],
    status_code=201,
)
@handle_service_errors
async def add_tags(
    session_id: UUID,
    request: AddTagsRequest,
    service: SessionTagService = Depends(get_session_tag_service),
) -> list[SessionTagResponse]:
    return map_tags_to_response(await service.add_tags(session_id, request.tags))


@router.get("/study-sessions/{session_id}/tags", response_model=list[str])
@handle_service_errors
async def list_tags(
    session_id: UUID,
    service: SessionTagService = Depends(get_session_tag_service),
) -> list[str]:
    return await service.list_tags(session_id)


@router.delete(
    "/study-sessions/{session_id}/tags/{tag}",
    status_code=status.HTTP_204_NO_CONTENT,
)
@handle_service_errors
async def remove_tag(
    session_id: UUID,
    tag: str,
    service: SessionTagService = Depends(get_session_tag_service),
) -> Response:
    await service.remove_tag(session_id, tag)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/tags/{tag}/study-sessions", response_model=list[StudySessionResponse])
@handle_service_errors
async def sessions_by_tag(
    tag: str,
    service: SessionTagService = Depends(get_session_tag_service),
) -> list[StudySessionResponse]:
    return map_sessions_to_response(await service.sessions_by_tag(tag))
