"""
Task API endpoints.

Routes:
- POST /tasks - Create task
- GET /tasks - List tasks
- PUT /tasks/reorder - Set positions for several tasks
- GET /tasks/{id} - Get task
- PATCH /tasks/{id} - Partial update
- POST /tasks/{id}/toggle - Flip completion
- DELETE /tasks/{id} - Delete task

Dependencies: lockedin.application.services, lockedin.models
System role: Task HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from lockedin.api.deps.dependencies import get_task_service
from lockedin.application.services.task_service import TaskService
from lockedin.models.task import (
    CreateTaskRequest,
    ReorderTasksRequest,
    TaskResponse,
    UpdateTaskRequest,
)

from .error_handling import handle_service_errors
from .responses import map_task_to_response, map_tasks_to_response

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=201)
@handle_service_errors
async def create_task(
    request: CreateTaskRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return map_task_to_response(await service.create(**request.model_dump()))


@router.get("", response_model=list[TaskResponse])
@handle_service_errors
async def list_tasks(
    completed: bool | None = None,
    session_id: UUID | None = None,
    limit: int | None = Query(None, ge=1, le=500),
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    tasks = await service.list_tasks(completed=completed, session_id=session_id, limit=limit)
    return map_tasks_to_response(tasks)


@router.put("/reorder", response_model=list[TaskResponse])
@handle_service_errors
async def reorder_tasks(
    request: ReorderTasksRequest,
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    positions = [(item.id, item.order_index) for item in request.tasks]
    return map_tasks_to_response(await service.reorder(positions))


@router.get("/{task_id}", response_model=TaskResponse)
@handle_service_errors
async def get_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return map_task_to_response(await service.get(task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
@handle_service_errors
async def update_task(
    task_id: UUID,
    request: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    fields = request.model_dump(exclude_unset=True)
    return map_task_to_response(await service.update(task_id, fields))


@router.post("/{task_id}/toggle", response_model=TaskResponse)
@handle_service_errors
async def toggle_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return map_task_to_response(await service.toggle_completion(task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_service_errors
async def delete_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
) -> Response:
    await service.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
