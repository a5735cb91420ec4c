"""
Task schemas.

Request/response schemas for task operations.

Dependencies: pydantic
System role: Task API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreateTaskRequest(BaseModel):
    """Request schema for creating a task."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    priority: int = Field(0, ge=0, le=3, description="0=none, 1=low, 2=medium, 3=high")
    due_date: datetime | None = None
    order_index: int = 0
    session_id: uuid.UUID | None = None


class UpdateTaskRequest(BaseModel):
    """Partial update; only fields present in the body are written."""

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    is_completed: bool | None = None
    priority: int | None = Field(None, ge=0, le=3)
    due_date: datetime | None = None
    order_index: int | None = None
    session_id: uuid.UUID | None = None


class TaskPosition(BaseModel):
    id: uuid.UUID
    order_index: int


class ReorderTasksRequest(BaseModel):
    """New positions for a batch of tasks."""

    tasks: list[TaskPosition] = Field(..., min_length=1)


class TaskResponse(BaseModel):
    """Response schema for a task."""

    id: uuid.UUID
    user_id: uuid.UUID
    session_id: uuid.UUID | None
    title: str
    description: str | None
    is_completed: bool
    completed_at: datetime | None
    priority: int
    due_date: datetime | None
    order_index: int
    created_at: datetime
    updated_at: datetime
