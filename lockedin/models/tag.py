"""
Session tag schemas.

Dependencies: pydantic
System role: Tag index API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class AddTagsRequest(BaseModel):
    """Tags to attach; normalized server-side."""

    tags: list[str] = Field(..., min_length=1)


class SessionTagResponse(BaseModel):
    id: uuid.UUID
    session_id: uuid.UUID
    tag: str
    created_at: datetime
