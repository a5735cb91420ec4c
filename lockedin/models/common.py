"""
Common response models.

Dependencies: pydantic
System role: Error envelope shared by every router
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")
