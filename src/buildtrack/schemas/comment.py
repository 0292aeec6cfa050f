"""Comment schemas for API request/response."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.buildtrack.models.enums import Visibility


class CommentCreate(BaseModel):
    """Schema for commenting on a task. New comments stay internal unless asked."""

    task_id: UUID
    content: str = Field(min_length=1, max_length=5000)
    visibility: Visibility = Visibility.INTERNAL

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty or whitespace only")
        return v
