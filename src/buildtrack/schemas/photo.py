"""Photo schemas for API request/response."""

from typing import Self
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.buildtrack.models.enums import Visibility


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    return v.strip() or None


class PhotoCreate(BaseModel):
    """Schema for registering an uploaded photo on a task.

    The file itself is stored elsewhere; only its URLs are recorded.
    """

    task_id: UUID
    file_url: str = Field(min_length=1, max_length=2000)
    thumbnail_url: str | None = Field(default=None, max_length=2000)
    caption: str | None = Field(default=None, max_length=1000)
    visibility: Visibility = Visibility.INTERNAL

    @field_validator("caption")
    @classmethod
    def validate_caption(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class PhotoUpdate(BaseModel):
    """Schema for changing a photo's visibility or caption.

    An empty caption clears it.
    """

    visibility: Visibility | None = None
    caption: str | None = Field(default=None, max_length=1000)

    @field_validator("caption")
    @classmethod
    def validate_caption(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @model_validator(mode="after")
    def validate_not_empty(self) -> Self:
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self
