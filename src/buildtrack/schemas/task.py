"""Task schemas for API request/response."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.buildtrack.models.enums import TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating a task under a trade."""

    trade_id: UUID
    name: str = Field(min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    status: TaskStatus = TaskStatus.PENDING
    blocked_reason: str | None = Field(default=None, max_length=1000)
    due_date: date | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task name cannot be empty or whitespace only")
        return v

    @model_validator(mode="after")
    def validate_blocked_reason(self) -> Self:
        if self.status == TaskStatus.BLOCKED and not self.blocked_reason:
            raise ValueError("blocked_reason is required when status is blocked")
        if self.status != TaskStatus.BLOCKED and self.blocked_reason:
            raise ValueError("blocked_reason is only allowed when status is blocked")
        return self


class TaskUpdate(BaseModel):
    """Schema for updating a task. Only provided fields change.

    The blocked_reason invariant is checked against the merged row in the
    service, since a partial update may only carry one of the two fields.
    """

    name: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    status: TaskStatus | None = None
    blocked_reason: str | None = Field(default=None, max_length=1000)
    due_date: date | None = None

    @model_validator(mode="after")
    def validate_not_empty(self) -> Self:
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class TaskRead(BaseModel):
    """Schema for reading a task without photos and comments."""

    id: UUID
    trade_id: UUID
    title: str = Field(validation_alias="name")
    description: str | None
    status: TaskStatus
    blocked_reason: str | None
    due_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}
