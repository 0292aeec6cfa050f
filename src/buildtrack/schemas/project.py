"""Project schemas for API request/response."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.buildtrack.models.enums import PhotoApprovalMode, ProjectStatus


def _strip_optional(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=200)
    project_number: str | None = Field(default=None, max_length=50)
    address: str = Field(min_length=1, max_length=500)
    client_id: UUID | None = None
    start_date: date
    target_end_date: date
    photo_approval_mode: PhotoApprovalMode = PhotoApprovalMode.MANUAL
    escalation_hours: int | None = Field(default=None, ge=1, le=720)

    @field_validator("name", "address")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be empty or whitespace only")
        return v

    @field_validator("project_number")
    @classmethod
    def validate_project_number(cls, v: str | None) -> str | None:
        return _strip_optional(v)

    @model_validator(mode="after")
    def validate_date_order(self) -> Self:
        if self.start_date > self.target_end_date:
            raise ValueError("start_date must not be after target_end_date")
        return self


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    project_number: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, min_length=1, max_length=500)
    client_id: UUID | None = None
    start_date: date | None = None
    target_end_date: date | None = None
    status: ProjectStatus | None = None
    photo_approval_mode: PhotoApprovalMode | None = None
    escalation_hours: int | None = Field(default=None, ge=1, le=720)

    @field_validator("name", "address")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Value cannot be empty or whitespace only")
        return v

    @field_validator("project_number")
    @classmethod
    def validate_project_number(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class ProjectRead(BaseModel):
    """Schema for reading a project without its trades."""

    id: UUID
    name: str
    project_number: str | None
    address: str
    client_id: UUID | None
    architect_id: UUID | None
    start_date: date
    target_end_date: date
    status: ProjectStatus
    photo_approval_mode: PhotoApprovalMode
    escalation_hours: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
