"""Shaped project tree returned to callers after access control and visibility filtering."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.buildtrack.models.enums import (
    PhotoApprovalMode,
    ProjectStatus,
    Role,
    TaskStatus,
    Visibility,
)


class PhotoNode(BaseModel):
    id: UUID
    task_id: UUID
    file_url: str
    thumbnail_url: str
    uploaded_by: UUID
    uploaded_by_name: str | None = None
    uploaded_at: datetime
    visibility: Visibility
    caption: str | None = None


class CommentNode(BaseModel):
    id: UUID
    task_id: UUID
    author_id: UUID
    author_name: str
    author_role: Role
    content: str
    visibility: Visibility
    created_at: datetime


class TaskNode(BaseModel):
    id: UUID
    trade_id: UUID
    title: str
    description: str | None = None
    status: TaskStatus
    blocked_reason: str | None = None
    due_date: date | None = None
    created_at: datetime
    updated_at: datetime
    photos: list[PhotoNode] = Field(default_factory=list)
    comments: list[CommentNode] = Field(default_factory=list)


class TradeNode(BaseModel):
    id: UUID
    project_id: UUID
    name: str
    contractor_id: UUID | None = None
    company_name: str | None = None
    contact_person: str | None = None
    phone: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    budget: float | None = None
    order: int
    can_create_subtasks: bool = False
    tasks: list[TaskNode] = Field(default_factory=list)


class ProjectTree(BaseModel):
    """A project with its ordered trades and their tasks, as one caller may see it."""

    id: UUID
    name: str
    project_number: str | None = None
    address: str
    client_id: UUID | None = None
    architect_id: UUID | None = None
    start_date: date
    target_end_date: date
    status: ProjectStatus
    photo_approval_mode: PhotoApprovalMode
    escalation_hours: int
    created_at: datetime
    updated_at: datetime
    trades: list[TradeNode] = Field(default_factory=list)
