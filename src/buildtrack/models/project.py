"""Project tree models: projects, trades, tasks, photos and task comments."""

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from src.buildtrack.models.base import utc_now
from src.buildtrack.models.enums import (
    PhotoApprovalMode,
    ProjectStatus,
    Role,
    TaskStatus,
    Visibility,
)


class Project(SQLModel, table=True):
    """Construction project, the root of the tree."""

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    project_number: str | None = Field(default=None, max_length=50)
    address: str = Field(max_length=500)
    client_id: UUID | None = Field(default=None, index=True)
    architect_id: UUID | None = Field(default=None, index=True)
    start_date: date
    target_end_date: date
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20)
    photo_approval_mode: str = Field(default=PhotoApprovalMode.MANUAL.value, max_length=10)
    escalation_hours: int = Field(default=48)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    trades: list["Trade"] = Relationship(back_populates="project")

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)


class Trade(SQLModel, table=True):
    """Contracted work package within a project."""

    __tablename__ = "trades"
    __table_args__ = (
        # Deferrable so a single UPDATE can permute orders
        UniqueConstraint(
            "project_id",
            "order",
            name="uq_trades_project_order",
            deferrable=True,
            initially="IMMEDIATE",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=200)
    contractor_id: UUID | None = Field(default=None, index=True)
    company_name: str | None = Field(default=None, max_length=200)
    contact_person: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=5000)
    start_date: date | None = Field(default=None)
    end_date: date | None = Field(default=None)
    budget: float | None = Field(default=None, ge=0)
    order: int = Field(default=0, ge=0)
    can_create_subtasks: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    project: Project | None = Relationship(back_populates="trades")
    tasks: list["Task"] = Relationship(back_populates="trade")


class Task(SQLModel, table=True):
    """Smallest trackable unit of work within a trade."""

    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    trade_id: UUID = Field(foreign_key="trades.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=500)
    description: str | None = Field(default=None, max_length=5000)
    status: str = Field(default=TaskStatus.PENDING.value, max_length=20)
    blocked_reason: str | None = Field(default=None, max_length=1000)
    due_date: date | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    trade: Trade | None = Relationship(back_populates="tasks")
    photos: list["Photo"] = Relationship(back_populates="task")
    comments: list["TaskComment"] = Relationship(back_populates="task")

    @property
    def status_enum(self) -> TaskStatus:
        """Get status as TaskStatus enum."""
        return TaskStatus(self.status)


class Photo(SQLModel, table=True):
    """Photo attached to a task. Binary storage lives elsewhere; only URLs are kept."""

    __tablename__ = "photos"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    file_url: str = Field(max_length=2000)
    thumbnail_url: str | None = Field(default=None, max_length=2000)
    uploaded_by: UUID
    uploaded_by_name: str | None = Field(default=None, max_length=200)
    visibility: str = Field(default=Visibility.INTERNAL.value, max_length=10)
    caption: str | None = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)

    task: Task | None = Relationship(back_populates="photos")


class TaskComment(SQLModel, table=True):
    """Comment on a task."""

    __tablename__ = "task_comments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    author_id: UUID
    author_name: str | None = Field(default=None, max_length=200)
    author_role: str | None = Field(default=Role.CONTRACTOR.value, max_length=20)
    content: str = Field(max_length=5000)
    visibility: str = Field(default=Visibility.INTERNAL.value, max_length=10)
    created_at: datetime = Field(default_factory=utc_now)

    task: Task | None = Relationship(back_populates="comments")
