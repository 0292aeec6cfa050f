"""Project service: architect-side project creation and updates."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildtrack.core.config import get_settings
from src.buildtrack.core.exceptions import DomainValidationError, ForbiddenError
from src.buildtrack.core.logging import get_logger
from src.buildtrack.models.base import utc_now
from src.buildtrack.models.enums import Role
from src.buildtrack.models.project import Project
from src.buildtrack.repositories.project import ProjectRepository
from src.buildtrack.schemas.project import ProjectCreate, ProjectUpdate
from src.buildtrack.services.access import Caller, ensure_can_write_project
from src.buildtrack.services.project_tree import ProjectTreeService

logger = get_logger(__name__)


class ProjectService:
    """Project creation and updates. Architects only."""

    def __init__(self, project_repo: ProjectRepository, session: AsyncSession):
        self.project_repo = project_repo
        self.session = session
        self.trees = ProjectTreeService(project_repo)

    async def create(self, data: ProjectCreate, caller: Caller) -> Project:
        """Create a project owned by the calling architect."""
        if caller.role != Role.ARCHITECT:
            raise ForbiddenError("Only architects may create projects")

        escalation_hours = data.escalation_hours or get_settings().default_escalation_hours
        project = Project(
            name=data.name,
            project_number=data.project_number,
            address=data.address,
            client_id=data.client_id,
            architect_id=caller.user_id,
            start_date=data.start_date,
            target_end_date=data.target_end_date,
            photo_approval_mode=data.photo_approval_mode.value,
            escalation_hours=escalation_hours,
        )
        self.project_repo.add(project)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(project)
        logger.info("Project created", project_id=str(project.id))
        return project

    async def update(self, project_id: UUID, data: ProjectUpdate, caller: Caller) -> Project:
        """Apply a partial update.

        Raises:
            NotFoundError: Unknown project.
            ForbiddenError: Caller may not write this project.
            DomainValidationError: Resulting dates would be out of order.
        """
        project = await self.trees.load_row(project_id)
        ensure_can_write_project(project, caller)

        update_data = data.model_dump(exclude_unset=True)
        start = update_data.get("start_date", project.start_date)
        end = update_data.get("target_end_date", project.target_end_date)
        if start is None or end is None:
            raise DomainValidationError("Project dates cannot be cleared")
        if start > end:
            raise DomainValidationError("start_date must not be after target_end_date")

        for field, value in update_data.items():
            if value is None and field not in ("client_id", "project_number"):
                continue
            setattr(project, field, value)

        # SQLModel has no onupdate hook, so maintain updated_at explicitly
        project.updated_at = utc_now()
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(project)
        logger.info("Project updated", project_id=str(project_id), fields=sorted(update_data))
        return project
