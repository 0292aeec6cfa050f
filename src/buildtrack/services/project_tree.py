"""Project tree shaping: load rows, check access, map to domain shapes, filter leaves."""

from typing import assert_never
from uuid import UUID

from src.buildtrack.core.exceptions import NotFoundError
from src.buildtrack.core.logging import get_logger
from src.buildtrack.models.enums import Role
from src.buildtrack.models.project import Photo, Project, Task, TaskComment, Trade
from src.buildtrack.repositories.project import ProjectRepository
from src.buildtrack.schemas.tree import (
    CommentNode,
    PhotoNode,
    ProjectTree,
    TaskNode,
    TradeNode,
)
from src.buildtrack.services.access import Caller, ensure_can_read_project, is_visible

logger = get_logger(__name__)

UNKNOWN_AUTHOR = "Unknown"


def shape_photo(photo: Photo) -> PhotoNode:
    return PhotoNode(
        id=photo.id,
        task_id=photo.task_id,
        file_url=photo.file_url,
        thumbnail_url=photo.thumbnail_url or photo.file_url,
        uploaded_by=photo.uploaded_by,
        uploaded_by_name=photo.uploaded_by_name,
        uploaded_at=photo.created_at,
        visibility=photo.visibility,
        caption=photo.caption,
    )


def shape_comment(comment: TaskComment) -> CommentNode:
    return CommentNode(
        id=comment.id,
        task_id=comment.task_id,
        author_id=comment.author_id,
        author_name=comment.author_name or UNKNOWN_AUTHOR,
        author_role=comment.author_role or Role.CONTRACTOR,
        content=comment.content,
        visibility=comment.visibility,
        created_at=comment.created_at,
    )


def shape_task(task: Task, role: Role) -> TaskNode:
    """Map a task row and drop the photos and comments ``role`` may not see."""
    return TaskNode(
        id=task.id,
        trade_id=task.trade_id,
        title=task.name,
        description=task.description,
        status=task.status,
        blocked_reason=task.blocked_reason,
        due_date=task.due_date,
        created_at=task.created_at,
        updated_at=task.updated_at or task.created_at,
        photos=[shape_photo(p) for p in task.photos if is_visible(p.visibility, role)],
        comments=[shape_comment(c) for c in task.comments if is_visible(c.visibility, role)],
    )


def shape_trade(trade: Trade, role: Role) -> TradeNode:
    return TradeNode(
        id=trade.id,
        project_id=trade.project_id,
        name=trade.name,
        contractor_id=trade.contractor_id,
        company_name=trade.company_name,
        contact_person=trade.contact_person,
        phone=trade.phone,
        description=trade.description,
        start_date=trade.start_date,
        end_date=trade.end_date,
        budget=trade.budget,
        order=trade.order,
        can_create_subtasks=trade.can_create_subtasks,
        tasks=[shape_task(t, role) for t in trade.tasks],
    )


def shape_project(project: Project, role: Role) -> ProjectTree:
    """Map a fully loaded project row to the tree ``role`` may see.

    Trades come back sorted by ``order``. Access control is not applied here;
    callers run ``ensure_can_read_project`` first.
    """
    trades = sorted(project.trades, key=lambda t: t.order)
    return ProjectTree(
        id=project.id,
        name=project.name,
        project_number=project.project_number,
        address=project.address,
        client_id=project.client_id,
        architect_id=project.architect_id,
        start_date=project.start_date,
        target_end_date=project.target_end_date,
        status=project.status,
        photo_approval_mode=project.photo_approval_mode,
        escalation_hours=project.escalation_hours,
        created_at=project.created_at,
        updated_at=project.updated_at,
        trades=[shape_trade(t, role) for t in trades],
    )


class ProjectTreeService:
    """Loads project trees for a caller. Nothing is cached; every call reloads."""

    def __init__(self, project_repo: ProjectRepository):
        self.project_repo = project_repo

    async def load_row(self, project_id: UUID) -> Project:
        """Load the fully nested project row.

        Raises:
            NotFoundError: If the project does not exist.
        """
        project = await self.project_repo.get_tree(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    async def load(self, project_id: UUID, caller: Caller) -> ProjectTree:
        """Load, authorize and shape a project for ``caller``.

        Raises:
            NotFoundError: If the project does not exist.
            ForbiddenError: If the caller may not read the project.
        """
        project = await self.load_row(project_id)
        ensure_can_read_project(project, caller)
        return shape_project(project, caller.role)

    async def list_for_caller(
        self, caller: Caller, cursor: str | None = None, limit: int = 50
    ) -> tuple[list[Project], str | None, bool]:
        """Projects visible to the caller, newest first, one page at a time."""
        match caller.role:
            case Role.ARCHITECT:
                page = await self.project_repo.list_all(cursor, limit)
            case Role.CLIENT:
                page = await self.project_repo.list_for_client(caller.user_id, cursor, limit)
            case Role.CONTRACTOR:
                page = await self.project_repo.list_for_contractor(caller.user_id, cursor, limit)
            case _:
                assert_never(caller.role)
        logger.debug("Listed projects", count=len(page[0]), has_more=page[2])
        return page
