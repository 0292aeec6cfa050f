"""Repositories for the project tree."""

from uuid import UUID

from sqlalchemy import case, func, update
from sqlalchemy.orm import selectinload
from sqlmodel import col, select

from src.buildtrack.models.base import utc_now
from src.buildtrack.models.project import Photo, Project, Task, TaskComment, Trade
from src.buildtrack.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for projects and their nested tree."""

    model = Project

    async def get_tree(self, project_id: UUID) -> Project | None:
        """Load a project with trades, tasks, photos and comments eagerly."""
        query = (
            select(Project)
            .where(Project.id == project_id)
            .options(
                selectinload(Project.trades)  # type: ignore[arg-type]
                .selectinload(Trade.tasks)  # type: ignore[arg-type]
                .selectinload(Task.photos),  # type: ignore[arg-type]
                selectinload(Project.trades)  # type: ignore[arg-type]
                .selectinload(Trade.tasks)  # type: ignore[arg-type]
                .selectinload(Task.comments),  # type: ignore[arg-type]
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_all(
        self, cursor: str | None = None, limit: int = 50
    ) -> tuple[list[Project], str | None, bool]:
        """List all projects with cursor-based pagination."""
        return await self.paginate(select(Project), cursor, limit, Project.created_at)

    async def list_for_client(
        self, client_id: UUID, cursor: str | None = None, limit: int = 50
    ) -> tuple[list[Project], str | None, bool]:
        """List projects owned by a client."""
        query = select(Project).where(Project.client_id == client_id)
        return await self.paginate(query, cursor, limit, Project.created_at)

    async def list_for_contractor(
        self, contractor_id: UUID, cursor: str | None = None, limit: int = 50
    ) -> tuple[list[Project], str | None, bool]:
        """List projects containing at least one trade assigned to the contractor."""
        assigned = select(Trade.project_id).where(Trade.contractor_id == contractor_id)
        query = select(Project).where(col(Project.id).in_(assigned))
        return await self.paginate(query, cursor, limit, Project.created_at)


class TradeRepository(BaseRepository[Trade]):
    """Repository for trades."""

    model = Trade

    async def next_order(self, project_id: UUID) -> int:
        """Order value for a trade appended to the project (0 for the first trade)."""
        result = await self.session.execute(
            select(func.max(Trade.order)).where(Trade.project_id == project_id)
        )
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def order_taken(self, project_id: UUID, order: int, exclude_id: UUID) -> bool:
        """Whether another trade of the project already holds ``order``."""
        result = await self.session.execute(
            select(Trade.id)
            .where(
                Trade.project_id == project_id,
                Trade.order == order,
                col(Trade.id) != exclude_id,
            )
            .limit(1)
        )
        return result.first() is not None

    async def set_orders(self, project_id: UUID, orders: dict[UUID, int]) -> None:
        """Write new orders for several trades in one statement.

        The unique (project_id, order) constraint is checked at the end of the
        statement, so swapping two trades does not collide midway.
        """
        await self.session.execute(
            update(Trade)
            .where(col(Trade.project_id) == project_id, col(Trade.id).in_(list(orders)))
            .values(order=case(orders, value=Trade.id), updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )


class TaskRepository(BaseRepository[Task]):
    """Repository for tasks."""

    model = Task

    async def list_for_contractor(
        self, contractor_id: UUID, project_id: UUID | None = None
    ) -> list[Task]:
        """Tasks of trades assigned to the contractor, oldest first."""
        query = (
            select(Task)
            .join(Trade, col(Task.trade_id) == col(Trade.id))
            .where(Trade.contractor_id == contractor_id)
        )
        if project_id is not None:
            query = query.where(Trade.project_id == project_id)
        result = await self.session.execute(query.order_by(col(Task.created_at)))
        return list(result.scalars().all())


class PhotoRepository(BaseRepository[Photo]):
    """Repository for task photos."""

    model = Photo


class TaskCommentRepository(BaseRepository[TaskComment]):
    """Repository for task comments."""

    model = TaskComment
