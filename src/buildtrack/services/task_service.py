"""Task service: creation, updates and contractor task lists."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildtrack.core.exceptions import DomainValidationError, ForbiddenError, NotFoundError
from src.buildtrack.core.logging import get_logger
from src.buildtrack.models.base import utc_now
from src.buildtrack.models.enums import Role, TaskStatus
from src.buildtrack.models.project import Task, Trade
from src.buildtrack.repositories.project import TaskRepository, TradeRepository
from src.buildtrack.schemas.task import TaskCreate, TaskUpdate
from src.buildtrack.services.access import Caller, ensure_can_create_task, ensure_can_update_task

logger = get_logger(__name__)


class TaskService:
    """Task creation and updates under the trade permission rules."""

    def __init__(
        self,
        task_repo: TaskRepository,
        trade_repo: TradeRepository,
        session: AsyncSession,
    ):
        self.task_repo = task_repo
        self.trade_repo = trade_repo
        self.session = session

    async def _get_trade(self, trade_id: UUID) -> Trade:
        trade = await self.trade_repo.get_by_id(trade_id)
        if trade is None:
            raise NotFoundError("Trade", trade_id)
        return trade

    async def create(self, data: TaskCreate, caller: Caller) -> Task:
        """Create a task under a trade.

        Raises:
            NotFoundError: Unknown trade.
            ForbiddenError: Caller may not create tasks on this trade.
        """
        trade = await self._get_trade(data.trade_id)
        ensure_can_create_task(trade, caller)

        task = Task(
            trade_id=trade.id,
            name=data.name,
            description=data.description,
            status=data.status.value,
            blocked_reason=data.blocked_reason,
            due_date=data.due_date,
        )
        self.task_repo.add(task)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(task)
        logger.info("Task created", task_id=str(task.id), trade_id=str(trade.id))
        return task

    async def update(self, task_id: UUID, data: TaskUpdate, caller: Caller) -> Task:
        """Apply a partial update to a task.

        Moving a task out of ``blocked`` clears its reason.

        Raises:
            NotFoundError: Unknown task.
            ForbiddenError: Caller may not update tasks of this trade.
            DomainValidationError: Task would be blocked without a reason.
        """
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        trade = await self._get_trade(task.trade_id)
        ensure_can_update_task(trade, caller)

        update_data = data.model_dump(exclude_unset=True)
        status = TaskStatus(update_data.get("status") or task.status)
        reason = update_data.get("blocked_reason", task.blocked_reason)
        if status == TaskStatus.BLOCKED and not reason:
            raise DomainValidationError("blocked_reason is required when status is blocked")

        for field, value in update_data.items():
            if value is None and field in ("name", "status"):
                continue
            setattr(task, field, value)
        task.status = status.value
        if status != TaskStatus.BLOCKED:
            task.blocked_reason = None

        task.updated_at = utc_now()
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(task)
        logger.info(
            "Task updated", task_id=str(task_id), status=task.status, fields=sorted(update_data)
        )
        return task

    async def list_mine(self, caller: Caller, project_id: UUID | None = None) -> list[Task]:
        """Tasks on trades assigned to the calling contractor."""
        if caller.role != Role.CONTRACTOR:
            raise ForbiddenError("Only contractors have assigned tasks")
        return await self.task_repo.list_for_contractor(caller.user_id, project_id)
