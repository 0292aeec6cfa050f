"""Task comment service."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildtrack.core.exceptions import NotFoundError
from src.buildtrack.core.logging import get_logger
from src.buildtrack.models.project import TaskComment
from src.buildtrack.repositories.project import (
    TaskCommentRepository,
    TaskRepository,
    TradeRepository,
)
from src.buildtrack.schemas.comment import CommentCreate
from src.buildtrack.services.access import Caller, ensure_can_annotate_task

logger = get_logger(__name__)


class CommentService:
    def __init__(
        self,
        comment_repo: TaskCommentRepository,
        task_repo: TaskRepository,
        trade_repo: TradeRepository,
        session: AsyncSession,
    ):
        self.comment_repo = comment_repo
        self.task_repo = task_repo
        self.trade_repo = trade_repo
        self.session = session

    async def create(self, data: CommentCreate, caller: Caller) -> TaskComment:
        """Add a comment to a task, internal unless the caller asks otherwise.

        Raises:
            NotFoundError: Unknown task.
            ForbiddenError: Clients, and contractors not assigned to the task's trade.
        """
        task = await self.task_repo.get_by_id(data.task_id)
        if task is None:
            raise NotFoundError("Task", data.task_id)
        trade = await self.trade_repo.get_by_id(task.trade_id)
        if trade is None:
            raise NotFoundError("Trade", task.trade_id)
        ensure_can_annotate_task(trade, caller)

        comment = TaskComment(
            task_id=task.id,
            author_id=caller.user_id,
            author_name=caller.name,
            author_role=caller.role.value,
            content=data.content,
            visibility=data.visibility.value,
        )
        self.comment_repo.add(comment)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(comment)
        logger.info(
            "Comment created",
            comment_id=str(comment.id),
            task_id=str(task.id),
            visibility=comment.visibility,
        )
        return comment
