"""Task photo service: registering uploads and editing visibility or caption."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildtrack.core.exceptions import NotFoundError
from src.buildtrack.core.logging import get_logger
from src.buildtrack.models.project import Photo
from src.buildtrack.repositories.project import PhotoRepository, TaskRepository, TradeRepository
from src.buildtrack.schemas.photo import PhotoCreate, PhotoUpdate
from src.buildtrack.services.access import Caller, ensure_can_annotate_task, ensure_can_edit_photo

logger = get_logger(__name__)


class PhotoService:
    """Photo metadata on tasks. The files themselves are stored outside this service."""

    def __init__(
        self,
        photo_repo: PhotoRepository,
        task_repo: TaskRepository,
        trade_repo: TradeRepository,
        session: AsyncSession,
    ):
        self.photo_repo = photo_repo
        self.task_repo = task_repo
        self.trade_repo = trade_repo
        self.session = session

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def create(self, data: PhotoCreate, caller: Caller) -> Photo:
        """Record an uploaded photo on a task.

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

        photo = Photo(
            task_id=task.id,
            file_url=data.file_url,
            thumbnail_url=data.thumbnail_url,
            caption=data.caption,
            uploaded_by=caller.user_id,
            uploaded_by_name=caller.name,
            visibility=data.visibility.value,
        )
        self.photo_repo.add(photo)
        await self._commit()
        await self.session.refresh(photo)
        logger.info("Photo added", photo_id=str(photo.id), task_id=str(task.id))
        return photo

    async def update(self, photo_id: UUID, data: PhotoUpdate, caller: Caller) -> Photo:
        """Change a photo's visibility or caption.

        A null visibility leaves it unchanged; a null caption clears it.

        Raises:
            NotFoundError: Unknown photo.
            ForbiddenError: Clients, and contractors who did not upload the photo.
        """
        photo = await self.photo_repo.get_by_id(photo_id)
        if photo is None:
            raise NotFoundError("Photo", photo_id)
        ensure_can_edit_photo(photo, caller)

        update_data = data.model_dump(exclude_unset=True)
        if data.visibility is not None:
            photo.visibility = data.visibility.value
        if "caption" in update_data:
            photo.caption = data.caption

        await self._commit()
        await self.session.refresh(photo)
        logger.info("Photo updated", photo_id=str(photo_id), fields=sorted(update_data))
        return photo
