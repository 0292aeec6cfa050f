"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.buildtrack.api.dependencies.db import DBSession
from src.buildtrack.api.dependencies.repositories import (
    CommentRepo,
    PhotoRepo,
    ProjectRepo,
    TaskRepo,
    TradeRepo,
)
from src.buildtrack.services import (
    CommentService,
    PhotoService,
    ProjectService,
    ProjectTreeService,
    TaskService,
    TradeService,
)


def get_project_tree_service(project_repo: ProjectRepo) -> ProjectTreeService:
    """Get the read-side project tree service."""
    return ProjectTreeService(project_repo)


def get_project_service(project_repo: ProjectRepo, session: DBSession) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, session)


def get_trade_service(
    project_repo: ProjectRepo,
    trade_repo: TradeRepo,
    session: DBSession,
) -> TradeService:
    """Get trade service."""
    return TradeService(project_repo, trade_repo, session)


def get_task_service(task_repo: TaskRepo, trade_repo: TradeRepo, session: DBSession) -> TaskService:
    """Get task service."""
    return TaskService(task_repo, trade_repo, session)


def get_comment_service(
    comment_repo: CommentRepo,
    task_repo: TaskRepo,
    trade_repo: TradeRepo,
    session: DBSession,
) -> CommentService:
    """Get comment service."""
    return CommentService(comment_repo, task_repo, trade_repo, session)


def get_photo_service(
    photo_repo: PhotoRepo,
    task_repo: TaskRepo,
    trade_repo: TradeRepo,
    session: DBSession,
) -> PhotoService:
    """Get photo service."""
    return PhotoService(photo_repo, task_repo, trade_repo, session)


ProjectTreeServiceDep = Annotated[ProjectTreeService, Depends(get_project_tree_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TradeServiceDep = Annotated[TradeService, Depends(get_trade_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
PhotoServiceDep = Annotated[PhotoService, Depends(get_photo_service)]
