"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.buildtrack.api.dependencies.db import DBSession
from src.buildtrack.repositories import (
    PhotoRepository,
    ProjectRepository,
    TaskCommentRepository,
    TaskRepository,
    TradeRepository,
)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_trade_repository(session: DBSession) -> TradeRepository:
    return TradeRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_photo_repository(session: DBSession) -> PhotoRepository:
    return PhotoRepository(session)


def get_comment_repository(session: DBSession) -> TaskCommentRepository:
    return TaskCommentRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TradeRepo = Annotated[TradeRepository, Depends(get_trade_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
PhotoRepo = Annotated[PhotoRepository, Depends(get_photo_repository)]
CommentRepo = Annotated[TaskCommentRepository, Depends(get_comment_repository)]
