"""FastAPI dependency injection definitions - Lobby Pattern."""

# Database
from src.buildtrack.api.dependencies.db import DBSession, get_db_session

# Identity
from src.buildtrack.api.dependencies.identity import CurrentCaller, get_caller

# Repositories
from src.buildtrack.api.dependencies.repositories import (
    CommentRepo,
    PhotoRepo,
    ProjectRepo,
    TaskRepo,
    TradeRepo,
    get_comment_repository,
    get_photo_repository,
    get_project_repository,
    get_task_repository,
    get_trade_repository,
)

# Services
from src.buildtrack.api.dependencies.services import (
    CommentServiceDep,
    PhotoServiceDep,
    ProjectServiceDep,
    ProjectTreeServiceDep,
    TaskServiceDep,
    TradeServiceDep,
    get_comment_service,
    get_photo_service,
    get_project_service,
    get_project_tree_service,
    get_task_service,
    get_trade_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Identity
    "CurrentCaller",
    "get_caller",
    # Repositories
    "CommentRepo",
    "PhotoRepo",
    "ProjectRepo",
    "TaskRepo",
    "TradeRepo",
    "get_comment_repository",
    "get_photo_repository",
    "get_project_repository",
    "get_task_repository",
    "get_trade_repository",
    # Services
    "CommentServiceDep",
    "PhotoServiceDep",
    "ProjectServiceDep",
    "ProjectTreeServiceDep",
    "TaskServiceDep",
    "TradeServiceDep",
    "get_comment_service",
    "get_photo_service",
    "get_project_service",
    "get_project_tree_service",
    "get_task_service",
    "get_trade_service",
]
