"""Repository layer - data access abstraction."""

from src.buildtrack.repositories.base import BaseRepository
from src.buildtrack.repositories.project import (
    PhotoRepository,
    ProjectRepository,
    TaskCommentRepository,
    TaskRepository,
    TradeRepository,
)

__all__ = [
    "BaseRepository",
    "PhotoRepository",
    "ProjectRepository",
    "TaskCommentRepository",
    "TaskRepository",
    "TradeRepository",
]
