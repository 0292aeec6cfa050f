from src.buildtrack.services.comment_service import CommentService
from src.buildtrack.services.photo_service import PhotoService
from src.buildtrack.services.project_service import ProjectService
from src.buildtrack.services.project_tree import ProjectTreeService
from src.buildtrack.services.task_service import TaskService
from src.buildtrack.services.trade_service import TradeService

__all__ = [
    "CommentService",
    "PhotoService",
    "ProjectService",
    "ProjectTreeService",
    "TaskService",
    "TradeService",
]
