from src.buildtrack.schemas.comment import CommentCreate
from src.buildtrack.schemas.pagination import PaginatedResponse
from src.buildtrack.schemas.photo import PhotoCreate, PhotoUpdate
from src.buildtrack.schemas.progress import (
    ClientProjectProgress,
    ClientTradeSummary,
    ProjectProgress,
    ProjectTemplateRead,
    ScheduledTradeRead,
    TemplateCategoryGroup,
    TradeProgress,
    TradeTemplateRead,
)
from src.buildtrack.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.buildtrack.schemas.task import TaskCreate, TaskRead, TaskUpdate
from src.buildtrack.schemas.trade import (
    BulkImportRequest,
    BulkImportResult,
    ProposedTradeDates,
    TradeCreate,
    TradeOrderUpdate,
    TradeRead,
    TradeUpdate,
)
from src.buildtrack.schemas.tree import CommentNode, PhotoNode, ProjectTree, TaskNode, TradeNode

__all__ = [
    # Pagination
    "PaginatedResponse",
    # Projects
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # Tree
    "CommentNode",
    "PhotoNode",
    "ProjectTree",
    "TaskNode",
    "TradeNode",
    # Trades
    "BulkImportRequest",
    "BulkImportResult",
    "ProposedTradeDates",
    "TradeCreate",
    "TradeOrderUpdate",
    "TradeRead",
    "TradeUpdate",
    # Tasks
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    # Comments and photos
    "CommentCreate",
    "PhotoCreate",
    "PhotoUpdate",
    # Progress and templates
    "ClientProjectProgress",
    "ClientTradeSummary",
    "ProjectProgress",
    "ProjectTemplateRead",
    "ScheduledTradeRead",
    "TemplateCategoryGroup",
    "TradeProgress",
    "TradeTemplateRead",
]
