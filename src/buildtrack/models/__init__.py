"""Model exports.

Import from here: `from src.buildtrack.models import Project, Trade`
"""

from src.buildtrack.models.enums import (
    PhotoApprovalMode,
    ProjectStatus,
    Role,
    ScheduleMode,
    SimplifiedStatus,
    TaskStatus,
    TradeCategory,
    Visibility,
)
from src.buildtrack.models.project import Photo, Project, Task, TaskComment, Trade

__all__ = [
    # Enums
    "PhotoApprovalMode",
    "ProjectStatus",
    "Role",
    "ScheduleMode",
    "SimplifiedStatus",
    "TaskStatus",
    "TradeCategory",
    "Visibility",
    # Tables
    "Photo",
    "Project",
    "Task",
    "TaskComment",
    "Trade",
]
