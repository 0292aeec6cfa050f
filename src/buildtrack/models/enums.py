"""Shared enums for models."""

from enum import Enum


class Role(str, Enum):
    """Caller role. The set is closed; every policy decision handles all three."""

    ARCHITECT = "architect"
    CONTRACTOR = "contractor"
    CLIENT = "client"


class Visibility(str, Enum):
    """Read access flag on photos and comments."""

    INTERNAL = "internal"
    CLIENT = "client"


class TaskStatus(str, Enum):
    """Task workflow status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class PhotoApprovalMode(str, Enum):
    """Whether contractor photos need manual approval before clients see them."""

    MANUAL = "manual"
    AUTO = "auto"


class TradeCategory(str, Enum):
    """Coarse category of a trade template."""

    FOUNDATION = "foundation"
    STRUCTURE = "structure"
    INTERIOR = "interior"
    FINISHING = "finishing"
    EXTERIOR = "exterior"


class SimplifiedStatus(str, Enum):
    """Three-valued trade status shown to clients."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ScheduleMode(str, Enum):
    """Placement rule for previewing a project template schedule."""

    BULK = "bulk"
    PHASED = "phased"
