"""Progress and schedule schemas."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from src.buildtrack.models.enums import SimplifiedStatus, TradeCategory


class TradeProgress(BaseModel):
    trade_id: UUID
    trade_name: str
    total: int
    done: int
    in_progress: int
    blocked: int
    open: int
    percentage: int


class ProjectProgress(BaseModel):
    project_id: UUID
    per_trade: list[TradeProgress]
    total_percentage: int
    blocked_count: int


class ClientTradeSummary(BaseModel):
    """Per-trade progress as shown to clients, without blocked/open detail."""

    trade_id: UUID
    trade_name: str
    status: SimplifiedStatus
    percentage: int


class ClientProjectProgress(BaseModel):
    project_id: UUID
    trades: list[ClientTradeSummary]
    total_percentage: int


class TradeTemplateRead(BaseModel):
    id: str
    name: str
    icon: str
    phase: str
    typical_duration_days: int
    category: TradeCategory
    description: str

    model_config = {"from_attributes": True}


class TemplateCategoryGroup(BaseModel):
    category: TradeCategory
    label: str
    templates: list[TradeTemplateRead]


class ProjectTemplateRead(BaseModel):
    id: str
    name: str
    icon: str
    description: str
    trade_ids: list[str]

    model_config = {"from_attributes": True}


class ScheduledTradeRead(BaseModel):
    """A trade template placed on the calendar."""

    template: TradeTemplateRead
    start_date: date
    end_date: date

    model_config = {"from_attributes": True}
