"""Trade schemas for API request/response."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

MAX_BUDGET = 999_999_999


def _strip_optional(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class TradeCreate(BaseModel):
    """Schema for creating a trade. The order is assigned by the server."""

    name: str = Field(min_length=1, max_length=200)
    company_name: str | None = Field(default=None, max_length=200)
    contact_person: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=5000)
    contractor_id: UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    budget: float | None = Field(default=None, ge=0, le=MAX_BUDGET)
    can_create_subtasks: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Trade name cannot be empty or whitespace only")
        return v

    @field_validator("company_name", "contact_person", "phone", "description")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return _strip_optional(v)

    @model_validator(mode="after")
    def validate_date_order(self) -> Self:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class TradeUpdate(BaseModel):
    """Schema for updating a trade. Only provided fields change.

    Sending ``contractor_id: null`` explicitly unassigns the contractor.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    company_name: str | None = Field(default=None, max_length=200)
    contact_person: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=5000)
    contractor_id: UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    budget: float | None = Field(default=None, ge=0, le=MAX_BUDGET)
    order: int | None = Field(default=None, ge=0)
    can_create_subtasks: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Trade name cannot be empty or whitespace only")
        return v

    @model_validator(mode="after")
    def validate_not_empty(self) -> Self:
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class TradeRead(BaseModel):
    """Schema for reading a trade without its tasks."""

    id: UUID
    project_id: UUID
    name: str
    contractor_id: UUID | None
    company_name: str | None
    contact_person: str | None
    phone: str | None
    description: str | None
    start_date: date | None
    end_date: date | None
    budget: float | None
    order: int
    can_create_subtasks: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProposedTradeDates(BaseModel):
    """Default form values for adding one templated trade. Nothing is persisted."""

    template_id: str
    name: str
    description: str
    start_date: date
    end_date: date


class BulkImportRequest(BaseModel):
    """Import all trades of a project template, chained from the project start."""

    project_template_id: str = Field(min_length=1, max_length=100)


class BulkImportResult(BaseModel):
    created: int
    requested: int
    trades: list[TradeRead]


class TradeOrderUpdate(BaseModel):
    """New display order: trade ids from first to last."""

    trade_ids: list[UUID] = Field(min_length=1)

    @field_validator("trade_ids")
    @classmethod
    def validate_unique(cls, v: list[UUID]) -> list[UUID]:
        if len(set(v)) != len(v):
            raise ValueError("trade_ids must not contain duplicates")
        return v
