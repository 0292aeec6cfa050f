"""Template catalog endpoints. Read-only reference data."""

from datetime import date
from typing import Annotated, assert_never

from fastapi import APIRouter, Query

from src.buildtrack.api.dependencies import CurrentCaller
from src.buildtrack.catalog import (
    PROJECT_TEMPLATES,
    category_label,
    project_template_by_id,
    templates_by_category,
    templates_for_project,
)
from src.buildtrack.core.exceptions import NotFoundError
from src.buildtrack.models.enums import ScheduleMode
from src.buildtrack.schemas.progress import (
    ProjectTemplateRead,
    ScheduledTradeRead,
    TemplateCategoryGroup,
    TradeTemplateRead,
)
from src.buildtrack.services.scheduling import calculate_trade_dates, chain_bulk_import

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get(
    "",
    response_model=list[TemplateCategoryGroup],
    summary="List trade templates",
    description="All trade templates grouped by category, every category included.",
)
async def list_trade_templates(_caller: CurrentCaller) -> list[TemplateCategoryGroup]:
    return [
        TemplateCategoryGroup(
            category=category,
            label=category_label(category),
            templates=[TradeTemplateRead.model_validate(t) for t in templates],
        )
        for category, templates in templates_by_category().items()
    ]


@router.get(
    "/projects",
    response_model=list[ProjectTemplateRead],
    summary="List project templates",
)
async def list_project_templates(_caller: CurrentCaller) -> list[ProjectTemplateRead]:
    return [ProjectTemplateRead.model_validate(p) for p in PROJECT_TEMPLATES]


@router.get(
    "/projects/{template_id}/schedule",
    response_model=list[ScheduledTradeRead],
    summary="Preview a project template schedule",
    description=(
        "bulk: trades back to back with a one-day gap, as created by bulk import. "
        "phased: phases in fixed order with overlapping trades inside a phase."
    ),
    responses={404: {"description": "Project template not found"}},
)
async def preview_schedule(
    template_id: str,
    _caller: CurrentCaller,
    start_date: Annotated[date, Query(description="First day of the schedule")],
    mode: Annotated[ScheduleMode, Query(description="Placement rule")] = ScheduleMode.BULK,
) -> list[ScheduledTradeRead]:
    project_template = project_template_by_id(template_id)
    if project_template is None:
        raise NotFoundError("Project template", template_id)

    match mode:
        case ScheduleMode.BULK:
            schedule = chain_bulk_import(project_template, start_date)
        case ScheduleMode.PHASED:
            schedule = calculate_trade_dates(templates_for_project(template_id), start_date)
        case _:
            assert_never(mode)
    return [ScheduledTradeRead.model_validate(s) for s in schedule]
