"""Trade endpoints, nested under their project."""

from uuid import UUID

from fastapi import APIRouter, status

from src.buildtrack.api.dependencies import CurrentCaller, TradeServiceDep
from src.buildtrack.schemas.trade import (
    BulkImportRequest,
    BulkImportResult,
    ProposedTradeDates,
    TradeCreate,
    TradeOrderUpdate,
    TradeRead,
    TradeUpdate,
)
from src.buildtrack.schemas.tree import ProjectTree

router = APIRouter(prefix="/projects/{project_id}/trades", tags=["trades"])


@router.post(
    "",
    response_model=TradeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create trade",
    description="Append a trade to the project. The order is assigned by the server.",
    responses={
        403: {"description": "Caller may not modify this project"},
        404: {"description": "Project not found"},
        409: {"description": "A concurrent create took the same order"},
    },
)
async def create_trade(
    project_id: UUID,
    request: TradeCreate,
    caller: CurrentCaller,
    service: TradeServiceDep,
) -> TradeRead:
    trade = await service.create(project_id, request, caller)
    return TradeRead.model_validate(trade)


@router.patch(
    "/{trade_id}",
    response_model=TradeRead,
    summary="Update trade",
    description="Partial update. Send contractor_id: null to unassign the contractor.",
    responses={
        403: {"description": "Caller may not modify this project"},
        404: {"description": "Project or trade not found"},
        409: {"description": "A concurrent update took the same order"},
        422: {"description": "Dates out of order, or order already used"},
    },
)
async def update_trade(
    project_id: UUID,
    trade_id: UUID,
    request: TradeUpdate,
    caller: CurrentCaller,
    service: TradeServiceDep,
) -> TradeRead:
    trade = await service.update(project_id, trade_id, request, caller)
    return TradeRead.model_validate(trade)


@router.get(
    "/quick-add/{template_id}",
    response_model=ProposedTradeDates,
    summary="Propose a templated trade",
    description=(
        "Default name, description and dates for appending one trade from the "
        "catalog, anchored on the end of the last trade. Nothing is saved."
    ),
    responses={404: {"description": "Project or template not found"}},
)
async def quick_add_trade(
    project_id: UUID,
    template_id: str,
    caller: CurrentCaller,
    service: TradeServiceDep,
) -> ProposedTradeDates:
    return await service.propose_quick_add(project_id, template_id, caller)


@router.post(
    "/bulk-import",
    response_model=BulkImportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import a project template",
    description=(
        "Create all trades of a project template one after another, chained "
        "from the project start with a one-day gap."
    ),
    responses={
        207: {"description": "Import stopped partway; created trades are kept"},
        403: {"description": "Caller may not modify this project"},
        404: {"description": "Project not found"},
        422: {"description": "Unknown project template"},
    },
)
async def bulk_import_trades(
    project_id: UUID,
    request: BulkImportRequest,
    caller: CurrentCaller,
    service: TradeServiceDep,
) -> BulkImportResult:
    trades = await service.bulk_import(project_id, request.project_template_id, caller)
    return BulkImportResult(
        created=len(trades),
        requested=len(trades),
        trades=[TradeRead.model_validate(t) for t in trades],
    )


@router.put(
    "/order",
    response_model=ProjectTree,
    summary="Reorder trades",
    description=(
        "Set the display order from a full list of trade ids. The response is the "
        "project tree as stored afterwards."
    ),
    responses={
        403: {"description": "Caller may not modify this project"},
        404: {"description": "Project not found"},
        422: {"description": "trade_ids is not a permutation of the project's trades"},
    },
)
async def reorder_trades(
    project_id: UUID,
    request: TradeOrderUpdate,
    caller: CurrentCaller,
    service: TradeServiceDep,
) -> ProjectTree:
    return await service.reorder(project_id, request.trade_ids, caller)
