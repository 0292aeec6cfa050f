"""Progress aggregation over a shaped project tree.

All functions are pure. A trade without tasks is 0% and a project without
trades is 0%; neither case raises.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from src.buildtrack.models.enums import SimplifiedStatus, TaskStatus
from src.buildtrack.schemas.progress import (
    ClientProjectProgress,
    ClientTradeSummary,
    ProjectProgress,
    TradeProgress,
)
from src.buildtrack.schemas.tree import ProjectTree, TradeNode


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest integer, halves away from zero."""
    if denominator == 0:
        return 0
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _count(statuses: Iterable[TaskStatus], wanted: TaskStatus) -> int:
    return sum(1 for s in statuses if s == wanted)


def trade_progress(trade: TradeNode) -> TradeProgress:
    """Count tasks per status and compute the done percentage of one trade."""
    statuses = [TaskStatus(task.status) for task in trade.tasks]
    total = len(statuses)
    done = _count(statuses, TaskStatus.DONE)
    return TradeProgress(
        trade_id=trade.id,
        trade_name=trade.name,
        total=total,
        done=done,
        in_progress=_count(statuses, TaskStatus.IN_PROGRESS),
        blocked=_count(statuses, TaskStatus.BLOCKED),
        open=_count(statuses, TaskStatus.PENDING),
        percentage=round_half_up(100 * done, total),
    )


def project_progress(project: ProjectTree) -> ProjectProgress:
    """Aggregate trade progress into an unweighted project percentage."""
    per_trade = [trade_progress(trade) for trade in project.trades]
    return ProjectProgress(
        project_id=project.id,
        per_trade=per_trade,
        total_percentage=round_half_up(sum(p.percentage for p in per_trade), len(per_trade)),
        blocked_count=sum(p.blocked for p in per_trade),
    )


def simplified_status(progress: TradeProgress) -> SimplifiedStatus:
    """Project trade progress onto the three states clients see."""
    if progress.percentage == 100:
        return SimplifiedStatus.COMPLETED
    if progress.done == 0 and progress.in_progress == 0:
        return SimplifiedStatus.NOT_STARTED
    return SimplifiedStatus.IN_PROGRESS


def client_project_progress(project: ProjectTree) -> ClientProjectProgress:
    """Project progress with per-trade detail reduced to simplified statuses."""
    progress = project_progress(project)
    return ClientProjectProgress(
        project_id=progress.project_id,
        trades=[
            ClientTradeSummary(
                trade_id=p.trade_id,
                trade_name=p.trade_name,
                status=simplified_status(p),
                percentage=p.percentage,
            )
            for p in progress.per_trade
        ],
        total_percentage=progress.total_percentage,
    )
