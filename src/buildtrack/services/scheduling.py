"""Schedule generation from trade templates.

Three placement rules exist side by side and are deliberately not unified:

- quick add: one trade anchored on the end of the project's last trade
- bulk import: back-to-back trades with a one-day gap
- phase chaining: phases in fixed order, trades inside a phase overlapping 70%

Dates are ``datetime.date`` values, so no caller-supplied date is ever mutated.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from src.buildtrack.catalog import PHASES, ProjectTemplate, TradeTemplate, template_by_id
from src.buildtrack.schemas.tree import ProjectTree

PHASE_OVERLAP_FACTOR = 0.7
BULK_IMPORT_GAP = timedelta(days=1)


@dataclass(frozen=True)
class ScheduledTrade:
    """A trade template placed on the calendar."""

    template: TradeTemplate
    start_date: date
    end_date: date


def _span(template: TradeTemplate, start: date) -> ScheduledTrade:
    return ScheduledTrade(
        template=template,
        start_date=start,
        end_date=start + timedelta(days=template.typical_duration_days),
    )


def quick_add_anchor(project: ProjectTree) -> date:
    """Start date for a trade appended to the project.

    The end of the last trade by order when it has one, otherwise the project start.
    """
    if project.trades:
        last_trade = max(project.trades, key=lambda t: t.order)
        if last_trade.end_date is not None:
            return last_trade.end_date
    return project.start_date


def propose_quick_add(project: ProjectTree, template: TradeTemplate) -> ScheduledTrade:
    """Propose default dates for adding one templated trade. Nothing is persisted."""
    return _span(template, quick_add_anchor(project))


def chain_bulk_import(project_template: ProjectTemplate, start: date) -> list[ScheduledTrade]:
    """Lay out a project template's trades back to back from ``start``.

    Each trade starts the day after the previous one ends. Ids missing from
    the catalog are skipped.
    """
    result: list[ScheduledTrade] = []
    cursor = start
    for trade_id in project_template.trade_ids:
        template = template_by_id(trade_id)
        if template is None:
            continue
        scheduled = _span(template, cursor)
        result.append(scheduled)
        cursor = scheduled.end_date + BULK_IMPORT_GAP
    return result


def calculate_trade_dates(templates: Iterable[TradeTemplate], start: date) -> list[ScheduledTrade]:
    """Chain templates phase by phase with overlapping trades inside a phase.

    Phases run in ``PHASES`` order. Inside a phase the cursor advances by
    ceil(70% of the duration), so neighbouring trades overlap like parallel
    crews. Templates whose phase is not in ``PHASES`` are dropped.
    """
    templates = list(templates)
    result: list[ScheduledTrade] = []
    cursor = start
    for phase in PHASES:
        for template in (t for t in templates if t.phase == phase):
            result.append(_span(template, cursor))
            step = math.ceil(template.typical_duration_days * PHASE_OVERLAP_FACTOR)
            cursor = cursor + timedelta(days=step)
    return result
