"""Trade service: creation, updates, template import and reordering."""

from functools import partial
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.buildtrack.catalog import project_template_by_id, template_by_id
from src.buildtrack.core.exceptions import (
    ConflictError,
    DomainValidationError,
    NotFoundError,
    PartialFailureError,
)
from src.buildtrack.core.logging import get_logger
from src.buildtrack.models.base import utc_now
from src.buildtrack.models.project import Project, Trade
from src.buildtrack.repositories.project import ProjectRepository, TradeRepository
from src.buildtrack.schemas.trade import ProposedTradeDates, TradeCreate, TradeUpdate
from src.buildtrack.schemas.tree import ProjectTree
from src.buildtrack.services.access import (
    Caller,
    ensure_can_read_project,
    ensure_can_write_project,
)
from src.buildtrack.services.project_tree import ProjectTreeService, shape_project
from src.buildtrack.services.reorder import OptimisticReorder
from src.buildtrack.services.scheduling import chain_bulk_import, propose_quick_add

logger = get_logger(__name__)


class TradeService:
    """Trade creation, updates and template-driven scheduling for one project."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        trade_repo: TradeRepository,
        session: AsyncSession,
    ):
        self.trade_repo = trade_repo
        self.session = session
        self.trees = ProjectTreeService(project_repo)

    async def _writable_project(self, project_id: UUID, caller: Caller) -> Project:
        project = await self.trees.load_row(project_id)
        ensure_can_write_project(project, caller)
        return project

    async def _get_trade(self, project_id: UUID, trade_id: UUID) -> Trade:
        trade = await self.trade_repo.get_by_id(trade_id)
        if trade is None or trade.project_id != project_id:
            raise NotFoundError("Trade", trade_id)
        return trade

    async def _commit(self, conflict_detail: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Unique (project_id, order) lost a race with a concurrent write
            await self.session.rollback()
            raise ConflictError(conflict_detail) from e
        except Exception:
            await self.session.rollback()
            raise

    async def _insert(self, project_id: UUID, data: TradeCreate) -> Trade:
        trade = Trade(
            project_id=project_id,
            order=await self.trade_repo.next_order(project_id),
            **data.model_dump(),
        )
        self.trade_repo.add(trade)
        await self._commit("Another trade was added concurrently, retry the request")
        await self.session.refresh(trade)
        return trade

    async def create(self, project_id: UUID, data: TradeCreate, caller: Caller) -> Trade:
        """Append a trade to the project.

        Raises:
            NotFoundError: Unknown project.
            ForbiddenError: Caller may not write this project.
        """
        await self._writable_project(project_id, caller)
        trade = await self._insert(project_id, data)
        logger.info("Trade created", project_id=str(project_id), trade_id=str(trade.id))
        return trade

    async def update(
        self, project_id: UUID, trade_id: UUID, data: TradeUpdate, caller: Caller
    ) -> Trade:
        """Apply a partial update to a trade.

        Raises:
            NotFoundError: Unknown project or trade.
            ForbiddenError: Caller may not write this project.
            DomainValidationError: Resulting start date is after the end date, or
                the new order is already held by another trade of the project.
            ConflictError: A concurrent write took the new order first.
        """
        await self._writable_project(project_id, caller)
        trade = await self._get_trade(project_id, trade_id)

        update_data = data.model_dump(exclude_unset=True)
        start = update_data.get("start_date", trade.start_date)
        end = update_data.get("end_date", trade.end_date)
        if start is not None and end is not None and start > end:
            raise DomainValidationError("start_date must not be after end_date")

        new_order = update_data.get("order")
        if new_order is not None and new_order != trade.order:
            if await self.trade_repo.order_taken(project_id, new_order, trade.id):
                raise DomainValidationError(
                    f"Order {new_order} is already used by another trade; "
                    "reorder the project's trades to swap positions"
                )

        for field, value in update_data.items():
            if value is None and field in ("name", "order", "can_create_subtasks"):
                continue
            setattr(trade, field, value)

        trade.updated_at = utc_now()
        await self._commit(f"Order {trade.order} was taken by a concurrent update")
        await self.session.refresh(trade)
        logger.info("Trade updated", trade_id=str(trade_id), fields=sorted(update_data))
        return trade

    async def propose_quick_add(
        self, project_id: UUID, template_id: str, caller: Caller
    ) -> ProposedTradeDates:
        """Default form values for appending one templated trade.

        Raises:
            NotFoundError: Unknown project or trade template.
            ForbiddenError: Caller may not read this project.
        """
        template = template_by_id(template_id)
        if template is None:
            raise NotFoundError("Trade template", template_id)
        project = await self.trees.load_row(project_id)
        ensure_can_read_project(project, caller)

        scheduled = propose_quick_add(shape_project(project, caller.role), template)
        return ProposedTradeDates(
            template_id=template.id,
            name=template.name,
            description=template.description,
            start_date=scheduled.start_date,
            end_date=scheduled.end_date,
        )

    async def bulk_import(
        self, project_id: UUID, project_template_id: str, caller: Caller
    ) -> list[Trade]:
        """Create every trade of a project template, chained from the project start.

        Trades are created strictly one after another in template order. If one
        create fails the loop stops and the trades already created are kept.

        Raises:
            NotFoundError: Unknown project.
            ForbiddenError: Caller may not write this project.
            DomainValidationError: Unknown project template id.
            PartialFailureError: A create failed partway; carries the count created.
        """
        project_template = project_template_by_id(project_template_id)
        if project_template is None:
            raise DomainValidationError(f"Unknown project template '{project_template_id}'")
        project = await self._writable_project(project_id, caller)

        schedule = chain_bulk_import(project_template, project.start_date)
        created: list[Trade] = []
        for scheduled in schedule:
            data = TradeCreate(
                name=scheduled.template.name,
                description=scheduled.template.description,
                start_date=scheduled.start_date,
                end_date=scheduled.end_date,
            )
            try:
                created.append(await self._insert(project_id, data))
            except Exception as e:
                logger.exception(
                    "Bulk import stopped",
                    project_id=str(project_id),
                    template=project_template.id,
                    failed_trade=scheduled.template.id,
                    created=len(created),
                )
                raise PartialFailureError(created=len(created), requested=len(schedule)) from e

        logger.info(
            "Bulk import finished",
            project_id=str(project_id),
            template=project_template.id,
            created=len(created),
        )
        return created

    async def _write_orders(self, project_id: UUID, orders: dict[UUID, int]) -> None:
        # The constraint fires on the UPDATE itself, before commit
        try:
            await self.trade_repo.set_orders(project_id, orders)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Trades were changed concurrently, reload and retry") from e
        except Exception:
            await self.session.rollback()
            raise
        await self._commit("Trades were changed concurrently, reload and retry")

    async def reorder(self, project_id: UUID, trade_ids: list[UUID], caller: Caller) -> ProjectTree:
        """Apply a new trade order optimistically and return the reloaded tree.

        All orders are written in one statement. The returned tree always comes
        from the database, so when the write fails it shows what is stored.

        Raises:
            NotFoundError: Unknown project.
            ForbiddenError: Caller may not write this project.
            DomainValidationError: ``trade_ids`` is not a permutation of the project's trades.
        """
        project = await self._writable_project(project_id, caller)
        reorder = OptimisticReorder(
            shape_project(project, caller.role),
            partial(self._write_orders, project_id),
            lambda: self.trees.load(project_id, caller),
        )
        reorder.apply(trade_ids)
        if await reorder.persist():
            logger.info("Trades reordered", project_id=str(project_id), count=len(trade_ids))
        return await reorder.reconcile()
