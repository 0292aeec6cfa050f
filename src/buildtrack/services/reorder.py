"""Optimistic trade reordering.

The new order is applied to the in-memory tree right away, then persisted as
one batch. A failed write leaves the view stale until it is reconciled against
the database. There is no per-trade rollback.
"""

from collections.abc import Awaitable, Callable
from uuid import UUID

from src.buildtrack.core.exceptions import DomainValidationError
from src.buildtrack.core.logging import get_logger
from src.buildtrack.schemas.tree import ProjectTree

logger = get_logger(__name__)

OrderWriter = Callable[[dict[UUID, int]], Awaitable[None]]
TreeLoader = Callable[[], Awaitable[ProjectTree]]


class OptimisticReorder:
    """Speculative reorder of one project's trades.

    Args:
        tree: The tree as last loaded; reordered in place by ``apply``
        write_orders: Persists the new ``order`` of every trade at once
        reload: Fetches the ground-truth tree
    """

    def __init__(self, tree: ProjectTree, write_orders: OrderWriter, reload: TreeLoader):
        self.tree = tree
        self._write_orders = write_orders
        self._reload = reload
        self._pending: dict[UUID, int] = {}
        self.stale = False
        self.failure: Exception | None = None

    def apply(self, trade_ids: list[UUID]) -> ProjectTree:
        """Rewrite ``order = index + 1`` for the given ids and re-sort the view.

        Raises:
            DomainValidationError: ``trade_ids`` is not a permutation of the
                project's trades.
        """
        by_id = {trade.id: trade for trade in self.tree.trades}
        if len(trade_ids) != len(by_id) or set(trade_ids) != set(by_id):
            raise DomainValidationError(
                "trade_ids must list every trade of the project exactly once"
            )

        self._pending = {}
        for index, trade_id in enumerate(trade_ids):
            by_id[trade_id].order = index + 1
            self._pending[trade_id] = index + 1
        self.tree.trades = [by_id[trade_id] for trade_id in trade_ids]
        return self.tree

    async def persist(self) -> bool:
        """Write the pending orders.

        Returns:
            True if the write succeeded. On failure the view is marked stale
            and ``reconcile`` must be called.
        """
        pending, self._pending = self._pending, {}
        try:
            await self._write_orders(pending)
        except Exception as e:
            self.failure = e
            self.stale = True
            logger.warning(
                "Trade reorder failed",
                project_id=str(self.tree.id),
                trades=len(pending),
                error=str(e),
            )
            return False
        return True

    async def reconcile(self) -> ProjectTree:
        """Discard the speculative view and reload the tree."""
        self.tree = await self._reload()
        self.stale = False
        return self.tree
