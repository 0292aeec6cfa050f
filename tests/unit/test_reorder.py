"""Tests for optimistic trade reordering."""

from unittest.mock import AsyncMock

import pytest

from src.buildtrack.core.exceptions import DomainValidationError
from src.buildtrack.models.enums import Role
from src.buildtrack.services.project_tree import shape_project
from src.buildtrack.services.reorder import OptimisticReorder
from tests.factories import ProjectFactory, TradeFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def tree():
    project = ProjectFactory.with_trades(
        TradeFactory.build(name="Rohbau", order=0),
        TradeFactory.build(name="Elektro", order=1),
        TradeFactory.build(name="Maler", order=2),
    )
    return shape_project(project, Role.ARCHITECT)


class TestApply:
    def test_rewrites_order_and_sorts_view(self, tree):
        rohbau, elektro, maler = tree.trades
        reorder = OptimisticReorder(tree, AsyncMock(), AsyncMock())

        view = reorder.apply([maler.id, rohbau.id, elektro.id])

        assert [t.name for t in view.trades] == ["Maler", "Rohbau", "Elektro"]
        assert [t.order for t in view.trades] == [1, 2, 3]

    def test_rejects_missing_trade(self, tree):
        reorder = OptimisticReorder(tree, AsyncMock(), AsyncMock())

        with pytest.raises(DomainValidationError):
            reorder.apply([tree.trades[0].id, tree.trades[1].id])

    def test_rejects_foreign_trade(self, tree):
        reorder = OptimisticReorder(tree, AsyncMock(), AsyncMock())
        foreign = TradeFactory.build().id

        with pytest.raises(DomainValidationError):
            reorder.apply([tree.trades[0].id, tree.trades[1].id, foreign])


class TestPersistAndReconcile:
    async def test_writes_whole_permutation_at_once(self, tree):
        write_orders = AsyncMock()
        reorder = OptimisticReorder(tree, write_orders, AsyncMock())
        ids = [t.id for t in reversed(tree.trades)]
        reorder.apply(ids)

        assert await reorder.persist() is True

        assert reorder.stale is False
        write_orders.assert_awaited_once_with({ids[0]: 1, ids[1]: 2, ids[2]: 3})

    async def test_failure_marks_view_stale(self, tree):
        write_orders = AsyncMock(side_effect=RuntimeError("connection reset"))
        reorder = OptimisticReorder(tree, write_orders, AsyncMock())
        reorder.apply([t.id for t in reversed(tree.trades)])

        assert await reorder.persist() is False

        assert reorder.stale is True
        assert isinstance(reorder.failure, RuntimeError)

    async def test_pending_cleared_after_persist(self, tree):
        write_orders = AsyncMock()
        reorder = OptimisticReorder(tree, write_orders, AsyncMock())
        reorder.apply([t.id for t in tree.trades])
        await reorder.persist()

        await reorder.persist()

        assert write_orders.await_args_list[1].args == ({},)

    async def test_reconcile_replaces_speculative_view(self, tree):
        ground_truth = tree.model_copy(deep=True)
        reload = AsyncMock(return_value=ground_truth)
        reorder = OptimisticReorder(
            tree, AsyncMock(side_effect=RuntimeError("boom")), reload
        )
        reorder.apply([t.id for t in reversed(tree.trades)])
        await reorder.persist()

        reconciled = await reorder.reconcile()

        assert reconciled is ground_truth
        assert reorder.tree is ground_truth
        assert reorder.stale is False
        reload.assert_awaited_once()
