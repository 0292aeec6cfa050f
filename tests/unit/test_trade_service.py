"""Unit tests for TradeService."""

from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.buildtrack.catalog import templates_for_project
from src.buildtrack.core.exceptions import (
    ConflictError,
    DomainValidationError,
    ForbiddenError,
    NotFoundError,
    PartialFailureError,
)
from src.buildtrack.schemas.trade import TradeCreate, TradeUpdate
from src.buildtrack.services.access import Caller
from src.buildtrack.services.trade_service import TradeService
from tests.factories import ProjectFactory, TradeFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def project(architect: Caller):
    return ProjectFactory.with_trades(
        TradeFactory.build(name="Rohbau", order=0, end_date=date(2026, 4, 30)),
        architect_id=architect.user_id,
        start_date=date(2026, 1, 1),
    )


@pytest.fixture
def project_repo(project) -> MagicMock:
    repo = MagicMock()
    repo.get_tree = AsyncMock(return_value=project)
    return repo


@pytest.fixture
def trade_repo() -> MagicMock:
    repo = MagicMock()
    repo.add = MagicMock()
    repo.get_by_id = AsyncMock()
    repo.next_order = AsyncMock(side_effect=lambda project_id: 1 + repo.add.call_count)
    repo.order_taken = AsyncMock(return_value=False)
    repo.set_orders = AsyncMock()
    return repo


@pytest.fixture
def mock_session() -> AsyncMock:
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def trade_service(project_repo, trade_repo, mock_session) -> TradeService:
    return TradeService(project_repo, trade_repo, mock_session)


class TestCreate:
    async def test_appends_with_next_order(self, trade_service, trade_repo, project, architect):
        trade = await trade_service.create(project.id, TradeCreate(name="Elektro"), architect)

        trade_repo.add.assert_called_once_with(trade)
        assert trade.project_id == project.id
        assert trade.order == 1
        assert trade.name == "Elektro"

    async def test_rejects_contractor(self, trade_service, trade_repo, project, contractor):
        with pytest.raises(ForbiddenError):
            await trade_service.create(project.id, TradeCreate(name="Elektro"), contractor)
        trade_repo.add.assert_not_called()

    async def test_unknown_project(self, trade_service, project_repo, architect):
        project_repo.get_tree.return_value = None

        with pytest.raises(NotFoundError):
            await trade_service.create(uuid4(), TradeCreate(name="Elektro"), architect)

    async def test_rollback_on_commit_failure(
        self, trade_service, mock_session, project, architect
    ):
        mock_session.commit.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            await trade_service.create(project.id, TradeCreate(name="Elektro"), architect)
        mock_session.rollback.assert_awaited_once()

    async def test_concurrent_append_is_conflict(
        self, trade_service, mock_session, project, architect
    ):
        mock_session.commit.side_effect = IntegrityError(
            "INSERT INTO trades", {}, Exception("uq_trades_project_order")
        )

        with pytest.raises(ConflictError):
            await trade_service.create(project.id, TradeCreate(name="Elektro"), architect)
        mock_session.rollback.assert_awaited_once()


class TestUpdate:
    async def test_unassign_contractor(self, trade_service, trade_repo, project, architect):
        trade = project.trades[0]
        trade.contractor_id = uuid4()
        trade_repo.get_by_id.return_value = trade

        updated = await trade_service.update(
            project.id, trade.id, TradeUpdate(contractor_id=None), architect
        )

        assert updated.contractor_id is None

    async def test_null_name_ignored(self, trade_service, trade_repo, project, architect):
        trade = project.trades[0]
        trade_repo.get_by_id.return_value = trade

        await trade_service.update(
            project.id, trade.id, TradeUpdate(name=None, phone="0170 1234567"), architect
        )

        assert trade.name == "Rohbau"
        assert trade.phone == "0170 1234567"

    async def test_dates_checked_against_stored_values(
        self, trade_service, trade_repo, project, architect
    ):
        trade = project.trades[0]
        trade_repo.get_by_id.return_value = trade

        with pytest.raises(DomainValidationError):
            await trade_service.update(
                project.id, trade.id, TradeUpdate(start_date=date(2026, 5, 1)), architect
            )

    async def test_colliding_order_rejected(
        self, trade_service, trade_repo, mock_session, project, architect
    ):
        second = TradeFactory.build(name="Elektro", order=1, project_id=project.id)
        project.trades.append(second)
        trade_repo.get_by_id.return_value = second
        trade_repo.order_taken.return_value = True

        with pytest.raises(DomainValidationError):
            await trade_service.update(project.id, second.id, TradeUpdate(order=0), architect)

        trade_repo.order_taken.assert_awaited_once_with(project.id, 0, second.id)
        assert second.order == 1
        mock_session.commit.assert_not_awaited()

    async def test_free_order_accepted(self, trade_service, trade_repo, project, architect):
        trade = project.trades[0]
        trade_repo.get_by_id.return_value = trade

        await trade_service.update(project.id, trade.id, TradeUpdate(order=5), architect)

        assert trade.order == 5

    async def test_unchanged_order_skips_lookup(
        self, trade_service, trade_repo, project, architect
    ):
        trade = project.trades[0]
        trade_repo.get_by_id.return_value = trade

        await trade_service.update(project.id, trade.id, TradeUpdate(order=0), architect)

        trade_repo.order_taken.assert_not_awaited()

    async def test_order_race_is_conflict(
        self, trade_service, trade_repo, mock_session, project, architect
    ):
        trade = project.trades[0]
        trade_repo.get_by_id.return_value = trade
        mock_session.commit.side_effect = IntegrityError(
            "UPDATE trades", {}, Exception("uq_trades_project_order")
        )

        with pytest.raises(ConflictError):
            await trade_service.update(project.id, trade.id, TradeUpdate(order=3), architect)
        mock_session.rollback.assert_awaited_once()

    async def test_trade_from_other_project(self, trade_service, trade_repo, project, architect):
        trade_repo.get_by_id.return_value = TradeFactory.build(project_id=uuid4())

        with pytest.raises(NotFoundError):
            await trade_service.update(project.id, uuid4(), TradeUpdate(name="x"), architect)


class TestQuickAdd:
    async def test_anchored_on_last_trade(self, trade_service, project, architect):
        proposal = await trade_service.propose_quick_add(project.id, "maler", architect)

        assert proposal.template_id == "maler"
        assert proposal.name == "Maler & Lackierer"
        assert proposal.start_date == date(2026, 4, 30)
        assert proposal.end_date == date(2026, 5, 14)

    async def test_unknown_template(self, trade_service, project, architect):
        with pytest.raises(NotFoundError):
            await trade_service.propose_quick_add(project.id, "nope", architect)

    async def test_nothing_persisted(
        self, trade_service, trade_repo, mock_session, project, architect
    ):
        await trade_service.propose_quick_add(project.id, "maler", architect)

        trade_repo.add.assert_not_called()
        mock_session.commit.assert_not_awaited()


class TestBulkImport:
    async def test_creates_every_trade_chained(self, trade_service, trade_repo, project, architect):
        expected = templates_for_project("baeder")

        trades = await trade_service.bulk_import(project.id, "baeder", architect)

        assert [t.name for t in trades] == [t.name for t in expected]
        assert trades[0].start_date == project.start_date
        for previous, current in zip(trades, trades[1:], strict=False):
            assert current.start_date == previous.end_date + timedelta(days=1)
        assert trade_repo.add.call_count == len(expected)

    async def test_partial_failure_keeps_created(
        self, trade_service, trade_repo, mock_session, project, architect
    ):
        mock_session.commit.side_effect = [None, None, RuntimeError("db down"), None]

        with pytest.raises(PartialFailureError) as exc_info:
            await trade_service.bulk_import(project.id, "baeder", architect)

        assert exc_info.value.created == 2
        assert exc_info.value.requested == 4
        # The loop stops at the failing trade
        assert trade_repo.add.call_count == 3
        mock_session.rollback.assert_awaited_once()

    async def test_unknown_project_template(self, trade_service, trade_repo, project, architect):
        with pytest.raises(DomainValidationError):
            await trade_service.bulk_import(project.id, "schloss", architect)
        trade_repo.add.assert_not_called()

    async def test_client_rejected(self, trade_service, project, client_caller):
        with pytest.raises(ForbiddenError):
            await trade_service.bulk_import(project.id, "baeder", client_caller)


class TestReorder:
    async def test_returns_reloaded_tree(
        self, trade_service, project_repo, trade_repo, mock_session, project, architect
    ):
        second = TradeFactory.build(name="Elektro", order=1, project_id=project.id)
        project.trades.append(second)
        first = project.trades[0]

        tree = await trade_service.reorder(project.id, [second.id, first.id], architect)

        trade_repo.set_orders.assert_awaited_once_with(project.id, {second.id: 1, first.id: 2})
        mock_session.commit.assert_awaited_once()
        # Initial load plus the reconcile reload
        assert project_repo.get_tree.await_count == 2
        assert tree.id == project.id

    async def test_failed_write_still_reconciles(
        self, trade_service, project_repo, trade_repo, mock_session, project, architect
    ):
        trade_repo.set_orders.side_effect = RuntimeError("deadlock")

        tree = await trade_service.reorder(project.id, [project.trades[0].id], architect)

        mock_session.commit.assert_not_awaited()
        mock_session.rollback.assert_awaited_once()
        assert project_repo.get_tree.await_count == 2
        assert tree.trades[0].order == 0

    async def test_statement_level_violation_rolls_back(
        self, trade_service, project_repo, trade_repo, mock_session, project, architect
    ):
        trade_repo.set_orders.side_effect = IntegrityError("UPDATE trades", {}, Exception("dup"))

        tree = await trade_service.reorder(project.id, [project.trades[0].id], architect)

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
        assert tree.id == project.id

    async def test_constraint_violation_rolls_back_and_reconciles(
        self, trade_service, project_repo, mock_session, project, architect
    ):
        mock_session.commit.side_effect = IntegrityError("UPDATE trades", {}, Exception("dup"))

        tree = await trade_service.reorder(project.id, [project.trades[0].id], architect)

        mock_session.rollback.assert_awaited_once()
        assert project_repo.get_tree.await_count == 2
        assert tree.id == project.id

    async def test_rejects_partial_id_list(self, trade_service, trade_repo, project, architect):
        project.trades.append(TradeFactory.build(order=1, project_id=project.id))

        with pytest.raises(DomainValidationError):
            await trade_service.reorder(project.id, [project.trades[0].id], architect)
        trade_repo.set_orders.assert_not_awaited()
