"""Unit tests for TaskService."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.buildtrack.core.exceptions import DomainValidationError, ForbiddenError, NotFoundError
from src.buildtrack.models.enums import Role, TaskStatus
from src.buildtrack.schemas.task import TaskCreate, TaskUpdate
from src.buildtrack.services.access import Caller
from src.buildtrack.services.task_service import TaskService
from tests.factories import TaskFactory, TradeFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def task_repo() -> MagicMock:
    repo = MagicMock()
    repo.add = MagicMock()
    repo.get_by_id = AsyncMock()
    repo.list_for_contractor = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def trade_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock()
    return repo


@pytest.fixture
def mock_session() -> AsyncMock:
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def task_service(task_repo, trade_repo, mock_session) -> TaskService:
    return TaskService(task_repo, trade_repo, mock_session)


class TestCreate:
    async def test_architect_creates(self, task_service, task_repo, trade_repo, architect):
        trade = TradeFactory.build()
        trade_repo.get_by_id.return_value = trade

        task = await task_service.create(
            TaskCreate(trade_id=trade.id, name="Steckdosen setzen"), architect
        )

        task_repo.add.assert_called_once_with(task)
        assert task.trade_id == trade.id
        assert task.status == TaskStatus.PENDING.value

    async def test_contractor_with_subtask_permission(
        self, task_service, trade_repo, contractor: Caller
    ):
        trade = TradeFactory.build(contractor_id=contractor.user_id, can_create_subtasks=True)
        trade_repo.get_by_id.return_value = trade

        task = await task_service.create(TaskCreate(trade_id=trade.id, name="Abnahme"), contractor)

        assert task.name == "Abnahme"

    async def test_contractor_without_subtask_permission(
        self, task_service, task_repo, trade_repo, contractor: Caller
    ):
        trade = TradeFactory.build(contractor_id=contractor.user_id, can_create_subtasks=False)
        trade_repo.get_by_id.return_value = trade

        with pytest.raises(ForbiddenError):
            await task_service.create(TaskCreate(trade_id=trade.id, name="Abnahme"), contractor)
        task_repo.add.assert_not_called()

    async def test_unknown_trade(self, task_service, trade_repo, architect):
        trade_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await task_service.create(TaskCreate(trade_id=uuid4(), name="Abnahme"), architect)


class TestUpdate:
    @pytest.fixture
    def trade(self, trade_repo, contractor: Caller):
        trade = TradeFactory.build(contractor_id=contractor.user_id)
        trade_repo.get_by_id.return_value = trade
        return trade

    async def test_block_with_reason(self, task_service, task_repo, trade, contractor):
        task = TaskFactory.build(trade_id=trade.id)
        task_repo.get_by_id.return_value = task

        await task_service.update(
            task.id,
            TaskUpdate(status=TaskStatus.BLOCKED, blocked_reason="Lieferung verspätet"),
            contractor,
        )

        assert task.status == TaskStatus.BLOCKED.value
        assert task.blocked_reason == "Lieferung verspätet"

    async def test_block_without_reason(self, task_service, task_repo, trade, contractor):
        task = TaskFactory.build(trade_id=trade.id)
        task_repo.get_by_id.return_value = task

        with pytest.raises(DomainValidationError):
            await task_service.update(task.id, TaskUpdate(status=TaskStatus.BLOCKED), contractor)

    async def test_unblocking_clears_reason(self, task_service, task_repo, trade, architect):
        task = TaskFactory.with_status(TaskStatus.BLOCKED, trade_id=trade.id)
        task_repo.get_by_id.return_value = task

        await task_service.update(task.id, TaskUpdate(status=TaskStatus.DONE), architect)

        assert task.status == TaskStatus.DONE.value
        assert task.blocked_reason is None

    async def test_reason_edit_keeps_blocked(self, task_service, task_repo, trade, architect):
        task = TaskFactory.with_status(TaskStatus.BLOCKED, trade_id=trade.id)
        task_repo.get_by_id.return_value = task

        await task_service.update(task.id, TaskUpdate(blocked_reason="Statik offen"), architect)

        assert task.status == TaskStatus.BLOCKED.value
        assert task.blocked_reason == "Statik offen"

    async def test_other_contractor_rejected(self, task_service, task_repo, trade, mock_session):
        task_repo.get_by_id.return_value = TaskFactory.build(trade_id=trade.id)
        stranger = Caller(user_id=uuid4(), role=Role.CONTRACTOR)

        with pytest.raises(ForbiddenError):
            await task_service.update(uuid4(), TaskUpdate(name="x"), stranger)
        mock_session.commit.assert_not_awaited()

    async def test_client_rejected(self, task_service, task_repo, trade, client_caller):
        task_repo.get_by_id.return_value = TaskFactory.build(trade_id=trade.id)

        with pytest.raises(ForbiddenError):
            await task_service.update(uuid4(), TaskUpdate(name="x"), client_caller)

    async def test_unknown_task(self, task_service, task_repo, architect):
        task_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await task_service.update(uuid4(), TaskUpdate(name="x"), architect)


class TestListMine:
    async def test_contractor(self, task_service, task_repo, contractor):
        project_id = uuid4()

        await task_service.list_mine(contractor, project_id)

        task_repo.list_for_contractor.assert_awaited_once_with(contractor.user_id, project_id)

    async def test_architect_rejected(self, task_service, architect):
        with pytest.raises(ForbiddenError):
            await task_service.list_mine(architect)
