"""Task endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.buildtrack.api.dependencies import CurrentCaller, TaskServiceDep
from src.buildtrack.schemas.task import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "/mine",
    response_model=list[TaskRead],
    summary="List my tasks",
    description="Tasks on trades assigned to the calling contractor.",
    responses={403: {"description": "Caller is not a contractor"}},
)
async def list_my_tasks(
    caller: CurrentCaller,
    service: TaskServiceDep,
    project_id: Annotated[UUID | None, Query(description="Restrict to one project")] = None,
) -> list[TaskRead]:
    tasks = await service.list_mine(caller, project_id)
    return [TaskRead.model_validate(t) for t in tasks]


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    description=(
        "Architects may add tasks to any trade; contractors only to their own "
        "trades when the trade allows subtasks."
    ),
    responses={
        403: {"description": "Caller may not create tasks on this trade"},
        404: {"description": "Trade not found"},
    },
)
async def create_task(
    request: TaskCreate,
    caller: CurrentCaller,
    service: TaskServiceDep,
) -> TaskRead:
    task = await service.create(request, caller)
    return TaskRead.model_validate(task)


@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update task",
    responses={
        403: {"description": "Caller may not update this task"},
        404: {"description": "Task not found"},
        422: {"description": "Blocked without a reason"},
    },
)
async def update_task(
    task_id: UUID,
    request: TaskUpdate,
    caller: CurrentCaller,
    service: TaskServiceDep,
) -> TaskRead:
    task = await service.update(task_id, request, caller)
    return TaskRead.model_validate(task)
