"""Project endpoints: list, nested tree, progress and architect writes."""

from typing import Annotated, assert_never
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.buildtrack.api.dependencies import (
    CurrentCaller,
    ProjectServiceDep,
    ProjectTreeServiceDep,
)
from src.buildtrack.models.enums import Role
from src.buildtrack.schemas.pagination import PaginatedResponse
from src.buildtrack.schemas.progress import ClientProjectProgress, ProjectProgress
from src.buildtrack.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.buildtrack.schemas.tree import ProjectTree
from src.buildtrack.services.progress import client_project_progress, project_progress

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description=(
        "Architects see every project, clients their own projects and contractors "
        "projects with at least one trade assigned to them."
    ),
)
async def list_projects(
    caller: CurrentCaller,
    trees: ProjectTreeServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await trees.list_for_caller(caller, cursor, limit)
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get(
    "/{project_id}",
    response_model=ProjectTree,
    summary="Get project tree",
    description=(
        "Project with trades sorted by order, their tasks, and the photos and "
        "comments visible to the caller."
    ),
    responses={
        403: {"description": "Caller may not read this project"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    caller: CurrentCaller,
    trees: ProjectTreeServiceDep,
) -> ProjectTree:
    return await trees.load(project_id, caller)


@router.get(
    "/{project_id}/progress",
    response_model=ProjectProgress | ClientProjectProgress,
    summary="Get project progress",
    description="Clients get simplified per-trade statuses; other roles the full breakdown.",
    responses={
        403: {"description": "Caller may not read this project"},
        404: {"description": "Project not found"},
    },
)
async def get_project_progress(
    project_id: UUID,
    caller: CurrentCaller,
    trees: ProjectTreeServiceDep,
) -> ProjectProgress | ClientProjectProgress:
    tree = await trees.load(project_id, caller)
    match caller.role:
        case Role.CLIENT:
            return client_project_progress(tree)
        case Role.ARCHITECT | Role.CONTRACTOR:
            return project_progress(tree)
        case _:
            assert_never(caller.role)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        403: {"description": "Only architects may create projects"},
    },
)
async def create_project(
    request: ProjectCreate,
    caller: CurrentCaller,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await service.create(request, caller)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    responses={
        200: {"description": "Project updated"},
        403: {"description": "Caller may not modify this project"},
        404: {"description": "Project not found"},
        422: {"description": "Dates out of order"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    caller: CurrentCaller,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await service.update(project_id, request, caller)
    return ProjectRead.model_validate(project)
