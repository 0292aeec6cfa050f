"""Task photo endpoints. Uploading the file itself happens elsewhere."""

from uuid import UUID

from fastapi import APIRouter, status

from src.buildtrack.api.dependencies import CurrentCaller, PhotoServiceDep
from src.buildtrack.schemas.photo import PhotoCreate, PhotoUpdate
from src.buildtrack.schemas.tree import PhotoNode
from src.buildtrack.services.project_tree import shape_photo

router = APIRouter(prefix="/photos", tags=["photos"])


@router.post(
    "",
    response_model=PhotoNode,
    status_code=status.HTTP_201_CREATED,
    summary="Attach photo",
    description="Record an uploaded photo on a task. New photos are internal by default.",
    responses={
        403: {"description": "Clients, or contractors not assigned to the trade"},
        404: {"description": "Task not found"},
    },
)
async def create_photo(
    request: PhotoCreate,
    caller: CurrentCaller,
    service: PhotoServiceDep,
) -> PhotoNode:
    photo = await service.create(request, caller)
    return shape_photo(photo)


@router.patch(
    "/{photo_id}",
    response_model=PhotoNode,
    summary="Update photo",
    description="Change visibility or caption. An empty caption removes it.",
    responses={
        403: {"description": "Caller is neither an architect nor the uploader"},
        404: {"description": "Photo not found"},
    },
)
async def update_photo(
    photo_id: UUID,
    request: PhotoUpdate,
    caller: CurrentCaller,
    service: PhotoServiceDep,
) -> PhotoNode:
    photo = await service.update(photo_id, request, caller)
    return shape_photo(photo)
