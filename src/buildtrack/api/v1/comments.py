"""Task comment endpoints."""

from fastapi import APIRouter, status

from src.buildtrack.api.dependencies import CommentServiceDep, CurrentCaller
from src.buildtrack.schemas.comment import CommentCreate
from src.buildtrack.schemas.tree import CommentNode
from src.buildtrack.services.project_tree import shape_comment

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "",
    response_model=CommentNode,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on task",
    description="New comments are internal unless `visibility` is `client`.",
    responses={
        403: {"description": "Clients, or contractors not assigned to the trade"},
        404: {"description": "Task not found"},
    },
)
async def create_comment(
    request: CommentCreate,
    caller: CurrentCaller,
    service: CommentServiceDep,
) -> CommentNode:
    comment = await service.create(request, caller)
    return shape_comment(comment)
