"""Caller identity from the trusted headers set by the auth gateway."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status

from src.buildtrack.core.config import get_settings
from src.buildtrack.core.logging import bind_caller_context
from src.buildtrack.models.enums import Role
from src.buildtrack.services.access import Caller


async def get_caller(request: Request) -> Caller:
    """Build the caller from the identity headers.

    The gateway authenticates the user; this only parses what it forwards.
    """
    settings = get_settings()
    raw_user_id = request.headers.get(settings.identity_user_header)
    raw_role = request.headers.get(settings.identity_role_header)

    if not raw_user_id or not raw_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller identity headers",
        )

    try:
        user_id = UUID(raw_user_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id header",
        ) from e

    try:
        role = Role(raw_role.strip().lower())
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid role header",
        ) from e

    name = request.headers.get(settings.identity_name_header, "").strip() or None

    bind_caller_context(user_id, role.value)
    return Caller(user_id=user_id, role=role, name=name)


CurrentCaller = Annotated[Caller, Depends(get_caller)]
