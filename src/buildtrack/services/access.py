"""Role-based access control and the photo/comment visibility filter.

Roles form a closed set. Each decision matches on every role and ends in
``assert_never`` so a new role cannot slip through unhandled.
"""

from dataclasses import dataclass
from typing import assert_never
from uuid import UUID

from src.buildtrack.core.exceptions import ForbiddenError
from src.buildtrack.models.enums import Role, Visibility
from src.buildtrack.models.project import Photo, Project, Trade


@dataclass(frozen=True)
class Caller:
    """Authenticated caller, already validated by the auth gateway.

    Attributes:
        user_id: The caller's user id
        role: The caller's fixed role
        name: Display name forwarded by the gateway, if any
    """

    user_id: UUID
    role: Role
    name: str | None = None


def is_visible(visibility: Visibility, role: Role) -> bool:
    """Whether a photo or comment with this visibility may be shown to ``role``."""
    match Visibility(visibility):
        case Visibility.CLIENT:
            return True
        case Visibility.INTERNAL:
            match role:
                case Role.ARCHITECT | Role.CONTRACTOR:
                    return True
                case Role.CLIENT:
                    return False
                case _:
                    assert_never(role)
        case _ as unreachable:
            assert_never(unreachable)


def is_assigned_contractor(trade: Trade, caller: Caller) -> bool:
    return trade.contractor_id is not None and trade.contractor_id == caller.user_id


def ensure_can_read_project(project: Project, caller: Caller) -> None:
    """Coarse read check, applied before any leaf filtering.

    Raises:
        ForbiddenError: Client not owning the project, or contractor without
            a trade in it.
    """
    match caller.role:
        case Role.ARCHITECT:
            return
        case Role.CLIENT:
            if project.client_id != caller.user_id:
                raise ForbiddenError()
        case Role.CONTRACTOR:
            if not any(is_assigned_contractor(t, caller) for t in project.trades):
                raise ForbiddenError()
        case _:
            assert_never(caller.role)


def ensure_can_write_project(project: Project, caller: Caller) -> None:
    """Write check for the project and its trades.

    Only architects write. A project without an owning architect may be
    written by any architect.

    Raises:
        ForbiddenError: Non-architect caller, or an architect who does not
            own the project.
    """
    match caller.role:
        case Role.ARCHITECT:
            if project.architect_id is not None and project.architect_id != caller.user_id:
                raise ForbiddenError()
        case Role.CONTRACTOR | Role.CLIENT:
            raise ForbiddenError("Only architects may modify projects")
        case _:
            assert_never(caller.role)


def can_create_task(trade: Trade, caller: Caller) -> bool:
    """Architects always; contractors only on their own trade when it allows subtasks."""
    match caller.role:
        case Role.ARCHITECT:
            return True
        case Role.CONTRACTOR:
            return is_assigned_contractor(trade, caller) and trade.can_create_subtasks
        case Role.CLIENT:
            return False
        case _:
            assert_never(caller.role)


def ensure_can_create_task(trade: Trade, caller: Caller) -> None:
    """Raises ForbiddenError unless ``can_create_task`` allows it."""
    if not can_create_task(trade, caller):
        if caller.role == Role.CONTRACTOR and is_assigned_contractor(trade, caller):
            raise ForbiddenError("Trade does not allow contractors to create tasks")
        raise ForbiddenError()


def ensure_can_update_task(trade: Trade, caller: Caller) -> None:
    """Architects update any task, contractors only tasks of their own trades.

    Raises:
        ForbiddenError: Clients, and contractors not assigned to the trade.
    """
    match caller.role:
        case Role.ARCHITECT:
            return
        case Role.CONTRACTOR:
            if not is_assigned_contractor(trade, caller):
                raise ForbiddenError()
        case Role.CLIENT:
            raise ForbiddenError()
        case _:
            assert_never(caller.role)


def ensure_can_annotate_task(trade: Trade, caller: Caller) -> None:
    """Comments and photos: architects on any task, contractors on their own trades.

    Raises:
        ForbiddenError: Clients, and contractors not assigned to the trade.
    """
    match caller.role:
        case Role.ARCHITECT:
            return
        case Role.CONTRACTOR:
            if not is_assigned_contractor(trade, caller):
                raise ForbiddenError()
        case Role.CLIENT:
            raise ForbiddenError("Clients may not add comments or photos")
        case _:
            assert_never(caller.role)


def ensure_can_edit_photo(photo: Photo, caller: Caller) -> None:
    """Only architects and the uploader may change a photo's visibility or caption."""
    match caller.role:
        case Role.ARCHITECT:
            return
        case Role.CONTRACTOR:
            if photo.uploaded_by != caller.user_id:
                raise ForbiddenError("Only the uploader may edit this photo")
        case Role.CLIENT:
            raise ForbiddenError("Clients may not edit photos")
        case _:
            assert_never(caller.role)
