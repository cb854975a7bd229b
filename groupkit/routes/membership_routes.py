from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from groupkit.database import get_db
from groupkit.dependencies import get_group_context, get_current_user
from groupkit.models.group_context import GroupContext
from groupkit.models.user import User
from groupkit.services.membership_service import MembershipService
from groupkit.schemas.membership_schemas import (
    MemberResponse,
    JoinResponse,
    RolesUpdate,
    OwnershipTransferRequest,
    LeaveResponse,
)

router = APIRouter()


@router.get("/{group_id}/members", response_model=list[MemberResponse])
async def list_members(
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """
    List members of the group with their roles and badges.

    Pending applicants are included only for callers who manage members.
    """
    service = MembershipService(db)
    return service.list_members(context)


@router.post(
    "/{group_id}/join",
    response_model=JoinResponse,
    status_code=status.HTTP_201_CREATED,
)
async def request_join(
    group_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Request to join a group.

    - Groups requiring approval create a **pending** membership
    - Open groups admit immediately; fair accounts charge the entry fee
    """
    service = MembershipService(db)
    return service.request_join(group_id, user)


@router.post("/{group_id}/members/{user_id}/approve", response_model=JoinResponse)
async def approve_join(
    user_id: int,
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """
    Approve a pending join request.

    - **Requires member management permission** (owner or manager)
    - Fair accounts collect the entry fee from the new member
    """
    service = MembershipService(db)
    return service.approve_join(user_id, context)


@router.put("/{group_id}/members/{user_id}/roles", response_model=MemberResponse)
async def update_member_roles(
    user_id: int,
    roles_update: RolesUpdate,
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """
    Replace a member's roles.

    - **Requires role assignment permission** (owner)
    - Any combination of treasurer, manager and member
    - Cannot change the owner's roles or your own
    """
    service = MembershipService(db)
    membership = service.update_roles(user_id, roles_update.roles, context)
    return service.describe_member(membership)


@router.post("/{group_id}/transfer-ownership", response_model=MemberResponse)
async def transfer_ownership(
    transfer: OwnershipTransferRequest,
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """
    Make another member the owner.

    - **Requires OWNER**
    - The previous owner becomes a plain member
    """
    service = MembershipService(db)
    membership = service.transfer_ownership(transfer.user_id, context)
    return service.describe_member(membership)


@router.post("/{group_id}/leave", response_model=LeaveResponse)
async def leave_group(
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """
    Leave the group.

    - Fair accounts refund one equal share
    - Operating accounts refund nothing
    - The owner must transfer ownership first
    """
    service = MembershipService(db)
    refunded = service.leave(context)

    return {
        "message": "Left group successfully",
        "group_id": context.group.id,
        "refunded": refunded,
    }
