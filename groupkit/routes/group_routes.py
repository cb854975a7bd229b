from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from groupkit.database import get_db
from groupkit.dependencies import get_group_context, get_current_user
from groupkit.models.group_context import GroupContext
from groupkit.models.user import User
from groupkit.services.group_service import GroupService
from groupkit.schemas.group_schemas import (
    GroupCreate,
    GroupResponse,
    GroupDetailResponse,
    UserGroupResponse,
    MyRoleResponse,
)

router = APIRouter()


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    data: GroupCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Create a group and its account; the caller becomes the owner"""
    service = GroupService(db)
    return service.create_group(data, user)


@router.get("", response_model=list[UserGroupResponse])
async def list_user_groups(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    List all groups the authenticated user belongs to.

    Each entry carries the user's primary role and badge label in that group.
    """
    service = GroupService(db)
    return service.list_user_groups(user)


@router.get("/{group_id}", response_model=GroupDetailResponse)
async def get_group(
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """Get group details"""
    service = GroupService(db)
    return service.get_group(context)


@router.get("/{group_id}/my-role", response_model=MyRoleResponse)
async def get_my_role(
    context: GroupContext = Depends(get_group_context),
    db: Session = Depends(get_db),
):
    """
    Get the caller's roles and permissions in the group.

    Returns the primary role shown on badges, every role held, the merged
    permission set, and the display label and colour.
    """
    service = GroupService(db)
    return service.get_my_role(context)
