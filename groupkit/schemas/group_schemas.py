from datetime import datetime
from pydantic import BaseModel, Field
from groupkit.models.account_snapshot import ManagementType
from groupkit.models.role import GroupRole


class GroupCreate(BaseModel):
    """Schema for creating a group together with its account"""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    max_members: int | None = Field(None, ge=1, le=1000)
    require_approval: bool = True
    management_type: ManagementType = ManagementType.OPERATING
    opening_balance: int = Field(default=0, ge=0)


class GroupResponse(BaseModel):
    """Group details response"""

    id: int
    name: str
    description: str | None
    max_members: int
    require_approval: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GroupDetailResponse(GroupResponse):
    """Group details with owner and head count"""

    owner_user_id: int | None
    member_count: int


class UserGroupResponse(BaseModel):
    """Group listed with the caller's badge in it"""

    id: int
    name: str
    primary_role: GroupRole
    label: str
    created_at: datetime


class PermissionSetResponse(BaseModel):
    """The ten capabilities, flattened"""

    can_manage_group: bool
    can_manage_dues: bool
    can_withdraw: bool
    can_manage_shares: bool
    can_manage_members: bool
    can_delete_posts: bool
    can_delete_comments: bool
    can_finalize_schedule: bool
    can_change_management_type: bool
    can_assign_roles: bool

    model_config = {"from_attributes": True}


class MyRoleResponse(BaseModel):
    """Caller's roles and resolved permissions in a group"""

    primary_role: GroupRole
    roles: list[GroupRole]
    permissions: PermissionSetResponse
    label: str
    color: str
    description: str
