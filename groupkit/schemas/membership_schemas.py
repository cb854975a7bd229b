from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from groupkit.models.role import GroupRole


class MemberResponse(BaseModel):
    """Group member details with user info"""

    id: int
    user_id: int
    auth_user_id: str
    roles: list[GroupRole]
    primary_role: GroupRole
    label: str
    created_at: datetime


class JoinResponse(BaseModel):
    """Result of a join request or approval"""

    membership_id: int
    group_id: int
    user_id: int
    roles: list[GroupRole]
    paid_entry_fee: int = 0


class RolesUpdate(BaseModel):
    """Replace a member's roles (requires role assignment permission)"""

    roles: list[GroupRole] = Field(..., min_length=1, description="Roles to hold from now on")

    @field_validator("roles")
    @classmethod
    def only_assignable_roles(cls, roles: list[GroupRole]) -> list[GroupRole]:
        forbidden = {GroupRole.OWNER, GroupRole.PENDING} & set(roles)
        if forbidden:
            names = ", ".join(sorted(role.value for role in forbidden))
            raise ValueError(f"Roles cannot be assigned directly: {names}")
        return sorted(set(roles), key=lambda role: role.value)


class OwnershipTransferRequest(BaseModel):
    """Hand the OWNER role to another approved member"""

    user_id: int = Field(..., gt=0, description="User ID of the new owner")


class LeaveResponse(BaseModel):
    """Response after leaving a group"""

    message: str
    group_id: int
    refunded: int
