"""Group role enum and its display tables."""

from enum import Enum as PyEnum


class GroupRole(str, PyEnum):
    """
    Roles a user can hold inside a group.

    A user may hold several roles at once (e.g. TREASURER and MANAGER).
    OWNER and PENDING are singletons in practice: an owner holds every
    permission anyway, and a pending applicant holds nothing else.

    - OWNER: Everything, including role assignment and ownership transfer
    - TREASURER: Dues, withdrawals, shares, settlement model
    - MANAGER: Group details, members, posts and comments, schedules
    - MEMBER: Baseline approved member
    - PENDING: Join request awaiting approval
    """

    OWNER = "owner"
    TREASURER = "treasurer"
    MANAGER = "manager"
    MEMBER = "member"
    PENDING = "pending"


# Highest first. Used to pick the single role shown on badges.
ROLE_PRIORITY: tuple[GroupRole, ...] = (
    GroupRole.OWNER,
    GroupRole.TREASURER,
    GroupRole.MANAGER,
    GroupRole.MEMBER,
    GroupRole.PENDING,
)

# Non-owner elevated roles, in the order they appear in compound labels
STAFF_ROLES: tuple[GroupRole, ...] = (GroupRole.TREASURER, GroupRole.MANAGER)

DEFAULT_ROLES: frozenset[GroupRole] = frozenset({GroupRole.MEMBER})

ROLE_LABELS: dict[GroupRole, str] = {
    GroupRole.OWNER: "Owner",
    GroupRole.TREASURER: "Treasurer",
    GroupRole.MANAGER: "Manager",
    GroupRole.MEMBER: "Member",
    GroupRole.PENDING: "Pending",
}

ROLE_COLORS: dict[GroupRole, str] = {
    GroupRole.OWNER: "bg-purple-100 text-purple-700",
    GroupRole.TREASURER: "bg-green-100 text-green-700",
    GroupRole.MANAGER: "bg-blue-100 text-blue-700",
    GroupRole.MEMBER: "bg-stone-100 text-stone-700",
    GroupRole.PENDING: "bg-yellow-100 text-yellow-700",
}

ROLE_DESCRIPTIONS: dict[GroupRole, str] = {
    GroupRole.OWNER: "All permissions (includes treasurer and manager)",
    GroupRole.TREASURER: "Withdraw dues, manage shares, settle accounts",
    GroupRole.MANAGER: "Manage members, finalize schedules, moderate posts",
    GroupRole.MEMBER: "Basic access (view, join events, deposit dues)",
    GroupRole.PENDING: "Waiting for join approval",
}
