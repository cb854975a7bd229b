"""Group context for request authorization."""

from dataclasses import dataclass
from groupkit.models.user import User
from groupkit.models.group import Group
from groupkit.models.group_membership import GroupMembership
from groupkit.models.permissions import PermissionSet
from groupkit.models.role import GroupRole


@dataclass
class GroupContext:
    """
    Complete group context for request authorization.

    Built once per request from the authenticated user and the group in
    the URL. The permission set is resolved from every role the user
    holds in the group, so checks never look at a single role.

    Attributes:
        user: The authenticated User object
        group: The Group being accessed
        membership: The user's membership in the group
        permissions: Union of the capabilities of all held roles
    """

    user: User
    group: Group
    membership: GroupMembership
    permissions: PermissionSet

    @property
    def roles(self) -> frozenset[GroupRole]:
        return self.membership.roles

    def can(self, capability: str) -> bool:
        """
        Check a single capability by name.

        Args:
            capability: PermissionSet field, e.g. "can_withdraw"
        """
        return getattr(self.permissions, capability)

    def is_owner(self) -> bool:
        """Check if user is the group owner."""
        return GroupRole.OWNER in self.roles

    def is_approved(self) -> bool:
        """Check if user is a full member (not awaiting approval)."""
        return GroupRole.PENDING not in self.roles

    def __repr__(self) -> str:
        roles = ",".join(sorted(role.value for role in self.roles))
        return f"<GroupContext(user_id={self.user.id}, group_id={self.group.id}, roles={roles})>"
