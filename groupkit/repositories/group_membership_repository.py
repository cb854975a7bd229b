"""Repository for GroupMembership model operations."""

from sqlalchemy.orm import Session
from groupkit.models.group_membership import GroupMembership, GroupRoleAssignment
from groupkit.models.role import GroupRole


class GroupMembershipRepository:
    """Repository for GroupMembership model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_membership(self, user_id: int, group_id: int) -> GroupMembership | None:
        """
        Get membership for a specific user in a specific group.

        Args:
            user_id: User ID
            group_id: Group ID

        Returns:
            GroupMembership object or None if not found
        """
        return (
            self.db.query(GroupMembership)
            .filter(
                GroupMembership.user_id == user_id,
                GroupMembership.group_id == group_id,
            )
            .first()
        )

    def get_group_members(self, group_id: int) -> list[GroupMembership]:
        """
        Get all memberships for a group, pending applicants included.

        Args:
            group_id: Group ID

        Returns:
            List of GroupMembership objects for the group
        """
        return (
            self.db.query(GroupMembership)
            .filter(GroupMembership.group_id == group_id)
            .order_by(GroupMembership.id)
            .all()
        )

    def get_owner(self, group_id: int) -> GroupMembership | None:
        """
        Get the owner membership for a group.

        Args:
            group_id: Group ID

        Returns:
            GroupMembership holding the OWNER role or None
        """
        return (
            self.db.query(GroupMembership)
            .join(GroupRoleAssignment)
            .filter(
                GroupMembership.group_id == group_id,
                GroupRoleAssignment.role == GroupRole.OWNER,
            )
            .first()
        )

    def create(self, membership: GroupMembership) -> GroupMembership:
        """
        Create a new group membership.

        Raises:
            IntegrityError: If (group_id, user_id) already exists
        """
        self.db.add(membership)
        self.db.commit()
        self.db.refresh(membership)
        return membership

    def update(self, membership: GroupMembership) -> GroupMembership:
        """Persist changes to a membership and its role assignments"""
        self.db.commit()
        self.db.refresh(membership)
        return membership

    def delete(self, membership: GroupMembership) -> None:
        """
        Remove a user from a group.

        Args:
            membership: GroupMembership object to delete
        """
        self.db.delete(membership)
        self.db.commit()
