"""Repository for Group model operations."""

from sqlalchemy.orm import Session
from groupkit.models.group import Group
from groupkit.models.group_membership import GroupMembership


class GroupRepository:
    """Repository for Group model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, group_id: int) -> Group | None:
        """
        Get group by ID.

        Args:
            group_id: Group ID

        Returns:
            Group object or None if not found
        """
        return self.db.query(Group).filter(Group.id == group_id).first()

    def get_for_user(self, user_id: int) -> list[Group]:
        """Get all groups a user has a membership in (pending included)"""
        return (
            self.db.query(Group)
            .join(GroupMembership, GroupMembership.group_id == Group.id)
            .filter(GroupMembership.user_id == user_id)
            .order_by(Group.id)
            .all()
        )

    def create(self, group: Group) -> Group:
        """
        Create a new group.

        The group is flushed and committed together with any account and
        membership objects attached to it.

        Args:
            group: Group object to create

        Returns:
            Created Group object with ID populated
        """
        self.db.add(group)
        self.db.commit()
        self.db.refresh(group)
        return group

    def update(self, group: Group) -> Group:
        """Update an existing group"""
        self.db.commit()
        self.db.refresh(group)
        return group
