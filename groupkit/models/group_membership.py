"""Group membership model linking users to groups with a set of roles."""

from sqlalchemy import Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from groupkit.models.base import Base, TimestampMixin
from groupkit.models.role import GroupRole

if TYPE_CHECKING:
    from groupkit.models.user import User
    from groupkit.models.group import Group


class GroupMembership(Base, TimestampMixin):
    """
    Join table linking users to groups.

    Unlike a single-role membership, each row owns a collection of
    GroupRoleAssignment rows so a user can be e.g. TREASURER and MANAGER
    in the same group.

    Constraints:
    - Unique(group_id, user_id) - one membership per user per group
    - Each group has exactly one OWNER (enforced at application layer)
    """

    __tablename__ = "group_memberships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    group: Mapped["Group"] = relationship("Group", back_populates="memberships")
    user: Mapped["User"] = relationship("User", back_populates="memberships")
    role_assignments: Mapped[list["GroupRoleAssignment"]] = relationship(
        "GroupRoleAssignment",
        back_populates="membership",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_user"),
    )

    @property
    def roles(self) -> frozenset[GroupRole]:
        return frozenset(assignment.role for assignment in self.role_assignments)

    def set_roles(self, roles: set[GroupRole] | frozenset[GroupRole]) -> None:
        """Replace the held roles, keeping rows for roles that stay"""
        kept = [a for a in self.role_assignments if a.role in roles]
        held = {a.role for a in kept}
        added = [GroupRoleAssignment(role=role) for role in roles if role not in held]
        self.role_assignments = kept + added

    def is_pending(self) -> bool:
        return GroupRole.PENDING in self.roles

    def __repr__(self) -> str:
        roles = ",".join(sorted(role.value for role in self.roles))
        return f"<GroupMembership(group_id={self.group_id}, user_id={self.user_id}, roles={roles})>"


class GroupRoleAssignment(Base, TimestampMixin):
    """One role held by one membership"""

    __tablename__ = "group_role_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    membership_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("group_memberships.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[GroupRole] = mapped_column(
        Enum(GroupRole, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )

    membership: Mapped["GroupMembership"] = relationship(
        "GroupMembership", back_populates="role_assignments"
    )

    __table_args__ = (
        UniqueConstraint("membership_id", "role", name="uq_membership_role"),
    )
