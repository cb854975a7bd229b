"""
Role resolution: turn the roles a user holds in a group into a badge
(primary role, label, colour) and a permission set.

The module-level functions work on a plain role set. RoleResolver adds the
lookup by group id through an injected RoleStore, so the same logic runs
against a fixture snapshot or the database.
"""

from collections.abc import Iterable, Mapping
from typing import Protocol

from sqlalchemy.orm import Session

from groupkit.models.permissions import PermissionSet, ROLE_CAPABILITIES
from groupkit.models.role import (
    GroupRole,
    DEFAULT_ROLES,
    ROLE_PRIORITY,
    ROLE_LABELS,
    ROLE_COLORS,
    STAFF_ROLES,
)
from groupkit.repositories.group_membership_repository import GroupMembershipRepository

COMPOUND_LABEL_SEPARATOR = "+"


class RoleStore(Protocol):
    """Source of the current user's role set per group"""

    def get_roles(self, group_id: int) -> frozenset[GroupRole]: ...


def normalize_roles(roles: Iterable[GroupRole]) -> frozenset[GroupRole]:
    """An empty role set means a plain member."""
    roles = frozenset(roles)
    return roles or DEFAULT_ROLES


def primary_role(roles: Iterable[GroupRole]) -> GroupRole:
    """
    Highest-priority role held: OWNER > TREASURER > MANAGER > MEMBER.

    PENDING only comes out when it is the sole role, i.e. for an applicant
    who has not been approved yet.
    """
    held = normalize_roles(roles)
    return next(role for role in ROLE_PRIORITY if role in held)


def permissions_for(roles: Iterable[GroupRole]) -> PermissionSet:
    """Union of the capability rows of every role held."""
    result = PermissionSet.none()
    for role in normalize_roles(roles):
        result = result | ROLE_CAPABILITIES[role]
    return result


def label_for(roles: Iterable[GroupRole]) -> str:
    """
    Badge text for a role set.

    Owner wins outright. Otherwise every staff role held is listed in
    canonical order, so {treasurer, manager} reads "Treasurer+Manager".
    """
    held = normalize_roles(roles)
    if GroupRole.OWNER in held:
        return ROLE_LABELS[GroupRole.OWNER]

    staff = [ROLE_LABELS[role] for role in STAFF_ROLES if role in held]
    if staff:
        return COMPOUND_LABEL_SEPARATOR.join(staff)

    return ROLE_LABELS[primary_role(held)]


def color_for(roles: Iterable[GroupRole]) -> str:
    return ROLE_COLORS[primary_role(roles)]


class RoleResolver:
    """Resolves badges and permissions for the current user by group id"""

    def __init__(self, store: RoleStore):
        self.store = store

    def roles(self, group_id: int) -> frozenset[GroupRole]:
        return normalize_roles(self.store.get_roles(group_id))

    def resolve_primary_role(self, group_id: int) -> GroupRole:
        return primary_role(self.roles(group_id))

    def resolve_permissions(self, group_id: int) -> PermissionSet:
        return permissions_for(self.roles(group_id))

    def display_label(self, group_id: int) -> str:
        return label_for(self.roles(group_id))

    def display_color(self, group_id: int) -> str:
        return color_for(self.roles(group_id))


class InMemoryRoleStore:
    """
    Role store backed by a fixed snapshot.

    Args:
        assignments: group id -> roles the current user holds there.
            Groups not present resolve to an empty set (plain member).
    """

    def __init__(self, assignments: Mapping[int, Iterable[GroupRole]]):
        self._assignments = {
            group_id: frozenset(roles) for group_id, roles in assignments.items()
        }

    def get_roles(self, group_id: int) -> frozenset[GroupRole]:
        return self._assignments.get(group_id, frozenset())


class MembershipRoleStore:
    """Role store reading one user's memberships from the database"""

    def __init__(self, db: Session, user_id: int):
        self.repo = GroupMembershipRepository(db)
        self.user_id = user_id

    def get_roles(self, group_id: int) -> frozenset[GroupRole]:
        membership = self.repo.get_membership(self.user_id, group_id)
        if not membership:
            return frozenset()
        return membership.roles
