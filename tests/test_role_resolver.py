from itertools import combinations

import pytest

from groupkit.models.permissions import PermissionSet, ROLE_CAPABILITIES
from groupkit.models.role import GroupRole, ROLE_COLORS
from groupkit.services.role_resolver import (
    RoleResolver,
    InMemoryRoleStore,
    primary_role,
    permissions_for,
    label_for,
)

APPROVED_ROLES = [GroupRole.OWNER, GroupRole.TREASURER, GroupRole.MANAGER, GroupRole.MEMBER]


def all_subsets(roles):
    return [frozenset(c) for r in range(len(roles) + 1) for c in combinations(roles, r)]


@pytest.fixture
def resolver():
    """Snapshot mirroring a user who holds different roles across six groups"""
    store = InMemoryRoleStore(
        {
            1: {GroupRole.OWNER},
            2: {GroupRole.TREASURER},
            3: {GroupRole.MANAGER},
            4: {GroupRole.MEMBER},
            5: {GroupRole.TREASURER, GroupRole.MANAGER},
            6: {GroupRole.PENDING},
        }
    )
    return RoleResolver(store)


class TestPrimaryRole:
    """Tests for resolve_primary_role"""

    def test_single_roles(self, resolver):
        assert resolver.resolve_primary_role(1) == GroupRole.OWNER
        assert resolver.resolve_primary_role(2) == GroupRole.TREASURER
        assert resolver.resolve_primary_role(3) == GroupRole.MANAGER
        assert resolver.resolve_primary_role(4) == GroupRole.MEMBER

    def test_compound_roles_pick_treasurer(self, resolver):
        assert resolver.resolve_primary_role(5) == GroupRole.TREASURER

    def test_missing_group_defaults_to_member(self, resolver):
        """Unknown group ids resolve as a plain member"""
        assert resolver.resolve_primary_role(999) == GroupRole.MEMBER
        assert resolver.roles(999) == frozenset({GroupRole.MEMBER})

    def test_pending_alone_is_pending(self, resolver):
        assert resolver.resolve_primary_role(6) == GroupRole.PENDING

    def test_pending_never_shadows_approved_role(self):
        assert primary_role({GroupRole.PENDING, GroupRole.MEMBER}) == GroupRole.MEMBER

    @pytest.mark.parametrize("roles", all_subsets(APPROVED_ROLES))
    def test_priority_order_for_every_subset(self, roles):
        """Owner > treasurer > manager > member for every combination"""
        expected = next(
            (role for role in APPROVED_ROLES if role in roles), GroupRole.MEMBER
        )
        assert primary_role(roles) == expected


class TestPermissions:
    """Tests for resolve_permissions"""

    def test_owner_has_everything(self, resolver):
        assert resolver.resolve_permissions(1) == PermissionSet.all_granted()

    def test_treasurer_permissions(self, resolver):
        perms = resolver.resolve_permissions(2)
        assert perms.can_withdraw
        assert perms.can_manage_dues
        assert perms.can_manage_shares
        assert perms.can_change_management_type
        assert perms.can_finalize_schedule
        assert not perms.can_manage_members
        assert not perms.can_assign_roles

    def test_manager_permissions(self, resolver):
        perms = resolver.resolve_permissions(3)
        assert perms.can_manage_group
        assert perms.can_manage_members
        assert perms.can_delete_posts
        assert perms.can_delete_comments
        assert not perms.can_withdraw
        assert not perms.can_assign_roles

    def test_member_and_pending_have_nothing(self, resolver):
        assert resolver.resolve_permissions(4) == PermissionSet.none()
        assert resolver.resolve_permissions(6) == PermissionSet.none()
        assert resolver.resolve_permissions(999) == PermissionSet.none()

    def test_treasurer_manager_combines_both(self, resolver):
        perms = resolver.resolve_permissions(5)
        assert perms == ROLE_CAPABILITIES[GroupRole.TREASURER] | ROLE_CAPABILITIES[GroupRole.MANAGER]
        assert perms.can_withdraw and perms.can_manage_members
        assert not perms.can_assign_roles

    @pytest.mark.parametrize("roles", all_subsets(list(GroupRole)))
    def test_union_covers_every_held_role(self, roles):
        """Holding a role never yields fewer permissions than that role alone"""
        merged = permissions_for(roles)
        for role in roles:
            assert merged.issuperset(ROLE_CAPABILITIES[role])

    @pytest.mark.parametrize("roles", all_subsets(list(GroupRole)))
    def test_adding_a_role_never_removes_permissions(self, roles):
        before = permissions_for(roles)
        for extra in GroupRole:
            assert permissions_for(roles | {extra}).issuperset(before)

    @pytest.mark.parametrize("roles", all_subsets(list(GroupRole)))
    def test_owner_is_complete_regardless_of_other_roles(self, roles):
        assert permissions_for(roles | {GroupRole.OWNER}) == PermissionSet.all_granted()


class TestDisplay:
    """Tests for display_label and display_color"""

    def test_compound_label(self, resolver):
        assert resolver.display_label(5) == "Treasurer+Manager"

    def test_owner_label_wins(self):
        assert label_for({GroupRole.OWNER, GroupRole.TREASURER}) == "Owner"
        assert label_for({GroupRole.OWNER, GroupRole.TREASURER, GroupRole.MANAGER}) == "Owner"

    def test_single_labels(self, resolver):
        assert resolver.display_label(1) == "Owner"
        assert resolver.display_label(2) == "Treasurer"
        assert resolver.display_label(3) == "Manager"
        assert resolver.display_label(4) == "Member"
        assert resolver.display_label(6) == "Pending"
        assert resolver.display_label(999) == "Member"

    @pytest.mark.parametrize("roles", all_subsets(APPROVED_ROLES))
    def test_compound_label_only_for_treasurer_and_manager(self, roles):
        """Compound label iff both staff roles are held without owner"""
        is_compound = label_for(roles) == "Treasurer+Manager"
        expected = (
            GroupRole.OWNER not in roles
            and {GroupRole.TREASURER, GroupRole.MANAGER} <= roles
        )
        assert is_compound == expected

    def test_color_follows_primary_role(self, resolver):
        assert resolver.display_color(1) == ROLE_COLORS[GroupRole.OWNER]
        assert resolver.display_color(5) == ROLE_COLORS[GroupRole.TREASURER]
        assert resolver.display_color(999) == ROLE_COLORS[GroupRole.MEMBER]


def test_resolver_is_idempotent(resolver):
    """Repeated calls on the same snapshot give identical answers"""
    for group_id in (1, 2, 3, 4, 5, 6, 999):
        first = (
            resolver.resolve_primary_role(group_id),
            resolver.resolve_permissions(group_id),
            resolver.display_label(group_id),
            resolver.display_color(group_id),
        )
        second = (
            resolver.resolve_primary_role(group_id),
            resolver.resolve_permissions(group_id),
            resolver.display_label(group_id),
            resolver.display_color(group_id),
        )
        assert first == second
