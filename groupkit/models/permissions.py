"""Permission set and the static role -> capability table."""

from dataclasses import dataclass, fields, replace

from groupkit.core.exceptions import InvariantViolation
from groupkit.models.role import GroupRole


@dataclass(frozen=True)
class PermissionSet:
    """
    Fixed-shape record of the capabilities a user has in a group.

    Never stored; always derived from the roles a user holds. Combining two
    sets with ``|`` grants a capability if either side grants it, so no
    role can veto another role's grant.
    """

    can_manage_group: bool = False
    can_manage_dues: bool = False
    can_withdraw: bool = False
    can_manage_shares: bool = False
    can_manage_members: bool = False
    can_delete_posts: bool = False
    can_delete_comments: bool = False
    can_finalize_schedule: bool = False
    can_change_management_type: bool = False
    can_assign_roles: bool = False

    @classmethod
    def none(cls) -> "PermissionSet":
        return cls()

    @classmethod
    def all_granted(cls) -> "PermissionSet":
        return cls(**{name: True for name in cls.capability_names()})

    @classmethod
    def capability_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def of(cls, *names: str) -> "PermissionSet":
        """Build a set granting exactly the named capabilities."""
        unknown = set(names) - set(cls.capability_names())
        if unknown:
            raise ValueError(f"Unknown capabilities: {sorted(unknown)}")
        return cls(**{name: True for name in names})

    def __or__(self, other: "PermissionSet") -> "PermissionSet":
        if not isinstance(other, PermissionSet):
            return NotImplemented
        return replace(
            self,
            **{name: getattr(self, name) or getattr(other, name) for name in self.capability_names()},
        )

    def granted(self) -> frozenset[str]:
        """Names of the capabilities this set grants"""
        return frozenset(name for name in self.capability_names() if getattr(self, name))

    def issuperset(self, other: "PermissionSet") -> bool:
        return self.granted() >= other.granted()

    def is_complete(self) -> bool:
        return len(self.granted()) == len(self.capability_names())

    def to_dict(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in self.capability_names()}


def build_capability_table(
    rows: dict[GroupRole, PermissionSet],
) -> dict[GroupRole, PermissionSet]:
    """
    Validate and freeze a role -> capability table.

    Raises:
        InvariantViolation: If a role has no row, the owner row does not grant
            every capability, or the pending row grants anything
    """
    missing = [role for role in GroupRole if role not in rows]
    if missing:
        raise InvariantViolation(
            f"Capability table missing roles: {[role.value for role in missing]}"
        )

    if not rows[GroupRole.OWNER].is_complete():
        missing_caps = set(PermissionSet.capability_names()) - rows[GroupRole.OWNER].granted()
        raise InvariantViolation(
            f"Owner must hold every capability, missing: {sorted(missing_caps)}"
        )

    if rows[GroupRole.PENDING].granted():
        raise InvariantViolation("Pending applicants cannot hold capabilities")

    return dict(rows)


ROLE_CAPABILITIES: dict[GroupRole, PermissionSet] = build_capability_table(
    {
        GroupRole.OWNER: PermissionSet.all_granted(),
        GroupRole.TREASURER: PermissionSet.of(
            "can_manage_dues",
            "can_withdraw",
            "can_manage_shares",
            "can_finalize_schedule",
            "can_change_management_type",
        ),
        GroupRole.MANAGER: PermissionSet.of(
            "can_manage_group",
            "can_manage_members",
            "can_delete_posts",
            "can_delete_comments",
            "can_finalize_schedule",
        ),
        GroupRole.MEMBER: PermissionSet.none(),
        GroupRole.PENDING: PermissionSet.none(),
    }
)
