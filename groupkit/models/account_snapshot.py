"""Immutable view of a group account used by the ledger arithmetic."""

from dataclasses import dataclass
from enum import Enum as PyEnum

from groupkit.core.exceptions import InvariantViolation


class ManagementType(str, PyEnum):
    """
    Settlement model of a group account.

    - FAIR: balance is split into equal shares per current member. Joining
      costs a share, leaving refunds a share.
    - OPERATING: contributions accumulate into a shared operating fund with
      no individual ownership and no refund on exit.
    """

    FAIR = "fair"
    OPERATING = "operating"


@dataclass(frozen=True)
class AccountSnapshot:
    """
    Point-in-time figures of a group account.

    All amounts are non-negative integers in the smallest currency unit.
    A snapshot can only be built from well-formed data, so the ledger
    functions that consume it never fail.

    Attributes:
        management_type: FAIR or OPERATING settlement
        total_balance: Money currently in the account
        member_count: Approved members sharing the account
        total_deposited: Lifetime deposits (including entry fees)
        total_used: Lifetime withdrawals (including refunds)
    """

    management_type: ManagementType
    total_balance: int
    member_count: int
    total_deposited: int = 0
    total_used: int = 0

    def __post_init__(self):
        if self.member_count <= 0:
            raise InvariantViolation(
                f"Group account needs at least one member, got {self.member_count}"
            )
        for name in ("total_balance", "total_deposited", "total_used"):
            if getattr(self, name) < 0:
                raise InvariantViolation(f"{name} cannot be negative")

    @property
    def is_fair(self) -> bool:
        return self.management_type == ManagementType.FAIR
