import pytest

from groupkit.core.exceptions import InvariantViolation
from groupkit.models.account_snapshot import AccountSnapshot, ManagementType
from groupkit.services.account_ledger import (
    per_person_share,
    entry_fee,
    refund_amount,
    undistributed_remainder,
    summarize,
)


def fair(balance: int, members: int) -> AccountSnapshot:
    return AccountSnapshot(ManagementType.FAIR, total_balance=balance, member_count=members)


def operating(balance: int, members: int) -> AccountSnapshot:
    return AccountSnapshot(ManagementType.OPERATING, total_balance=balance, member_count=members)


class TestFairAccount:
    """Tests for fair-type settlement"""

    def test_share_rounds_down(self):
        account = fair(1_250_000, 15)
        assert per_person_share(account) == 83_333
        assert entry_fee(account) == 83_333
        assert refund_amount(account) == 83_333

    def test_remainder_stays_in_pool(self):
        account = fair(1_250_000, 15)
        assert undistributed_remainder(account) == 5
        assert per_person_share(account) * 15 + undistributed_remainder(account) == 1_250_000

    def test_exact_division_has_no_remainder(self):
        account = fair(900_000, 6)
        assert per_person_share(account) == 150_000
        assert undistributed_remainder(account) == 0

    def test_sole_member_owns_everything(self):
        account = fair(1_250_001, 1)
        assert per_person_share(account) == 1_250_001
        assert refund_amount(account) == 1_250_001
        assert undistributed_remainder(account) == 0

    def test_empty_pool(self):
        account = fair(0, 8)
        assert entry_fee(account) == 0
        assert refund_amount(account) == 0

    def test_share_tracks_membership_changes(self):
        """Share is derived live, so it follows the member count"""
        assert per_person_share(fair(1_200_000, 12)) == 100_000
        assert per_person_share(fair(1_200_000, 15)) == 80_000


class TestOperatingAccount:
    """Tests for operating-type settlement"""

    @pytest.mark.parametrize(
        "balance,members",
        [(0, 1), (300_000, 1), (1_250_000, 15), (999_999, 35)],
    )
    def test_no_entry_fee_and_no_refund(self, balance, members):
        account = operating(balance, members)
        assert entry_fee(account) == 0
        assert refund_amount(account) == 0
        assert per_person_share(account) == 0
        assert undistributed_remainder(account) == 0


class TestSnapshotValidation:
    """Invalid accounts cannot be constructed"""

    @pytest.mark.parametrize("members", [0, -1])
    def test_member_count_must_be_positive(self, members):
        with pytest.raises(InvariantViolation):
            fair(100_000, members)

    def test_negative_balance_rejected(self):
        with pytest.raises(InvariantViolation, match="total_balance"):
            operating(-1, 3)

    def test_negative_totals_rejected(self):
        with pytest.raises(InvariantViolation, match="total_used"):
            AccountSnapshot(ManagementType.FAIR, 100, 2, total_deposited=100, total_used=-5)


def test_summary_includes_derived_figures():
    account = AccountSnapshot(
        ManagementType.FAIR,
        total_balance=1_250_000,
        member_count=15,
        total_deposited=1_400_000,
        total_used=150_000,
    )
    summary = summarize(account)

    assert summary["management_type"] == ManagementType.FAIR
    assert summary["per_person_share"] == 83_333
    assert summary["entry_fee"] == 83_333
    assert summary["refund_amount"] == 83_333
    assert summary["undistributed_remainder"] == 5
    assert summary["total_deposited"] == 1_400_000
    assert summary["total_used"] == 150_000


def test_ledger_functions_are_pure():
    account = fair(1_000_003, 7)
    assert summarize(account) == summarize(account)
    assert account == fair(1_000_003, 7)
