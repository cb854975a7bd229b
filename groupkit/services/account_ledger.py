"""
Settlement arithmetic for group accounts.

Fair accounts split the balance into equal shares, rounded down. The
rounding residue (``total_balance % member_count``) stays in the pool
and is never paid out early. Because a sole member's share is the whole
balance, the residue ends up with the last member to leave.

Operating accounts have no individual ownership: no entry fee and no
refund, ever.
"""

from groupkit.models.account_snapshot import AccountSnapshot


def per_person_share(account: AccountSnapshot) -> int:
    if not account.is_fair:
        return 0
    return account.total_balance // account.member_count


def undistributed_remainder(account: AccountSnapshot) -> int:
    if not account.is_fair:
        return 0
    return account.total_balance % account.member_count


def entry_fee(account: AccountSnapshot) -> int:
    """Amount a new member pays to buy into an equal share."""
    return per_person_share(account)


def refund_amount(account: AccountSnapshot) -> int:
    """Amount returned to a member who leaves."""
    return per_person_share(account)


def summarize(account: AccountSnapshot) -> dict:
    """All account figures, stored and derived"""
    return {
        "management_type": account.management_type,
        "total_balance": account.total_balance,
        "member_count": account.member_count,
        "total_deposited": account.total_deposited,
        "total_used": account.total_used,
        "per_person_share": per_person_share(account),
        "entry_fee": entry_fee(account),
        "refund_amount": refund_amount(account),
        "undistributed_remainder": undistributed_remainder(account),
    }
