import logging

from sqlalchemy.orm import Session

from groupkit.models.account_snapshot import ManagementType
from groupkit.models.group_account import GroupAccount
from groupkit.models.group_context import GroupContext
from groupkit.models.group_transaction import GroupTransaction, TransactionKind
from groupkit.repositories.group_account_repository import GroupAccountRepository
from groupkit.repositories.group_transaction_repository import GroupTransactionRepository
from groupkit.schemas.account_schemas import DepositCreate, WithdrawalCreate
from groupkit.services import account_ledger
from groupkit.core.exceptions import NotFoundException, ForbiddenException, ValidationException

logger = logging.getLogger(__name__)


class AccountService:
    """Service for group account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = GroupAccountRepository(db)
        self.transaction_repo = GroupTransactionRepository(db)

    def get_account(self, context: GroupContext, for_update: bool = False) -> GroupAccount:
        """
        Get the group's account; pending applicants cannot see it.

        Raises:
            ForbiddenException: If the caller is still pending approval
            NotFoundException: If the group has no account
        """
        if not context.is_approved():
            raise ForbiddenException("Pending members cannot access the group account")

        if for_update:
            account = self.repo.get_by_group_for_update(context.group.id)
        else:
            account = self.repo.get_by_group(context.group.id)
        if not account:
            raise NotFoundException("Account not found")
        return account

    def get_account_summary(self, context: GroupContext) -> dict:
        """Stored figures plus per-person share, entry fee and refund"""
        account = self.get_account(context)
        return {"group_id": account.group_id, **account_ledger.summarize(account.snapshot())}

    def deposit(self, data: DepositCreate, context: GroupContext) -> dict:
        """Pay dues into the account. Any approved member may deposit."""
        account = self.get_account(context, for_update=True)
        account.total_balance += data.amount
        account.total_deposited += data.amount
        self.transaction_repo.create_no_commit(
            GroupTransaction(
                group_id=context.group.id,
                user_id=context.user.id,
                kind=TransactionKind.DEPOSIT,
                amount=data.amount,
                note=data.note,
            )
        )
        account = self.repo.update(account)

        logger.info(
            "User %s deposited %s into group %s account",
            context.user.id,
            data.amount,
            context.group.id,
        )
        return {"group_id": account.group_id, **account_ledger.summarize(account.snapshot())}

    def withdraw(self, data: WithdrawalCreate, context: GroupContext) -> dict:
        """
        Spend from the account (requires can_withdraw).

        Raises:
            ForbiddenException: If the caller cannot withdraw
            ValidationException: If the amount exceeds the balance
        """
        if not context.can("can_withdraw"):
            raise ForbiddenException("Only the owner or treasurer can withdraw")

        account = self.get_account(context, for_update=True)
        if data.amount > account.total_balance:
            raise ValidationException(
                f"Insufficient balance: {account.total_balance} available, {data.amount} requested"
            )

        account.total_balance -= data.amount
        account.total_used += data.amount
        self.transaction_repo.create_no_commit(
            GroupTransaction(
                group_id=context.group.id,
                user_id=context.user.id,
                kind=TransactionKind.WITHDRAWAL,
                amount=data.amount,
                note=data.purpose,
            )
        )
        account = self.repo.update(account)

        logger.info(
            "User %s withdrew %s from group %s account for %r",
            context.user.id,
            data.amount,
            context.group.id,
            data.purpose,
        )
        return {"group_id": account.group_id, **account_ledger.summarize(account.snapshot())}

    def change_management_type(
        self, management_type: ManagementType, context: GroupContext
    ) -> dict:
        """
        Switch between fair and operating settlement (requires
        can_change_management_type). Balances are left as they are.

        Raises:
            ForbiddenException: If the caller lacks the permission
            ValidationException: If the account already uses this type
        """
        if not context.can("can_change_management_type"):
            raise ForbiddenException("You do not have permission to change the management type")

        account = self.get_account(context, for_update=True)
        if account.management_type == management_type:
            raise ValidationException(f"Account is already {management_type.value}")

        previous = account.management_type
        account.management_type = management_type
        account = self.repo.update(account)

        logger.info(
            "Group %s account switched from %s to %s by user %s",
            context.group.id,
            previous.value,
            management_type.value,
            context.user.id,
        )
        return {"group_id": account.group_id, **account_ledger.summarize(account.snapshot())}

    def list_transactions(
        self, context: GroupContext, limit: int = 100, offset: int = 0
    ) -> dict:
        """
        Account history, newest first. Any approved member may read it.

        Raises:
            ForbiddenException: If the caller is still pending approval
        """
        account = self.get_account(context)
        transactions, total = self.transaction_repo.get_by_group(
            account.group_id, limit=limit, offset=offset
        )
        return {"transactions": transactions, "total": total}
