import logging

from sqlalchemy.orm import Session

from groupkit.models.group_account import GroupAccount
from groupkit.models.group_context import GroupContext
from groupkit.models.group_membership import GroupMembership, GroupRoleAssignment
from groupkit.models.group_transaction import GroupTransaction, TransactionKind
from groupkit.models.role import GroupRole
from groupkit.models.user import User
from groupkit.repositories.group_repository import GroupRepository
from groupkit.repositories.group_membership_repository import GroupMembershipRepository
from groupkit.repositories.group_account_repository import GroupAccountRepository
from groupkit.repositories.group_transaction_repository import GroupTransactionRepository
from groupkit.services import account_ledger
from groupkit.services.role_resolver import primary_role, label_for
from groupkit.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
    GroupNotFoundException,
)

logger = logging.getLogger(__name__)


class MembershipService:
    """Service layer for joining, leaving and role management"""

    def __init__(self, db: Session):
        self.db = db
        self.group_repo = GroupRepository(db)
        self.membership_repo = GroupMembershipRepository(db)
        self.account_repo = GroupAccountRepository(db)
        self.transaction_repo = GroupTransactionRepository(db)

    def list_members(self, context: GroupContext) -> list[dict]:
        """
        Get all members of the group with user details and badges.

        Pending applicants are only visible to callers who manage members.
        """
        memberships = self.membership_repo.get_group_members(context.group.id)
        if not context.can("can_manage_members"):
            memberships = [m for m in memberships if not m.is_pending()]

        return [self.describe_member(membership) for membership in memberships]

    @staticmethod
    def describe_member(membership: GroupMembership) -> dict:
        """Membership with user info and badge, shaped like MemberResponse"""
        return {
            "id": membership.id,
            "user_id": membership.user_id,
            "auth_user_id": membership.user.auth_user_id,
            "roles": sorted(membership.roles, key=lambda role: role.value),
            "primary_role": primary_role(membership.roles),
            "label": label_for(membership.roles),
            "created_at": membership.created_at,
        }

    def request_join(self, group_id: int, user: User) -> dict:
        """
        Ask to join a group.

        Groups that require approval get a PENDING membership. Open groups
        admit the user straight away, which charges the entry fee on a
        fair account.

        Raises:
            GroupNotFoundException: If the group does not exist
            ValidationException: If already a member or the group is full
        """
        group = self.group_repo.get_by_id(group_id)
        if not group:
            raise GroupNotFoundException(group_id)

        if self.membership_repo.get_membership(user.id, group_id):
            raise ValidationException("You already belong to this group or have a pending request")

        account = self._locked_account(group_id)
        if account.member_count >= group.max_members:
            raise ValidationException(f"Group is full ({group.max_members} members)")

        if group.require_approval:
            membership = self.membership_repo.create(
                GroupMembership(
                    group_id=group_id,
                    user_id=user.id,
                    role_assignments=[GroupRoleAssignment(role=GroupRole.PENDING)],
                )
            )
            logger.info("User %s requested to join group %s", user.id, group_id)
            return self._join_result(membership, paid_entry_fee=0)

        membership = GroupMembership(group_id=group_id, user_id=user.id)
        self.db.add(membership)
        return self._admit(membership, account)

    def approve_join(self, user_id: int, context: GroupContext) -> dict:
        """
        Approve a pending applicant (requires can_manage_members).

        Raises:
            ForbiddenException: If the caller cannot manage members
            NotFoundException: If there is no such applicant
            ValidationException: If the group is full
        """
        if not context.can("can_manage_members"):
            raise ForbiddenException("You do not have permission to approve members")

        membership = self.membership_repo.get_membership(user_id, context.group.id)
        if not membership or not membership.is_pending():
            raise NotFoundException("No pending join request for this user")

        account = self._locked_account(context.group.id)
        if account.member_count >= context.group.max_members:
            raise ValidationException(f"Group is full ({context.group.max_members} members)")

        return self._admit(membership, account)

    def leave(self, context: GroupContext) -> int:
        """
        Leave the group, receiving the refund a fair account owes.

        Returns:
            Amount refunded (0 for operating accounts and pending applicants)

        Raises:
            ForbiddenException: If the caller is the owner
        """
        if context.is_owner():
            raise ForbiddenException("Owner must transfer ownership before leaving")

        membership = context.membership
        group_id = context.group.id
        refund = 0

        if context.is_approved():
            account = self._locked_account(group_id)
            snapshot = account.snapshot()
            refund = account_ledger.refund_amount(snapshot)
            account.total_balance -= refund
            account.total_used += refund
            account.member_count -= 1
            if refund:
                self.transaction_repo.create_no_commit(
                    GroupTransaction(
                        group_id=group_id,
                        user_id=context.user.id,
                        kind=TransactionKind.REFUND,
                        amount=refund,
                        note="Refund on leaving",
                    )
                )

        self.membership_repo.delete(membership)
        logger.info("User %s left group %s (refund %s)", context.user.id, group_id, refund)
        return refund

    def update_roles(
        self, user_id: int, roles: list[GroupRole], context: GroupContext
    ) -> GroupMembership:
        """
        Replace a member's roles (requires can_assign_roles).

        Args:
            user_id: User ID to update
            roles: Any non-empty subset of TREASURER, MANAGER, MEMBER
            context: Group context

        Raises:
            ForbiddenException: If the caller cannot assign roles, targets
                themselves, or targets the owner
            NotFoundException: If membership not found
            ValidationException: If roles include OWNER/PENDING, or the
                target is still pending
        """
        if not context.can("can_assign_roles"):
            raise ForbiddenException("Only the owner can change member roles")

        new_roles = frozenset(roles)
        if not new_roles:
            raise ValidationException("At least one role is required")
        if {GroupRole.OWNER, GroupRole.PENDING} & new_roles:
            raise ValidationException("Use ownership transfer or approval instead")

        membership = self.membership_repo.get_membership(user_id, context.group.id)
        if not membership:
            raise NotFoundException("Member not found in this group")

        # Self check precedes the owner check: the owner is the usual caller
        if user_id == context.user.id:
            raise ForbiddenException("Cannot change your own roles")

        if GroupRole.OWNER in membership.roles:
            raise ForbiddenException("Cannot change owner's roles")

        if membership.is_pending():
            raise ValidationException("Approve the join request before assigning roles")

        previous = membership.roles
        membership.set_roles(new_roles)
        membership = self.membership_repo.update(membership)
        logger.info(
            "Roles of user %s in group %s changed from %s to %s by user %s",
            user_id,
            context.group.id,
            sorted(role.value for role in previous),
            sorted(role.value for role in new_roles),
            context.user.id,
        )
        return membership

    def transfer_ownership(self, user_id: int, context: GroupContext) -> GroupMembership:
        """
        Make another approved member the owner; the old owner becomes MEMBER.

        Raises:
            ForbiddenException: If the caller is not the owner
            NotFoundException: If the target is not in the group
            ValidationException: If the target is the caller or pending
        """
        if not context.is_owner():
            raise ForbiddenException("Only the owner can transfer ownership")

        if user_id == context.user.id:
            raise ValidationException("You already own this group")

        target = self.membership_repo.get_membership(user_id, context.group.id)
        if not target:
            raise NotFoundException("Member not found in this group")
        if target.is_pending():
            raise ValidationException("Cannot transfer ownership to a pending applicant")

        target.set_roles({GroupRole.OWNER})
        context.membership.set_roles({GroupRole.MEMBER})
        target = self.membership_repo.update(target)
        logger.info(
            "Ownership of group %s transferred from user %s to user %s",
            context.group.id,
            context.user.id,
            user_id,
        )
        return target

    def _locked_account(self, group_id: int) -> GroupAccount:
        account = self.account_repo.get_by_group_for_update(group_id)
        if not account:
            raise NotFoundException(f"Account for group {group_id} not found")
        return account

    def _admit(self, membership: GroupMembership, account: GroupAccount) -> dict:
        """Turn a membership into a full MEMBER and collect the entry fee"""
        fee = account_ledger.entry_fee(account.snapshot())
        account.total_balance += fee
        account.total_deposited += fee
        account.member_count += 1
        membership.set_roles({GroupRole.MEMBER})
        if fee:
            self.transaction_repo.create_no_commit(
                GroupTransaction(
                    group_id=account.group_id,
                    user_id=membership.user_id,
                    kind=TransactionKind.ENTRY_FEE,
                    amount=fee,
                    note="Entry fee on joining",
                )
            )

        membership = self.membership_repo.update(membership)
        logger.info(
            "User %s admitted to group %s (entry fee %s)",
            membership.user_id,
            membership.group_id,
            fee,
        )
        return self._join_result(membership, paid_entry_fee=fee)

    def _join_result(self, membership: GroupMembership, paid_entry_fee: int) -> dict:
        return {
            "membership_id": membership.id,
            "group_id": membership.group_id,
            "user_id": membership.user_id,
            "roles": sorted(membership.roles, key=lambda role: role.value),
            "paid_entry_fee": paid_entry_fee,
        }
