import logging

from sqlalchemy.orm import Session

from groupkit.config import settings
from groupkit.models.account_snapshot import AccountSnapshot
from groupkit.models.group import Group
from groupkit.models.group_account import GroupAccount
from groupkit.models.group_context import GroupContext
from groupkit.models.group_membership import GroupMembership, GroupRoleAssignment
from groupkit.models.group_transaction import GroupTransaction, TransactionKind
from groupkit.models.role import GroupRole, ROLE_DESCRIPTIONS
from groupkit.models.user import User
from groupkit.repositories.group_repository import GroupRepository
from groupkit.repositories.group_membership_repository import GroupMembershipRepository
from groupkit.schemas.group_schemas import GroupCreate
from groupkit.services.role_resolver import RoleResolver, MembershipRoleStore

logger = logging.getLogger(__name__)


class GroupService:
    """Service layer for group lifecycle and the caller's standing in groups"""

    def __init__(self, db: Session):
        self.db = db
        self.group_repo = GroupRepository(db)
        self.membership_repo = GroupMembershipRepository(db)

    def create_group(self, data: GroupCreate, user: User) -> Group:
        """
        Create a group with its account; the creator becomes OWNER.

        The opening balance counts as the owner's first deposit, so for a
        fair account the owner starts out holding the whole balance.
        """
        # Validates the account figures before anything is written
        snapshot = AccountSnapshot(
            management_type=data.management_type,
            total_balance=data.opening_balance,
            member_count=1,
            total_deposited=data.opening_balance,
        )

        group = Group(
            name=data.name,
            description=data.description,
            max_members=data.max_members or settings.DEFAULT_MAX_MEMBERS,
            require_approval=data.require_approval,
        )
        group.account = GroupAccount(
            management_type=snapshot.management_type,
            total_balance=snapshot.total_balance,
            member_count=snapshot.member_count,
            total_deposited=snapshot.total_deposited,
            total_used=snapshot.total_used,
        )
        group.memberships.append(
            GroupMembership(
                user_id=user.id,
                role_assignments=[GroupRoleAssignment(role=GroupRole.OWNER)],
            )
        )
        if data.opening_balance:
            group.transactions.append(
                GroupTransaction(
                    user_id=user.id,
                    kind=TransactionKind.DEPOSIT,
                    amount=data.opening_balance,
                    note="Opening balance",
                )
            )

        group = self.group_repo.create(group)
        logger.info(
            "Group %s created by user %s (%s account)",
            group.id,
            user.id,
            snapshot.management_type.value,
        )
        return group

    def list_user_groups(self, user: User) -> list[dict]:
        """
        List all groups the user belongs to, with their badge in each.

        Args:
            user: Authenticated user

        Returns:
            List of groups with primary role and display label
        """
        resolver = RoleResolver(MembershipRoleStore(self.db, user.id))

        return [
            {
                "id": group.id,
                "name": group.name,
                "primary_role": resolver.resolve_primary_role(group.id),
                "label": resolver.display_label(group.id),
                "created_at": group.created_at,
            }
            for group in self.group_repo.get_for_user(user.id)
        ]

    def get_group(self, context: GroupContext) -> dict:
        """Group details with the current owner and member count"""
        group = context.group
        owner = self.membership_repo.get_owner(group.id)
        return {
            "id": group.id,
            "name": group.name,
            "description": group.description,
            "max_members": group.max_members,
            "require_approval": group.require_approval,
            "created_at": group.created_at,
            "updated_at": group.updated_at,
            "owner_user_id": owner.user_id if owner else None,
            "member_count": group.account.member_count,
        }

    def get_my_role(self, context: GroupContext) -> dict:
        """
        Resolve the caller's roles, badge and permissions in the group.

        Returns:
            Dict shaped like MyRoleResponse
        """
        resolver = RoleResolver(MembershipRoleStore(self.db, context.user.id))
        group_id = context.group.id

        return {
            "primary_role": resolver.resolve_primary_role(group_id),
            "roles": sorted(resolver.roles(group_id), key=lambda role: role.value),
            "permissions": resolver.resolve_permissions(group_id).to_dict(),
            "label": resolver.display_label(group_id),
            "color": resolver.display_color(group_id),
            "description": ROLE_DESCRIPTIONS[resolver.resolve_primary_role(group_id)],
        }
