"""create_group_tables

Revision ID: 3f2b9c1d7e4a
Revises:
Create Date: 2026-10-19 09:12:41.508213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2b9c1d7e4a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLE_VALUES = ('owner', 'treasurer', 'manager', 'member', 'pending')
MANAGEMENT_TYPE_VALUES = ('fair', 'operating')


def upgrade() -> None:
    """
    Create the group management schema.

    Creates:
    - users table
    - groups table
    - group_accounts table (1:1 with groups)
    - group_memberships table
    - group_role_assignments table (many roles per membership)
    """
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('auth_user_id', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_auth_user_id', 'users', ['auth_user_id'], unique=True)

    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('max_members', sa.Integer(), nullable=False),
        sa.Column('require_approval', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'group_accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column(
            'management_type',
            sa.Enum(*MANAGEMENT_TYPE_VALUES, name='managementtype', native_enum=False),
            nullable=False,
        ),
        sa.Column('total_balance', sa.Integer(), nullable=False),
        sa.Column('member_count', sa.Integer(), nullable=False),
        sa.Column('total_deposited', sa.Integer(), nullable=False),
        sa.Column('total_used', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('member_count > 0', name='ck_group_accounts_member_count'),
        sa.CheckConstraint('total_balance >= 0', name='ck_group_accounts_balance'),
    )
    op.create_index('ix_group_accounts_group_id', 'group_accounts', ['group_id'], unique=True)

    op.create_table(
        'group_memberships',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('group_id', 'user_id', name='uq_group_user')
    )
    op.create_index('ix_group_memberships_group_id', 'group_memberships', ['group_id'])
    op.create_index('ix_group_memberships_user_id', 'group_memberships', ['user_id'])

    op.create_table(
        'group_role_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('membership_id', sa.Integer(), nullable=False),
        sa.Column(
            'role',
            sa.Enum(*ROLE_VALUES, name='grouprole', native_enum=False),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['membership_id'], ['group_memberships.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('membership_id', 'role', name='uq_membership_role')
    )
    op.create_index(
        'ix_group_role_assignments_membership_id', 'group_role_assignments', ['membership_id']
    )


def downgrade() -> None:
    """Drop the group management schema."""
    op.drop_index('ix_group_role_assignments_membership_id', table_name='group_role_assignments')
    op.drop_table('group_role_assignments')

    op.drop_index('ix_group_memberships_user_id', table_name='group_memberships')
    op.drop_index('ix_group_memberships_group_id', table_name='group_memberships')
    op.drop_table('group_memberships')

    op.drop_index('ix_group_accounts_group_id', table_name='group_accounts')
    op.drop_table('group_accounts')

    op.drop_table('groups')

    op.drop_index('ix_users_auth_user_id', table_name='users')
    op.drop_table('users')
