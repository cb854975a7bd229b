"""add_group_transactions

Revision ID: 8c41d5e2a9f0
Revises: 3f2b9c1d7e4a
Create Date: 2026-10-19 15:47:03.118402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c41d5e2a9f0'
down_revision: Union[str, Sequence[str], None] = '3f2b9c1d7e4a'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TRANSACTION_KIND_VALUES = ('deposit', 'withdrawal', 'entry_fee', 'refund')


def upgrade() -> None:
    """
    Record every movement on a group account.

    Creates:
    - group_transactions table (deposits, withdrawals, entry fees, refunds)
    """
    op.create_table(
        'group_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column(
            'kind',
            sa.Enum(*TRANSACTION_KIND_VALUES, name='transactionkind', native_enum=False),
            nullable=False,
        ),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('note', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='ck_group_transactions_amount'),
    )
    op.create_index('ix_group_transactions_group_id', 'group_transactions', ['group_id'])
    op.create_index(
        'ix_group_transactions_group_kind', 'group_transactions', ['group_id', 'kind']
    )


def downgrade() -> None:
    """Drop the group transaction history."""
    op.drop_index('ix_group_transactions_group_kind', table_name='group_transactions')
    op.drop_index('ix_group_transactions_group_id', table_name='group_transactions')
    op.drop_table('group_transactions')
