from enum import Enum as PyEnum

from sqlalchemy import String, Integer, ForeignKey, Enum, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from groupkit.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from groupkit.models.group import Group
    from groupkit.models.user import User


class TransactionKind(str, PyEnum):
    """What moved money in or out of a group account"""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    ENTRY_FEE = "entry_fee"
    REFUND = "refund"


INFLOW_KINDS = frozenset({TransactionKind.DEPOSIT, TransactionKind.ENTRY_FEE})


class GroupTransaction(Base, TimestampMixin):
    """
    One movement on a group's dues account.

    Amount is always positive; the kind gives the direction. Deposits and
    entry fees add up to the account's total_deposited, withdrawals and
    refunds to its total_used. Rows are written in the same commit as the
    balance change they record and are never edited afterwards.
    """

    __tablename__ = "group_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    kind: Mapped[TransactionKind] = mapped_column(
        Enum(TransactionKind, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    note: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    group: Mapped["Group"] = relationship("Group", back_populates="transactions")
    user: Mapped["User"] = relationship("User")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_group_transactions_amount"),
        Index("ix_group_transactions_group_kind", "group_id", "kind"),
    )

    @property
    def is_inflow(self) -> bool:
        return self.kind in INFLOW_KINDS

    def __repr__(self) -> str:
        return (
            f"<GroupTransaction(group_id={self.group_id}, kind={self.kind.value}, "
            f"amount={self.amount})>"
        )
