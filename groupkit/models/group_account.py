from sqlalchemy import Integer, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from groupkit.models.base import Base, TimestampMixin
from groupkit.models.account_snapshot import AccountSnapshot, ManagementType

if TYPE_CHECKING:
    from groupkit.models.group import Group


class GroupAccount(Base, TimestampMixin):
    """
    Shared dues account owned 1:1 by a group.

    Figures are only changed through AccountService and MembershipService
    (deposit, withdrawal, join, leave, management type change). Per-person
    share is never stored; it is derived from the snapshot on read.
    """

    __tablename__ = "group_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    management_type: Mapped[ManagementType] = mapped_column(
        Enum(ManagementType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ManagementType.OPERATING,
    )
    total_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total_deposited: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    group: Mapped["Group"] = relationship("Group", back_populates="account")

    __table_args__ = (
        CheckConstraint("member_count > 0", name="ck_group_accounts_member_count"),
        CheckConstraint("total_balance >= 0", name="ck_group_accounts_balance"),
    )

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            management_type=self.management_type,
            total_balance=self.total_balance,
            member_count=self.member_count,
            total_deposited=self.total_deposited,
            total_used=self.total_used,
        )

    def __repr__(self) -> str:
        return (
            f"<GroupAccount(group_id={self.group_id}, type={self.management_type.value}, "
            f"balance={self.total_balance}, members={self.member_count})>"
        )
