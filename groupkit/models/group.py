"""Group model: the club, meetup or study group itself."""

from sqlalchemy import String, Integer, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from groupkit.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from groupkit.models.group_membership import GroupMembership
    from groupkit.models.group_account import GroupAccount
    from groupkit.models.group_transaction import GroupTransaction


class Group(Base, TimestampMixin):
    """
    A group users join to share dues, schedules and stories.

    Every group owns exactly one GroupAccount, created together with the
    group. Users belong to a group through GroupMembership rows, each of
    which carries one or more roles.
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_members: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    require_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    memberships: Mapped[list["GroupMembership"]] = relationship(
        "GroupMembership",
        back_populates="group",
        cascade="all, delete-orphan",
    )
    account: Mapped["GroupAccount"] = relationship(
        "GroupAccount",
        back_populates="group",
        uselist=False,
        cascade="all, delete-orphan",
    )
    transactions: Mapped[list["GroupTransaction"]] = relationship(
        "GroupTransaction",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupTransaction.id",
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name='{self.name}')>"
