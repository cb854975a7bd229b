from sqlalchemy.orm import Session
from groupkit.models.group_transaction import GroupTransaction


class GroupTransactionRepository:
    """Repository for GroupTransaction data access"""

    def __init__(self, db: Session):
        self.db = db

    def create_no_commit(self, transaction: GroupTransaction) -> GroupTransaction:
        """
        Add a transaction without committing.

        The caller commits it together with the account change it records.
        """
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def get_by_group(
        self, group_id: int, limit: int = 100, offset: int = 0
    ) -> tuple[list[GroupTransaction], int]:
        """
        Get a group's transactions, newest first.

        Returns:
            Tuple of (transactions page, total count)
        """
        query = self.db.query(GroupTransaction).filter(GroupTransaction.group_id == group_id)
        total = query.count()

        transactions = (
            query.order_by(GroupTransaction.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )
        return transactions, total
