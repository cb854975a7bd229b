from sqlalchemy.orm import Session
from groupkit.models.group_account import GroupAccount


class GroupAccountRepository:
    """Repository for GroupAccount model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_group(self, group_id: int) -> GroupAccount | None:
        """Get the account owned by a group"""
        return self.db.query(GroupAccount).filter(GroupAccount.group_id == group_id).first()

    def get_by_group_for_update(self, group_id: int) -> GroupAccount | None:
        """
        Get the account with a row lock for balance changes.

        Backends without row locks (SQLite) ignore FOR UPDATE.
        """
        return (
            self.db.query(GroupAccount)
            .filter(GroupAccount.group_id == group_id)
            .with_for_update()
            .first()
        )

    def update(self, account: GroupAccount) -> GroupAccount:
        """Update existing account"""
        self.db.commit()
        self.db.refresh(account)
        return account
