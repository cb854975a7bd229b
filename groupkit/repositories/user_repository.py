import logging

from sqlalchemy.orm import Session
from groupkit.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_or_create_by_auth_id(self, auth_user_id: str) -> User:
        """
        Get user by auth_user_id, registering it on first sight.

        Called for every authenticated request and for join/role
        operations that name another user by auth id.
        """
        user = self.get_by_auth_id(auth_user_id)

        if not user:
            user = User(auth_user_id=auth_user_id)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            logger.info("Registered user %s as id=%s", auth_user_id, user.id)

        return user

    def get_by_auth_id(self, auth_user_id: str) -> User | None:
        return self.db.query(User).filter(User.auth_user_id == auth_user_id).first()

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()
