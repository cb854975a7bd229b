from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from groupkit.core.security import extract_user_id
from groupkit.core.exceptions import (
    UnauthorizedException,
    GroupNotFoundException,
    UserNotMemberException,
)
from groupkit.database import get_db
from groupkit.models.group_context import GroupContext
from groupkit.models.user import User
from groupkit.repositories.group_repository import GroupRepository
from groupkit.repositories.group_membership_repository import GroupMembershipRepository
from groupkit.repositories.user_repository import UserRepository
from groupkit.services.role_resolver import permissions_for

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    FastAPI dependency to validate JWT and get/create user.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using shared SECRET_KEY
    3. Extract auth_user_id from 'sub' claim
    4. Get or auto-create User record
    5. Return User object for use in endpoints

    Raises:
        HTTPException 401: If token missing, invalid or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        auth_user_id = extract_user_id(credentials.credentials)
    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return UserRepository(db).get_or_create_by_auth_id(auth_user_id)


async def get_group_context(
    group_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> GroupContext:
    """
    FastAPI dependency resolving the caller's standing in the group from the URL.

    Raises:
        GroupNotFoundException: If the group does not exist (404)
        UserNotMemberException: If the caller has no membership at all (403)
    """
    group = GroupRepository(db).get_by_id(group_id)
    if not group:
        raise GroupNotFoundException(group_id)

    membership = GroupMembershipRepository(db).get_membership(user.id, group_id)
    if not membership:
        raise UserNotMemberException(group_id)

    return GroupContext(
        user=user,
        group=group,
        membership=membership,
        permissions=permissions_for(membership.roles),
    )
