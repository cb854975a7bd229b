import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_groupkit.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-groupkit")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from groupkit.database import get_db
from groupkit.models.base import Base
from groupkit.config import settings
# Import all model classes to ensure they're registered with SQLAlchemy
from groupkit.models.user import User
from groupkit.models.group import Group
from groupkit.models.group_account import GroupAccount
from groupkit.models.group_membership import GroupMembership, GroupRoleAssignment
from groupkit.models.group_transaction import GroupTransaction
from groupkit.models.account_snapshot import ManagementType
from groupkit.models.role import GroupRole
# Import FastAPI app AFTER model imports
from groupkit.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(user_id: str = "test-user-123", expired: bool = False) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        user_id: User ID to embed in 'sub' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": user_id, "exp": exp, "iat": datetime.now(UTC)}

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


def headers_for(auth_user_id: str) -> dict:
    """Authorization headers for the given auth user id"""
    return {"Authorization": f"Bearer {create_test_token(user_id=auth_user_id)}"}


def create_user(db_session, auth_user_id: str) -> User:
    user = User(auth_user_id=auth_user_id)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def create_group(
    db_session,
    owner: User,
    management_type: ManagementType = ManagementType.OPERATING,
    balance: int = 0,
    name: str = "Weekend Hiking Club",
    require_approval: bool = True,
    max_members: int = 50,
) -> Group:
    """Create a group, its account and the owner's membership directly in the DB"""
    group = Group(name=name, max_members=max_members, require_approval=require_approval)
    group.account = GroupAccount(
        management_type=management_type,
        total_balance=balance,
        member_count=1,
        total_deposited=balance,
        total_used=0,
    )
    group.memberships.append(
        GroupMembership(
            user_id=owner.id,
            role_assignments=[GroupRoleAssignment(role=GroupRole.OWNER)],
        )
    )
    db_session.add(group)
    db_session.commit()
    db_session.refresh(group)
    return group


def add_member(db_session, group: Group, user: User, *roles: GroupRole) -> GroupMembership:
    """
    Add a membership with the given roles (MEMBER if none).

    Approved memberships bump the account's member count; pending ones don't.
    """
    roles = roles or (GroupRole.MEMBER,)
    membership = GroupMembership(
        group_id=group.id,
        user_id=user.id,
        role_assignments=[GroupRoleAssignment(role=role) for role in roles],
    )
    db_session.add(membership)
    if GroupRole.PENDING not in roles:
        group.account.member_count += 1
    db_session.commit()
    db_session.refresh(membership)
    return membership


@pytest.fixture
def mock_jwt_token():
    """Generate valid JWT token"""
    return create_test_token()


@pytest.fixture
def auth_headers(mock_jwt_token):
    """Authorization headers for authenticated requests"""
    return {"Authorization": f"Bearer {mock_jwt_token}"}


@pytest.fixture
def owner(db_session):
    return create_user(db_session, "owner-user")


@pytest.fixture
def owner_headers(owner):
    return headers_for("owner-user")


@pytest.fixture
def operating_group(db_session, owner):
    """Operating-type group owned by `owner` with 300,000 in the pool"""
    return create_group(db_session, owner, ManagementType.OPERATING, balance=300_000)


@pytest.fixture
def fair_group(db_session, owner):
    """Fair-type group owned by `owner` with 1,250,000 in the pool"""
    return create_group(
        db_session, owner, ManagementType.FAIR, balance=1_250_000, name="Gangnam Book Club"
    )
