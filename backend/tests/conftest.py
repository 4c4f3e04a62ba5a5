"""Shared test fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from stockroom.config import settings
from stockroom.database import Base, get_db
from stockroom.main import app
from stockroom.models import User, Group, GroupMember, Category, Item


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    """Build request headers identifying a user to the API."""
    def _headers(user):
        return {settings.user_id_header: user.id}
    return _headers


def make_user(db_session, name, email):
    user = User(id=str(uuid.uuid4()), name=name, email=email)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def owner(db_session):
    """User who owns the sample group."""
    return make_user(db_session, "Hana", "hana@example.com")


@pytest.fixture
def member(db_session):
    """User who joined the sample group."""
    return make_user(db_session, "Kenji", "kenji@example.com")


@pytest.fixture
def outsider(db_session):
    """User with no relation to the sample group."""
    return make_user(db_session, "Mio", "mio@example.com")


@pytest.fixture
def sample_group(db_session, owner, member):
    """Group owned by `owner` with `member` joined."""
    group = Group(
        id=str(uuid.uuid4()),
        name="Share house",
        owner_id=owner.id,
        invite_code="0123456789abcdef",
    )
    db_session.add(group)
    db_session.add(GroupMember(id=str(uuid.uuid4()), group_id=group.id, user_id=member.id))
    db_session.commit()
    db_session.refresh(group)
    return group


@pytest.fixture
def personal_category(db_session, owner):
    """Personal category of `owner`."""
    category = Category(
        id=str(uuid.uuid4()),
        name="Kitchen",
        color="#22c55e",
        sort_order=0,
        user_id=owner.id,
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def group_category(db_session, sample_group):
    """Category shared in the sample group."""
    category = Category(
        id=str(uuid.uuid4()),
        name="Bathroom",
        color="#3b82f6",
        sort_order=0,
        group_id=sample_group.id,
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def personal_item(db_session, owner, personal_category):
    """Personal item of `owner`, filed under `personal_category`."""
    item = Item(
        id=str(uuid.uuid4()),
        name="Milk",
        quantity=3,
        unit="bottles",
        threshold=2,
        sort_order=0,
        category_id=personal_category.id,
        user_id=owner.id,
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item


@pytest.fixture
def group_item(db_session, sample_group, group_category):
    """Item shared in the sample group."""
    item = Item(
        id=str(uuid.uuid4()),
        name="Toilet paper",
        quantity=6,
        unit="rolls",
        threshold=4,
        sort_order=0,
        category_id=group_category.id,
        group_id=sample_group.id,
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item
