"""
pytest Fixtures for BookStore API Tests

Shared fixtures used across all test files.

For database tests we use:
- session scope for the engine (expensive to create)
- function scope for sessions, each wrapped in a transaction that is
  rolled back after the test, so tests never see each other's data
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_ENABLED"] = "true"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["JWT_ISSUER"] = "http://testserver"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Author, Book, Role, RoleName, User
from app.services.security import create_access_token, hash_password

DEFAULT_PASSWORD = "P@ssword1"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole session;
    without it the in-memory database would vanish between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client that uses the test database.

    get_db is overridden so every repository in the request works on
    db_session.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# USER FIXTURES
# =============================================================================
def make_user(db: Session, username: str, role: Role) -> User:
    user = User(
        username=username,
        email=f"{username}@bookstore.com",
        hashed_password=hash_password(DEFAULT_PASSWORD),
        roles=[role],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    """Bearer header for a user, carrying the user's roles."""
    token = create_access_token(user, [role.name for role in user.roles])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def roles(db_session: Session) -> dict[str, Role]:
    """The Administrator and Customer roles."""
    created = {name.value: Role(name=name.value) for name in RoleName}
    db_session.add_all(created.values())
    db_session.commit()
    return created


@pytest.fixture
def admin_user(db_session: Session, roles: dict[str, Role]) -> User:
    return make_user(db_session, "admin", roles[RoleName.ADMINISTRATOR.value])


@pytest.fixture
def customer_user(db_session: Session, roles: dict[str, Role]) -> User:
    return make_user(db_session, "customer", roles[RoleName.CUSTOMER.value])


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return auth_headers(admin_user)


@pytest.fixture
def customer_headers(customer_user: User) -> dict:
    return auth_headers(customer_user)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(
        first_name="George",
        last_name="Orwell",
        bio="English novelist and essayist, journalist and critic.",
    )
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book written by sample_author."""
    book = Book(
        title="1984",
        year=1949,
        isbn="9780451524935",
        summary="A dystopian novel set in a totalitarian society.",
        image="1984.jpg",
        author_id=sample_author.id,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book
