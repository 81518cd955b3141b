"""
pytest Fixtures for Reading Tracker API Tests

This file contains shared fixtures used across all test files.

WHAT ARE FIXTURES?
==================
Fixtures are reusable test setup/teardown functions.
They provide:
- Test data (users, books, access tokens)
- Test resources (database connections, HTTP clients)
- Setup/cleanup logic (create/drop tables)

For database tests, we use:
- session scope for engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# Settings are validated on import, and the app engine is built from them.
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings, get_settings
from app.database import Base, get_db
from app.main import app
from app.models import Book, User
from app.services.auth import AuthService
from app.services.books import BookService
from app.services.security import hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps the suite fast and self-contained. The CHECK
# constraints on books are enforced by SQLite too, but the services reject
# out-of-range values before they reach the database.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the connection alive for the entire session.
    Without it, SQLite in-memory database would disappear between connections.
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
        bind=engine,
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
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def settings() -> Settings:
    """The application settings the app itself uses."""
    return get_settings()


# =============================================================================
# USER FIXTURES
# =============================================================================
@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample reader for testing."""
    user = User(
        username="reader",
        email="reader@example.com",
        hashed_password=hash_password("secret123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Create a second reader for testing ownership scenarios."""
    user = User(
        username="otherreader",
        email="other@example.com",
        hashed_password=hash_password("secret456"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_service(db_session: Session, settings: Settings) -> AuthService:
    return AuthService(db_session, settings)


@pytest.fixture
def book_service(db_session: Session) -> BookService:
    return BookService(db_session)


@pytest.fixture
def auth_headers(auth_service: AuthService, sample_user: User) -> dict[str, str]:
    """Authorization header carrying a valid token for sample_user."""
    token = auth_service.issue_token(sample_user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_auth_headers(auth_service: AuthService, second_user: User) -> dict[str, str]:
    """Authorization header carrying a valid token for second_user."""
    token = auth_service.issue_token(second_user)
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# BOOK FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(book_service: BookService, sample_user: User) -> Book:
    """Dune on sample_user's shelf, not started yet."""
    return book_service.create_book(
        sample_user.id,
        {
            "title": "Dune",
            "author": "Frank Herbert",
            "no_of_pages": 412,
            "published_at": date(1965, 8, 1),
            "genre": "Science Fiction",
        },
    )
