"""Shared fixtures: a throwaway database, an app client bound to it, and a logged-in user."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from cookai.database import Base, get_db, init_db
from cookai.main import app

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "testpass123"  # noqa: S105


class AuthHeaders(dict):
    """Bearer headers that also remember who they belong to."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


def _test_database_url() -> str:
    # Postgres when DATABASE_URL is set (docker compose), otherwise a local sqlite file
    url = os.getenv("DATABASE_URL")
    if url:
        return url.replace("/cookai", "/cookai_test")
    return "sqlite:///./test.db"


TEST_DATABASE_URL = _test_database_url()
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if TEST_DATABASE_URL.startswith("sqlite") else {},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _delete_all_rows(session) -> None:
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    if TEST_DATABASE_URL.startswith("postgresql"):
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(TEST_DATABASE_URL):
            create_database(TEST_DATABASE_URL)

    init_db(bind=engine)
    yield


@pytest.fixture(autouse=True)
def db():
    """A session per test; every table is emptied afterwards."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        _delete_all_rows(session)
        session.close()


@pytest.fixture
def client(db):
    """TestClient whose requests all share the test session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 201
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=TEST_EMAIL,
    )


@pytest.fixture
def recipe_payload():
    """A recipe with structured ingredients, used across API tests."""
    return {
        "title": "Chicken Tikka Masala",
        "description": "Creamy tomato curry",
        "cuisine": "Indian",
        "difficulty": "medium",
        "tags": ["spicy", "dinner"],
        "instructions": ["Marinate the chicken", "Simmer in sauce"],
        "ingredients": [
            {"name": "chicken", "quantity": 1.5, "unit": "lb"},
            {"name": "garlic", "quantity": 3, "unit": "clove", "preparation": "minced"},
            {"name": "tomato sauce", "quantity": 2, "unit": "cup"},
            {"name": "cream", "quantity": 0.5, "unit": "cup"},
        ],
    }
