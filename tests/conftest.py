"""
Test configuration and fixtures for the media service.
This centralizes all test setup, making individual tests clean.
"""

import os

# Settings are read at import time; point the app engine at the test
# database before main or media_app is imported.
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from main import app
from media_app.auth import create_access_token
from media_app.database.connection import Base, get_db
from media_app.dependencies import get_link_store
from media_app.links.store import LinkStore

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeClock:
    """Controllable UTC clock for link expiry tests"""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class BrokenSession:
    """Session stand-in whose queries and commits fail like a dropped database"""

    def __init__(self):
        self.rollbacks = 0

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is unavailable"))

    query = _fail
    commit = _fail

    def add(self, instance):
        pass

    def refresh(self, instance):
        pass

    def rollback(self):
        self.rollbacks += 1


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        # Cleanup
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def link_store(clock):
    """Isolated link store per test, driven by the fake clock"""
    return LinkStore(ttl=timedelta(minutes=10), clock=clock)


@pytest.fixture
def broken_session():
    return BrokenSession()


@pytest.fixture(scope="function")
def client(db_session, link_store):
    """
    Create a test client with database and link store dependencies overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_link_store] = lambda: link_store

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token(user_id=1, email="admin@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_media(client: TestClient, auth_headers):
    """Create a media asset through the API and return its JSON"""
    def _create(title="Test Video", media_type="video", file_url="https://cdn.example.com/v/test.mp4"):
        response = client.post(
            "/media",
            json={"title": title, "type": media_type, "file_url": file_url},
            headers=auth_headers,
        )
        assert response.status_code == 201
        return response.json()["media"]

    return _create
