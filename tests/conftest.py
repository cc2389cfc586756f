# tests/conftest.py
import os

# Settings are read at import time, so the test environment goes first
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_URL"] = "http://localhost:3000"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from event_registration.main import app
from event_registration.api import deps
from event_registration.db.session import get_db
from event_registration.db.base_class import Base
from event_registration.schemas.token import TokenPayload

from tests.utils.email import FakeEmailTransport


# --- Test Database Setup ---
# One in-memory SQLite database shared by every connection of the pool
engine = create_engine(
    "sqlite+pysqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# --- Mock Dependencies Setup ---
def override_get_current_user():
    return TokenPayload(sub="user_test", exp=9999999999)


@pytest.fixture(scope="function")
def email_transport():
    return FakeEmailTransport()


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db, email_transport):
    """
    TestClient backed by the test database, with authentication and the
    email provider mocked.
    """

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_current_user] = override_get_current_user
    app.dependency_overrides[deps.get_email_transport] = lambda: email_transport

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def unauthenticated_client(db):
    """TestClient with only the database overridden."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
