"""Pytest fixtures."""

import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from mindhaven.db.base import Base  # noqa: E402
from mindhaven.db.session import enable_sqlite_foreign_keys, get_db  # noqa: E402
from mindhaven.main import app  # noqa: E402
from mindhaven.models import Comment, ForumPost, Like, Mood, Resource, User  # noqa: E402,F401 - register for create_all

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def setup_db():
    """Fresh tables for every test so aggregates start from zero."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(setup_db):
    """Direct session for service-level tests."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(setup_db):
    """Test client with overridden DB."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register and log in a user; returns (auth headers, user id)."""

    def _make(username: str | None = None, password: str = "secret123", admin: bool = False):
        username = username or f"user_{uuid.uuid4().hex[:8]}"
        reg = client.post("/auth/register", json={"username": username, "password": password})
        assert reg.status_code == 201, reg.json()
        user_id = reg.json()["id"]
        if admin:
            session = TestingSessionLocal()
            try:
                session.get(User, user_id).is_admin = True
                session.commit()
            finally:
                session.close()
        token = client.post("/auth/login", json={"username": username, "password": password}).json()["access_token"]
        return {"Authorization": f"Bearer {token}"}, user_id

    return _make
