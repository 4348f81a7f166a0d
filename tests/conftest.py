"""Shared fixtures: in-memory SQLite, TestClient with get_db overridden."""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-0123456789"
os.environ["BCRYPT_ROUNDS"] = "10"
os.environ["EMAIL_USER"] = ""
os.environ["SITE_URL"] = "http://frontend.test"
os.environ["YOUTUBE_API_KEY"] = "test-youtube-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_session_token
from app.db.base import Base
from app.db.models import User
from app.dependencies import get_db
from app.main import app
from app.services import auth_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session: Session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db_session: Session) -> User:
    return auth_service.register(
        db_session,
        name="Alice",
        email="alice@example.com",
        username="alice",
        password="s3cret-pass",
    )


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    token = create_session_token(str(test_user.id), test_user.username, test_user.name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def session_factory(tmp_path):
    """Sessionmaker over a file database so separate sessions use separate connections."""
    file_engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrency.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=file_engine)
    try:
        yield sessionmaker(bind=file_engine, autocommit=False, autoflush=False)
    finally:
        file_engine.dispose()
