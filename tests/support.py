"""Test helpers: in-memory SQLite sessions, test settings and an app client with overrides."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from account_api.core.config import Settings, get_settings
from account_api.core.database import get_db
from account_api.models import Base, User

TEST_SECRET = "test-signing-secret-0123456789abcdef"


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the environment and .env: test secret, fast bcrypt."""
    values: dict[str, Any] = {
        "DATABASE_URL": "sqlite://",
        "SECRET_KEY": TEST_SECRET,
        "JWT_SECRET": None,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with the schema created; one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(session: Session, username: str, password: str, **fields: Any) -> User:
    """Insert a user row as-is (password not hashed, to model legacy rows)."""
    user = User(username=username, password=password, **fields)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def stored_password(session_factory: sessionmaker, username: str) -> str:
    """Read the password column with a fresh session."""
    db = session_factory()
    try:
        return db.query(User.password).filter(User.username == username).scalar()
    finally:
        db.close()


def make_client(
    settings: Settings, session_factory: sessionmaker, raise_server_exceptions: bool = True
) -> TestClient:
    """TestClient for the real app with get_db and get_settings overridden."""
    from account_api.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


def clear_overrides() -> None:
    from account_api.main import app

    app.dependency_overrides.clear()
