"""
Pytest fixtures for the Achiva API.

Every test gets a fresh in-memory SQLite schema; the FastAPI app is wired to
the same session through a ``get_db`` override.
"""
import os

# precisa vir antes de importar app.*
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.rbac import ROLE_ADMIN, principal_for
from app.core.tokens import create_access_token
from app.crud.user import user_crud
from app.db.base import Base
from app.db.init_db import ensure_roles
from app.db.session import get_db
from app.main import api
from app.schemas.user import UserCreate

TEST_PASSWORD = "secret123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ============== Database Fixtures ==============

@pytest.fixture
def db():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    ensure_roles(session)
    session.commit()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """TestClient sharing the test session."""

    def override_get_db():
        yield db

    api.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(api)
    finally:
        api.dependency_overrides.clear()


# ============== User Fixtures ==============

def _make_user(db, name, email, role_name=None):
    body = UserCreate(name=name, email=email, password=TEST_PASSWORD)
    if role_name:
        return user_crud.create(db, body, role_name=role_name)
    return user_crud.create(db, body)


@pytest.fixture
def student_user(db):
    return _make_user(db, "Ana Souza", "ana@example.com")


@pytest.fixture
def other_student(db):
    return _make_user(db, "Bruno Lima", "bruno@example.com")


@pytest.fixture
def admin_user(db):
    return _make_user(db, "Prof. Carla", "carla@example.com", role_name=ROLE_ADMIN)


@pytest.fixture
def student(student_user):
    return principal_for(student_user)


@pytest.fixture
def other(other_student):
    return principal_for(other_student)


@pytest.fixture
def admin(admin_user):
    return principal_for(admin_user)


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(sub=user.id)}"}


@pytest.fixture
def student_headers(student_user):
    return bearer(student_user)


@pytest.fixture
def other_headers(other_student):
    return bearer(other_student)


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)
