"""
Pytest configuration file for backend testing.
"""
import os
import sys
from pathlib import Path

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Never touch a developer database from tests
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from core.auth import Administrator, create_access_token
from core.database import Base, enable_sqlite_foreign_keys, get_db
from modules.auth.models.admin_models import AdminUser
from modules.auth.schemas.auth_schemas import SignupRequest
from modules.auth.services.auth_service import AuthService

# Test database setup
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client sharing the test session."""

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


def _register(db_session: Session, email: str, name: str) -> AdminUser:
    user = AuthService(db_session).register_administrator(
        SignupRequest(email=email, password=ADMIN_PASSWORD, name=name)
    )
    return db_session.get(AdminUser, user.id)


def bearer(account: AdminUser) -> Dict[str, str]:
    token = create_access_token({"sub": account.id, "email": account.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture
def admin_a(db_session: Session) -> AdminUser:
    return _register(db_session, "alice@example.com", "Alice")


@pytest.fixture
def admin_b(db_session: Session) -> AdminUser:
    return _register(db_session, "bob@example.com", "Bob")


@pytest.fixture
def actor_a(admin_a: AdminUser) -> Administrator:
    return Administrator(id=admin_a.id, email=admin_a.email)


@pytest.fixture
def actor_b(admin_b: AdminUser) -> Administrator:
    return Administrator(id=admin_b.id, email=admin_b.email)


@pytest.fixture
def headers_a(admin_a: AdminUser) -> Dict[str, str]:
    return bearer(admin_a)


@pytest.fixture
def headers_b(admin_b: AdminUser) -> Dict[str, str]:
    return bearer(admin_b)
