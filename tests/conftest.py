"""Shared fixtures: a throwaway SQLite database and an application client."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "dypse_api_test.db"
TEST_UPLOAD_DIR = Path(tempfile.mkdtemp(prefix="dypse_api_uploads_"))
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["UPLOAD_DIR"] = str(TEST_UPLOAD_DIR)
os.environ.pop("APP_TIMEZONE", None)

from dypse_api.config import get_settings  # noqa: E402

get_settings.cache_clear()

from dypse_api.domain.entities import User  # noqa: E402
from dypse_api.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from dypse_api.infrastructure.repositories import RoleRepository, UserRepository  # noqa: E402
from dypse_api.infrastructure.security import get_password_hash  # noqa: E402
from dypse_api.utils import now_in_app_timezone  # noqa: E402

PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables with the default roles seeded."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_user(
    session,
    *,
    email: str = "youth@example.com",
    role: str = "youth",
    password: str = PASSWORD,
) -> User:
    """Insert a user without going through registration, so no activity is logged."""

    user = User(
        id=None,
        role=RoleRepository(session).get_by_alias(role),
        first_name="Tendai",
        last_name="Moyo",
        email=email,
        password=get_password_hash(password),
        phone=None,
        last_login=None,
        created_at=now_in_app_timezone(),
        updated_at=None,
        is_active=True,
    )
    return UserRepository(session).create(user)


@pytest.fixture()
def user(session) -> User:
    return create_user(session)


@pytest.fixture()
def client():
    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def register_and_login(
    client: TestClient,
    *,
    email: str = "youth@example.com",
    role: str = "youth",
) -> dict[str, str]:
    """Register an account through the API and return its bearer headers."""

    response = client.post(
        "/auth/register",
        json={
            "first_name": "Tendai",
            "last_name": "Moyo",
            "email": email,
            "password": PASSWORD,
            "role": role,
        },
    )
    assert response.status_code == 201, response.text

    token_response = client.post("/auth/token", data={"username": email, "password": PASSWORD})
    assert token_response.status_code == 200, token_response.text
    return {"Authorization": f"Bearer {token_response.json()['access_token']}"}
