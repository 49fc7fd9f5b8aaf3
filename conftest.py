"""Fixtures compartidas por los tests."""

from datetime import datetime, timezone
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from perfume_catalog.core.config import Settings
from perfume_catalog.core.security import PasswordHasher, TokenService
from perfume_catalog.db.database import create_session_factory, create_tables
from perfume_catalog.main import create_app

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256-signing"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password"


class FrozenClock:
    """Reloj manual para controlar la caducidad de los tokens."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_service(clock):
    return TokenService(secret_key=TEST_SECRET, clock=clock)


@pytest.fixture
def password_hasher():
    return PasswordHasher()


# ─────────────────────────────────────────────────────────────────────────────
# Base de datos para tests de servicios
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
async def db(tmp_path):
    engine, session_factory = create_session_factory(f"sqlite+aiosqlite:///{tmp_path / 'services.db'}")
    await create_tables(engine)
    async with session_factory() as session:
        yield session
    await engine.dispose()


# ─────────────────────────────────────────────────────────────────────────────
# Aplicación completa
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        JWT_SECRET_KEY=TEST_SECRET,
        SQLALCHEMY_DATABASE_URI=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        UPLOAD_DIR=tmp_path / "uploads",
        ADMIN_USERNAME=ADMIN_USERNAME,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_EMAIL="admin@perfumes.io",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return bearer(response.json()["token"])


@pytest.fixture
def user_headers(client):
    response = client.post("/api/v1/auth/register", json={"username": "reader", "password": "reader-pass"})
    assert response.status_code == 200, response.text
    return bearer(response.json()["token"])
