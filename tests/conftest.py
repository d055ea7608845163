"""Pytest configuration and fixtures.

The application reads its configuration from the environment at import
time, so the variables below are set before anything from ``pyme_auth`` is
imported. Every test runs against a freshly created SQLite schema.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="pyme_auth_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["BCRYPT_ROUNDS"] = "4"  # custo mínimo do bcrypt, só para testes
os.environ["JWT_SECRET"] = "test-secret"
os.environ["AUDIT_FAILED_REGISTRATIONS"] = "false"

import pytest
from fastapi.testclient import TestClient

import pyme_auth.domain.entities  # noqa: F401
from pyme_auth.infrastructure.database import Base, SessionLocal, engine
from pyme_auth.application.use_cases.autentication_use_cases import AuthenticationUseCases
from pyme_auth.application.use_cases.user_use_cases import UserUseCases


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth(db) -> AuthenticationUseCases:
    return AuthenticationUseCases(db)


@pytest.fixture
def client():
    from pyme_auth.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered(auth):
    """A PYME account registered through the use case."""
    return auth.register(
        business_name="Acme",
        business_phone="555-0100",
        email="owner@acme.com",
        password="secret123",
    )


@pytest.fixture
def admin_headers(client, db) -> dict:
    result = AuthenticationUseCases(db).register(
        business_name="Administração",
        business_phone=None,
        email="admin@pyme.com",
        password="admin-pass-123",
    )
    UserUseCases(db).promote_to_admin(result.user_id)

    resp = client.post("/auth/login", json={"email": "admin@pyme.com", "password": "admin-pass-123"})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
