"""Pytest configuration and fixtures.

The settings object is cached on first import, so the environment has to
point at a throwaway database, upload dir and log dir before anything from
`app` is imported.
"""
import os
import tempfile

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="lumenix-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.sqlite')}"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-jwt"
os.environ["ADMIN_EMAIL"] = "admin@lumenix.com.br"
os.environ["ADMIN_PASSWORD"] = "admin-secret"
os.environ["ADMIN_NAME"] = "Admin Teste"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from app.core.bootstrap import bootstrap_system  # noqa: E402
from app.db.engine_sync import sync_engine  # noqa: E402
from app.main import app  # noqa: E402

ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


@pytest.fixture()
def fresh_db():
    """Empty schema plus the bootstrap admin account."""
    SQLModel.metadata.drop_all(sync_engine)
    bootstrap_system()
    yield sync_engine


@pytest.fixture()
def session(fresh_db):
    with Session(fresh_db) as session:
        yield session


@pytest.fixture()
def client(fresh_db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client) -> dict:
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    token = response.json()["tokens"]["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def sample_client_payload() -> dict:
    return {
        "companyName": "Padaria Central",
        "monthlyValue": 1500.0,
        "dueDay": 10,
        "websiteLink": "https://padariacentral.com.br",
    }


@pytest.fixture()
def sample_expense_payload() -> dict:
    return {
        "description": "Hospedagem",
        "amount": 89.9,
        "category": "Tecnologia",
        "date": "2026-03-05",
        "frequency": "Mensal",
    }


@pytest.fixture()
def sample_project_payload() -> dict:
    return {
        "title": "Site institucional",
        "description": "Landing page com formulário de contato",
        "image": "https://cdn.example.com/site.png",
        "link": "https://example.com",
    }
