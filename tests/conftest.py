from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Settings are read at import time, so point them at a scratch area first.
_SCRATCH = Path(tempfile.mkdtemp(prefix="job-tracker-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_SCRATCH / 'test.db'}"
os.environ["UPLOAD_DIR"] = str(_SCRATCH / "uploads")
os.environ["SECRET_KEY_FOR_AUTH"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from job_tracker.db.database import engine
from job_tracker.db.models import Base
from job_tracker.main import app


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def register(client):
    """Registers a user and returns the Authorization headers for them."""

    def _register(email: str = "user@example.com", password: str = "secret123") -> dict[str, str]:
        resp = client.post("/api/v1/auth/register", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _register


@pytest.fixture()
def auth_headers(register) -> dict[str, str]:
    return register()


@pytest.fixture()
def company_id(client, auth_headers) -> int:
    resp = client.post("/api/v1/companies/", json={"name": "Acme"}, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]
