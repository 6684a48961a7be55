import os
import tempfile
import uuid
from pathlib import Path

import pytest

# Point the app at throwaway storage before `careerhub` is imported anywhere.
_TMP = Path(tempfile.mkdtemp(prefix="careerhub-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["RESUME_STORAGE_DIR"] = str(_TMP / "resumes")
os.environ["ENV"] = "dev"
os.environ["SERPAPI_KEY"] = ""
os.environ["GROQ_API_KEY"] = ""

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from careerhub import main  # noqa: E402
from careerhub.database import create_db_and_tables, engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    """Give every test empty tables and a fresh chat rate limiter."""
    SQLModel.metadata.drop_all(engine)
    create_db_and_tables()
    main._chat_rate_limiter.reset()
    yield


@pytest.fixture
def client():
    return TestClient(main.app)


@pytest.fixture
def make_user(client):
    """Register and log in a user; returns (user json, auth headers)."""
    def _make(name="Asha Rao", email=None, password="secret123"):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        r = client.post('/auth/register', json={'name': name, 'email': email, 'password': password})
        assert r.status_code == 201, r.text
        login = client.post('/auth/login', json={'email': email, 'password': password})
        assert login.status_code == 200, login.text
        return r.json(), {'Authorization': f"Bearer {login.json()['access_token']}"}
    return _make


@pytest.fixture
def auth_headers(make_user):
    return make_user()[1]
