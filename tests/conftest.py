"""
Pytest configuration shared by all tests.

Environment is set before anything imports basicauth.core.config, because
settings and the database engine are created at import time.
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="basicauth-tests-")

os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TEST_DIR, 'users.db')}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("API_BASE_URL", "http://testserver/")
os.environ.setdefault("SESSION_STORE_PATH", os.path.join(_TEST_DIR, "session.json"))

import httpx
import pytest
from fastapi.testclient import TestClient

from basicauth.core.database import drop_db, init_db
from basicauth.main import app


@pytest.fixture
def database():
    """Fresh user table for each test."""
    drop_db()
    init_db()
    yield
    drop_db()


@pytest.fixture
def api_client(database):
    """Synchronous client against the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def asgi_transport(database):
    """Transport that routes ApiService calls into the in-process app."""
    return httpx.ASGITransport(app=app)


@pytest.fixture
def registration():
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "s3cret",
        "securityQuestion": "First pet?",
        "securityAnswer": "Rex",
    }
