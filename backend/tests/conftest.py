"""
Blog API Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── app: Fresh FastAPI app with its own seeded in-memory store
    ├── test_client: HTTPX AsyncClient bound to `app`
    ├── auth_headers: Authorization header from a real POST /login
    ├── store / post_service: Service-level fixtures without HTTP
    └── auth_service: AuthService built from the test settings
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["JWT_EXPIRES_IN"] = "3600"
os.environ["AUTH_USERNAME"] = "user"
os.environ["AUTH_PASSWORD"] = "password"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ.pop("SEED_FILE", None)

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.config import settings
from app.main import create_app
from app.schemas.post import Post
from app.services.auth_service import AuthService
from app.services.post_service import PostService
from app.store import InMemoryPostStore


@pytest.fixture
def app():
    """A fresh application per test, so mutations never leak between tests."""
    return create_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient configured to talk to the FastAPI app in-process.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/posts")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_headers(test_client):
    """Bearer header obtained through the login endpoint."""
    response = await test_client.post(
        "/login", json={"username": "user", "password": "password"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def sample_post():
    """A post matching the seed data shape."""
    ts = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)
    return Post(
        id="a1",
        title="Original title",
        content="Original content",
        author="Jane Doe",
        created_at=ts,
        updated_at=ts,
    )


@pytest.fixture
def store(sample_post):
    return InMemoryPostStore([sample_post])


@pytest.fixture
def post_service(store):
    return PostService(store)


@pytest.fixture
def auth_service():
    return AuthService.from_settings(settings)
