"""Pytest configuration and fixtures."""

import os

# Set test environment variables before importing app modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PLAINPOST_EDITOR_USERNAME"] = "editor"
os.environ["PLAINPOST_EDITOR_PASSWORD"] = "s3cret"
os.environ["PLAINPOST_NOTIFY_EMAIL"] = ""
os.environ["ENVIRONMENT"] = "development"
os.environ["SMTP_HOST"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from plainpost.infrastructure.database import build_engine
from plainpost.models.post import Post  # noqa: F401
from plainpost.services.post_service import PostService

EDITOR_AUTH = ("editor", "s3cret")


@pytest.fixture
async def session():
    """Fresh in-memory database per test, on the test's own event loop."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    async with AsyncSession(engine, expire_on_commit=False) as db_session:
        yield db_session
    await engine.dispose()


@pytest.fixture
def service(session):
    return PostService(session)


@pytest.fixture
def client():
    """App client; the lifespan disposes the in-memory database on exit."""
    from plainpost.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def editor_auth():
    return EDITOR_AUTH


@pytest.fixture
def create_post(client, editor_auth):
    def _create(title="Hello", content="World"):
        response = client.post("/api/posts", json={"title": title, "content": content}, auth=editor_auth)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
