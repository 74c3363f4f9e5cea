"""Pytest fixtures for kanbanhub.

The app runs against an in-memory SQLite database shared through a
``StaticPool``; tables are created fresh for every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "development"
os.environ["FEATURE_AI_ENABLED"] = "true"

from typing import Any, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from kanbanhub.ai.providers.base import AIMessage, AIProvider, AIResponse
from kanbanhub.ai.service import AIAssistService, get_ai_service
from kanbanhub.api.v1.auth import get_current_user
from kanbanhub.db.base import Base
from kanbanhub.db.session import get_db_session
from kanbanhub.main import app as kanban_app
from kanbanhub.models.user import User

TEST_USER_ID = "user-1"


class FakeProvider(AIProvider):
    """Provider returning canned content, or raising ``error`` when set."""

    def __init__(self, content: str = "", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: list[List[AIMessage]] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return "fake-model"

    async def complete(
        self,
        messages: List[AIMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: int = 1000,
        json_mode: bool = False,
    ) -> AIResponse:
        self._validate_messages(messages)
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIResponse(content=self.content, model=self.default_model)


@pytest.fixture()
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture()
def current_user() -> User:
    return User(
        id=TEST_USER_ID,
        email="user1@example.com",
        display_name="Test User",
        is_active=True,
    )


@pytest.fixture()
def fake_provider() -> FakeProvider:
    return FakeProvider(content='{"subtasks": []}')


@pytest.fixture()
def app(session_factory, fake_provider):
    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    kanban_app.dependency_overrides[get_db_session] = override_get_db_session
    kanban_app.dependency_overrides[get_ai_service] = lambda: AIAssistService(provider=fake_provider)
    try:
        yield kanban_app
    finally:
        kanban_app.dependency_overrides.clear()


@pytest.fixture()
async def anon_client(app):
    """Client without an authenticated user."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture()
async def client(app, current_user):
    """Client authenticated as ``current_user``."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture()
async def workspace(client) -> dict[str, Any]:
    response = await client.post("/api/workspaces", json={"name": "Acme", "slug": "acme"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
async def project(client, workspace) -> dict[str, Any]:
    response = await client.post(
        f"/api/workspaces/{workspace['id']}/projects",
        json={"name": "Redesign", "key": "RD"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
async def columns(client, project) -> list[dict[str, Any]]:
    """The project's default columns, in board order."""
    response = await client.get(f"/api/projects/{project['id']}/board")
    assert response.status_code == 200
    return response.json()["columns"]


@pytest.fixture()
def create_task(client, project):
    async def _create(title: str, column_id: Optional[int] = None, **fields: Any) -> dict[str, Any]:
        body = {"title": title, "priority": fields.pop("priority", "medium"), **fields}
        if column_id is not None:
            body["columnId"] = column_id
        response = await client.post(f"/api/projects/{project['id']}/tasks", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
