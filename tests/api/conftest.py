"""
API test fixtures.

Routes run against mocked services; the database dependency yields a mock
session so no engine is ever created.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.api.deps import get_current_actor
from discuss_board.api.main import create_app
from discuss_board.boundary.db import get_async_db
from discuss_board.core.actor import Actor


@pytest.fixture
def mock_db() -> AsyncMock:
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def app(mock_db):
    app = create_app()

    async def _db():
        yield mock_db

    app.dependency_overrides[get_async_db] = _db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def member() -> Actor:
    return Actor(role="member", user_account_id=uuid.uuid4(), member_id=uuid.uuid4())


@pytest.fixture
def login_as(app):
    """Make every route see ``actor`` as the authenticated caller."""

    def _login(actor: Actor) -> Actor:
        app.dependency_overrides[get_current_actor] = lambda: actor
        return actor

    return _login
