"""
Shared test fixtures and configuration for entire test suite.

Provides: Settings isolation, in-memory SQLite session, actor factories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid

import pytest

from discuss_board.boundary.db.CRUD.account_crud import (
    administrator_crud,
    member_crud,
    moderator_crud,
    user_account_crud,
)
from discuss_board.boundary.db.models.account_model import AccountStatus
from discuss_board.configs import get_settings
from discuss_board.core.actor import Actor
from discuss_board.core.security import hash_password
from discuss_board.core.timeutils import utcnow

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """
    Isolate configuration from the developer environment.

    Yields:
        Settings: Freshly loaded settings for the test
    """
    monkeypatch.setenv("AUTH_JWT_SECRET", "test-secret")
    monkeypatch.setenv("POSTGRES_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from discuss_board.boundary.db import models  # noqa: F401
    from discuss_board.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def member_factory(test_async_db):
    """
    Create active, verified members directly through the CRUD layer.

    Returns:
        Callable: ``await member_factory(nickname=None, status=ACTIVE) -> Actor``
    """

    async def _create(nickname: str | None = None, status: AccountStatus = AccountStatus.ACTIVE) -> Actor:
        nickname = nickname or f"member-{uuid.uuid4().hex[:8]}"
        account = await user_account_crud.create(
            test_async_db,
            email=f"{nickname}@example.com",
            password_hash=hash_password(TEST_PASSWORD),
            email_verified=True,
            status=status,
        )
        member = await member_crud.create(
            test_async_db, user_account_id=account.id, nickname=nickname
        )
        return Actor(role="member", user_account_id=account.id, member_id=member.id)

    return _create


@pytest.fixture
def moderator_factory(test_async_db, member_factory):
    """Members holding an active moderator record."""

    async def _create(nickname: str | None = None) -> Actor:
        actor = await member_factory(nickname)
        moderator = await moderator_crud.create(
            test_async_db, member_id=actor.member_id, assigned_at=utcnow()
        )
        return Actor(
            role="member",
            user_account_id=actor.user_account_id,
            member_id=actor.member_id,
            moderator_id=moderator.id,
        )

    return _create


@pytest.fixture
def admin_factory(test_async_db, member_factory):
    """Members holding an active administrator record, acting with an administrator token."""

    async def _create(nickname: str | None = None) -> Actor:
        actor = await member_factory(nickname)
        administrator = await administrator_crud.create(
            test_async_db, member_id=actor.member_id, escalated_at=utcnow()
        )
        return Actor(
            role="administrator",
            user_account_id=actor.user_account_id,
            member_id=actor.member_id,
            administrator_id=administrator.id,
        )

    return _create


@pytest.fixture
def guest_actor() -> Actor:
    return Actor(role="guest", guest_id=uuid.uuid4())
