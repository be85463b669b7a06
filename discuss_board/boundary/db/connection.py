"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and the FastAPI
dependency that scopes one session (and one transaction) to each request.

Dependencies: sqlalchemy, discuss_board.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from discuss_board.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the process-wide async engine.

    Pool sizing applies to PostgreSQL only; SQLite URLs (local development)
    use SQLAlchemy's default pool for the driver. pool_pre_ping=True
    verifies connections before use to detect stale ones early.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    if db_config.is_sqlite:
        return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory bound to the engine.

    expire_on_commit=False keeps ORM rows readable after the request
    transaction commits.

    Returns:
        async_sessionmaker: Async session factory
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    Commits when the route returns normally and rolls back when it raises,
    so each request is a single all-or-nothing transaction.

    Yields:
        AsyncSession: Async SQLAlchemy session

    Usage:
        @router.get("/posts/{post_id}")
        async def get_post(post_id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await post_crud.get_active_by_id(db, post_id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
