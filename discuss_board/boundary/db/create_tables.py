"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, discuss_board.configs
System role: Database schema initialization

Usage:
    python -m discuss_board.boundary.db.create_tables
"""

import asyncio
import logging

from discuss_board.boundary.db import models  # noqa: F401  (registers tables)
from discuss_board.boundary.db.base import Base
from discuss_board.boundary.db.connection import get_async_engine

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables are left unchanged.

    Raises:
        SQLAlchemyError: If the connection or DDL fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created", extra={"table_count": len(Base.metadata.tables)})


async def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_all_tables())
