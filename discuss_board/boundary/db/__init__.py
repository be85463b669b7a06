"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, SoftDeleteMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management

Dependencies: sqlalchemy, discuss_board.configs
System role: Database adapter providing persistent storage for the board
"""

from discuss_board.boundary.db.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin
from discuss_board.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from discuss_board.boundary.db import models  # noqa: F401

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
