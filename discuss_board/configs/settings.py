"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from discuss_board.configs.auth import AuthSettings
from discuss_board.configs.base import BaseSettings
from discuss_board.configs.board import BoardSettings
from discuss_board.configs.database import DatabaseSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    board: BoardSettings = Field(default_factory=BoardSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once; call ``get_settings.cache_clear()``
    to reload them (tests do this after patching the environment).

    Returns:
        Settings: Application settings instance
    """
    return Settings()
