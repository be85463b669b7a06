"""
Shared configuration base.

Every settings group inherits the .env loading rules and the process-wide
fields (environment, debug flag, log level, API prefix) from here.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process-wide settings read from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment (development, staging, production)",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    api_prefix: str = Field(default="/api/v1", description="Prefix for all routers")

    @property
    def is_production(self) -> bool:
        """True when running with production settings."""
        return self.environment.lower() == "production"
