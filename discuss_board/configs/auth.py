"""
Authentication configuration settings.

JWT signing parameters and token lifetimes for members, administrators
and guests.

Dependencies: pydantic, pydantic_settings
System role: Token issuance configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from discuss_board.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT and credential configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(
        default="change-me-in-production",
        description="HMAC secret used to sign access and refresh tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_issuer: str = Field(default="discuss-board", description="JWT iss claim")
    access_token_minutes: int = Field(default=60, description="Access token lifetime")
    refresh_token_days: int = Field(default=7, description="Refresh token lifetime")
    email_verification_hours: int = Field(
        default=48,
        description="Lifetime of email verification tokens",
    )
    require_email_verification: bool = Field(
        default=True,
        description="Members must verify their email before logging in",
    )
    member_password_min_length: int = Field(default=8, description="Minimum member password length")
    admin_password_min_length: int = Field(default=10, description="Minimum administrator password length")
