"""
Board behaviour settings.

Pagination defaults, edit windows, attachment limits and CORS origins.

Dependencies: pydantic, pydantic_settings
System role: Tunables for forum business rules
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from discuss_board.configs.base import BaseSettings


class BoardSettings(BaseSettings):
    """Forum business rule configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BOARD_",
        case_sensitive=False,
        extra="ignore",
    )

    post_edit_window_hours: int = Field(
        default=24,
        description="Hours after creation during which authors may edit a post",
    )
    default_page_size: int = Field(default=20, description="Default search page size")
    max_page_size: int = Field(default=100, description="Largest accepted page size")
    max_log_page_size: int = Field(
        default=1000,
        description="Largest accepted page size for integration log searches",
    )
    max_attachment_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum attachment size in bytes",
    )
    allowed_attachment_types: list[str] = Field(
        default=["application/pdf", "image/png", "image/jpeg", "image/gif"],
        description="Accepted attachment MIME types",
    )
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
