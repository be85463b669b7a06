"""
Board configuration ORM models.

Key/value settings editable by administrators and the forbidden word list
enforced on posts and comments.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Runtime board configuration persistence
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class SettingModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Named board setting; key is unique among non-deleted settings."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)


class ForbiddenWordModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Expression rejected in post and comment text (case-insensitive)."""

    __tablename__ = "forbidden_words"

    expression: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
