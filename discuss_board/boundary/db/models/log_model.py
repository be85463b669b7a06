"""
Audit and integration log ORM models.

Both tables are append-only: rows are written by services and only read
back through administrator searches.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Compliance and integration trail persistence
"""

import uuid

from sqlalchemy import JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import Base, TimestampMixin, UUIDMixin


class AuditLogModel(Base, UUIDMixin, TimestampMixin):
    """
    Record of a security or moderation relevant event.

    Attributes:
        actor_user_account_id: Account that caused the event, if known
        actor_type: "member", "moderator", "administrator" or "system"
        action_category: Grouping such as "authentication" or "moderation"
        target_table: Table of the affected row
        target_id: Id of the affected row
        event_payload: Structured event details
        event_description: Human-readable summary
    """

    __tablename__ = "audit_logs"

    actor_user_account_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), nullable=True, index=True
    )
    actor_type: Mapped[str] = mapped_column(String(32), nullable=False)
    action_category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    target_table: Mapped[str | None] = mapped_column(String(64), nullable=True)
    target_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    event_payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    event_description: Mapped[str | None] = mapped_column(Text, nullable=True)


class IntegrationLogModel(Base, UUIDMixin, TimestampMixin):
    """Trace of a call to or from an external system (mailer, webhook)."""

    __tablename__ = "integration_logs"

    user_account_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), nullable=True, index=True
    )
    integration_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    partner: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    external_reference_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
