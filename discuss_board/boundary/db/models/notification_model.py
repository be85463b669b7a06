"""
Notification ORM models.

Notifications are addressed to user accounts. Delivery honours the
recipient member's notification preference.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: In-app notification persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
    enum_column,
)


class DeliveryStatus(str, enum.Enum):
    """
    PENDING: Queued for an external channel
    DELIVERED: Visible to the recipient
    SUPPRESSED: Dropped because of the recipient's preferences
    """

    PENDING = "pending"
    DELIVERED = "delivered"
    SUPPRESSED = "suppressed"


class NotificationFrequency(str, enum.Enum):
    REALTIME = "realtime"
    DAILY = "daily"
    WEEKLY = "weekly"


class NotificationModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Message for a user account.

    Attributes:
        user_account_id: Recipient account
        event_type: Event that produced the notification ("comment_reply",
            "moderation_action", "email_verification", ...)
        subject: Short headline
        body: Message text
        delivery_channel: "in_app" or "email"
        delivery_status: DeliveryStatus
        read_at: When the recipient marked it read
    """

    __tablename__ = "notifications"

    user_account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("user_accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    delivery_channel: Mapped[str] = mapped_column(String(32), nullable=False, default="in_app")
    delivery_status: Mapped[DeliveryStatus] = mapped_column(
        enum_column(DeliveryStatus), nullable=False, default=DeliveryStatus.DELIVERED
    )
    read_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )


class NotificationPreferenceModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Per-member delivery settings; one row per member."""

    __tablename__ = "notification_preferences"

    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    email_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    push_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    in_app_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    frequency: Mapped[NotificationFrequency] = mapped_column(
        enum_column(NotificationFrequency),
        nullable=False,
        default=NotificationFrequency.REALTIME,
    )
    mute_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
