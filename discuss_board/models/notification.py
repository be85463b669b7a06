"""
Notification schemas.

Dependencies: pydantic
System role: Notification and preference API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from discuss_board.models.common import SearchRequest


class NotificationResponse(BaseModel):
    id: uuid.UUID
    user_account_id: uuid.UUID
    event_type: str
    subject: str
    body: str
    delivery_channel: str
    delivery_status: str
    read_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class NotificationSearchRequest(SearchRequest):
    """Filters for the caller's own notifications."""

    event_type: str | None = None
    unread_only: bool = False


class AdminNotificationSearchRequest(NotificationSearchRequest):
    user_account_id: uuid.UUID | None = None
    delivery_status: Literal["pending", "delivered", "suppressed"] | None = None


class NotificationPreferenceResponse(BaseModel):
    id: uuid.UUID
    member_id: uuid.UUID
    email_enabled: bool
    push_enabled: bool
    in_app_enabled: bool
    frequency: str
    mute_until: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UpdateNotificationPreferenceRequest(BaseModel):
    email_enabled: bool | None = None
    push_enabled: bool | None = None
    in_app_enabled: bool | None = None
    frequency: Literal["realtime", "daily", "weekly"] | None = None
    mute_until: datetime | None = Field(None, description="Suppress in-app delivery until then")
    clear_mute: bool = Field(False, description="Lift an active mute")
