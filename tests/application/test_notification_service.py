"""
Test suite for NotificationService.

Tests delivery suppression through preferences, recipient-only access and
read acknowledgement.

System role: Verification of notification orchestration
"""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.notification_service import NotificationService
from discuss_board.core.exceptions import ForbiddenError, ValidationError
from discuss_board.core.timeutils import utcnow
from discuss_board.models.notification import (
    AdminNotificationSearchRequest,
    NotificationSearchRequest,
)


@pytest.fixture
def notification_service(test_async_db: AsyncSession) -> NotificationService:
    return NotificationService(test_async_db)


async def _ping(service: NotificationService, actor, event_type: str = "comment_created") -> dict:
    return await service.notify(actor.user_account_id, event_type, "Subject", "Body")


class TestNotify:
    """Test suite for NotificationService.notify()."""

    async def test_default_preferences_deliver(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        recipient = await member_factory()

        notification = await _ping(notification_service, recipient)

        assert notification["delivery_status"] == "delivered"
        assert notification["delivery_channel"] == "in_app"
        assert notification["read_at"] is None

    async def test_disabled_in_app_is_suppressed_and_hidden(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        # Arrange
        recipient = await member_factory()
        await notification_service.update_my_preferences(recipient, in_app_enabled=False)

        # Act
        notification = await _ping(notification_service, recipient)

        # Assert
        assert notification["delivery_status"] == "suppressed"
        inbox = await notification_service.search_my_notifications(recipient, NotificationSearchRequest())
        assert inbox["pagination"]["records"] == 0
        everything = await notification_service.search_all_notifications(
            AdminNotificationSearchRequest(delivery_status="suppressed")
        )
        assert everything["pagination"]["records"] == 1

    async def test_mute_window_suppresses_until_expiry(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        recipient = await member_factory()
        await notification_service.update_my_preferences(
            recipient, mute_until=utcnow() + timedelta(hours=1)
        )

        muted = await _ping(notification_service, recipient)
        await notification_service.update_my_preferences(
            recipient, mute_until=utcnow() - timedelta(hours=1)
        )
        delivered = await _ping(notification_service, recipient)

        assert muted["delivery_status"] == "suppressed"
        assert delivered["delivery_status"] == "delivered"

    async def test_clear_mute_lifts_mute_early(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        # Arrange
        recipient = await member_factory()
        await notification_service.update_my_preferences(
            recipient, mute_until=utcnow() + timedelta(days=1)
        )

        # Act
        preferences = await notification_service.update_my_preferences(recipient, clear_mute=True)
        notification = await _ping(notification_service, recipient)

        # Assert
        assert preferences["mute_until"] is None
        assert notification["delivery_status"] == "delivered"

    async def test_omitted_mute_keeps_existing_mute(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        recipient = await member_factory()
        await notification_service.update_my_preferences(
            recipient, mute_until=utcnow() + timedelta(days=1)
        )

        preferences = await notification_service.update_my_preferences(recipient, frequency="daily")

        assert preferences["mute_until"] is not None
        assert preferences["frequency"] == "daily"

    async def test_transactional_events_ignore_preferences(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        recipient = await member_factory()
        await notification_service.update_my_preferences(recipient, in_app_enabled=False)

        notification = await _ping(notification_service, recipient, event_type="email_verification")

        assert notification["delivery_status"] == "delivered"

    async def test_email_channel_starts_pending(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        recipient = await member_factory()

        notification = await notification_service.notify(
            recipient.user_account_id, "digest", "Weekly", "Body", delivery_channel="email"
        )

        assert notification["delivery_status"] == "pending"


class TestRecipientAccess:
    async def test_mark_read_is_idempotent(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        recipient = await member_factory()
        notification = await _ping(notification_service, recipient)

        first = await notification_service.mark_read(notification["id"], recipient)
        second = await notification_service.mark_read(notification["id"], recipient)

        assert first["read_at"] is not None
        assert second["read_at"] == first["read_at"]
        unread = await notification_service.search_my_notifications(
            recipient, NotificationSearchRequest(unread_only=True)
        )
        assert unread["pagination"]["records"] == 0

    async def test_other_members_are_forbidden(
        self, notification_service: NotificationService, member_factory, admin_factory
    ) -> None:
        recipient = await member_factory()
        notification = await _ping(notification_service, recipient)

        with pytest.raises(ForbiddenError):
            await notification_service.get_notification(notification["id"], await member_factory())
        admin_view = await notification_service.get_notification(notification["id"], await admin_factory())
        assert admin_view["id"] == notification["id"]

    async def test_guests_have_no_inbox(
        self, notification_service: NotificationService, guest_actor
    ) -> None:
        with pytest.raises(ForbiddenError):
            await notification_service.search_my_notifications(guest_actor, NotificationSearchRequest())


class TestPreferences:
    async def test_defaults_created_on_first_read(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        member = await member_factory()

        first = await notification_service.get_my_preferences(member)
        second = await notification_service.get_my_preferences(member)

        assert first["id"] == second["id"]
        assert first["in_app_enabled"] is True
        assert first["frequency"] == "realtime"

    async def test_unknown_frequency(
        self, notification_service: NotificationService, member_factory
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await notification_service.update_my_preferences(await member_factory(), frequency="hourly")

        assert exc_info.value.field == "frequency"
