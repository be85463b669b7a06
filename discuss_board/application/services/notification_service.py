"""
Notification service orchestrator.

Creates notifications on behalf of other services, lets recipients page
through and acknowledge them, and manages per-member delivery preferences.

Dependencies: discuss_board.boundary.db.CRUD, discuss_board.core
System role: Notification use case orchestration
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.query_utils import order_clause, page_request
from discuss_board.boundary.db.CRUD.account_crud import member_crud
from discuss_board.boundary.db.CRUD.notification_crud import (
    notification_crud,
    notification_preference_crud,
)
from discuss_board.boundary.db.models.notification_model import (
    DeliveryStatus,
    NotificationFrequency,
    NotificationModel,
    NotificationPreferenceModel,
)
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import ensure_utc, to_iso, utcnow
from discuss_board.models.notification import (
    AdminNotificationSearchRequest,
    NotificationSearchRequest,
)

logger = logging.getLogger(__name__)

NOTIFICATION_SORT_FIELDS = ("created_at", "event_type", "read_at")

# Always delivered regardless of preferences.
TRANSACTIONAL_EVENTS = frozenset({"email_verification"})


def notification_to_dict(notification: NotificationModel) -> dict:
    return {
        "id": notification.id,
        "user_account_id": notification.user_account_id,
        "event_type": notification.event_type,
        "subject": notification.subject,
        "body": notification.body,
        "delivery_channel": notification.delivery_channel,
        "delivery_status": DeliveryStatus(notification.delivery_status).value,
        "read_at": to_iso(notification.read_at),
        "created_at": to_iso(notification.created_at),
        "updated_at": to_iso(notification.updated_at),
    }


def preference_to_dict(preference: NotificationPreferenceModel) -> dict:
    return {
        "id": preference.id,
        "member_id": preference.member_id,
        "email_enabled": preference.email_enabled,
        "push_enabled": preference.push_enabled,
        "in_app_enabled": preference.in_app_enabled,
        "frequency": NotificationFrequency(preference.frequency).value,
        "mute_until": to_iso(preference.mute_until),
        "created_at": to_iso(preference.created_at),
        "updated_at": to_iso(preference.updated_at),
    }


class NotificationService:
    """Notification service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize notification service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def notify(
        self,
        user_account_id: UUID,
        event_type: str,
        subject: str,
        body: str,
        delivery_channel: str = "in_app",
    ) -> dict:
        """
        Create a notification for an account.

        In-app notifications are suppressed when the recipient disabled
        in-app delivery or muted notifications until a future time.
        Transactional events (email verification) are never suppressed.

        Args:
            user_account_id: Recipient account
            event_type: Event identifier
            subject: Short headline
            body: Message text
            delivery_channel: "in_app" or "email"

        Returns:
            dict: Created notification
        """
        if event_type in TRANSACTIONAL_EVENTS or delivery_channel != "in_app":
            status = DeliveryStatus.PENDING if delivery_channel != "in_app" else DeliveryStatus.DELIVERED
        else:
            status = await self._in_app_status(user_account_id)

        notification = await notification_crud.create(
            self.db,
            user_account_id=user_account_id,
            event_type=event_type,
            subject=subject,
            body=body,
            delivery_channel=delivery_channel,
            delivery_status=status,
        )
        logger.info(
            "Notification created",
            extra={
                "notification_id": str(notification.id),
                "event_type": event_type,
                "delivery_status": status.value,
            },
        )
        return notification_to_dict(notification)

    async def _in_app_status(self, user_account_id: UUID) -> DeliveryStatus:
        member = await member_crud.get_by_user_account_id(self.db, user_account_id)
        if member is None:
            return DeliveryStatus.DELIVERED
        preference = await notification_preference_crud.get_by_member_id(self.db, member.id)
        if preference is None:
            return DeliveryStatus.DELIVERED
        if not preference.in_app_enabled:
            return DeliveryStatus.SUPPRESSED
        mute_until = ensure_utc(preference.mute_until)
        if mute_until is not None and mute_until > utcnow():
            return DeliveryStatus.SUPPRESSED
        return DeliveryStatus.DELIVERED

    async def search_my_notifications(
        self,
        actor: Actor,
        request: NotificationSearchRequest,
    ) -> dict:
        """
        Page through the caller's own notifications.

        Suppressed notifications are hidden from the recipient.

        Args:
            actor: Authenticated caller
            request: Filters, paging and sorting

        Returns:
            dict: Page of notifications
        """
        if actor.user_account_id is None:
            raise ForbiddenError("Notifications require a signed-in account")

        criteria = [
            NotificationModel.user_account_id == actor.user_account_id,
            NotificationModel.delivery_status != DeliveryStatus.SUPPRESSED,
        ]
        criteria.extend(self._common_filters(request))
        return await self._search(request, criteria)

    async def search_all_notifications(self, request: AdminNotificationSearchRequest) -> dict:
        """Administrator search across every account's notifications."""
        criteria = self._common_filters(request)
        if request.user_account_id is not None:
            criteria.append(NotificationModel.user_account_id == request.user_account_id)
        if request.delivery_status is not None:
            criteria.append(
                NotificationModel.delivery_status == DeliveryStatus(request.delivery_status)
            )
        return await self._search(request, criteria)

    @staticmethod
    def _common_filters(request: NotificationSearchRequest) -> list:
        criteria = []
        if request.event_type:
            criteria.append(NotificationModel.event_type == request.event_type)
        if request.unread_only:
            criteria.append(NotificationModel.read_at.is_(None))
        return criteria

    async def _search(self, request: NotificationSearchRequest, criteria: list) -> dict:
        paging = page_request(request.page, request.limit)
        rows, total = await notification_crud.search(
            self.db,
            criteria,
            order_by=order_clause(
                NotificationModel, request.sort_by, request.sort_order, NOTIFICATION_SORT_FIELDS
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [notification_to_dict(n) for n in rows])

    async def _get_owned(self, notification_id: UUID, actor: Actor) -> NotificationModel:
        notification = await notification_crud.get_active_by_id(self.db, notification_id)
        if notification is None:
            raise NotFoundError("Notification", notification_id)
        if notification.user_account_id != actor.user_account_id and not actor.is_administrator:
            raise ForbiddenError("You can only access your own notifications")
        return notification

    async def get_notification(self, notification_id: UUID, actor: Actor) -> dict:
        return notification_to_dict(await self._get_owned(notification_id, actor))

    async def mark_read(self, notification_id: UUID, actor: Actor) -> dict:
        """
        Mark a notification as read; repeated calls keep the first read time.

        Raises:
            NotFoundError: Notification missing or deleted
            ForbiddenError: Caller is not the recipient
        """
        notification = await self._get_owned(notification_id, actor)
        if notification.read_at is None:
            notification = await notification_crud.update(self.db, notification, read_at=utcnow())
        return notification_to_dict(notification)

    async def delete_notification(self, notification_id: UUID, actor: Actor) -> None:
        notification = await self._get_owned(notification_id, actor)
        await notification_crud.soft_delete(self.db, notification)

    # Preferences

    async def get_my_preferences(self, actor: Actor) -> dict:
        """Return the caller's preferences, creating defaults on first access."""
        preference = await self._get_or_create_preference(actor.require_member())
        return preference_to_dict(preference)

    async def update_my_preferences(
        self,
        actor: Actor,
        email_enabled: bool | None = None,
        push_enabled: bool | None = None,
        in_app_enabled: bool | None = None,
        frequency: str | None = None,
        mute_until: datetime | None = None,
        clear_mute: bool = False,
    ) -> dict:
        """
        Change the caller's notification preferences.

        Args:
            actor: Authenticated member
            email_enabled: Toggle email delivery
            push_enabled: Toggle push delivery
            in_app_enabled: Toggle in-app delivery
            frequency: "realtime", "daily" or "weekly"
            mute_until: Suppress in-app delivery until this time
            clear_mute: Lift an active mute; wins over mute_until

        Returns:
            dict: Updated preferences

        Raises:
            ValidationError: Unknown frequency
        """
        preference = await self._get_or_create_preference(actor.require_member())

        changes: dict = {}
        if email_enabled is not None:
            changes["email_enabled"] = email_enabled
        if push_enabled is not None:
            changes["push_enabled"] = push_enabled
        if in_app_enabled is not None:
            changes["in_app_enabled"] = in_app_enabled
        if frequency is not None:
            try:
                changes["frequency"] = NotificationFrequency(frequency)
            except ValueError:
                raise ValidationError(f"Unknown frequency: {frequency}", field="frequency")
        if clear_mute:
            changes["mute_until"] = None
        elif mute_until is not None:
            changes["mute_until"] = ensure_utc(mute_until)

        if changes:
            preference = await notification_preference_crud.update(self.db, preference, **changes)
        return preference_to_dict(preference)

    async def _get_or_create_preference(self, member_id: UUID) -> NotificationPreferenceModel:
        preference = await notification_preference_crud.get_by_member_id(self.db, member_id)
        if preference is None:
            preference = await notification_preference_crud.create(self.db, member_id=member_id)
        return preference
