"""
Notification API endpoints.

Routes:
- PATCH /notifications - Search the caller's notifications
- GET /notifications/preferences - Caller's delivery preferences
- PUT /notifications/preferences - Update delivery preferences
- GET /notifications/{id} - Get notification (recipient or administrator)
- PUT /notifications/{id}/read - Mark as read
- DELETE /notifications/{id} - Delete notification

Dependencies: discuss_board.application.services, discuss_board.models
System role: Notification HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_current_member, get_notification_service
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import NotificationService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.notification import (
    NotificationPreferenceResponse,
    NotificationResponse,
    NotificationSearchRequest,
    UpdateNotificationPreferenceRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.patch("", response_model=Page[NotificationResponse])
@handle_service_errors
async def search_my_notifications(
    request: NotificationSearchRequest,
    actor: Actor = Depends(get_current_member),
    notification_service: NotificationService = Depends(get_notification_service),
) -> dict:
    """
    Page through the caller's notifications, newest first.

    Suppressed notifications are never listed here.
    """
    return await notification_service.search_my_notifications(actor, request)


@router.get("/preferences", response_model=NotificationPreferenceResponse)
@handle_service_errors
async def get_my_preferences(
    actor: Actor = Depends(get_current_member),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationPreferenceResponse:
    return NotificationPreferenceResponse(**await notification_service.get_my_preferences(actor))


@router.put("/preferences", response_model=NotificationPreferenceResponse)
@handle_service_errors
async def update_my_preferences(
    request: UpdateNotificationPreferenceRequest,
    actor: Actor = Depends(get_current_member),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationPreferenceResponse:
    result = await notification_service.update_my_preferences(
        actor,
        email_enabled=request.email_enabled,
        push_enabled=request.push_enabled,
        in_app_enabled=request.in_app_enabled,
        frequency=request.frequency,
        mute_until=request.mute_until,
        clear_mute=request.clear_mute,
    )
    return NotificationPreferenceResponse(**result)


@router.get("/{notification_id}", response_model=NotificationResponse)
@handle_service_errors
async def get_notification(
    notification_id: UUID,
    actor: Actor = Depends(get_current_member),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    result = await notification_service.get_notification(notification_id, actor)
    return NotificationResponse(**result)


@router.put("/{notification_id}/read", response_model=NotificationResponse)
@handle_service_errors
async def mark_read(
    notification_id: UUID,
    actor: Actor = Depends(get_current_member),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    return NotificationResponse(**await notification_service.mark_read(notification_id, actor))


@router.delete("/{notification_id}", status_code=204)
@handle_service_errors
async def delete_notification(
    notification_id: UUID,
    actor: Actor = Depends(get_current_member),
    notification_service: NotificationService = Depends(get_notification_service),
) -> None:
    await notification_service.delete_notification(notification_id, actor)
