"""
Administration API endpoints.

Every route requires an administrator token.

Routes:
- PATCH /admin/audit-logs - Search audit trail
- POST /admin/integration-logs - Record an integration event
- PATCH /admin/integration-logs - Search integration events
- PATCH /admin/notifications - Search every notification
- POST /admin/settings - Create setting
- PATCH /admin/settings - Search settings
- GET /admin/settings/by-key/{key} - Get setting by key
- GET /admin/settings/{id} - Get setting
- PUT /admin/settings/{id} - Update setting
- DELETE /admin/settings/{id} - Delete setting

Dependencies: discuss_board.application.services, discuss_board.models
System role: Administrator HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import (
    get_audit_log_service,
    get_current_administrator,
    get_integration_log_service,
    get_notification_service,
    get_setting_service,
)
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import (
    AuditLogService,
    IntegrationLogService,
    NotificationService,
    SettingService,
)
from discuss_board.models.admin import (
    AuditLogResponse,
    AuditLogSearchRequest,
    CreateIntegrationLogRequest,
    CreateSettingRequest,
    IntegrationLogResponse,
    IntegrationLogSearchRequest,
    SettingResponse,
    SettingSearchRequest,
    UpdateSettingRequest,
)
from discuss_board.models.common import Page
from discuss_board.models.notification import (
    AdminNotificationSearchRequest,
    NotificationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_current_administrator)],
)


@router.patch("/audit-logs", response_model=Page[AuditLogResponse])
@handle_service_errors
async def search_audit_logs(
    request: AuditLogSearchRequest,
    audit_log_service: AuditLogService = Depends(get_audit_log_service),
) -> dict:
    return await audit_log_service.search_audit_logs(request)


@router.post("/integration-logs", response_model=IntegrationLogResponse, status_code=201)
@handle_service_errors
async def create_integration_log(
    request: CreateIntegrationLogRequest,
    integration_log_service: IntegrationLogService = Depends(get_integration_log_service),
) -> IntegrationLogResponse:
    logger.info(
        "Recording integration event",
        extra={"integration_type": request.integration_type, "partner": request.partner},
    )
    return IntegrationLogResponse(
        **await integration_log_service.create_integration_log(request)
    )


@router.patch("/integration-logs", response_model=Page[IntegrationLogResponse])
@handle_service_errors
async def search_integration_logs(
    request: IntegrationLogSearchRequest,
    integration_log_service: IntegrationLogService = Depends(get_integration_log_service),
) -> dict:
    """Search integration events; accepts larger pages than other searches."""
    return await integration_log_service.search_integration_logs(request)


@router.patch("/notifications", response_model=Page[NotificationResponse])
@handle_service_errors
async def search_all_notifications(
    request: AdminNotificationSearchRequest,
    notification_service: NotificationService = Depends(get_notification_service),
) -> dict:
    return await notification_service.search_all_notifications(request)


@router.post("/settings", response_model=SettingResponse, status_code=201)
@handle_service_errors
async def create_setting(
    request: CreateSettingRequest,
    setting_service: SettingService = Depends(get_setting_service),
) -> SettingResponse:
    """
    Create a board setting.

    Raises:
        HTTPException(409): Key already exists
    """
    result = await setting_service.create_setting(
        key=request.key, value=request.value, description=request.description
    )
    return SettingResponse(**result)


@router.patch("/settings", response_model=Page[SettingResponse])
@handle_service_errors
async def search_settings(
    request: SettingSearchRequest,
    setting_service: SettingService = Depends(get_setting_service),
) -> dict:
    return await setting_service.search_settings(request)


@router.get("/settings/by-key/{key}", response_model=SettingResponse)
@handle_service_errors
async def get_setting_by_key(
    key: str,
    setting_service: SettingService = Depends(get_setting_service),
) -> SettingResponse:
    return SettingResponse(**await setting_service.get_setting_by_key(key))


@router.get("/settings/{setting_id}", response_model=SettingResponse)
@handle_service_errors
async def get_setting(
    setting_id: UUID,
    setting_service: SettingService = Depends(get_setting_service),
) -> SettingResponse:
    return SettingResponse(**await setting_service.get_setting(setting_id))


@router.put("/settings/{setting_id}", response_model=SettingResponse)
@handle_service_errors
async def update_setting(
    setting_id: UUID,
    request: UpdateSettingRequest,
    setting_service: SettingService = Depends(get_setting_service),
) -> SettingResponse:
    result = await setting_service.update_setting(
        setting_id, value=request.value, description=request.description
    )
    return SettingResponse(**result)


@router.delete("/settings/{setting_id}", status_code=204)
@handle_service_errors
async def delete_setting(
    setting_id: UUID,
    setting_service: SettingService = Depends(get_setting_service),
) -> None:
    await setting_service.delete_setting(setting_id)
