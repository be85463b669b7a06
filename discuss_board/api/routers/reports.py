"""
Content report API endpoints.

Routes:
- POST /reports - Report a post or comment
- PATCH /reports - Search reports (staff)
- GET /reports/{id} - Get report (reporter or staff)
- PUT /reports/{id} - Update report status (staff)

Dependencies: discuss_board.application.services, discuss_board.models
System role: Content reporting HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_current_member, get_current_staff, get_report_service
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import ReportService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.moderation import (
    ContentReportResponse,
    ContentReportSearchRequest,
    CreateContentReportRequest,
    UpdateContentReportRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ContentReportResponse, status_code=201)
@handle_service_errors
async def create_report(
    request: CreateContentReportRequest,
    actor: Actor = Depends(get_current_member),
    report_service: ReportService = Depends(get_report_service),
) -> ContentReportResponse:
    """
    Report a post or a comment.

    Args:
        request: Content type, exactly one target id and the reason
        actor: Reporting member
        report_service: Injected ReportService

    Returns:
        ContentReportResponse: Created report (status pending)

    Raises:
        HTTPException(400): Target missing or not matching content_type
        HTTPException(404): Target not found
        HTTPException(409): Member already reported this content
    """
    result = await report_service.create_report(
        actor,
        content_type=request.content_type,
        reason=request.reason,
        content_post_id=request.content_post_id,
        content_comment_id=request.content_comment_id,
    )
    logger.info(
        "Content reported",
        extra={"report_id": str(result["id"]), "content_type": request.content_type},
    )
    return ContentReportResponse(**result)


@router.patch("", response_model=Page[ContentReportResponse])
@handle_service_errors
async def search_reports(
    request: ContentReportSearchRequest,
    actor: Actor = Depends(get_current_staff),
    report_service: ReportService = Depends(get_report_service),
) -> dict:
    return await report_service.search_reports(request)


@router.get("/{report_id}", response_model=ContentReportResponse)
@handle_service_errors
async def get_report(
    report_id: UUID,
    actor: Actor = Depends(get_current_member),
    report_service: ReportService = Depends(get_report_service),
) -> ContentReportResponse:
    return ContentReportResponse(**await report_service.get_report(report_id, actor))


@router.put("/{report_id}", response_model=ContentReportResponse)
@handle_service_errors
async def update_report(
    report_id: UUID,
    request: UpdateContentReportRequest,
    actor: Actor = Depends(get_current_staff),
    report_service: ReportService = Depends(get_report_service),
) -> ContentReportResponse:
    result = await report_service.update_report(
        report_id,
        actor,
        status=request.status,
        moderation_action_id=request.moderation_action_id,
    )
    return ContentReportResponse(**result)
