"""
Moderation action API endpoints.

Routes:
- POST /moderation-actions - Apply a moderation action (moderator)
- PATCH /moderation-actions - Search actions (staff)
- GET /moderation-actions/{id} - Get action (staff)
- PUT /moderation-actions/{id}/status - Complete or revert an action (staff)

Dependencies: discuss_board.application.services, discuss_board.models
System role: Moderation HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import (
    get_current_moderator,
    get_current_staff,
    get_moderation_service,
)
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import ModerationService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.moderation import (
    CreateModerationActionRequest,
    ModerationActionResponse,
    ModerationActionSearchRequest,
    UpdateModerationActionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moderation-actions", tags=["moderation"])


@router.post("", response_model=ModerationActionResponse, status_code=201)
@handle_service_errors
async def create_action(
    request: CreateModerationActionRequest,
    actor: Actor = Depends(get_current_moderator),
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> ModerationActionResponse:
    """
    Record and apply a moderation action.

    Args:
        request: Action type, reason, targets, window and related reports
        actor: Acting moderator
        moderation_service: Injected ModerationService

    Returns:
        ModerationActionResponse: Created action

    Raises:
        HTTPException(400): No target or inverted effective window
        HTTPException(403): Caller is not a moderator
        HTTPException(404): Target or report not found
    """
    logger.info(
        "Applying moderation action",
        extra={
            "action_type": request.action_type,
            "report_count": len(request.related_report_ids),
        },
    )
    result = await moderation_service.create_action(
        actor,
        action_type=request.action_type,
        action_reason=request.action_reason,
        target_member_id=request.target_member_id,
        target_post_id=request.target_post_id,
        target_comment_id=request.target_comment_id,
        decision_narrative=request.decision_narrative,
        effective_from=request.effective_from,
        effective_until=request.effective_until,
        related_report_ids=request.related_report_ids,
    )
    return ModerationActionResponse(**result)


@router.patch("", response_model=Page[ModerationActionResponse])
@handle_service_errors
async def search_actions(
    request: ModerationActionSearchRequest,
    actor: Actor = Depends(get_current_staff),
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> dict:
    return await moderation_service.search_actions(request)


@router.get("/{action_id}", response_model=ModerationActionResponse)
@handle_service_errors
async def get_action(
    action_id: UUID,
    actor: Actor = Depends(get_current_staff),
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> ModerationActionResponse:
    return ModerationActionResponse(**await moderation_service.get_action(action_id))


@router.put("/{action_id}/status", response_model=ModerationActionResponse)
@handle_service_errors
async def update_action_status(
    action_id: UUID,
    request: UpdateModerationActionRequest,
    actor: Actor = Depends(get_current_staff),
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> ModerationActionResponse:
    """Set an action's status; ``reverted`` undoes its effect on content."""
    result = await moderation_service.update_action_status(action_id, actor, request.status)
    return ModerationActionResponse(**result)
