"""
Appeal API endpoints.

Routes:
- POST /appeals - Appeal a moderation action
- PATCH /appeals - Search appeals (own appeals for members, all for staff)
- GET /appeals/{id} - Get appeal
- PUT /appeals/{id} - Review an appeal (staff)
- DELETE /appeals/{id} - Delete appeal (administrator)

Dependencies: discuss_board.application.services, discuss_board.models
System role: Appeal HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import (
    get_appeal_service,
    get_current_administrator,
    get_current_member,
    get_current_staff,
)
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import AppealService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.moderation import (
    AppealResponse,
    AppealSearchRequest,
    CreateAppealRequest,
    ResolveAppealRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appeals", tags=["appeals"])


@router.post("", response_model=AppealResponse, status_code=201)
@handle_service_errors
async def create_appeal(
    request: CreateAppealRequest,
    actor: Actor = Depends(get_current_member),
    appeal_service: AppealService = Depends(get_appeal_service),
) -> AppealResponse:
    """
    Appeal a moderation action that affected the caller.

    Raises:
        HTTPException(403): Caller was not affected by the action
        HTTPException(404): Action not found
        HTTPException(409): Open appeal already exists
    """
    result = await appeal_service.create_appeal(
        actor,
        moderation_action_id=request.moderation_action_id,
        appeal_rationale=request.appeal_rationale,
    )
    return AppealResponse(**result)


@router.patch("", response_model=Page[AppealResponse])
@handle_service_errors
async def search_appeals(
    request: AppealSearchRequest,
    actor: Actor = Depends(get_current_member),
    appeal_service: AppealService = Depends(get_appeal_service),
) -> dict:
    return await appeal_service.search_appeals(request, actor)


@router.get("/{appeal_id}", response_model=AppealResponse)
@handle_service_errors
async def get_appeal(
    appeal_id: UUID,
    actor: Actor = Depends(get_current_member),
    appeal_service: AppealService = Depends(get_appeal_service),
) -> AppealResponse:
    return AppealResponse(**await appeal_service.get_appeal(appeal_id, actor))


@router.put("/{appeal_id}", response_model=AppealResponse)
@handle_service_errors
async def resolve_appeal(
    appeal_id: UUID,
    request: ResolveAppealRequest,
    actor: Actor = Depends(get_current_staff),
    appeal_service: AppealService = Depends(get_appeal_service),
) -> AppealResponse:
    """
    Review an appeal; accepting it reverts the contested action.

    Raises:
        HTTPException(400): Appeal already resolved
        HTTPException(404): Appeal not found
    """
    result = await appeal_service.resolve_appeal(
        appeal_id, actor, status=request.status, resolution_notes=request.resolution_notes
    )
    logger.info(
        "Appeal reviewed",
        extra={"appeal_id": str(appeal_id), "appeal_status": request.status},
    )
    return AppealResponse(**result)


@router.delete("/{appeal_id}", status_code=204)
@handle_service_errors
async def delete_appeal(
    appeal_id: UUID,
    actor: Actor = Depends(get_current_administrator),
    appeal_service: AppealService = Depends(get_appeal_service),
) -> None:
    await appeal_service.delete_appeal(appeal_id, actor)
