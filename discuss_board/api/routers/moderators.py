"""
Moderator role API endpoints.

Routes:
- GET /moderators - List active moderators (administrator)
- PUT /moderators/{member_id} - Grant the moderator role (administrator)
- DELETE /moderators/{member_id} - Revoke the moderator role (administrator)

Dependencies: discuss_board.application.services, discuss_board.models
System role: Moderator assignment HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_current_administrator, get_moderator_service
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import ModeratorService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.member import ModeratorResponse

router = APIRouter(prefix="/moderators", tags=["moderators"])


@router.get("", response_model=Page[ModeratorResponse])
@handle_service_errors
async def list_moderators(
    page: int | None = None,
    limit: int | None = None,
    actor: Actor = Depends(get_current_administrator),
    moderator_service: ModeratorService = Depends(get_moderator_service),
) -> dict:
    return await moderator_service.list_moderators(page=page, limit=limit)


@router.put("/{member_id}", response_model=ModeratorResponse)
@handle_service_errors
async def assign_moderator(
    member_id: UUID,
    actor: Actor = Depends(get_current_administrator),
    moderator_service: ModeratorService = Depends(get_moderator_service),
) -> ModeratorResponse:
    """
    Grant the moderator role; repeating the call is harmless.

    Raises:
        HTTPException(400): Member account suspended or banned
        HTTPException(404): Member not found
    """
    return ModeratorResponse(**await moderator_service.assign_moderator(member_id, actor))


@router.delete("/{member_id}", response_model=ModeratorResponse)
@handle_service_errors
async def revoke_moderator(
    member_id: UUID,
    actor: Actor = Depends(get_current_administrator),
    moderator_service: ModeratorService = Depends(get_moderator_service),
) -> ModeratorResponse:
    return ModeratorResponse(**await moderator_service.revoke_moderator(member_id, actor))
