"""
Tag API endpoints.

Routes:
- POST /tags - Create tag (staff)
- PATCH /tags - Search tags
- GET /tags/{id} - Get tag
- PUT /tags/{id} - Update tag (staff)
- DELETE /tags/{id} - Delete tag (staff)

Dependencies: discuss_board.application.services, discuss_board.models
System role: Tag vocabulary HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_current_actor, get_current_staff, get_tag_service
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import TagService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.post import (
    CreateTagRequest,
    TagResponse,
    TagSearchRequest,
    UpdateTagRequest,
)

router = APIRouter(prefix="/tags", tags=["tags"])


@router.post("", response_model=TagResponse, status_code=201)
@handle_service_errors
async def create_tag(
    request: CreateTagRequest,
    actor: Actor = Depends(get_current_staff),
    tag_service: TagService = Depends(get_tag_service),
) -> TagResponse:
    """
    Create a tag.

    Raises:
        HTTPException(403): Caller is not staff
        HTTPException(409): Tag name already exists
    """
    result = await tag_service.create_tag(actor, name=request.name, description=request.description)
    return TagResponse(**result)


@router.patch("", response_model=Page[TagResponse])
@handle_service_errors
async def list_tags(
    request: TagSearchRequest,
    actor: Actor = Depends(get_current_actor),
    tag_service: TagService = Depends(get_tag_service),
) -> dict:
    return await tag_service.list_tags(request)


@router.get("/{tag_id}", response_model=TagResponse)
@handle_service_errors
async def get_tag(
    tag_id: UUID,
    actor: Actor = Depends(get_current_actor),
    tag_service: TagService = Depends(get_tag_service),
) -> TagResponse:
    return TagResponse(**await tag_service.get_tag(tag_id))


@router.put("/{tag_id}", response_model=TagResponse)
@handle_service_errors
async def update_tag(
    tag_id: UUID,
    request: UpdateTagRequest,
    actor: Actor = Depends(get_current_staff),
    tag_service: TagService = Depends(get_tag_service),
) -> TagResponse:
    result = await tag_service.update_tag(
        tag_id, actor, name=request.name, description=request.description
    )
    return TagResponse(**result)


@router.delete("/{tag_id}", status_code=204)
@handle_service_errors
async def delete_tag(
    tag_id: UUID,
    actor: Actor = Depends(get_current_staff),
    tag_service: TagService = Depends(get_tag_service),
) -> None:
    await tag_service.delete_tag(tag_id, actor)
