"""
Forbidden word API endpoints (staff).

Routes:
- POST /forbidden-words - Add expression
- PATCH /forbidden-words - Search expressions
- GET /forbidden-words/{id} - Get expression
- PUT /forbidden-words/{id} - Update expression
- DELETE /forbidden-words/{id} - Delete expression

Dependencies: discuss_board.application.services, discuss_board.models
System role: Content filter vocabulary HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_current_staff, get_forbidden_word_service
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import ForbiddenWordService
from discuss_board.models.admin import (
    CreateForbiddenWordRequest,
    ForbiddenWordResponse,
    ForbiddenWordSearchRequest,
    UpdateForbiddenWordRequest,
)
from discuss_board.models.common import Page

router = APIRouter(
    prefix="/forbidden-words",
    tags=["forbidden-words"],
    dependencies=[Depends(get_current_staff)],
)


@router.post("", response_model=ForbiddenWordResponse, status_code=201)
@handle_service_errors
async def create_forbidden_word(
    request: CreateForbiddenWordRequest,
    forbidden_word_service: ForbiddenWordService = Depends(get_forbidden_word_service),
) -> ForbiddenWordResponse:
    """
    Add an expression rejected in posts and comments.

    Raises:
        HTTPException(409): Expression already listed (case-insensitive)
    """
    result = await forbidden_word_service.create_forbidden_word(
        request.expression, description=request.description
    )
    return ForbiddenWordResponse(**result)


@router.patch("", response_model=Page[ForbiddenWordResponse])
@handle_service_errors
async def search_forbidden_words(
    request: ForbiddenWordSearchRequest,
    forbidden_word_service: ForbiddenWordService = Depends(get_forbidden_word_service),
) -> dict:
    return await forbidden_word_service.search_forbidden_words(request)


@router.get("/{word_id}", response_model=ForbiddenWordResponse)
@handle_service_errors
async def get_forbidden_word(
    word_id: UUID,
    forbidden_word_service: ForbiddenWordService = Depends(get_forbidden_word_service),
) -> ForbiddenWordResponse:
    return ForbiddenWordResponse(**await forbidden_word_service.get_forbidden_word(word_id))


@router.put("/{word_id}", response_model=ForbiddenWordResponse)
@handle_service_errors
async def update_forbidden_word(
    word_id: UUID,
    request: UpdateForbiddenWordRequest,
    forbidden_word_service: ForbiddenWordService = Depends(get_forbidden_word_service),
) -> ForbiddenWordResponse:
    result = await forbidden_word_service.update_forbidden_word(
        word_id, expression=request.expression, description=request.description
    )
    return ForbiddenWordResponse(**result)


@router.delete("/{word_id}", status_code=204)
@handle_service_errors
async def delete_forbidden_word(
    word_id: UUID,
    forbidden_word_service: ForbiddenWordService = Depends(get_forbidden_word_service),
) -> None:
    await forbidden_word_service.delete_forbidden_word(word_id)
