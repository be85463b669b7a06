"""
Comment API endpoints.

Routes:
- POST /posts/{id}/comments - Comment on a post
- GET /posts/{id}/comments - List a post's comments
- GET /comments/{id} - Get comment
- PUT /comments/{id} - Edit comment (author)
- DELETE /comments/{id} - Delete comment (author or staff)
- GET /comments/{id}/history - Edit history

Dependencies: discuss_board.application.services, discuss_board.models
System role: Comment HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_comment_service, get_current_actor, get_current_member
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import CommentService
from discuss_board.core.actor import Actor
from discuss_board.models.comment import (
    CommentEditHistoryResponse,
    CommentResponse,
    CreateCommentRequest,
    UpdateCommentRequest,
)
from discuss_board.models.common import Page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["comments"])


@router.post("/posts/{post_id}/comments", response_model=CommentResponse, status_code=201)
@handle_service_errors
async def create_comment(
    post_id: UUID,
    request: CreateCommentRequest,
    actor: Actor = Depends(get_current_member),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    """
    Comment on a post, optionally replying to another comment.

    Args:
        post_id: Commented post
        request: Content and optional parent comment
        actor: Commenting member
        comment_service: Injected CommentService

    Returns:
        CommentResponse: Created comment

    Raises:
        HTTPException(400): Post locked, parent on another post, forbidden word
        HTTPException(404): Post or parent not found
    """
    result = await comment_service.create_comment(
        post_id, actor, content=request.content, parent_id=request.parent_id
    )
    logger.info(
        "Comment created",
        extra={"post_id": str(post_id), "comment_id": str(result["id"])},
    )
    return CommentResponse(**result)


@router.get("/posts/{post_id}/comments", response_model=Page[CommentResponse])
@handle_service_errors
async def list_comments(
    post_id: UUID,
    page: int | None = None,
    limit: int | None = None,
    actor: Actor = Depends(get_current_actor),
    comment_service: CommentService = Depends(get_comment_service),
) -> dict:
    return await comment_service.list_comments(post_id, page=page, limit=limit)


@router.get("/comments/{comment_id}", response_model=CommentResponse)
@handle_service_errors
async def get_comment(
    comment_id: UUID,
    actor: Actor = Depends(get_current_actor),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    return CommentResponse(**await comment_service.get_comment(comment_id))


@router.put("/comments/{comment_id}", response_model=CommentResponse)
@handle_service_errors
async def update_comment(
    comment_id: UUID,
    request: UpdateCommentRequest,
    actor: Actor = Depends(get_current_member),
    comment_service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    result = await comment_service.update_comment(comment_id, actor, content=request.content)
    return CommentResponse(**result)


@router.delete("/comments/{comment_id}", status_code=204)
@handle_service_errors
async def delete_comment(
    comment_id: UUID,
    actor: Actor = Depends(get_current_member),
    comment_service: CommentService = Depends(get_comment_service),
) -> None:
    await comment_service.delete_comment(comment_id, actor)


@router.get(
    "/comments/{comment_id}/history", response_model=list[CommentEditHistoryResponse]
)
@handle_service_errors
async def list_comment_edit_history(
    comment_id: UUID,
    actor: Actor = Depends(get_current_actor),
    comment_service: CommentService = Depends(get_comment_service),
) -> list[CommentEditHistoryResponse]:
    entries = await comment_service.list_comment_edit_history(comment_id)
    return [CommentEditHistoryResponse(**entry) for entry in entries]
