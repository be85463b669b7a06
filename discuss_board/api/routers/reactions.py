"""
Reaction API endpoints.

Routes:
- POST /reactions/comments - React to a comment
- POST /reactions/posts - React to a post
- GET /reactions/summary - Like/dislike counts of a post or comment
- GET /reactions/{kind}/{id} - Get reaction
- PUT /reactions/{kind}/{id} - Change reaction type (owner)
- DELETE /reactions/{kind}/{id} - Withdraw reaction (owner)

``kind`` is ``comments`` or ``posts``.

Dependencies: discuss_board.application.services, discuss_board.models
System role: Reaction HTTP API
"""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_current_actor, get_current_member, get_reaction_service
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import ReactionService
from discuss_board.application.services.reaction_service import COMMENT, POST
from discuss_board.core.actor import Actor
from discuss_board.models.comment import (
    CreateCommentReactionRequest,
    CreatePostReactionRequest,
    ReactionResponse,
    ReactionSummaryResponse,
    UpdateReactionRequest,
)

router = APIRouter(prefix="/reactions", tags=["reactions"])

ReactionKind = Literal["comments", "posts"]

_KINDS = {"comments": COMMENT, "posts": POST}


@router.post("/comments", response_model=ReactionResponse, status_code=201)
@handle_service_errors
async def react_to_comment(
    request: CreateCommentReactionRequest,
    actor: Actor = Depends(get_current_member),
    reaction_service: ReactionService = Depends(get_reaction_service),
) -> ReactionResponse:
    """
    Like or dislike a comment.

    Raises:
        HTTPException(403): Reacting to one's own comment
        HTTPException(409): An active reaction already exists
    """
    result = await reaction_service.react_to_comment(
        actor, request.comment_id, request.reaction_type
    )
    return ReactionResponse(**result)


@router.post("/posts", response_model=ReactionResponse, status_code=201)
@handle_service_errors
async def react_to_post(
    request: CreatePostReactionRequest,
    actor: Actor = Depends(get_current_member),
    reaction_service: ReactionService = Depends(get_reaction_service),
) -> ReactionResponse:
    result = await reaction_service.react_to_post(actor, request.post_id, request.reaction_type)
    return ReactionResponse(**result)


@router.get("/summary", response_model=ReactionSummaryResponse)
@handle_service_errors
async def reaction_summary(
    post_id: UUID | None = None,
    comment_id: UUID | None = None,
    actor: Actor = Depends(get_current_actor),
    reaction_service: ReactionService = Depends(get_reaction_service),
) -> ReactionSummaryResponse:
    counts = await reaction_service.reaction_summary(post_id=post_id, comment_id=comment_id)
    return ReactionSummaryResponse(**counts)


@router.get("/{kind}/{reaction_id}", response_model=ReactionResponse)
@handle_service_errors
async def get_reaction(
    kind: ReactionKind,
    reaction_id: UUID,
    actor: Actor = Depends(get_current_actor),
    reaction_service: ReactionService = Depends(get_reaction_service),
) -> ReactionResponse:
    return ReactionResponse(**await reaction_service.get_reaction(_KINDS[kind], reaction_id))


@router.put("/{kind}/{reaction_id}", response_model=ReactionResponse)
@handle_service_errors
async def update_reaction(
    kind: ReactionKind,
    reaction_id: UUID,
    request: UpdateReactionRequest,
    actor: Actor = Depends(get_current_member),
    reaction_service: ReactionService = Depends(get_reaction_service),
) -> ReactionResponse:
    result = await reaction_service.update_reaction(
        _KINDS[kind], reaction_id, actor, request.reaction_type
    )
    return ReactionResponse(**result)


@router.delete("/{kind}/{reaction_id}", status_code=204)
@handle_service_errors
async def delete_reaction(
    kind: ReactionKind,
    reaction_id: UUID,
    actor: Actor = Depends(get_current_member),
    reaction_service: ReactionService = Depends(get_reaction_service),
) -> None:
    await reaction_service.delete_reaction(_KINDS[kind], reaction_id, actor)
