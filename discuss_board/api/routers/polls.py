"""
Poll API endpoints.

Routes:
- POST /posts/{id}/polls - Create poll on a post
- GET /posts/{id}/polls - List a post's polls
- GET /polls/{id} - Get poll with vote counts
- PUT /polls/{id} - Update poll
- DELETE /polls/{id} - Delete poll
- POST /polls/{id}/votes - Cast ballot

Dependencies: discuss_board.application.services, discuss_board.models
System role: Poll HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_current_actor, get_current_member, get_poll_service
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import PollService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.poll import (
    CastVoteRequest,
    CreatePollRequest,
    PollResponse,
    PollVoteResponse,
    UpdatePollRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["polls"])


@router.post("/posts/{post_id}/polls", response_model=PollResponse, status_code=201)
@handle_service_errors
async def create_poll(
    post_id: UUID,
    request: CreatePollRequest,
    actor: Actor = Depends(get_current_member),
    poll_service: PollService = Depends(get_poll_service),
) -> PollResponse:
    """
    Attach a poll to a post.

    Args:
        post_id: Host post
        request: Title, option texts, choice mode and closing time
        actor: Post author or staff
        poll_service: Injected PollService

    Returns:
        PollResponse: Created poll

    Raises:
        HTTPException(400): Fewer than two distinct options or past closing time
        HTTPException(403): Caller may not manage the post
        HTTPException(404): Post not found
    """
    result = await poll_service.create_poll(
        post_id,
        actor,
        title=request.title,
        options=request.options,
        multiple_choice=request.multiple_choice,
        closed_at=request.closed_at,
    )
    logger.info("Poll created", extra={"post_id": str(post_id), "poll_id": str(result["id"])})
    return PollResponse(**result)


@router.get("/posts/{post_id}/polls", response_model=Page[PollResponse])
@handle_service_errors
async def list_polls(
    post_id: UUID,
    open_only: bool = False,
    closed_only: bool = False,
    page: int | None = None,
    limit: int | None = None,
    actor: Actor = Depends(get_current_actor),
    poll_service: PollService = Depends(get_poll_service),
) -> dict:
    return await poll_service.list_polls(
        post_id, open_only=open_only, closed_only=closed_only, page=page, limit=limit
    )


@router.get("/polls/{poll_id}", response_model=PollResponse)
@handle_service_errors
async def get_poll(
    poll_id: UUID,
    actor: Actor = Depends(get_current_actor),
    poll_service: PollService = Depends(get_poll_service),
) -> PollResponse:
    return PollResponse(**await poll_service.get_poll(poll_id))


@router.put("/polls/{poll_id}", response_model=PollResponse)
@handle_service_errors
async def update_poll(
    poll_id: UUID,
    request: UpdatePollRequest,
    actor: Actor = Depends(get_current_member),
    poll_service: PollService = Depends(get_poll_service),
) -> PollResponse:
    result = await poll_service.update_poll(
        poll_id, actor, title=request.title, closed_at=request.closed_at
    )
    return PollResponse(**result)


@router.delete("/polls/{poll_id}", status_code=204)
@handle_service_errors
async def delete_poll(
    poll_id: UUID,
    actor: Actor = Depends(get_current_member),
    poll_service: PollService = Depends(get_poll_service),
) -> None:
    await poll_service.delete_poll(poll_id, actor)


@router.post("/polls/{poll_id}/votes", response_model=PollVoteResponse, status_code=201)
@handle_service_errors
async def vote(
    poll_id: UUID,
    request: CastVoteRequest,
    actor: Actor = Depends(get_current_member),
    poll_service: PollService = Depends(get_poll_service),
) -> PollVoteResponse:
    """
    Cast a ballot.

    Raises:
        HTTPException(400): Poll closed or wrong number of options
        HTTPException(409): Member already voted
    """
    result = await poll_service.vote(poll_id, actor, request.option_ids)
    return PollVoteResponse(**result)
