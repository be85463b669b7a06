"""
Post API endpoints.

Routes:
- POST /posts - Create post with tags
- PATCH /posts - Search posts
- GET /posts/{id} - Get post
- PUT /posts/{id} - Update post
- DELETE /posts/{id} - Delete post
- POST /posts/{id}/tags - Attach tag
- DELETE /posts/{id}/tags/{tag_id} - Detach tag

Dependencies: discuss_board.application.services, discuss_board.models
System role: Post management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import (
    get_current_actor,
    get_current_member,
    get_post_service,
    get_tag_service,
)
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import PostService, TagService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.post import (
    CreatePostRequest,
    PostResponse,
    PostSearchRequest,
    PostSummary,
    PostTagRequest,
    PostTagResponse,
    UpdatePostRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=201)
@handle_service_errors
async def create_post(
    request: CreatePostRequest,
    actor: Actor = Depends(get_current_member),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    """
    Create a post and attach its tags.

    Args:
        request: Title, body, status and tag ids
        actor: Authoring member
        post_service: Injected PostService

    Returns:
        PostResponse: Created post

    Raises:
        HTTPException(400): Blank title/body or forbidden word
        HTTPException(404): Unknown tag
    """
    logger.info(
        "Creating post",
        extra={"member_id": str(actor.member_id), "tag_count": len(request.tag_ids)},
    )

    result = await post_service.create_post(
        actor,
        title=request.title,
        body=request.body,
        business_status=request.business_status,
        tag_ids=request.tag_ids,
    )

    logger.info("Post created successfully", extra={"post_id": str(result["id"])})
    return PostResponse(**result)


@router.patch("", response_model=Page[PostSummary])
@handle_service_errors
async def search_posts(
    request: PostSearchRequest,
    actor: Actor = Depends(get_current_actor),
    post_service: PostService = Depends(get_post_service),
) -> dict:
    """Search posts by author, status, tag, keyword and creation range."""
    return await post_service.search_posts(request)


@router.get("/{post_id}", response_model=PostResponse)
@handle_service_errors
async def get_post(
    post_id: UUID,
    actor: Actor = Depends(get_current_actor),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    return PostResponse(**await post_service.get_post(post_id))


@router.put("/{post_id}", response_model=PostResponse)
@handle_service_errors
async def update_post(
    post_id: UUID,
    request: UpdatePostRequest,
    actor: Actor = Depends(get_current_member),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    """
    Update a post.

    Authors may edit within the edit window; staff at any time.

    Raises:
        HTTPException(400): Forbidden word
        HTTPException(403): Not author or staff, post locked, or edit window expired
        HTTPException(404): Post not found
    """
    result = await post_service.update_post(
        post_id,
        actor,
        title=request.title,
        body=request.body,
        business_status=request.business_status,
    )
    return PostResponse(**result)


@router.delete("/{post_id}", status_code=204)
@handle_service_errors
async def delete_post(
    post_id: UUID,
    actor: Actor = Depends(get_current_member),
    post_service: PostService = Depends(get_post_service),
) -> None:
    await post_service.delete_post(post_id, actor)
    logger.info("Post deleted", extra={"post_id": str(post_id)})


@router.post("/{post_id}/tags", response_model=PostTagResponse, status_code=201)
@handle_service_errors
async def add_post_tag(
    post_id: UUID,
    request: PostTagRequest,
    actor: Actor = Depends(get_current_member),
    tag_service: TagService = Depends(get_tag_service),
) -> PostTagResponse:
    result = await tag_service.add_post_tag(post_id, request.tag_id, actor)
    return PostTagResponse(**result)


@router.delete("/{post_id}/tags/{tag_id}", status_code=204)
@handle_service_errors
async def remove_post_tag(
    post_id: UUID,
    tag_id: UUID,
    actor: Actor = Depends(get_current_member),
    tag_service: TagService = Depends(get_tag_service),
) -> None:
    await tag_service.remove_post_tag(post_id, tag_id, actor)
