"""
Attachment API endpoints.

Routes:
- POST /posts/{id}/attachments - Register attachment metadata
- GET /posts/{id}/attachments - List attachments of a post (optionally one comment)
- GET /attachments/{id} - Get attachment
- DELETE /attachments/{id} - Delete attachment (uploader or staff)

Dependencies: discuss_board.application.services, discuss_board.models
System role: Attachment HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import get_attachment_service, get_current_actor, get_current_member
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import AttachmentService
from discuss_board.core.actor import Actor
from discuss_board.models.poll import AttachmentResponse, CreateAttachmentRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["attachments"])


@router.post(
    "/posts/{post_id}/attachments", response_model=AttachmentResponse, status_code=201
)
@handle_service_errors
async def add_attachment(
    post_id: UUID,
    request: CreateAttachmentRequest,
    actor: Actor = Depends(get_current_member),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentResponse:
    """
    Register an uploaded file against a post or one of its comments.

    Raises:
        HTTPException(400): Type not allowed, file too large or post locked
        HTTPException(403): Caller is not the content author or a moderator
        HTTPException(404): Post or comment not found
    """
    logger.info(
        "Adding attachment",
        extra={
            "post_id": str(post_id),
            "content_type": request.content_type,
            "size_bytes": request.size_bytes,
        },
    )
    result = await attachment_service.add_attachment(
        post_id,
        actor,
        file_name=request.file_name,
        file_url=request.file_url,
        content_type=request.content_type,
        size_bytes=request.size_bytes,
        comment_id=request.comment_id,
    )
    return AttachmentResponse(**result)


@router.get("/posts/{post_id}/attachments", response_model=list[AttachmentResponse])
@handle_service_errors
async def list_attachments(
    post_id: UUID,
    comment_id: UUID | None = None,
    actor: Actor = Depends(get_current_actor),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> list[AttachmentResponse]:
    attachments = await attachment_service.list_attachments(post_id, comment_id=comment_id)
    return [AttachmentResponse(**attachment) for attachment in attachments]


@router.get("/attachments/{attachment_id}", response_model=AttachmentResponse)
@handle_service_errors
async def get_attachment(
    attachment_id: UUID,
    actor: Actor = Depends(get_current_actor),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentResponse:
    return AttachmentResponse(**await attachment_service.get_attachment(attachment_id))


@router.delete("/attachments/{attachment_id}", status_code=204)
@handle_service_errors
async def delete_attachment(
    attachment_id: UUID,
    actor: Actor = Depends(get_current_member),
    attachment_service: AttachmentService = Depends(get_attachment_service),
) -> None:
    await attachment_service.delete_attachment(attachment_id, actor)
