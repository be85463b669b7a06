"""
Attachment service orchestrator.

File metadata attached to posts or comments. Files themselves live in
external storage; only name, URL, type and size are recorded.

Dependencies: discuss_board.boundary.db.CRUD, discuss_board.configs
System role: Attachment use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.comment_service import get_active_comment
from discuss_board.application.services.post_service import get_active_post
from discuss_board.boundary.db.CRUD.attachment_crud import attachment_crud
from discuss_board.boundary.db.models.attachment_model import AttachmentModel
from discuss_board.configs import get_settings
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from discuss_board.core.timeutils import to_iso

logger = logging.getLogger(__name__)


def attachment_to_dict(attachment: AttachmentModel) -> dict:
    return {
        "id": attachment.id,
        "post_id": attachment.post_id,
        "comment_id": attachment.comment_id,
        "uploader_member_id": attachment.uploader_member_id,
        "file_name": attachment.file_name,
        "file_url": attachment.file_url,
        "content_type": attachment.content_type,
        "size_bytes": attachment.size_bytes,
        "created_at": to_iso(attachment.created_at),
        "updated_at": to_iso(attachment.updated_at),
    }


class AttachmentService:
    """Attachment service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add_attachment(
        self,
        post_id: UUID,
        actor: Actor,
        file_name: str,
        file_url: str,
        content_type: str,
        size_bytes: int,
        comment_id: UUID | None = None,
    ) -> dict:
        """
        Record an attachment on a post or on one of its comments.

        Only the author of the post (or of the comment, when given) or an
        active moderator may attach files.

        Args:
            post_id: Post receiving the file
            actor: Uploading member
            file_name: Original file name
            file_url: Storage URL
            content_type: MIME type from the allowed list
            size_bytes: File size, at most the configured limit
            comment_id: Comment of the post receiving the file

        Returns:
            dict: Created attachment

        Raises:
            NotFoundError: Post or comment missing
            ForbiddenError: Post locked or caller not author/moderator
            ValidationError: Disallowed type, oversize file, or foreign comment
        """
        member_id = actor.require_member()
        board = get_settings().board

        post = await get_active_post(self.db, post_id)
        if post.is_locked:
            raise ForbiddenError("Post is locked")

        owner_id = post.author_id
        if comment_id is not None:
            comment = await get_active_comment(self.db, comment_id)
            if comment.post_id != post.id:
                raise ValidationError("Comment belongs to another post", field="comment_id")
            owner_id = comment.author_member_id
        if owner_id != member_id and not actor.is_moderator:
            raise ForbiddenError("Only the author or a moderator can attach files")

        if content_type not in board.allowed_attachment_types:
            raise ValidationError(
                f"Unsupported content type: {content_type}", field="content_type"
            )
        if size_bytes < 0 or size_bytes > board.max_attachment_bytes:
            raise ValidationError(
                f"File exceeds the {board.max_attachment_bytes} byte limit", field="size_bytes"
            )

        attachment = await attachment_crud.create(
            self.db,
            post_id=post.id,
            comment_id=comment_id,
            uploader_member_id=member_id,
            file_name=file_name,
            file_url=file_url,
            content_type=content_type,
            size_bytes=size_bytes,
        )
        logger.info(
            "Attachment added",
            extra={"attachment_id": str(attachment.id), "size_bytes": size_bytes},
        )
        return attachment_to_dict(attachment)

    async def list_attachments(self, post_id: UUID, comment_id: UUID | None = None) -> list[dict]:
        await get_active_post(self.db, post_id)
        attachments = await attachment_crud.list_for_post(self.db, post_id, comment_id)
        return [attachment_to_dict(a) for a in attachments]

    async def get_attachment(self, attachment_id: UUID) -> dict:
        attachment = await attachment_crud.get_active_by_id(self.db, attachment_id)
        if attachment is None:
            raise NotFoundError("Attachment", attachment_id)
        return attachment_to_dict(attachment)

    async def delete_attachment(self, attachment_id: UUID, actor: Actor) -> None:
        attachment = await attachment_crud.get_active_by_id(self.db, attachment_id)
        if attachment is None:
            raise NotFoundError("Attachment", attachment_id)
        if not actor.owns(attachment.uploader_member_id) and not actor.is_staff:
            raise ForbiddenError("Only the uploader or staff can delete this attachment")
        await attachment_crud.soft_delete(self.db, attachment)
