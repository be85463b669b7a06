"""
Attachment CRUD operations.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Attachment metadata persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.attachment_model import AttachmentModel


class AttachmentCRUD(BaseCRUD[AttachmentModel]):
    """CRUD operations for AttachmentModel."""

    def __init__(self) -> None:
        super().__init__(AttachmentModel)

    async def list_for_post(
        self,
        session: AsyncSession,
        post_id: UUID,
        comment_id: UUID | None = None,
    ) -> Sequence[AttachmentModel]:
        """
        Non-deleted attachments of a post, or of one of its comments.

        Args:
            session: Async database session
            post_id: Post UUID
            comment_id: Restrict to attachments of this comment

        Returns:
            Sequence of attachments, oldest first
        """
        stmt = select(AttachmentModel).where(
            AttachmentModel.post_id == post_id,
            AttachmentModel.deleted_at.is_(None),
        )
        if comment_id is not None:
            stmt = stmt.where(AttachmentModel.comment_id == comment_id)
        stmt = stmt.order_by(AttachmentModel.created_at.asc())
        result = await session.execute(stmt)
        return result.scalars().all()


attachment_crud = AttachmentCRUD()
