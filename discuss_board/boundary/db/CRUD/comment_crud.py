"""
Comment CRUD operations.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Comment and edit history persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.comment_model import CommentEditHistoryModel, CommentModel


class CommentCRUD(BaseCRUD[CommentModel]):
    """CRUD operations for CommentModel."""

    def __init__(self) -> None:
        super().__init__(CommentModel)

    async def list_by_post(
        self,
        session: AsyncSession,
        post_id: UUID,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[Sequence[CommentModel], int]:
        """
        Non-deleted comments of a post, oldest first.

        Args:
            session: Async database session
            post_id: Post UUID
            offset: Rows to skip
            limit: Page size

        Returns:
            tuple: (comments, total)
        """
        return await self.search(
            session,
            [CommentModel.post_id == post_id],
            order_by=[CommentModel.created_at.asc()],
            offset=offset,
            limit=limit,
        )


class CommentEditHistoryCRUD(BaseCRUD[CommentEditHistoryModel]):
    """CRUD operations for CommentEditHistoryModel."""

    def __init__(self) -> None:
        super().__init__(CommentEditHistoryModel)

    async def list_by_comment(
        self,
        session: AsyncSession,
        comment_id: UUID,
    ) -> Sequence[CommentEditHistoryModel]:
        stmt = (
            select(CommentEditHistoryModel)
            .where(CommentEditHistoryModel.comment_id == comment_id)
            .order_by(CommentEditHistoryModel.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


comment_crud = CommentCRUD()
comment_edit_history_crud = CommentEditHistoryCRUD()
