"""
Moderation CRUD operations.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Report, moderation action and appeal persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.moderation_model import (
    AppealModel,
    AppealStatus,
    ContentReportModel,
    ModerationActionModel,
)


class ContentReportCRUD(BaseCRUD[ContentReportModel]):
    """CRUD operations for ContentReportModel."""

    def __init__(self) -> None:
        super().__init__(ContentReportModel)

    async def find_existing(
        self,
        session: AsyncSession,
        reporter_member_id: UUID,
        content_post_id: UUID | None,
        content_comment_id: UUID | None,
    ) -> ContentReportModel | None:
        """Earlier non-deleted report by the same member on the same target."""
        return await self.find_first(
            session,
            ContentReportModel.reporter_member_id == reporter_member_id,
            ContentReportModel.content_post_id == content_post_id
            if content_post_id is not None
            else ContentReportModel.content_post_id.is_(None),
            ContentReportModel.content_comment_id == content_comment_id
            if content_comment_id is not None
            else ContentReportModel.content_comment_id.is_(None),
        )

    async def get_many(self, session: AsyncSession, ids: list[UUID]) -> Sequence[ContentReportModel]:
        if not ids:
            return []
        stmt = select(ContentReportModel).where(
            ContentReportModel.id.in_(ids),
            ContentReportModel.deleted_at.is_(None),
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class ModerationActionCRUD(BaseCRUD[ModerationActionModel]):
    """CRUD operations for ModerationActionModel."""

    def __init__(self) -> None:
        super().__init__(ModerationActionModel)


class AppealCRUD(BaseCRUD[AppealModel]):
    """CRUD operations for AppealModel."""

    def __init__(self) -> None:
        super().__init__(AppealModel)

    async def get_open_for(
        self,
        session: AsyncSession,
        moderation_action_id: UUID,
        appellant_member_id: UUID,
    ) -> AppealModel | None:
        """Pending or in-review appeal of a member against an action."""
        return await self.find_first(
            session,
            AppealModel.moderation_action_id == moderation_action_id,
            AppealModel.appellant_member_id == appellant_member_id,
            AppealModel.status.in_([AppealStatus.PENDING, AppealStatus.REVIEWING]),
        )


content_report_crud = ContentReportCRUD()
moderation_action_crud = ModerationActionCRUD()
appeal_crud = AppealCRUD()
