"""
Reaction CRUD operations.

One CRUD class serves both comment and post reactions; the target column
is chosen at construction.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Reaction persistence operations
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD, ModelT
from discuss_board.boundary.db.models.reaction_model import (
    CommentReactionModel,
    PostReactionModel,
    ReactionType,
)


class ReactionCRUD(BaseCRUD[ModelT]):
    """
    CRUD operations for a reaction model.

    Attributes:
        target_field: Name of the column holding the reacted-to row id
    """

    def __init__(self, model: type[ModelT], target_field: str) -> None:
        super().__init__(model)
        self.target_field = target_field

    @property
    def target_column(self):
        return getattr(self.model, self.target_field)

    async def get_for_member(
        self,
        session: AsyncSession,
        member_id: UUID,
        target_id: UUID,
    ) -> ModelT | None:
        """
        The member's reaction to a target, soft-deleted or not.

        Args:
            session: Async database session
            member_id: Reacting member
            target_id: Comment or post id

        Returns:
            Reaction row or None
        """
        return await self.find_first(
            session,
            self.model.member_id == member_id,
            self.target_column == target_id,
            include_deleted=True,
        )

    async def count_by_type(self, session: AsyncSession, target_id: UUID) -> dict[str, int]:
        """Active reaction counts of a target keyed by reaction type value."""
        stmt = (
            select(self.model.reaction_type, func.count())
            .where(self.target_column == target_id, self.model.deleted_at.is_(None))
            .group_by(self.model.reaction_type)
        )
        counts = {reaction.value: 0 for reaction in ReactionType}
        for reaction_type, count in (await session.execute(stmt)).all():
            counts[ReactionType(reaction_type).value] = count
        return counts


comment_reaction_crud = ReactionCRUD(CommentReactionModel, "comment_id")
post_reaction_crud = ReactionCRUD(PostReactionModel, "post_id")
