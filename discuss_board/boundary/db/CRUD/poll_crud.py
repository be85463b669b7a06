"""
Poll CRUD operations.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Poll, option and ballot persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.poll_model import PollModel, PollOptionModel, PollVoteModel


class PollCRUD(BaseCRUD[PollModel]):
    """CRUD operations for PollModel."""

    def __init__(self) -> None:
        super().__init__(PollModel)


class PollOptionCRUD(BaseCRUD[PollOptionModel]):
    """CRUD operations for PollOptionModel."""

    def __init__(self) -> None:
        super().__init__(PollOptionModel)

    async def list_by_poll(self, session: AsyncSession, poll_id: UUID) -> Sequence[PollOptionModel]:
        stmt = (
            select(PollOptionModel)
            .where(PollOptionModel.poll_id == poll_id)
            .order_by(PollOptionModel.sequence)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class PollVoteCRUD(BaseCRUD[PollVoteModel]):
    """CRUD operations for PollVoteModel."""

    def __init__(self) -> None:
        super().__init__(PollVoteModel)

    async def has_voted(self, session: AsyncSession, poll_id: UUID, member_id: UUID) -> bool:
        vote = await self.find_first(
            session,
            PollVoteModel.poll_id == poll_id,
            PollVoteModel.member_id == member_id,
        )
        return vote is not None

    async def count_by_option(self, session: AsyncSession, poll_id: UUID) -> dict[UUID, int]:
        """
        Vote totals per option of a poll.

        Args:
            session: Async database session
            poll_id: Poll UUID

        Returns:
            dict: option id -> number of votes (options without votes omitted)
        """
        stmt = (
            select(PollVoteModel.poll_option_id, func.count())
            .where(PollVoteModel.poll_id == poll_id)
            .group_by(PollVoteModel.poll_option_id)
        )
        return {option_id: count for option_id, count in (await session.execute(stmt)).all()}


poll_crud = PollCRUD()
poll_option_crud = PollOptionCRUD()
poll_vote_crud = PollVoteCRUD()
