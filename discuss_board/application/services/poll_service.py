"""
Poll service orchestrator.

Polls attached to posts, their options, and member ballots.

Dependencies: discuss_board.boundary.db.CRUD
System role: Poll use case orchestration
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.post_service import (
    ensure_can_manage_post,
    get_active_post,
)
from discuss_board.application.services.query_utils import page_request
from discuss_board.boundary.db.CRUD.poll_crud import poll_crud, poll_option_crud, poll_vote_crud
from discuss_board.boundary.db.models.poll_model import PollModel, PollVoteModel
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import ensure_utc, to_iso, utcnow

logger = logging.getLogger(__name__)


def poll_is_open(poll: PollModel) -> bool:
    closed_at = ensure_utc(poll.closed_at)
    return poll.deleted_at is None and (closed_at is None or closed_at > utcnow())


def future_closing_time(closed_at: datetime, now: datetime) -> datetime:
    closed_at = ensure_utc(closed_at)
    if closed_at <= now:
        raise ValidationError("Closing time must be in the future", field="closed_at")
    return closed_at


def vote_to_dict(vote: PollVoteModel) -> dict:
    return {
        "id": vote.id,
        "poll_id": vote.poll_id,
        "poll_option_id": vote.poll_option_id,
        "member_id": vote.member_id,
        "created_at": to_iso(vote.created_at),
    }


class PollService:
    """Poll service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _poll_to_dict(self, poll: PollModel) -> dict:
        options = await poll_option_crud.list_by_poll(self.db, poll.id)
        counts = await poll_vote_crud.count_by_option(self.db, poll.id)
        return {
            "id": poll.id,
            "post_id": poll.post_id,
            "title": poll.title,
            "multiple_choice": poll.multiple_choice,
            "opened_at": to_iso(poll.opened_at),
            "closed_at": to_iso(poll.closed_at),
            "is_open": poll_is_open(poll),
            "options": [
                {
                    "id": option.id,
                    "option_text": option.option_text,
                    "sequence": option.sequence,
                    "vote_count": counts.get(option.id, 0),
                }
                for option in options
            ],
            "created_at": to_iso(poll.created_at),
            "updated_at": to_iso(poll.updated_at),
        }

    async def _get(self, poll_id: UUID) -> PollModel:
        poll = await poll_crud.get_active_by_id(self.db, poll_id)
        if poll is None:
            raise NotFoundError("Poll", poll_id)
        return poll

    async def create_poll(
        self,
        post_id: UUID,
        actor: Actor,
        title: str,
        options: list[str],
        multiple_choice: bool = False,
        closed_at: datetime | None = None,
    ) -> dict:
        """
        Attach a poll to a post.

        Args:
            post_id: Post hosting the poll
            actor: Post author, moderator or administrator
            title: Poll question
            options: Option texts; at least two distinct after trimming
            multiple_choice: Allow several options per ballot
            closed_at: Optional closing time, must be in the future

        Returns:
            dict: Poll with options

        Raises:
            NotFoundError: Post missing or deleted
            ForbiddenError: Caller may not manage the post
            ValidationError: Fewer than two distinct options or past closing time
        """
        post = await get_active_post(self.db, post_id)
        ensure_can_manage_post(post, actor)

        texts = list(dict.fromkeys(text.strip() for text in options if text.strip()))
        if len(texts) < 2:
            raise ValidationError("A poll needs at least two distinct options", field="options")
        now = utcnow()
        if closed_at is not None:
            closed_at = future_closing_time(closed_at, now)

        poll = await poll_crud.create(
            self.db,
            post_id=post.id,
            title=title.strip(),
            multiple_choice=multiple_choice,
            opened_at=now,
            closed_at=ensure_utc(closed_at),
        )
        for sequence, text in enumerate(texts, start=1):
            await poll_option_crud.create(
                self.db, poll_id=poll.id, option_text=text, sequence=sequence
            )
        logger.info(
            "Poll created",
            extra={"poll_id": str(poll.id), "post_id": str(post.id), "option_count": len(texts)},
        )
        return await self._poll_to_dict(poll)

    async def get_poll(self, poll_id: UUID) -> dict:
        return await self._poll_to_dict(await self._get(poll_id))

    async def list_polls(
        self,
        post_id: UUID,
        open_only: bool = False,
        closed_only: bool = False,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict:
        """
        Page through the polls of a post, newest first.

        Raises:
            NotFoundError: Post missing or deleted
            ValidationError: Both open_only and closed_only requested
        """
        if open_only and closed_only:
            raise ValidationError("open_only and closed_only are mutually exclusive")
        await get_active_post(self.db, post_id)

        now = utcnow()
        criteria = [PollModel.post_id == post_id]
        if open_only:
            criteria.append(or_(PollModel.closed_at.is_(None), PollModel.closed_at > now))
        if closed_only:
            criteria.append(PollModel.closed_at <= now)

        paging = page_request(page, limit)
        rows, total = await poll_crud.search(
            self.db,
            criteria,
            order_by=[PollModel.created_at.desc(), PollModel.id.asc()],
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [await self._poll_to_dict(poll) for poll in rows])

    async def update_poll(
        self,
        poll_id: UUID,
        actor: Actor,
        title: str | None = None,
        closed_at: datetime | None = None,
    ) -> dict:
        """
        Edit a poll's title or closing time.

        Raises:
            NotFoundError: Poll or post missing
            ForbiddenError: Caller may not manage the post, or post locked
            ValidationError: Poll already closed or closing time in the past
        """
        poll = await self._get(poll_id)
        post = await get_active_post(self.db, poll.post_id)
        ensure_can_manage_post(post, actor)
        if post.is_locked:
            raise ForbiddenError("Post is locked")
        if not poll_is_open(poll):
            raise ValidationError("Poll is already closed")

        changes: dict = {}
        if title is not None:
            changes["title"] = title.strip()
        if closed_at is not None:
            changes["closed_at"] = future_closing_time(closed_at, utcnow())
        if changes:
            poll = await poll_crud.update(self.db, poll, **changes)
        return await self._poll_to_dict(poll)

    async def delete_poll(self, poll_id: UUID, actor: Actor) -> None:
        poll = await self._get(poll_id)
        post = await get_active_post(self.db, poll.post_id)
        ensure_can_manage_post(post, actor)
        await poll_crud.soft_delete(self.db, poll)

    async def vote(self, poll_id: UUID, actor: Actor, option_ids: list[UUID]) -> dict:
        """
        Cast the caller's ballot.

        Single-choice polls take exactly one option, multiple-choice polls at
        least one. A member votes once per poll.

        Args:
            poll_id: Poll being voted on
            actor: Voting member
            option_ids: Chosen options (duplicates ignored)

        Returns:
            dict: The first recorded vote

        Raises:
            NotFoundError: Poll missing or deleted
            ValidationError: Poll closed, foreign option or wrong option count
            ConflictError: Member already voted
        """
        member_id = actor.require_member()
        poll = await self._get(poll_id)
        if not poll_is_open(poll):
            raise ValidationError("Poll is closed")

        chosen = list(dict.fromkeys(option_ids))
        if not chosen:
            raise ValidationError("Select at least one option", field="option_ids")
        if not poll.multiple_choice and len(chosen) != 1:
            raise ValidationError(
                "Single-choice polls accept exactly one option", field="option_ids"
            )
        valid_ids = {option.id for option in await poll_option_crud.list_by_poll(self.db, poll.id)}
        if any(option_id not in valid_ids for option_id in chosen):
            raise ValidationError("Option does not belong to this poll", field="option_ids")
        if await poll_vote_crud.has_voted(self.db, poll.id, member_id):
            raise ConflictError("Already voted")

        votes = [
            await poll_vote_crud.create(
                self.db, poll_id=poll.id, poll_option_id=option_id, member_id=member_id
            )
            for option_id in chosen
        ]
        logger.info(
            "Poll ballot cast",
            extra={"poll_id": str(poll.id), "option_count": len(votes)},
        )
        return vote_to_dict(votes[0])
