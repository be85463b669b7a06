"""
Reaction service orchestrator.

Like/dislike reactions on comments and posts. A member holds at most one
active reaction per target; reacting again after deleting revives the old
row with the new type.

Dependencies: discuss_board.boundary.db.CRUD
System role: Reaction use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.comment_service import get_active_comment
from discuss_board.application.services.post_service import get_active_post
from discuss_board.boundary.db.CRUD.reaction_crud import (
    ReactionCRUD,
    comment_reaction_crud,
    post_reaction_crud,
)
from discuss_board.boundary.db.models.reaction_model import ReactionType
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from discuss_board.core.timeutils import to_iso

logger = logging.getLogger(__name__)

COMMENT = "comment"
POST = "post"

_CRUDS: dict[str, ReactionCRUD] = {
    COMMENT: comment_reaction_crud,
    POST: post_reaction_crud,
}


def reaction_to_dict(reaction) -> dict:
    return {
        "id": reaction.id,
        "member_id": reaction.member_id,
        "comment_id": getattr(reaction, "comment_id", None),
        "post_id": getattr(reaction, "post_id", None),
        "reaction_type": ReactionType(reaction.reaction_type).value,
        "created_at": to_iso(reaction.created_at),
        "updated_at": to_iso(reaction.updated_at),
        "deleted_at": to_iso(reaction.deleted_at),
    }


def _reaction_type(value: str) -> ReactionType:
    try:
        return ReactionType(value)
    except ValueError:
        raise ValidationError(f"Unknown reaction type: {value}", field="reaction_type")


class ReactionService:
    """Reaction service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _react(
        self,
        kind: str,
        member_id: UUID,
        target_id: UUID,
        reaction_type: ReactionType,
    ) -> dict:
        crud = _CRUDS[kind]
        existing = await crud.get_for_member(self.db, member_id, target_id)
        if existing is not None and existing.deleted_at is None:
            raise ConflictError("Reaction already exists")

        if existing is not None:
            reaction = await crud.update(
                self.db, existing, deleted_at=None, reaction_type=reaction_type
            )
        else:
            reaction = await crud.create(
                self.db,
                member_id=member_id,
                reaction_type=reaction_type,
                **{crud.target_field: target_id},
            )
        logger.info(
            "Reaction recorded",
            extra={
                "reaction_id": str(reaction.id),
                "target_kind": kind,
                "reaction_type": reaction_type.value,
                "revived": existing is not None,
            },
        )
        return reaction_to_dict(reaction)

    async def react_to_comment(self, actor: Actor, comment_id: UUID, reaction_type: str) -> dict:
        """
        React to a comment.

        Raises:
            NotFoundError: Comment missing or deleted
            ForbiddenError: Comment locked or written by the caller
            ConflictError: Caller already has an active reaction
        """
        member_id = actor.require_member()
        kind = _reaction_type(reaction_type)
        comment = await get_active_comment(self.db, comment_id)
        if comment.is_locked:
            raise ForbiddenError("Comment is locked")
        if comment.author_member_id == member_id:
            raise ForbiddenError("Cannot react to your own comment")
        return await self._react(COMMENT, member_id, comment.id, kind)

    async def react_to_post(self, actor: Actor, post_id: UUID, reaction_type: str) -> dict:
        """
        React to a post.

        Raises:
            NotFoundError: Post missing or deleted
            ForbiddenError: Post locked or written by the caller
            ConflictError: Caller already has an active reaction
        """
        member_id = actor.require_member()
        kind = _reaction_type(reaction_type)
        post = await get_active_post(self.db, post_id)
        if post.is_locked:
            raise ForbiddenError("Post is locked")
        if post.author_id == member_id:
            raise ForbiddenError("Cannot react to your own post")
        return await self._react(POST, member_id, post.id, kind)

    async def _get_owned(self, kind: str, reaction_id: UUID, actor: Actor):
        reaction = await _CRUDS[kind].get_active_by_id(self.db, reaction_id)
        if reaction is None:
            raise NotFoundError("Reaction", reaction_id)
        if not actor.owns(reaction.member_id):
            raise ForbiddenError("You can only change your own reactions")
        return reaction

    async def get_reaction(self, kind: str, reaction_id: UUID) -> dict:
        reaction = await _CRUDS[kind].get_active_by_id(self.db, reaction_id)
        if reaction is None:
            raise NotFoundError("Reaction", reaction_id)
        return reaction_to_dict(reaction)

    async def update_reaction(
        self,
        kind: str,
        reaction_id: UUID,
        actor: Actor,
        reaction_type: str,
    ) -> dict:
        reaction = await self._get_owned(kind, reaction_id, actor)
        reaction = await _CRUDS[kind].update(
            self.db, reaction, reaction_type=_reaction_type(reaction_type)
        )
        return reaction_to_dict(reaction)

    async def delete_reaction(self, kind: str, reaction_id: UUID, actor: Actor) -> None:
        reaction = await self._get_owned(kind, reaction_id, actor)
        await _CRUDS[kind].soft_delete(self.db, reaction)

    async def reaction_summary(
        self,
        post_id: UUID | None = None,
        comment_id: UUID | None = None,
    ) -> dict[str, int]:
        """
        Count active likes and dislikes on exactly one target.

        Raises:
            ValidationError: Neither or both targets given
            NotFoundError: Target missing or deleted
        """
        if (post_id is None) == (comment_id is None):
            raise ValidationError("Exactly one of post_id or comment_id is required")
        if post_id is not None:
            await get_active_post(self.db, post_id)
            return await post_reaction_crud.count_by_type(self.db, post_id)
        await get_active_comment(self.db, comment_id)
        return await comment_reaction_crud.count_by_type(self.db, comment_id)
