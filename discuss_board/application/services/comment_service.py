"""
Comment service orchestrator.

Threaded comments on posts with edit history, author notifications and
forbidden word screening.

Dependencies: discuss_board.boundary.db.CRUD
System role: Comment use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.forbidden_word_service import ForbiddenWordService
from discuss_board.application.services.notification_service import NotificationService
from discuss_board.application.services.post_service import get_active_post
from discuss_board.application.services.query_utils import page_request
from discuss_board.boundary.db.CRUD.account_crud import member_crud
from discuss_board.boundary.db.CRUD.comment_crud import comment_crud, comment_edit_history_crud
from discuss_board.boundary.db.models.comment_model import CommentEditHistoryModel, CommentModel
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso

logger = logging.getLogger(__name__)


def comment_to_dict(comment: CommentModel) -> dict:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "author_member_id": comment.author_member_id,
        "parent_id": comment.parent_id,
        "content": comment.content,
        "is_locked": comment.is_locked,
        "created_at": to_iso(comment.created_at),
        "updated_at": to_iso(comment.updated_at),
        "deleted_at": to_iso(comment.deleted_at),
    }


def edit_history_to_dict(entry: CommentEditHistoryModel) -> dict:
    return {
        "id": entry.id,
        "comment_id": entry.comment_id,
        "editor_member_id": entry.editor_member_id,
        "previous_content": entry.previous_content,
        "created_at": to_iso(entry.created_at),
    }


async def get_active_comment(db: AsyncSession, comment_id: UUID) -> CommentModel:
    comment = await comment_crud.get_active_by_id(db, comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    return comment


class CommentService:
    """Comment service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize comment service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db
        self.forbidden_words = ForbiddenWordService(db)

    async def create_comment(
        self,
        post_id: UUID,
        actor: Actor,
        content: str,
        parent_id: UUID | None = None,
    ) -> dict:
        """
        Comment on a post, optionally replying to another comment.

        The post author is notified unless they wrote the comment.

        Args:
            post_id: Post being commented on
            actor: Commenting member
            content: Comment text
            parent_id: Comment being replied to

        Returns:
            dict: Created comment

        Raises:
            NotFoundError: Post or parent missing
            ForbiddenError: Post locked
            ValidationError: Parent on another post, or forbidden word
        """
        member_id = actor.require_member()
        post = await get_active_post(self.db, post_id)
        if post.is_locked:
            raise ForbiddenError("Post is locked")

        if parent_id is not None:
            parent = await get_active_comment(self.db, parent_id)
            if parent.post_id != post.id:
                raise ValidationError(
                    "Parent comment belongs to another post", field="parent_id"
                )
        await self.forbidden_words.ensure_clean(content)

        comment = await comment_crud.create(
            self.db,
            post_id=post.id,
            author_member_id=member_id,
            parent_id=parent_id,
            content=content,
        )
        logger.info(
            "Comment created",
            extra={"comment_id": str(comment.id), "post_id": str(post.id)},
        )

        if post.author_id != member_id:
            author = await member_crud.get_active_by_id(self.db, post.author_id)
            if author is not None:
                await NotificationService(self.db).notify(
                    author.user_account_id,
                    event_type="comment_created",
                    subject="New comment on your post",
                    body=f'Your post "{post.title}" received a new comment.',
                )
        return comment_to_dict(comment)

    async def get_comment(self, comment_id: UUID) -> dict:
        return comment_to_dict(await get_active_comment(self.db, comment_id))

    async def list_comments(
        self,
        post_id: UUID,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict:
        """
        Page through a post's comments, oldest first.

        Raises:
            NotFoundError: Post missing or deleted
        """
        await get_active_post(self.db, post_id)
        paging = page_request(page, limit)
        rows, total = await comment_crud.list_by_post(
            self.db, post_id, offset=paging.offset, limit=paging.limit
        )
        return build_page(paging, total, [comment_to_dict(c) for c in rows])

    async def update_comment(self, comment_id: UUID, actor: Actor, content: str) -> dict:
        """
        Edit a comment and keep the previous text in the edit history.

        Raises:
            NotFoundError: Comment missing or deleted
            ForbiddenError: Caller is not the author, or comment locked
            ValidationError: Forbidden word in new text
        """
        comment = await get_active_comment(self.db, comment_id)
        if not actor.owns(comment.author_member_id):
            raise ForbiddenError("Only the author can edit this comment")
        if comment.is_locked:
            raise ForbiddenError("Comment is locked")
        await self.forbidden_words.ensure_clean(content)

        if content != comment.content:
            await comment_edit_history_crud.create(
                self.db,
                comment_id=comment.id,
                editor_member_id=actor.member_id,
                previous_content=comment.content,
            )
            comment = await comment_crud.update(self.db, comment, content=content)
        return comment_to_dict(comment)

    async def list_comment_edit_history(self, comment_id: UUID) -> list[dict]:
        await get_active_comment(self.db, comment_id)
        entries = await comment_edit_history_crud.list_by_comment(self.db, comment_id)
        return [edit_history_to_dict(entry) for entry in entries]

    async def delete_comment(self, comment_id: UUID, actor: Actor) -> None:
        comment = await get_active_comment(self.db, comment_id)
        if not actor.owns(comment.author_member_id) and not actor.is_staff:
            raise ForbiddenError("Only the author or staff can delete this comment")
        await comment_crud.soft_delete(self.db, comment)
        logger.info("Comment deleted", extra={"comment_id": str(comment_id)})
