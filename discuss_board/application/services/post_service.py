"""
Post service orchestrator.

Post creation with tags, reads, edits within the author edit window,
soft deletion and filtered searches.

Dependencies: discuss_board.boundary.db.CRUD, discuss_board.configs
System role: Post use case orchestration
"""

import logging
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.forbidden_word_service import ForbiddenWordService
from discuss_board.application.services.query_utils import (
    contains,
    created_range,
    order_clause,
    page_request,
)
from discuss_board.boundary.db.CRUD.post_crud import post_crud, post_tag_crud, tag_crud
from discuss_board.boundary.db.models.post_model import PostModel, PostStatus
from discuss_board.configs import get_settings
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import ensure_utc, to_iso, utcnow
from discuss_board.models.post import PostSearchRequest

logger = logging.getLogger(__name__)

POST_SORT_FIELDS = ("created_at", "updated_at", "title")


def post_to_dict(post: PostModel, tag_ids: list[UUID]) -> dict:
    return {
        "id": post.id,
        "author_id": post.author_id,
        "title": post.title,
        "body": post.body,
        "business_status": PostStatus(post.business_status).value,
        "is_locked": post.is_locked,
        "tag_ids": tag_ids,
        "created_at": to_iso(post.created_at),
        "updated_at": to_iso(post.updated_at),
        "deleted_at": to_iso(post.deleted_at),
    }


def post_summary_to_dict(post: PostModel) -> dict:
    return {
        "id": post.id,
        "title": post.title,
        "business_status": PostStatus(post.business_status).value,
        "author_id": post.author_id,
        "created_at": to_iso(post.created_at),
        "updated_at": to_iso(post.updated_at),
        "deleted_at": to_iso(post.deleted_at),
    }


async def get_active_post(db: AsyncSession, post_id: UUID) -> PostModel:
    """Load a non-deleted post or raise NotFoundError."""
    post = await post_crud.get_active_by_id(db, post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post


def edit_window_open(created_at: datetime) -> bool:
    window = timedelta(hours=get_settings().board.post_edit_window_hours)
    return utcnow() - ensure_utc(created_at) <= window


def ensure_can_manage_post(post: PostModel, actor: Actor) -> None:
    """Post author, moderator or administrator; locked posts are staff only."""
    if actor.is_staff:
        return
    if not actor.owns(post.author_id):
        raise ForbiddenError("Only the author or staff can modify this post")
    if post.is_locked:
        raise ForbiddenError("Post is locked")


def clean_title(title: str) -> str:
    title = title.strip()
    if not title or len(title) > 300:
        raise ValidationError("Title must be between 1 and 300 characters", field="title")
    return title


def check_body(body: str) -> str:
    if not body.strip():
        raise ValidationError("Body must not be empty", field="body")
    return body


class PostService:
    """Post service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize post service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db
        self.forbidden_words = ForbiddenWordService(db)

    async def create_post(
        self,
        actor: Actor,
        title: str,
        body: str,
        business_status: str = PostStatus.PUBLIC.value,
        tag_ids: list[UUID] | None = None,
    ) -> dict:
        """
        Create a post and link its tags atomically.

        Every tag is validated before anything is written; the post and its
        links then go to the database in one flush. A failing flush rolls
        the session back, so no partial post survives.

        Args:
            actor: Authoring member
            title: Post title (1..300 characters)
            body: Post body
            business_status: Initial visibility
            tag_ids: Tags to attach; duplicates are ignored

        Returns:
            dict: Created post with tag ids

        Raises:
            ValidationError: Blank title/body or forbidden word
            NotFoundError: A tag is missing or deleted
        """
        author_id = actor.require_member()
        title = clean_title(title)
        body = check_body(body)
        await self.forbidden_words.ensure_clean(title, body)

        unique_tag_ids = list(dict.fromkeys(tag_ids or []))
        found = {tag.id for tag in await tag_crud.get_active_by_ids(self.db, unique_tag_ids)}
        missing = [tag_id for tag_id in unique_tag_ids if tag_id not in found]
        if missing:
            raise NotFoundError("Tag", missing[0])

        try:
            post = await post_crud.create_with_tags(
                self.db,
                unique_tag_ids,
                author_id=author_id,
                title=title,
                body=body,
                business_status=PostStatus(business_status),
            )
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to create post",
                extra={"author_id": str(author_id), "tag_count": len(unique_tag_ids), "error": str(e)},
            )
            raise

        logger.info(
            "Post created",
            extra={"post_id": str(post.id), "tag_count": len(unique_tag_ids)},
        )
        return post_to_dict(post, unique_tag_ids)

    async def get_post(self, post_id: UUID) -> dict:
        """
        Retrieve a post with its tag ids.

        Raises:
            NotFoundError: Post missing or deleted
        """
        post = await get_active_post(self.db, post_id)
        return post_to_dict(post, await post_crud.get_tag_ids(self.db, post.id))

    async def update_post(
        self,
        post_id: UUID,
        actor: Actor,
        title: str | None = None,
        body: str | None = None,
        business_status: str | None = None,
    ) -> dict:
        """
        Edit a post.

        Authors may edit unlocked posts within the edit window after
        creation. Moderators and administrators may always edit.

        Raises:
            NotFoundError: Post missing or deleted
            ForbiddenError: Not author/staff, post locked, or edit window over
            ValidationError: Blank title/body or forbidden word in new text
        """
        post = await get_active_post(self.db, post_id)
        ensure_can_manage_post(post, actor)
        if not actor.is_staff and not edit_window_open(post.created_at):
            raise ForbiddenError("Edit window has expired")

        changes: dict = {}
        if title is not None:
            changes["title"] = clean_title(title)
        if body is not None:
            changes["body"] = check_body(body)
        if business_status is not None:
            changes["business_status"] = PostStatus(business_status)
        await self.forbidden_words.ensure_clean(changes.get("title"), changes.get("body"))

        if changes:
            post = await post_crud.update(self.db, post, **changes)
            logger.info("Post updated", extra={"post_id": str(post.id), "fields": sorted(changes)})
        return post_to_dict(post, await post_crud.get_tag_ids(self.db, post.id))

    async def delete_post(self, post_id: UUID, actor: Actor) -> None:
        post = await get_active_post(self.db, post_id)
        if not actor.owns(post.author_id) and not actor.is_staff:
            raise ForbiddenError("Only the author or staff can delete this post")
        await post_crud.soft_delete(self.db, post)
        logger.info("Post deleted", extra={"post_id": str(post_id)})

    async def search_posts(self, request: PostSearchRequest) -> dict:
        """
        Search posts.

        A tag filter is resolved first; when no post carries the tag the
        result is an empty page without querying posts.

        Args:
            request: Filters, paging and sorting

        Returns:
            dict: Page of post summaries
        """
        paging = page_request(request.page, request.limit)

        criteria = created_range(PostModel, request.created_from, request.created_to)
        if request.tag_id is not None:
            post_ids = await post_tag_crud.get_post_ids_for_tag(self.db, request.tag_id)
            if not post_ids:
                return build_page(paging, 0, [])
            criteria.append(PostModel.id.in_(post_ids))
        if request.author_id is not None:
            criteria.append(PostModel.author_id == request.author_id)
        if request.status is not None:
            criteria.append(PostModel.business_status == PostStatus(request.status))
        keyword_filters = contains(PostModel.title, request.keyword) + contains(
            PostModel.body, request.keyword
        )
        if keyword_filters:
            criteria.append(or_(*keyword_filters))

        rows, total = await post_crud.search(
            self.db,
            criteria,
            order_by=order_clause(PostModel, request.sort_by, request.sort_order, POST_SORT_FIELDS),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [post_summary_to_dict(post) for post in rows])
