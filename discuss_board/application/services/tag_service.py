"""
Tag service orchestrator.

Tag catalogue management by staff and tag assignment on posts.

Dependencies: discuss_board.boundary.db.CRUD
System role: Tag use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.post_service import (
    ensure_can_manage_post,
    get_active_post,
)
from discuss_board.application.services.query_utils import contains, order_clause, page_request
from discuss_board.boundary.db.CRUD.post_crud import post_tag_crud, tag_crud
from discuss_board.boundary.db.models.post_model import PostTagModel, TagModel
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import ConflictError, NotFoundError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso
from discuss_board.models.post import TagSearchRequest

logger = logging.getLogger(__name__)

TAG_SORT_FIELDS = ("name", "created_at")


def tag_to_dict(tag: TagModel) -> dict:
    return {
        "id": tag.id,
        "name": tag.name,
        "description": tag.description,
        "created_at": to_iso(tag.created_at),
        "updated_at": to_iso(tag.updated_at),
    }


def post_tag_to_dict(link: PostTagModel) -> dict:
    return {
        "id": link.id,
        "post_id": link.post_id,
        "tag_id": link.tag_id,
        "created_at": to_iso(link.created_at),
    }


class TagService:
    """Tag service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get(self, tag_id: UUID) -> TagModel:
        tag = await tag_crud.get_active_by_id(self.db, tag_id)
        if tag is None:
            raise NotFoundError("Tag", tag_id)
        return tag

    async def create_tag(self, actor: Actor, name: str, description: str | None = None) -> dict:
        """
        Create a tag (moderators and administrators).

        Raises:
            ForbiddenError: Caller is not staff
            ConflictError: Name already used (case-insensitive)
        """
        actor.require_staff()
        name = name.strip()
        if await tag_crud.get_by_name(self.db, name):
            raise ConflictError("Tag name already exists", details={"name": name})

        tag = await tag_crud.create(self.db, name=name, description=description)
        logger.info("Tag created", extra={"tag_id": str(tag.id), "tag_name": name})
        return tag_to_dict(tag)

    async def get_tag(self, tag_id: UUID) -> dict:
        return tag_to_dict(await self._get(tag_id))

    async def list_tags(self, request: TagSearchRequest) -> dict:
        paging = page_request(request.page, request.limit)
        rows, total = await tag_crud.search(
            self.db,
            contains(TagModel.name, request.name),
            order_by=order_clause(
                TagModel, request.sort_by, request.sort_order, TAG_SORT_FIELDS, default="name"
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [tag_to_dict(tag) for tag in rows])

    async def update_tag(
        self,
        tag_id: UUID,
        actor: Actor,
        name: str | None = None,
        description: str | None = None,
    ) -> dict:
        actor.require_staff()
        tag = await self._get(tag_id)

        changes: dict = {}
        if name is not None and name.strip() != tag.name:
            existing = await tag_crud.get_by_name(self.db, name)
            if existing is not None and existing.id != tag.id:
                raise ConflictError("Tag name already exists", details={"name": name})
            changes["name"] = name.strip()
        if description is not None:
            changes["description"] = description

        if changes:
            tag = await tag_crud.update(self.db, tag, **changes)
        return tag_to_dict(tag)

    async def delete_tag(self, tag_id: UUID, actor: Actor) -> None:
        actor.require_staff()
        tag = await self._get(tag_id)
        await tag_crud.soft_delete(self.db, tag)
        logger.info("Tag deleted", extra={"tag_id": str(tag_id)})

    async def add_post_tag(self, post_id: UUID, tag_id: UUID, actor: Actor) -> dict:
        """
        Attach a tag to a post.

        Args:
            post_id: Target post
            tag_id: Tag to attach
            actor: Post author, moderator or administrator

        Returns:
            dict: Created link

        Raises:
            NotFoundError: Post or tag missing
            ForbiddenError: Caller may not manage the post
            ConflictError: Tag already attached
        """
        post = await get_active_post(self.db, post_id)
        ensure_can_manage_post(post, actor)
        await self._get(tag_id)

        if await post_tag_crud.get_link(self.db, post_id, tag_id):
            raise ConflictError("Tag already assigned to post")

        link = await post_tag_crud.create(self.db, post_id=post_id, tag_id=tag_id)
        return post_tag_to_dict(link)

    async def remove_post_tag(self, post_id: UUID, tag_id: UUID, actor: Actor) -> None:
        post = await get_active_post(self.db, post_id)
        ensure_can_manage_post(post, actor)

        link = await post_tag_crud.get_link(self.db, post_id, tag_id)
        if link is None:
            raise NotFoundError("Post tag", details={"post_id": str(post_id), "tag_id": str(tag_id)})
        await post_tag_crud.delete_by_id(self.db, link.id)
