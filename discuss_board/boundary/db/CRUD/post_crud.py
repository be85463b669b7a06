"""
Post and tag CRUD operations.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Post, tag and post-tag persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.post_model import PostModel, PostTagModel, TagModel


class PostCRUD(BaseCRUD[PostModel]):
    """CRUD operations for PostModel."""

    def __init__(self) -> None:
        super().__init__(PostModel)

    async def get_tag_ids(self, session: AsyncSession, post_id: UUID) -> list[UUID]:
        """
        Tag ids linked to a post, in link creation order.

        Args:
            session: Async database session
            post_id: Post UUID

        Returns:
            list[UUID]: Linked tag ids
        """
        stmt = (
            select(PostTagModel.tag_id)
            .where(PostTagModel.post_id == post_id)
            .order_by(PostTagModel.created_at)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def create_with_tags(
        self,
        session: AsyncSession,
        tag_ids: list[UUID],
        **kwargs,
    ) -> PostModel:
        """
        Insert a post and its tag links in a single flush.

        Args:
            session: Async database session
            tag_ids: Tags to link (already validated and deduplicated)
            **kwargs: Post field values

        Returns:
            Created post
        """
        post = PostModel(**kwargs)
        post.tag_links = [PostTagModel(tag_id=tag_id) for tag_id in tag_ids]
        session.add(post)
        await session.flush()
        await session.refresh(post, attribute_names=["id", "created_at", "updated_at"])
        return post


class TagCRUD(BaseCRUD[TagModel]):
    """CRUD operations for TagModel."""

    def __init__(self) -> None:
        super().__init__(TagModel)

    async def get_by_name(self, session: AsyncSession, name: str) -> TagModel | None:
        return await self.find_first(session, func.lower(TagModel.name) == name.strip().lower())

    async def get_active_by_ids(
        self,
        session: AsyncSession,
        ids: list[UUID],
    ) -> Sequence[TagModel]:
        """Non-deleted tags among ``ids``."""
        if not ids:
            return []
        stmt = select(TagModel).where(TagModel.id.in_(ids), TagModel.deleted_at.is_(None))
        result = await session.execute(stmt)
        return result.scalars().all()


class PostTagCRUD(BaseCRUD[PostTagModel]):
    """CRUD operations for PostTagModel."""

    def __init__(self) -> None:
        super().__init__(PostTagModel)

    async def get_link(
        self,
        session: AsyncSession,
        post_id: UUID,
        tag_id: UUID,
    ) -> PostTagModel | None:
        return await self.find_first(
            session, PostTagModel.post_id == post_id, PostTagModel.tag_id == tag_id
        )

    async def get_post_ids_for_tag(self, session: AsyncSession, tag_id: UUID) -> list[UUID]:
        stmt = select(PostTagModel.post_id).where(PostTagModel.tag_id == tag_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())


post_crud = PostCRUD()
tag_crud = TagCRUD()
post_tag_crud = PostTagCRUD()
