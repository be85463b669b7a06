"""
Test suite for PostService and TagService.

Tests post creation with tags, edit window and lock rules, forbidden word
screening, searches and tag assignment.

System role: Verification of post orchestration layer
"""

import uuid
from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.forbidden_word_service import ForbiddenWordService
from discuss_board.application.services.post_service import PostService
from discuss_board.application.services.tag_service import TagService
from discuss_board.boundary.db.CRUD.post_crud import post_crud
from discuss_board.boundary.db.models.post_model import PostModel, PostStatus
from discuss_board.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from discuss_board.core.timeutils import utcnow
from discuss_board.models.post import PostSearchRequest, TagSearchRequest


async def _count_posts(db: AsyncSession) -> int:
    return await db.scalar(select(func.count()).select_from(PostModel))


@pytest.fixture
def post_service(test_async_db: AsyncSession) -> PostService:
    return PostService(test_async_db)


@pytest.fixture
def tag_service(test_async_db: AsyncSession) -> TagService:
    return TagService(test_async_db)


class TestCreatePost:
    """Test suite for PostService.create_post()."""

    async def test_create_should_link_tags_once(
        self, post_service: PostService, tag_service: TagService, member_factory, moderator_factory
    ) -> None:
        # Arrange
        author = await member_factory()
        moderator = await moderator_factory()
        tag = await tag_service.create_tag(moderator, "python")

        # Act
        post = await post_service.create_post(
            author, "Hello", "First post", tag_ids=[tag["id"], tag["id"]]
        )

        # Assert
        assert post["tag_ids"] == [tag["id"]]
        assert post["author_id"] == author.member_id
        assert post["business_status"] == "public"
        fetched = await post_service.get_post(post["id"])
        assert fetched["tag_ids"] == [tag["id"]]

    async def test_create_should_reject_missing_tag_before_writing(
        self, post_service: PostService, test_async_db: AsyncSession, member_factory
    ) -> None:
        author = await member_factory()

        with pytest.raises(NotFoundError, match="Tag not found"):
            await post_service.create_post(author, "Hello", "Body", tag_ids=[uuid.uuid4()])

        assert await _count_posts(test_async_db) == 0

    async def test_create_should_reject_blank_title(self, post_service: PostService, member_factory) -> None:
        author = await member_factory()

        with pytest.raises(ValidationError) as exc_info:
            await post_service.create_post(author, "   ", "Body")

        assert exc_info.value.field == "title"

    async def test_create_should_reject_forbidden_words(
        self, post_service: PostService, test_async_db: AsyncSession, member_factory
    ) -> None:
        author = await member_factory()
        await ForbiddenWordService(test_async_db).create_forbidden_word("Spam")

        with pytest.raises(ValidationError, match="forbidden word"):
            await post_service.create_post(author, "Buy now", "cheap SPAM here")

    async def test_create_should_require_member(self, post_service: PostService, guest_actor) -> None:
        with pytest.raises(ForbiddenError):
            await post_service.create_post(guest_actor, "Hello", "Body")

    async def test_failed_insert_leaves_no_post(
        self, test_async_db: AsyncSession, tag_service: TagService, member_factory, moderator_factory
    ) -> None:
        """The post row and its tag links are flushed together or not at all."""
        # Arrange
        author = await member_factory()
        tag = await tag_service.create_tag(await moderator_factory(), "python")

        # Act
        with pytest.raises(IntegrityError):
            await post_crud.create_with_tags(
                test_async_db,
                [tag["id"], tag["id"]],
                author_id=author.member_id,
                title="Hello",
                body="Body",
                business_status=PostStatus.PUBLIC,
            )
        await test_async_db.rollback()

        # Assert
        assert await _count_posts(test_async_db) == 0

    async def test_create_should_roll_back_failed_insert(
        self, post_service: PostService, test_async_db: AsyncSession, tag_service: TagService,
        member_factory, moderator_factory,
    ) -> None:
        # Arrange
        author = await member_factory()
        tag = await tag_service.create_tag(await moderator_factory(), "python")
        real_create = post_crud.create_with_tags

        async def create_with_duplicate_link(session, tag_ids, **kwargs):
            return await real_create(session, tag_ids + tag_ids, **kwargs)

        # Act
        with patch.object(post_crud, "create_with_tags", side_effect=create_with_duplicate_link):
            with pytest.raises(IntegrityError):
                await post_service.create_post(author, "Hello", "Body", tag_ids=[tag["id"]])

        # Assert
        assert await _count_posts(test_async_db) == 0


class TestUpdatePost:
    """Test suite for PostService.update_post()."""

    async def test_author_can_edit_within_window(self, post_service: PostService, member_factory) -> None:
        author = await member_factory()
        post = await post_service.create_post(author, "Hello", "Body")

        updated = await post_service.update_post(post["id"], author, title=" Renamed ")

        assert updated["title"] == "Renamed"

    @pytest.mark.parametrize(
        "changes,field",
        [({"title": "   "}, "title"), ({"title": "x" * 301}, "title"), ({"body": " \n "}, "body")],
    )
    async def test_update_should_reject_blank_text(
        self, post_service: PostService, member_factory, changes, field
    ) -> None:
        author = await member_factory()
        post = await post_service.create_post(author, "Hello", "Body")

        with pytest.raises(ValidationError) as exc_info:
            await post_service.update_post(post["id"], author, **changes)

        assert exc_info.value.field == field
        fetched = await post_service.get_post(post["id"])
        assert (fetched["title"], fetched["body"]) == ("Hello", "Body")

    async def test_author_cannot_edit_after_window(
        self, post_service: PostService, test_async_db: AsyncSession, member_factory, moderator_factory
    ) -> None:
        # Arrange
        author = await member_factory()
        post = await post_service.create_post(author, "Hello", "Body")
        model = await post_crud.get_by_id(test_async_db, post["id"])
        await post_crud.update(test_async_db, model, created_at=utcnow() - timedelta(hours=25))

        # Act / Assert
        with pytest.raises(ForbiddenError, match="Edit window"):
            await post_service.update_post(post["id"], author, body="Late edit")
        moderator = await moderator_factory()
        updated = await post_service.update_post(post["id"], moderator, body="Staff edit")
        assert updated["body"] == "Staff edit"

    async def test_other_members_cannot_edit(self, post_service: PostService, member_factory) -> None:
        author = await member_factory()
        other = await member_factory()
        post = await post_service.create_post(author, "Hello", "Body")

        with pytest.raises(ForbiddenError):
            await post_service.update_post(post["id"], other, title="Mine now")

    async def test_locked_post_is_staff_only(
        self, post_service: PostService, test_async_db: AsyncSession, member_factory
    ) -> None:
        author = await member_factory()
        post = await post_service.create_post(author, "Hello", "Body")
        model = await post_crud.get_by_id(test_async_db, post["id"])
        await post_crud.update(test_async_db, model, is_locked=True)
        test_async_db.expire_all()

        with pytest.raises(ForbiddenError, match="locked"):
            await post_service.update_post(post["id"], author, title="Edit")


class TestDeleteAndSearch:
    async def test_deleted_posts_disappear(self, post_service: PostService, member_factory) -> None:
        author = await member_factory()
        post = await post_service.create_post(author, "Hello", "Body")

        await post_service.delete_post(post["id"], author)

        with pytest.raises(NotFoundError):
            await post_service.get_post(post["id"])
        page = await post_service.search_posts(PostSearchRequest())
        assert page["pagination"]["records"] == 0

    async def test_search_filters_by_keyword_and_author(
        self, post_service: PostService, member_factory
    ) -> None:
        # Arrange
        alice = await member_factory()
        bob = await member_factory()
        await post_service.create_post(alice, "Async tips", "Use gather")
        await post_service.create_post(alice, "Cooking", "Pasta ASYNC style")
        await post_service.create_post(bob, "Async too", "Something")

        # Act
        page = await post_service.search_posts(
            PostSearchRequest(keyword="async", author_id=alice.member_id, sort_by="title:asc")
        )

        # Assert
        assert page["pagination"] == {"current": 1, "limit": 20, "records": 2, "pages": 1}
        assert [row["title"] for row in page["data"]] == ["Async tips", "Cooking"]

    async def test_search_by_unused_tag_is_empty(
        self, post_service: PostService, tag_service: TagService, member_factory, moderator_factory
    ) -> None:
        author = await member_factory()
        tag = await tag_service.create_tag(await moderator_factory(), "unused")
        await post_service.create_post(author, "Hello", "Body")

        page = await post_service.search_posts(PostSearchRequest(tag_id=tag["id"]))

        assert page == {
            "pagination": {"current": 1, "limit": 20, "records": 0, "pages": 0},
            "data": [],
        }

    async def test_search_pages(self, post_service: PostService, member_factory) -> None:
        author = await member_factory()
        for index in range(5):
            await post_service.create_post(author, f"Post {index}", "Body")

        page = await post_service.search_posts(
            PostSearchRequest(page=3, limit=2, sort_by="title", sort_order="asc")
        )

        assert page["pagination"]["pages"] == 3
        assert [row["title"] for row in page["data"]] == ["Post 4"]


class TestTags:
    """Test suite for TagService."""

    async def test_tag_names_are_unique_ignoring_case(
        self, tag_service: TagService, moderator_factory
    ) -> None:
        moderator = await moderator_factory()
        await tag_service.create_tag(moderator, "Python")

        with pytest.raises(ConflictError):
            await tag_service.create_tag(moderator, "python")

    async def test_members_cannot_manage_tags(self, tag_service: TagService, member_factory) -> None:
        with pytest.raises(ForbiddenError):
            await tag_service.create_tag(await member_factory(), "python")

    async def test_list_tags_filters_by_name(self, tag_service: TagService, admin_factory) -> None:
        admin = await admin_factory()
        for name in ("python", "pytest", "rust"):
            await tag_service.create_tag(admin, name)

        page = await tag_service.list_tags(TagSearchRequest(name="py", sort_order="asc"))

        assert [tag["name"] for tag in page["data"]] == ["pytest", "python"]

    async def test_post_tag_assignment(
        self, post_service: PostService, tag_service: TagService, member_factory, moderator_factory
    ) -> None:
        # Arrange
        author = await member_factory()
        tag = await tag_service.create_tag(await moderator_factory(), "news")
        post = await post_service.create_post(author, "Hello", "Body")

        # Act
        link = await tag_service.add_post_tag(post["id"], tag["id"], author)

        # Assert
        assert link["tag_id"] == tag["id"]
        with pytest.raises(ConflictError):
            await tag_service.add_post_tag(post["id"], tag["id"], author)
        await tag_service.remove_post_tag(post["id"], tag["id"], author)
        assert (await post_service.get_post(post["id"]))["tag_ids"] == []
        with pytest.raises(NotFoundError):
            await tag_service.remove_post_tag(post["id"], tag["id"], author)
