"""
Test suite for CommentService and ReactionService.

Tests threaded comments, author notifications, edit history and the
one-reaction-per-target rule.

System role: Verification of comment and reaction orchestration
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.comment_service import CommentService
from discuss_board.application.services.notification_service import NotificationService
from discuss_board.application.services.post_service import PostService
from discuss_board.application.services.reaction_service import ReactionService
from discuss_board.boundary.db.CRUD.post_crud import post_crud
from discuss_board.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from discuss_board.models.notification import NotificationSearchRequest


@pytest.fixture
def comment_service(test_async_db: AsyncSession) -> CommentService:
    return CommentService(test_async_db)


@pytest.fixture
def reaction_service(test_async_db: AsyncSession) -> ReactionService:
    return ReactionService(test_async_db)


@pytest.fixture
async def post_author(member_factory):
    return await member_factory()


@pytest.fixture
async def post(test_async_db: AsyncSession, post_author) -> dict:
    return await PostService(test_async_db).create_post(post_author, "Topic", "Discuss")


class TestCreateComment:
    """Test suite for CommentService.create_comment()."""

    async def test_comment_should_notify_post_author(
        self,
        comment_service: CommentService,
        test_async_db: AsyncSession,
        post: dict,
        post_author,
        member_factory,
    ) -> None:
        # Arrange
        commenter = await member_factory()

        # Act
        comment = await comment_service.create_comment(post["id"], commenter, "Nice")

        # Assert
        assert comment["author_member_id"] == commenter.member_id
        inbox = await NotificationService(test_async_db).search_my_notifications(
            post_author, NotificationSearchRequest(event_type="comment_created")
        )
        assert inbox["pagination"]["records"] == 1
        assert "Topic" in inbox["data"][0]["body"]

    async def test_own_comment_does_not_notify(
        self, comment_service: CommentService, test_async_db: AsyncSession, post: dict, post_author
    ) -> None:
        await comment_service.create_comment(post["id"], post_author, "Bump")

        inbox = await NotificationService(test_async_db).search_my_notifications(
            post_author, NotificationSearchRequest()
        )
        assert inbox["pagination"]["records"] == 0

    async def test_reply_must_stay_on_same_post(
        self,
        comment_service: CommentService,
        test_async_db: AsyncSession,
        post: dict,
        post_author,
    ) -> None:
        other_post = await PostService(test_async_db).create_post(post_author, "Other", "Body")
        parent = await comment_service.create_comment(other_post["id"], post_author, "Parent")

        with pytest.raises(ValidationError) as exc_info:
            await comment_service.create_comment(post["id"], post_author, "Reply", parent_id=parent["id"])

        assert exc_info.value.field == "parent_id"

    async def test_reply_threads_under_parent(
        self, comment_service: CommentService, post: dict, post_author
    ) -> None:
        parent = await comment_service.create_comment(post["id"], post_author, "Parent")

        reply = await comment_service.create_comment(
            post["id"], post_author, "Reply", parent_id=parent["id"]
        )

        assert reply["parent_id"] == parent["id"]

    async def test_locked_post_rejects_comments(
        self, comment_service: CommentService, test_async_db: AsyncSession, post: dict, member_factory
    ) -> None:
        model = await post_crud.get_by_id(test_async_db, post["id"])
        await post_crud.update(test_async_db, model, is_locked=True)

        with pytest.raises(ForbiddenError, match="locked"):
            await comment_service.create_comment(post["id"], await member_factory(), "Hi")

    async def test_missing_post(self, comment_service: CommentService, member_factory) -> None:
        with pytest.raises(NotFoundError):
            await comment_service.create_comment(uuid.uuid4(), await member_factory(), "Hi")


class TestEditAndList:
    async def test_edit_records_previous_content(
        self, comment_service: CommentService, post: dict, post_author
    ) -> None:
        # Arrange
        comment = await comment_service.create_comment(post["id"], post_author, "First")

        # Act
        await comment_service.update_comment(comment["id"], post_author, "Second")
        await comment_service.update_comment(comment["id"], post_author, "Second")
        updated = await comment_service.update_comment(comment["id"], post_author, "Third")

        # Assert
        assert updated["content"] == "Third"
        history = await comment_service.list_comment_edit_history(comment["id"])
        assert [entry["previous_content"] for entry in history] == ["First", "Second"]

    async def test_only_author_can_edit(
        self, comment_service: CommentService, post: dict, post_author, moderator_factory
    ) -> None:
        comment = await comment_service.create_comment(post["id"], post_author, "Mine")

        with pytest.raises(ForbiddenError):
            await comment_service.update_comment(comment["id"], await moderator_factory(), "Edited")

    async def test_staff_can_delete(
        self, comment_service: CommentService, post: dict, post_author, moderator_factory
    ) -> None:
        comment = await comment_service.create_comment(post["id"], post_author, "Remove me")

        await comment_service.delete_comment(comment["id"], await moderator_factory())

        with pytest.raises(NotFoundError):
            await comment_service.get_comment(comment["id"])

    async def test_list_is_oldest_first_and_skips_deleted(
        self, comment_service: CommentService, post: dict, post_author
    ) -> None:
        first = await comment_service.create_comment(post["id"], post_author, "one")
        second = await comment_service.create_comment(post["id"], post_author, "two")
        await comment_service.delete_comment(first["id"], post_author)

        page = await comment_service.list_comments(post["id"])

        assert page["pagination"]["records"] == 1
        assert page["data"][0]["id"] == second["id"]


class TestReactions:
    """Test suite for ReactionService."""

    async def test_cannot_react_to_own_post(
        self, reaction_service: ReactionService, post: dict, post_author
    ) -> None:
        with pytest.raises(ForbiddenError, match="own post"):
            await reaction_service.react_to_post(post_author, post["id"], "like")

    async def test_second_reaction_conflicts(
        self, reaction_service: ReactionService, post: dict, member_factory
    ) -> None:
        fan = await member_factory()
        await reaction_service.react_to_post(fan, post["id"], "like")

        with pytest.raises(ConflictError):
            await reaction_service.react_to_post(fan, post["id"], "dislike")

    async def test_reacting_after_delete_revives_row(
        self, reaction_service: ReactionService, post: dict, member_factory
    ) -> None:
        # Arrange
        fan = await member_factory()
        first = await reaction_service.react_to_post(fan, post["id"], "like")
        await reaction_service.delete_reaction("post", first["id"], fan)

        # Act
        revived = await reaction_service.react_to_post(fan, post["id"], "dislike")

        # Assert
        assert revived["id"] == first["id"]
        assert revived["reaction_type"] == "dislike"
        assert revived["deleted_at"] is None

    async def test_unknown_reaction_type(
        self, reaction_service: ReactionService, post: dict, member_factory
    ) -> None:
        with pytest.raises(ValidationError):
            await reaction_service.react_to_post(await member_factory(), post["id"], "love")

    async def test_comment_reaction_and_summary(
        self,
        reaction_service: ReactionService,
        comment_service: CommentService,
        post: dict,
        post_author,
        member_factory,
    ) -> None:
        # Arrange
        comment = await comment_service.create_comment(post["id"], post_author, "React here")
        fans = [await member_factory() for _ in range(3)]

        # Act
        for fan, kind in zip(fans, ("like", "like", "dislike")):
            await reaction_service.react_to_comment(fan, comment["id"], kind)

        # Assert
        assert await reaction_service.reaction_summary(comment_id=comment["id"]) == {
            "like": 2,
            "dislike": 1,
        }
        assert await reaction_service.reaction_summary(post_id=post["id"]) == {
            "like": 0,
            "dislike": 0,
        }

    async def test_summary_needs_exactly_one_target(self, reaction_service: ReactionService) -> None:
        with pytest.raises(ValidationError):
            await reaction_service.reaction_summary()
        with pytest.raises(ValidationError):
            await reaction_service.reaction_summary(post_id=uuid.uuid4(), comment_id=uuid.uuid4())

    async def test_only_owner_updates_reaction(
        self, reaction_service: ReactionService, post: dict, member_factory
    ) -> None:
        fan = await member_factory()
        reaction = await reaction_service.react_to_post(fan, post["id"], "like")

        with pytest.raises(ForbiddenError):
            await reaction_service.update_reaction("post", reaction["id"], await member_factory(), "dislike")

        updated = await reaction_service.update_reaction("post", reaction["id"], fan, "dislike")
        assert updated["reaction_type"] == "dislike"
