"""
Test suite for ReportService, ModerationService and AppealService.

Tests the report -> action -> appeal flow: side effects on content, report
resolution, notifications, audit entries and reverting on accepted appeals.

System role: Verification of moderation orchestration
"""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.appeal_service import AppealService
from discuss_board.application.services.audit_log_service import AuditLogService
from discuss_board.application.services.comment_service import CommentService
from discuss_board.application.services.moderation_service import ModerationService
from discuss_board.application.services.notification_service import NotificationService
from discuss_board.application.services.post_service import PostService
from discuss_board.application.services.report_service import ReportService
from discuss_board.boundary.db.CRUD.post_crud import post_crud
from discuss_board.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from discuss_board.core.timeutils import utcnow
from discuss_board.models.admin import AuditLogSearchRequest
from discuss_board.models.moderation import ContentReportSearchRequest
from discuss_board.models.notification import NotificationSearchRequest


@pytest.fixture
def report_service(test_async_db: AsyncSession) -> ReportService:
    return ReportService(test_async_db)


@pytest.fixture
def moderation_service(test_async_db: AsyncSession) -> ModerationService:
    return ModerationService(test_async_db)


@pytest.fixture
def appeal_service(test_async_db: AsyncSession) -> AppealService:
    return AppealService(test_async_db)


@pytest.fixture
async def author(member_factory):
    return await member_factory()


@pytest.fixture
async def moderator(moderator_factory):
    return await moderator_factory()


@pytest.fixture
async def post(test_async_db: AsyncSession, author) -> dict:
    return await PostService(test_async_db).create_post(author, "Questionable", "Content")


class TestReports:
    """Test suite for ReportService."""

    async def test_report_post(self, report_service: ReportService, post: dict, member_factory) -> None:
        reporter = await member_factory()

        report = await report_service.create_report(
            reporter, "post", "Spam", content_post_id=post["id"]
        )

        assert report["status"] == "pending"
        assert report["content_post_id"] == post["id"]
        assert report["resolved_at"] is None

    @pytest.mark.parametrize(
        "content_type,use_post,use_comment",
        [
            ("post", False, False),
            ("post", True, True),
            ("comment", True, False),
        ],
    )
    async def test_target_must_match_content_type(
        self,
        report_service: ReportService,
        test_async_db: AsyncSession,
        post: dict,
        author,
        member_factory,
        content_type: str,
        use_post: bool,
        use_comment: bool,
    ) -> None:
        comment = await CommentService(test_async_db).create_comment(post["id"], author, "Reply")

        with pytest.raises(ValidationError):
            await report_service.create_report(
                await member_factory(),
                content_type,
                "Bad",
                content_post_id=post["id"] if use_post else None,
                content_comment_id=comment["id"] if use_comment else None,
            )

    async def test_duplicate_report_conflicts(
        self, report_service: ReportService, post: dict, member_factory
    ) -> None:
        reporter = await member_factory()
        await report_service.create_report(reporter, "post", "Spam", content_post_id=post["id"])

        with pytest.raises(ConflictError):
            await report_service.create_report(reporter, "post", "Again", content_post_id=post["id"])

    async def test_missing_target(self, report_service: ReportService, member_factory) -> None:
        with pytest.raises(NotFoundError):
            await report_service.create_report(
                await member_factory(), "comment", "Gone", content_comment_id=uuid.uuid4()
            )

    async def test_reports_visible_to_reporter_and_staff_only(
        self, report_service: ReportService, post: dict, member_factory, moderator
    ) -> None:
        reporter = await member_factory()
        report = await report_service.create_report(reporter, "post", "Spam", content_post_id=post["id"])

        assert (await report_service.get_report(report["id"], moderator))["id"] == report["id"]
        with pytest.raises(ForbiddenError):
            await report_service.get_report(report["id"], await member_factory())

    async def test_staff_review_stamps_resolution(
        self, report_service: ReportService, post: dict, member_factory, moderator
    ) -> None:
        report = await report_service.create_report(
            await member_factory(), "post", "Spam", content_post_id=post["id"]
        )

        reviewing = await report_service.update_report(report["id"], moderator, "under_review")
        rejected = await report_service.update_report(report["id"], moderator, "rejected")

        assert reviewing["resolved_at"] is None
        assert rejected["status"] == "rejected"
        assert rejected["resolved_at"] is not None
        page = await report_service.search_reports(ContentReportSearchRequest(status="rejected"))
        assert page["pagination"]["records"] == 1

    async def test_members_cannot_review(
        self, report_service: ReportService, post: dict, member_factory
    ) -> None:
        reporter = await member_factory()
        report = await report_service.create_report(reporter, "post", "Spam", content_post_id=post["id"])

        with pytest.raises(ForbiddenError):
            await report_service.update_report(report["id"], reporter, "resolved")


class TestModerationActions:
    """Test suite for ModerationService."""

    async def test_remove_soft_deletes_post_and_resolves_reports(
        self,
        moderation_service: ModerationService,
        report_service: ReportService,
        test_async_db: AsyncSession,
        post: dict,
        author,
        moderator,
        member_factory,
    ) -> None:
        # Arrange
        report = await report_service.create_report(
            await member_factory(), "post", "Spam", content_post_id=post["id"]
        )

        # Act
        action = await moderation_service.create_action(
            moderator,
            "remove",
            "Spam",
            target_post_id=post["id"],
            related_report_ids=[report["id"]],
        )

        # Assert
        assert action["status"] == "active"
        assert action["moderator_id"] == moderator.moderator_id
        assert await post_crud.get_active_by_id(test_async_db, post["id"]) is None
        resolved = await report_service.get_report(report["id"], moderator)
        assert resolved["status"] == "resolved"
        assert resolved["moderation_action_id"] == action["id"]

        inbox = await NotificationService(test_async_db).search_my_notifications(
            author, NotificationSearchRequest(event_type="moderation_action")
        )
        assert inbox["pagination"]["records"] == 1
        audit = await AuditLogService(test_async_db).search_audit_logs(
            AuditLogSearchRequest(action_category="moderation")
        )
        assert audit["data"][0]["target_id"] == action["id"]

    async def test_restrict_then_restore(
        self, moderation_service: ModerationService, test_async_db: AsyncSession, post: dict, moderator
    ) -> None:
        await moderation_service.create_action(moderator, "restrict", "Heated", target_post_id=post["id"])
        locked = await post_crud.get_by_id(test_async_db, post["id"])
        assert locked.is_locked

        await moderation_service.create_action(moderator, "restore", "Calmed", target_post_id=post["id"])

        restored = await post_crud.get_by_id(test_async_db, post["id"])
        assert not restored.is_locked
        assert restored.deleted_at is None

    async def test_restore_finds_removed_content(
        self, moderation_service: ModerationService, test_async_db: AsyncSession, post: dict, moderator
    ) -> None:
        await moderation_service.create_action(moderator, "remove", "Oops", target_post_id=post["id"])

        await moderation_service.create_action(moderator, "restore", "Mistake", target_post_id=post["id"])

        assert await post_crud.get_active_by_id(test_async_db, post["id"]) is not None

    async def test_requires_moderator(
        self, moderation_service: ModerationService, post: dict, admin_factory
    ) -> None:
        with pytest.raises(ForbiddenError):
            await moderation_service.create_action(
                await admin_factory(), "warn", "Be nice", target_post_id=post["id"]
            )

    async def test_requires_target_and_valid_window(
        self, moderation_service: ModerationService, author, moderator
    ) -> None:
        with pytest.raises(ValidationError):
            await moderation_service.create_action(moderator, "warn", "Nobody")

        now = utcnow()
        with pytest.raises(ValidationError) as exc_info:
            await moderation_service.create_action(
                moderator,
                "mute",
                "Cool off",
                target_member_id=author.member_id,
                effective_from=now,
                effective_until=now - timedelta(hours=1),
            )
        assert exc_info.value.field == "effective_until"

    async def test_unknown_report_is_rejected(
        self, moderation_service: ModerationService, post: dict, moderator
    ) -> None:
        with pytest.raises(NotFoundError, match="Content report"):
            await moderation_service.create_action(
                moderator, "warn", "x", target_post_id=post["id"], related_report_ids=[uuid.uuid4()]
            )

    async def test_revert_undoes_removal_once(
        self, moderation_service: ModerationService, test_async_db: AsyncSession, post: dict, moderator
    ) -> None:
        action = await moderation_service.create_action(
            moderator, "remove", "Spam", target_post_id=post["id"]
        )

        reverted = await moderation_service.update_action_status(action["id"], moderator, "reverted")
        again = await moderation_service.update_action_status(action["id"], moderator, "reverted")

        assert reverted["status"] == again["status"] == "reverted"
        assert await post_crud.get_active_by_id(test_async_db, post["id"]) is not None


class TestAppeals:
    """Test suite for AppealService."""

    async def _remove(self, moderation_service: ModerationService, moderator, post: dict) -> dict:
        return await moderation_service.create_action(
            moderator, "remove", "Spam", target_post_id=post["id"]
        )

    async def test_only_affected_members_can_appeal(
        self,
        appeal_service: AppealService,
        moderation_service: ModerationService,
        post: dict,
        moderator,
        member_factory,
    ) -> None:
        action = await self._remove(moderation_service, moderator, post)

        with pytest.raises(ForbiddenError):
            await appeal_service.create_appeal(await member_factory(), action["id"], "Not me")

    async def test_open_appeal_conflicts(
        self,
        appeal_service: AppealService,
        moderation_service: ModerationService,
        post: dict,
        author,
        moderator,
    ) -> None:
        action = await self._remove(moderation_service, moderator, post)
        await appeal_service.create_appeal(author, action["id"], "Was fine")

        with pytest.raises(ConflictError):
            await appeal_service.create_appeal(author, action["id"], "Again")

    async def test_accepting_reverts_action_and_is_final(
        self,
        appeal_service: AppealService,
        moderation_service: ModerationService,
        test_async_db: AsyncSession,
        post: dict,
        author,
        moderator,
    ) -> None:
        # Arrange
        action = await self._remove(moderation_service, moderator, post)
        appeal = await appeal_service.create_appeal(author, action["id"], "Was fine")

        # Act
        accepted = await appeal_service.resolve_appeal(appeal["id"], moderator, "accepted", "Agreed")

        # Assert
        assert accepted["status"] == "accepted"
        assert accepted["resolved_at"] is not None
        assert (await moderation_service.get_action(action["id"]))["status"] == "reverted"
        assert await post_crud.get_active_by_id(test_async_db, post["id"]) is not None
        inbox = await NotificationService(test_async_db).search_my_notifications(
            author, NotificationSearchRequest(event_type="appeal_resolved")
        )
        assert inbox["pagination"]["records"] == 1
        with pytest.raises(ValidationError):
            await appeal_service.resolve_appeal(appeal["id"], moderator, "rejected")

    async def test_reviewing_is_not_final(
        self,
        appeal_service: AppealService,
        moderation_service: ModerationService,
        post: dict,
        author,
        moderator,
    ) -> None:
        action = await self._remove(moderation_service, moderator, post)
        appeal = await appeal_service.create_appeal(author, action["id"], "Please check")

        reviewing = await appeal_service.resolve_appeal(appeal["id"], moderator, "reviewing")

        assert reviewing["resolved_at"] is None
        rejected = await appeal_service.resolve_appeal(appeal["id"], moderator, "rejected")
        assert rejected["status"] == "rejected"
        assert (await moderation_service.get_action(action["id"]))["status"] == "active"
