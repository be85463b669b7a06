"""
Content report service orchestrator.

Members flag posts or comments; moderators review and close the reports.

Dependencies: discuss_board.boundary.db.CRUD
System role: Content report use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.comment_service import get_active_comment
from discuss_board.application.services.post_service import get_active_post
from discuss_board.application.services.query_utils import (
    created_range,
    order_clause,
    page_request,
)
from discuss_board.boundary.db.CRUD.moderation_crud import (
    content_report_crud,
    moderation_action_crud,
)
from discuss_board.boundary.db.models.moderation_model import (
    ContentReportModel,
    ContentType,
    ReportStatus,
)
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso, utcnow
from discuss_board.models.moderation import ContentReportSearchRequest

logger = logging.getLogger(__name__)

REPORT_SORT_FIELDS = ("created_at", "status")
CLOSED_REPORT_STATUSES = (ReportStatus.RESOLVED, ReportStatus.REJECTED)


def report_to_dict(report: ContentReportModel) -> dict:
    return {
        "id": report.id,
        "reporter_member_id": report.reporter_member_id,
        "content_type": ContentType(report.content_type).value,
        "content_post_id": report.content_post_id,
        "content_comment_id": report.content_comment_id,
        "reason": report.reason,
        "status": ReportStatus(report.status).value,
        "moderation_action_id": report.moderation_action_id,
        "resolved_at": to_iso(report.resolved_at),
        "created_at": to_iso(report.created_at),
        "updated_at": to_iso(report.updated_at),
    }


class ReportService:
    """Content report service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_report(
        self,
        actor: Actor,
        content_type: str,
        reason: str,
        content_post_id: UUID | None = None,
        content_comment_id: UUID | None = None,
    ) -> dict:
        """
        File a report against a post or a comment.

        Exactly one target id must be given and it must match
        ``content_type``.

        Args:
            actor: Reporting member
            content_type: "post" or "comment"
            reason: Why the content is reported
            content_post_id: Reported post
            content_comment_id: Reported comment

        Returns:
            dict: Created report (status pending)

        Raises:
            ValidationError: Target ids inconsistent with content_type
            NotFoundError: Target missing or deleted
            ConflictError: Caller already reported this target
        """
        reporter_id = actor.require_member()
        kind = ContentType(content_type)

        if (content_post_id is None) == (content_comment_id is None):
            raise ValidationError("Exactly one of content_post_id or content_comment_id is required")
        if kind == ContentType.POST and content_post_id is None:
            raise ValidationError("Post reports need content_post_id", field="content_post_id")
        if kind == ContentType.COMMENT and content_comment_id is None:
            raise ValidationError(
                "Comment reports need content_comment_id", field="content_comment_id"
            )

        if content_post_id is not None:
            await get_active_post(self.db, content_post_id)
        else:
            await get_active_comment(self.db, content_comment_id)

        existing = await content_report_crud.find_existing(
            self.db, reporter_id, content_post_id, content_comment_id
        )
        if existing is not None:
            raise ConflictError("Duplicate report")

        report = await content_report_crud.create(
            self.db,
            reporter_member_id=reporter_id,
            content_type=kind,
            content_post_id=content_post_id,
            content_comment_id=content_comment_id,
            reason=reason,
            status=ReportStatus.PENDING,
        )
        logger.info(
            "Content reported",
            extra={"report_id": str(report.id), "content_type": kind.value},
        )
        return report_to_dict(report)

    async def get_report(self, report_id: UUID, actor: Actor) -> dict:
        """Reports are visible to their reporter and to staff."""
        report = await content_report_crud.get_active_by_id(self.db, report_id)
        if report is None:
            raise NotFoundError("Content report", report_id)
        if not actor.owns(report.reporter_member_id) and not actor.is_staff:
            raise ForbiddenError("You can only view your own reports")
        return report_to_dict(report)

    async def search_reports(self, request: ContentReportSearchRequest) -> dict:
        criteria = created_range(ContentReportModel, request.created_from, request.created_to)
        if request.status is not None:
            criteria.append(ContentReportModel.status == ReportStatus(request.status))
        if request.content_type is not None:
            criteria.append(ContentReportModel.content_type == ContentType(request.content_type))
        if request.reporter_member_id is not None:
            criteria.append(ContentReportModel.reporter_member_id == request.reporter_member_id)

        paging = page_request(request.page, request.limit)
        rows, total = await content_report_crud.search(
            self.db,
            criteria,
            order_by=order_clause(
                ContentReportModel, request.sort_by, request.sort_order, REPORT_SORT_FIELDS
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [report_to_dict(r) for r in rows])

    async def update_report(
        self,
        report_id: UUID,
        actor: Actor,
        status: str,
        moderation_action_id: UUID | None = None,
    ) -> dict:
        """
        Move a report through review.

        Resolved and rejected reports get ``resolved_at`` stamped.

        Raises:
            ForbiddenError: Caller is not staff
            NotFoundError: Report or linked action missing
        """
        actor.require_staff()
        report = await content_report_crud.get_active_by_id(self.db, report_id)
        if report is None:
            raise NotFoundError("Content report", report_id)

        new_status = ReportStatus(status)
        changes: dict = {"status": new_status}
        if moderation_action_id is not None:
            if await moderation_action_crud.get_active_by_id(self.db, moderation_action_id) is None:
                raise NotFoundError("Moderation action", moderation_action_id)
            changes["moderation_action_id"] = moderation_action_id
        if new_status in CLOSED_REPORT_STATUSES:
            changes["resolved_at"] = utcnow()

        report = await content_report_crud.update(self.db, report, **changes)
        logger.info(
            "Content report updated",
            extra={"report_id": str(report.id), "report_status": new_status.value},
        )
        return report_to_dict(report)
