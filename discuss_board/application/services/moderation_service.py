"""
Moderation action service orchestrator.

Moderators act on members, posts and comments. Actions apply their side
effects immediately (removal, locking, restoring), close the reports that
led to them, notify the affected member and leave an audit entry.

Dependencies: discuss_board.boundary.db.CRUD
System role: Moderation use case orchestration
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.audit_log_service import AuditLogService
from discuss_board.application.services.notification_service import NotificationService
from discuss_board.application.services.query_utils import (
    created_range,
    order_clause,
    page_request,
)
from discuss_board.boundary.db.CRUD.account_crud import member_crud
from discuss_board.boundary.db.CRUD.comment_crud import comment_crud
from discuss_board.boundary.db.CRUD.moderation_crud import (
    content_report_crud,
    moderation_action_crud,
)
from discuss_board.boundary.db.CRUD.post_crud import post_crud
from discuss_board.boundary.db.models.moderation_model import (
    ModerationActionModel,
    ModerationActionStatus,
    ModerationActionType,
    ReportStatus,
)
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import NotFoundError, ValidationError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import ensure_utc, to_iso, utcnow
from discuss_board.models.moderation import ModerationActionSearchRequest

logger = logging.getLogger(__name__)

ACTION_SORT_FIELDS = ("created_at", "action_type")


def action_to_dict(action: ModerationActionModel) -> dict:
    return {
        "id": action.id,
        "moderator_id": action.moderator_id,
        "target_member_id": action.target_member_id,
        "target_post_id": action.target_post_id,
        "target_comment_id": action.target_comment_id,
        "action_type": ModerationActionType(action.action_type).value,
        "action_reason": action.action_reason,
        "decision_narrative": action.decision_narrative,
        "status": ModerationActionStatus(action.status).value,
        "effective_from": to_iso(action.effective_from),
        "effective_until": to_iso(action.effective_until),
        "created_at": to_iso(action.created_at),
        "updated_at": to_iso(action.updated_at),
    }


class ModerationService:
    """Moderation action service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize moderation service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _load_targets(
        self,
        target_member_id: UUID | None,
        target_post_id: UUID | None,
        target_comment_id: UUID | None,
        include_deleted: bool = False,
    ) -> tuple:
        lookup = "get_by_id" if include_deleted else "get_active_by_id"
        member = post = comment = None
        if target_member_id is not None:
            member = await getattr(member_crud, lookup)(self.db, target_member_id)
            if member is None:
                raise NotFoundError("Member", target_member_id)
        if target_post_id is not None:
            post = await getattr(post_crud, lookup)(self.db, target_post_id)
            if post is None:
                raise NotFoundError("Post", target_post_id)
        if target_comment_id is not None:
            comment = await getattr(comment_crud, lookup)(self.db, target_comment_id)
            if comment is None:
                raise NotFoundError("Comment", target_comment_id)
        return member, post, comment

    async def _apply_effect(self, action_type: ModerationActionType, post, comment) -> None:
        for crud, target in ((post_crud, post), (comment_crud, comment)):
            if target is None:
                continue
            if action_type == ModerationActionType.REMOVE and target.deleted_at is None:
                await crud.soft_delete(self.db, target)
            elif action_type == ModerationActionType.RESTRICT and not target.is_locked:
                await crud.update(self.db, target, is_locked=True)
            elif action_type == ModerationActionType.RESTORE:
                await crud.update(self.db, target, deleted_at=None, is_locked=False)

    async def create_action(
        self,
        actor: Actor,
        action_type: str,
        action_reason: str,
        target_member_id: UUID | None = None,
        target_post_id: UUID | None = None,
        target_comment_id: UUID | None = None,
        decision_narrative: str | None = None,
        effective_from: datetime | None = None,
        effective_until: datetime | None = None,
        related_report_ids: list[UUID] | None = None,
    ) -> dict:
        """
        Record and apply a moderation action.

        ``remove`` soft-deletes the targeted post/comment, ``restrict``
        locks it and ``restore`` undeletes and unlocks it. Related reports
        are resolved and linked to the action. The affected member (the
        target member, or the author of the targeted content) is notified.

        Args:
            actor: Acting moderator
            action_type: One of warn, mute, remove, edit, restrict, restore, escalate
            action_reason: Short reason shown to the member
            target_member_id: Member acted upon
            target_post_id: Post acted upon
            target_comment_id: Comment acted upon
            decision_narrative: Internal notes
            effective_from: Start of the action (defaults to now)
            effective_until: End of the action, after effective_from
            related_report_ids: Reports closed by this action

        Returns:
            dict: Created action

        Raises:
            ForbiddenError: Caller is not a moderator
            ValidationError: No target or inverted effective window
            NotFoundError: A target or report is missing
        """
        moderator_id = actor.require_moderator()
        kind = ModerationActionType(action_type)
        if target_member_id is None and target_post_id is None and target_comment_id is None:
            raise ValidationError("At least one target is required")

        start = ensure_utc(effective_from) or utcnow()
        end = ensure_utc(effective_until)
        if end is not None and end <= start:
            raise ValidationError(
                "effective_until must be after effective_from", field="effective_until"
            )

        member, post, comment = await self._load_targets(
            target_member_id,
            target_post_id,
            target_comment_id,
            include_deleted=kind == ModerationActionType.RESTORE,
        )

        report_ids = list(dict.fromkeys(related_report_ids or []))
        reports = await content_report_crud.get_many(self.db, report_ids)
        found = {report.id for report in reports}
        for report_id in report_ids:
            if report_id not in found:
                raise NotFoundError("Content report", report_id)

        try:
            action = await moderation_action_crud.create(
                self.db,
                moderator_id=moderator_id,
                target_member_id=target_member_id,
                target_post_id=target_post_id,
                target_comment_id=target_comment_id,
                action_type=kind,
                action_reason=action_reason,
                decision_narrative=decision_narrative,
                status=ModerationActionStatus.ACTIVE,
                effective_from=start,
                effective_until=end,
            )
            await self._apply_effect(kind, post, comment)

            now = utcnow()
            for report in reports:
                await content_report_crud.update(
                    self.db,
                    report,
                    status=ReportStatus.RESOLVED,
                    moderation_action_id=action.id,
                    resolved_at=now,
                )
        except Exception as e:
            logger.error(
                "Failed to apply moderation action",
                extra={"action_type": kind.value, "error": str(e)},
            )
            raise

        await self._notify_affected(action, member, post, comment)
        await AuditLogService(self.db).record(
            actor_user_account_id=actor.user_account_id,
            actor_type="moderator",
            action_category="moderation",
            target_table="moderation_actions",
            target_id=action.id,
            description=f"Moderation action {kind.value}",
            payload={
                "target_member_id": str(target_member_id) if target_member_id else None,
                "target_post_id": str(target_post_id) if target_post_id else None,
                "target_comment_id": str(target_comment_id) if target_comment_id else None,
                "related_report_ids": [str(report_id) for report_id in report_ids],
            },
        )
        logger.info(
            "Moderation action created",
            extra={"moderation_action_id": str(action.id), "action_type": kind.value},
        )
        return action_to_dict(action)

    async def _notify_affected(self, action: ModerationActionModel, member, post, comment) -> None:
        affected = member
        if affected is None:
            author_id = post.author_id if post is not None else comment.author_member_id
            affected = await member_crud.get_by_id(self.db, author_id)
        if affected is None:
            return
        await NotificationService(self.db).notify(
            affected.user_account_id,
            event_type="moderation_action",
            subject="A moderation action affects you",
            body=(
                f"A moderator applied '{ModerationActionType(action.action_type).value}'. "
                f"Reason: {action.action_reason}"
            ),
        )

    async def get_action(self, action_id: UUID) -> dict:
        action = await moderation_action_crud.get_active_by_id(self.db, action_id)
        if action is None:
            raise NotFoundError("Moderation action", action_id)
        return action_to_dict(action)

    async def search_actions(self, request: ModerationActionSearchRequest) -> dict:
        criteria = created_range(ModerationActionModel, request.created_from, request.created_to)
        if request.moderator_id is not None:
            criteria.append(ModerationActionModel.moderator_id == request.moderator_id)
        if request.target_member_id is not None:
            criteria.append(ModerationActionModel.target_member_id == request.target_member_id)
        if request.action_type is not None:
            criteria.append(
                ModerationActionModel.action_type == ModerationActionType(request.action_type)
            )
        if request.status is not None:
            criteria.append(
                ModerationActionModel.status == ModerationActionStatus(request.status)
            )

        paging = page_request(request.page, request.limit)
        rows, total = await moderation_action_crud.search(
            self.db,
            criteria,
            order_by=order_clause(
                ModerationActionModel, request.sort_by, request.sort_order, ACTION_SORT_FIELDS
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [action_to_dict(a) for a in rows])

    async def update_action_status(self, action_id: UUID, actor: Actor, status: str) -> dict:
        """
        Change an action's status; reverting undoes its content side effects.

        Raises:
            ForbiddenError: Caller is not staff
            NotFoundError: Action missing or deleted
        """
        actor.require_staff()
        action = await moderation_action_crud.get_active_by_id(self.db, action_id)
        if action is None:
            raise NotFoundError("Moderation action", action_id)

        new_status = ModerationActionStatus(status)
        if new_status == ModerationActionStatus.REVERTED:
            action = await self.revert_action(action)
        else:
            action = await moderation_action_crud.update(self.db, action, status=new_status)
        return action_to_dict(action)

    async def revert_action(self, action: ModerationActionModel) -> ModerationActionModel:
        """
        Undo an action's effect on its post/comment and mark it reverted.

        Removed content is undeleted and restricted content unlocked.
        Reverting twice is a no-op.
        """
        if action.status == ModerationActionStatus.REVERTED:
            return action

        kind = ModerationActionType(action.action_type)
        if kind in (ModerationActionType.REMOVE, ModerationActionType.RESTRICT):
            _, post, comment = await self._load_targets(
                None, action.target_post_id, action.target_comment_id, include_deleted=True
            )
            for crud, target in ((post_crud, post), (comment_crud, comment)):
                if target is None:
                    continue
                if kind == ModerationActionType.REMOVE:
                    await crud.update(self.db, target, deleted_at=None)
                else:
                    await crud.update(self.db, target, is_locked=False)

        action = await moderation_action_crud.update(
            self.db, action, status=ModerationActionStatus.REVERTED
        )
        logger.info("Moderation action reverted", extra={"moderation_action_id": str(action.id)})
        return action
