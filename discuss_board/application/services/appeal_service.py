"""
Appeal service orchestrator.

Members contest moderation actions that affected them; staff review the
appeals. Accepting an appeal reverts the action.

Dependencies: discuss_board.boundary.db.CRUD
System role: Appeal use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.moderation_service import ModerationService
from discuss_board.application.services.notification_service import NotificationService
from discuss_board.application.services.query_utils import order_clause, page_request
from discuss_board.boundary.db.CRUD.account_crud import member_crud
from discuss_board.boundary.db.CRUD.comment_crud import comment_crud
from discuss_board.boundary.db.CRUD.moderation_crud import appeal_crud, moderation_action_crud
from discuss_board.boundary.db.CRUD.post_crud import post_crud
from discuss_board.boundary.db.models.moderation_model import (
    AppealModel,
    AppealStatus,
    ModerationActionModel,
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
from discuss_board.models.moderation import AppealSearchRequest

logger = logging.getLogger(__name__)

APPEAL_SORT_FIELDS = ("created_at", "status")
FINAL_APPEAL_STATUSES = (AppealStatus.ACCEPTED, AppealStatus.REJECTED)


def appeal_to_dict(appeal: AppealModel) -> dict:
    return {
        "id": appeal.id,
        "moderation_action_id": appeal.moderation_action_id,
        "appellant_member_id": appeal.appellant_member_id,
        "appeal_rationale": appeal.appeal_rationale,
        "status": AppealStatus(appeal.status).value,
        "resolution_notes": appeal.resolution_notes,
        "resolved_at": to_iso(appeal.resolved_at),
        "created_at": to_iso(appeal.created_at),
        "updated_at": to_iso(appeal.updated_at),
    }


class AppealService:
    """Appeal service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _affected_member_ids(self, action: ModerationActionModel) -> set[UUID]:
        """Members an action applies to: its target and the targeted content's authors."""
        affected = set()
        if action.target_member_id is not None:
            affected.add(action.target_member_id)
        if action.target_post_id is not None:
            post = await post_crud.get_by_id(self.db, action.target_post_id)
            if post is not None:
                affected.add(post.author_id)
        if action.target_comment_id is not None:
            comment = await comment_crud.get_by_id(self.db, action.target_comment_id)
            if comment is not None:
                affected.add(comment.author_member_id)
        return affected

    async def create_appeal(
        self,
        actor: Actor,
        moderation_action_id: UUID,
        appeal_rationale: str,
    ) -> dict:
        """
        Appeal a moderation action.

        Args:
            actor: Appealing member
            moderation_action_id: Contested action
            appeal_rationale: Why the action should be reverted

        Returns:
            dict: Created appeal (status pending)

        Raises:
            NotFoundError: Action missing or deleted
            ForbiddenError: Caller was not affected by the action
            ConflictError: Caller already has an open appeal on it
        """
        member_id = actor.require_member()
        action = await moderation_action_crud.get_active_by_id(self.db, moderation_action_id)
        if action is None:
            raise NotFoundError("Moderation action", moderation_action_id)
        if member_id not in await self._affected_member_ids(action):
            raise ForbiddenError("Only affected members can appeal this action")
        if await appeal_crud.get_open_for(self.db, action.id, member_id):
            raise ConflictError("Appeal already submitted")

        appeal = await appeal_crud.create(
            self.db,
            moderation_action_id=action.id,
            appellant_member_id=member_id,
            appeal_rationale=appeal_rationale,
            status=AppealStatus.PENDING,
        )
        logger.info(
            "Appeal submitted",
            extra={"appeal_id": str(appeal.id), "moderation_action_id": str(action.id)},
        )
        return appeal_to_dict(appeal)

    async def _get(self, appeal_id: UUID) -> AppealModel:
        appeal = await appeal_crud.get_active_by_id(self.db, appeal_id)
        if appeal is None:
            raise NotFoundError("Appeal", appeal_id)
        return appeal

    async def get_appeal(self, appeal_id: UUID, actor: Actor) -> dict:
        appeal = await self._get(appeal_id)
        if not actor.owns(appeal.appellant_member_id) and not actor.is_staff:
            raise ForbiddenError("You can only view your own appeals")
        return appeal_to_dict(appeal)

    async def search_appeals(self, request: AppealSearchRequest, actor: Actor) -> dict:
        """Staff see every appeal; members only their own."""
        criteria = []
        if not actor.is_staff:
            criteria.append(AppealModel.appellant_member_id == actor.require_member())
        elif request.appellant_member_id is not None:
            criteria.append(AppealModel.appellant_member_id == request.appellant_member_id)
        if request.status is not None:
            criteria.append(AppealModel.status == AppealStatus(request.status))
        if request.moderation_action_id is not None:
            criteria.append(AppealModel.moderation_action_id == request.moderation_action_id)

        paging = page_request(request.page, request.limit)
        rows, total = await appeal_crud.search(
            self.db,
            criteria,
            order_by=order_clause(AppealModel, request.sort_by, request.sort_order, APPEAL_SORT_FIELDS),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [appeal_to_dict(a) for a in rows])

    async def resolve_appeal(
        self,
        appeal_id: UUID,
        actor: Actor,
        status: str,
        resolution_notes: str | None = None,
    ) -> dict:
        """
        Review an appeal.

        Accepted appeals revert the contested action. Accepted and rejected
        appeals are final and notify the appellant.

        Raises:
            ForbiddenError: Caller is not staff
            NotFoundError: Appeal missing or deleted
            ValidationError: Appeal already final
        """
        actor.require_staff()
        appeal = await self._get(appeal_id)
        if appeal.status in FINAL_APPEAL_STATUSES:
            raise ValidationError("Appeal is already resolved")

        new_status = AppealStatus(status)
        changes: dict = {"status": new_status}
        if resolution_notes is not None:
            changes["resolution_notes"] = resolution_notes
        if new_status in FINAL_APPEAL_STATUSES:
            changes["resolved_at"] = utcnow()

        if new_status == AppealStatus.ACCEPTED:
            action = await moderation_action_crud.get_by_id(self.db, appeal.moderation_action_id)
            if action is not None:
                await ModerationService(self.db).revert_action(action)

        appeal = await appeal_crud.update(self.db, appeal, **changes)

        if new_status in FINAL_APPEAL_STATUSES:
            appellant = await member_crud.get_by_id(self.db, appeal.appellant_member_id)
            if appellant is not None:
                await NotificationService(self.db).notify(
                    appellant.user_account_id,
                    event_type="appeal_resolved",
                    subject="Your appeal was reviewed",
                    body=f"Your appeal was {new_status.value}.",
                )
        logger.info(
            "Appeal resolved",
            extra={"appeal_id": str(appeal.id), "appeal_status": new_status.value},
        )
        return appeal_to_dict(appeal)

    async def delete_appeal(self, appeal_id: UUID, actor: Actor) -> None:
        actor.require_administrator()
        appeal = await self._get(appeal_id)
        await appeal_crud.soft_delete(self.db, appeal)
