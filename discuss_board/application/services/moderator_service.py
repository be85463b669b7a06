"""
Moderator assignment service.

Dependencies: discuss_board.boundary.db.CRUD
System role: Moderator role management by administrators
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.audit_log_service import AuditLogService
from discuss_board.application.services.query_utils import page_request
from discuss_board.boundary.db.CRUD.account_crud import member_crud, moderator_crud
from discuss_board.boundary.db.models.account_model import (
    AccountStatus,
    ModeratorModel,
    RoleStatus,
)
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import NotFoundError, ValidationError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso, utcnow

logger = logging.getLogger(__name__)


def moderator_to_dict(moderator: ModeratorModel) -> dict:
    return {
        "id": moderator.id,
        "member_id": moderator.member_id,
        "assigned_by_administrator_id": moderator.assigned_by_administrator_id,
        "assigned_at": to_iso(moderator.assigned_at),
        "revoked_at": to_iso(moderator.revoked_at),
        "status": RoleStatus(moderator.status).value,
        "created_at": to_iso(moderator.created_at),
        "updated_at": to_iso(moderator.updated_at),
    }


class ModeratorService:
    """Moderator assignment service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def assign_moderator(self, member_id: UUID, actor: Actor) -> dict:
        """
        Grant the moderator role to a member.

        Idempotent: an active assignment is returned unchanged, a revoked or
        deleted one is reactivated, otherwise a new record is created.

        Args:
            member_id: Member receiving the role
            actor: Granting administrator

        Returns:
            dict: Active moderator record

        Raises:
            ForbiddenError: Caller is not an administrator
            NotFoundError: Member missing or deleted
            ValidationError: Member account suspended or banned
        """
        administrator_id = actor.require_administrator()
        loaded = await member_crud.get_with_account(self.db, member_id)
        if loaded is None:
            raise NotFoundError("Member", member_id)
        _, account = loaded
        if account.deleted_at is not None or account.status in (
            AccountStatus.SUSPENDED,
            AccountStatus.BANNED,
        ):
            raise ValidationError("Member account is not in good standing")

        moderator = await moderator_crud.get_by_member_id(self.db, member_id)
        if (
            moderator is not None
            and moderator.deleted_at is None
            and moderator.status == RoleStatus.ACTIVE
            and moderator.revoked_at is None
        ):
            return moderator_to_dict(moderator)

        now = utcnow()
        if moderator is not None:
            moderator = await moderator_crud.update(
                self.db,
                moderator,
                status=RoleStatus.ACTIVE,
                revoked_at=None,
                deleted_at=None,
                assigned_at=now,
                assigned_by_administrator_id=administrator_id,
            )
        else:
            moderator = await moderator_crud.create(
                self.db,
                member_id=member_id,
                assigned_by_administrator_id=administrator_id,
                assigned_at=now,
            )

        await AuditLogService(self.db).record(
            actor_user_account_id=actor.user_account_id,
            actor_type="administrator",
            action_category="role_assignment",
            target_table="moderators",
            target_id=moderator.id,
            description="Moderator assigned",
            payload={"member_id": str(member_id)},
        )
        logger.info(
            "Moderator assigned",
            extra={"moderator_id": str(moderator.id), "member_id": str(member_id)},
        )
        return moderator_to_dict(moderator)

    async def revoke_moderator(self, member_id: UUID, actor: Actor) -> dict:
        actor.require_administrator()
        moderator = await moderator_crud.get_active_by_member_id(self.db, member_id)
        if moderator is None:
            raise NotFoundError("Moderator", details={"member_id": str(member_id)})

        moderator = await moderator_crud.update(
            self.db, moderator, status=RoleStatus.REVOKED, revoked_at=utcnow()
        )
        await AuditLogService(self.db).record(
            actor_user_account_id=actor.user_account_id,
            actor_type="administrator",
            action_category="role_assignment",
            target_table="moderators",
            target_id=moderator.id,
            description="Moderator revoked",
            payload={"member_id": str(member_id)},
        )
        return moderator_to_dict(moderator)

    async def list_moderators(self, page: int | None = None, limit: int | None = None) -> dict:
        paging = page_request(page, limit)
        rows, total = await moderator_crud.search(
            self.db,
            [ModeratorModel.status == RoleStatus.ACTIVE],
            order_by=[ModeratorModel.assigned_at.desc(), ModeratorModel.id.asc()],
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [moderator_to_dict(m) for m in rows])
