"""
Member service orchestrator.

Profile reads and edits, self-service and administrator deletion, staff
member searches and administrator account status changes.

Dependencies: discuss_board.boundary.db.CRUD, discuss_board.core
System role: Member use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.audit_log_service import AuditLogService
from discuss_board.application.services.query_utils import contains, created_range, page_request
from discuss_board.boundary.db.CRUD.account_crud import (
    jwt_session_crud,
    member_crud,
    user_account_crud,
)
from discuss_board.boundary.db.models.account_model import (
    AccountStatus,
    MemberModel,
    MemberStatus,
    UserAccountModel,
)
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from discuss_board.core.pagination import build_page, resolve_sort
from discuss_board.core.timeutils import to_iso, utcnow
from discuss_board.models.member import MemberSearchRequest

logger = logging.getLogger(__name__)

MEMBER_SORT_FIELDS = ("created_at", "nickname", "email")


def member_to_dict(member: MemberModel) -> dict:
    return {
        "id": member.id,
        "user_account_id": member.user_account_id,
        "nickname": member.nickname,
        "status": MemberStatus(member.status).value,
        "created_at": to_iso(member.created_at),
        "updated_at": to_iso(member.updated_at),
        "deleted_at": to_iso(member.deleted_at),
    }


def member_detail_to_dict(member: MemberModel, account: UserAccountModel) -> dict:
    return {
        **member_to_dict(member),
        "email": account.email,
        "email_verified": account.email_verified,
        "account_status": AccountStatus(account.status).value,
        "last_login_at": to_iso(account.last_login_at),
    }


class MemberService:
    """Member service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize member service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get(self, member_id: UUID) -> MemberModel:
        member = await member_crud.get_active_by_id(self.db, member_id)
        if member is None:
            raise NotFoundError("Member", member_id)
        return member

    async def get_member(self, member_id: UUID) -> dict:
        """
        Retrieve a member profile.

        Raises:
            NotFoundError: Member missing or deleted
        """
        return member_to_dict(await self._get(member_id))

    async def update_member(
        self,
        member_id: UUID,
        actor: Actor,
        nickname: str | None = None,
    ) -> dict:
        """
        Update a member profile.

        Args:
            member_id: Member to update
            actor: Caller; must own the member or be an administrator
            nickname: New nickname

        Returns:
            dict: Updated member

        Raises:
            NotFoundError: Member missing or deleted
            ForbiddenError: Caller is neither owner nor administrator
            ConflictError: Nickname used by another member
        """
        member = await self._get(member_id)
        if not actor.owns(member.id) and not actor.is_administrator:
            raise ForbiddenError("You can only update your own profile")

        if nickname is not None and nickname != member.nickname:
            existing = await member_crud.get_by_nickname(self.db, nickname)
            if existing is not None and existing.id != member.id:
                raise ConflictError("Duplicate nickname", details={"nickname": nickname})
            member = await member_crud.update(self.db, member, nickname=nickname)
            logger.info("Member nickname updated", extra={"member_id": str(member.id)})

        return member_to_dict(member)

    async def delete_member(self, member_id: UUID, actor: Actor) -> None:
        """
        Soft-delete a member and its account and revoke every session.

        Raises:
            NotFoundError: Member missing or deleted
            ForbiddenError: Caller is neither owner nor administrator
        """
        member = await self._get(member_id)
        if not actor.owns(member.id) and not actor.is_administrator:
            raise ForbiddenError("You can only delete your own account")

        try:
            now = utcnow()
            await member_crud.update(self.db, member, deleted_at=now)
            account = await user_account_crud.get_by_id(self.db, member.user_account_id)
            if account is not None and account.deleted_at is None:
                await user_account_crud.update(self.db, account, deleted_at=now)
            revoked = await jwt_session_crud.revoke_all_for_account(self.db, member.user_account_id)
        except Exception as e:
            logger.error(
                "Failed to delete member",
                extra={"member_id": str(member_id), "error": str(e)},
            )
            raise

        logger.info(
            "Member deleted",
            extra={"member_id": str(member_id), "revoked_sessions": revoked},
        )

    async def search_members(self, request: MemberSearchRequest) -> dict:
        """
        Staff search over members with their account fields.

        Args:
            request: Filters, paging and sorting

        Returns:
            dict: Page of member details
        """
        criteria = created_range(MemberModel, request.created_from, request.created_to)
        criteria.extend(contains(MemberModel.nickname, request.nickname))
        criteria.extend(contains(UserAccountModel.email, request.email))
        if request.status is not None:
            criteria.append(MemberModel.status == MemberStatus(request.status))
        if request.account_status is not None:
            criteria.append(UserAccountModel.status == AccountStatus(request.account_status))
        if request.email_verified is not None:
            criteria.append(UserAccountModel.email_verified == request.email_verified)

        field, descending = resolve_sort(request.sort_by, request.sort_order, MEMBER_SORT_FIELDS)
        column = UserAccountModel.email if field == "email" else getattr(MemberModel, field)
        order_by = [column.desc() if descending else column.asc(), MemberModel.id.asc()]

        paging = page_request(request.page, request.limit)
        rows, total = await member_crud.search_with_account(
            self.db, criteria, order_by=order_by, offset=paging.offset, limit=paging.limit
        )
        return build_page(
            paging, total, [member_detail_to_dict(member, account) for member, account in rows]
        )

    async def update_account_status(
        self,
        user_account_id: UUID,
        actor: Actor,
        status: str | None = None,
        email_verified: bool | None = None,
    ) -> dict:
        """
        Administrator change of an account's status or verification flag.

        Suspending or banning an account revokes its open sessions.

        Args:
            user_account_id: Account to change
            actor: Administrator performing the change
            status: New account status
            email_verified: New verification flag

        Returns:
            dict: Member detail of the account

        Raises:
            ForbiddenError: Caller is not an administrator
            NotFoundError: Account or member missing
        """
        actor.require_administrator()
        account = await user_account_crud.get_active_by_id(self.db, user_account_id)
        if account is None:
            raise NotFoundError("User account", user_account_id)
        member = await member_crud.get_by_user_account_id(self.db, account.id)
        if member is None:
            raise NotFoundError("Member", details={"user_account_id": str(user_account_id)})

        changes: dict = {}
        if status is not None:
            changes["status"] = AccountStatus(status)
        if email_verified is not None:
            changes["email_verified"] = email_verified
        if not changes:
            return member_detail_to_dict(member, account)

        previous_status = AccountStatus(account.status).value
        account = await user_account_crud.update(self.db, account, **changes)
        if account.status in (AccountStatus.SUSPENDED, AccountStatus.BANNED):
            await jwt_session_crud.revoke_all_for_account(self.db, account.id)

        await AuditLogService(self.db).record(
            actor_user_account_id=actor.user_account_id,
            actor_type="administrator",
            action_category="account",
            target_table="user_accounts",
            target_id=account.id,
            description="Account status updated",
            payload={
                "previous_status": previous_status,
                "status": AccountStatus(account.status).value,
                "email_verified": account.email_verified,
            },
        )
        return member_detail_to_dict(member, account)
