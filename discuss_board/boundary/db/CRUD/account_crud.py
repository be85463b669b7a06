"""
Account CRUD operations.

Lookups for accounts, members, role records, consent records and JWT
sessions used by the auth, member and moderator services.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Identity persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.base import utc_now
from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.account_model import (
    AdministratorModel,
    ConsentRecordModel,
    GuestModel,
    JwtSessionModel,
    MemberModel,
    ModeratorModel,
    RoleStatus,
    UserAccountModel,
)


class UserAccountCRUD(BaseCRUD[UserAccountModel]):
    """CRUD operations for UserAccountModel."""

    def __init__(self) -> None:
        super().__init__(UserAccountModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserAccountModel | None:
        """
        Find a non-deleted account by email (case-insensitive).

        Args:
            session: Async database session
            email: Login email

        Returns:
            UserAccountModel if found, None otherwise
        """
        return await self.find_first(
            session, func.lower(UserAccountModel.email) == email.strip().lower()
        )


class MemberCRUD(BaseCRUD[MemberModel]):
    """CRUD operations for MemberModel."""

    def __init__(self) -> None:
        super().__init__(MemberModel)

    async def get_by_nickname(self, session: AsyncSession, nickname: str) -> MemberModel | None:
        return await self.find_first(session, MemberModel.nickname == nickname)

    async def get_by_user_account_id(
        self,
        session: AsyncSession,
        user_account_id: UUID,
    ) -> MemberModel | None:
        return await self.find_first(session, MemberModel.user_account_id == user_account_id)

    async def get_with_account(
        self,
        session: AsyncSession,
        member_id: UUID,
    ) -> tuple[MemberModel, UserAccountModel] | None:
        """
        Load a non-deleted member together with its account.

        Args:
            session: Async database session
            member_id: Member UUID

        Returns:
            (member, account) tuple, None if the member is missing or deleted
        """
        stmt = (
            select(MemberModel, UserAccountModel)
            .join(UserAccountModel, UserAccountModel.id == MemberModel.user_account_id)
            .where(MemberModel.id == member_id, MemberModel.deleted_at.is_(None))
        )
        row = (await session.execute(stmt)).first()
        return (row[0], row[1]) if row else None

    async def search_with_account(
        self,
        session: AsyncSession,
        criteria: list,
        order_by: list | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[list[tuple[MemberModel, UserAccountModel]], int]:
        """
        Page through non-deleted members joined with their accounts.

        Args:
            session: Async database session
            criteria: Filters over MemberModel and UserAccountModel columns
            order_by: ORDER BY clauses
            offset: Rows to skip
            limit: Page size (None for all)

        Returns:
            tuple: ([(member, account), ...], total matching rows)
        """
        base = (
            select(MemberModel, UserAccountModel)
            .join(UserAccountModel, UserAccountModel.id == MemberModel.user_account_id)
            .where(*criteria, MemberModel.deleted_at.is_(None))
        )
        count_stmt = select(func.count()).select_from(base.subquery())
        total = (await session.execute(count_stmt)).scalar_one()

        stmt = base
        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = (await session.execute(stmt)).all()
        return [(row[0], row[1]) for row in rows], total


class GuestCRUD(BaseCRUD[GuestModel]):
    """CRUD operations for GuestModel."""

    def __init__(self) -> None:
        super().__init__(GuestModel)


class AdministratorCRUD(BaseCRUD[AdministratorModel]):
    """CRUD operations for AdministratorModel."""

    def __init__(self) -> None:
        super().__init__(AdministratorModel)

    async def get_active_by_member_id(
        self,
        session: AsyncSession,
        member_id: UUID,
    ) -> AdministratorModel | None:
        """Active, non-revoked administrator record of a member."""
        return await self.find_first(
            session,
            AdministratorModel.member_id == member_id,
            AdministratorModel.status == RoleStatus.ACTIVE,
            AdministratorModel.revoked_at.is_(None),
        )

    async def count_active(self, session: AsyncSession) -> int:
        stmt = select(func.count()).select_from(AdministratorModel).where(
            AdministratorModel.status == RoleStatus.ACTIVE,
            AdministratorModel.deleted_at.is_(None),
        )
        return (await session.execute(stmt)).scalar_one()


class ModeratorCRUD(BaseCRUD[ModeratorModel]):
    """CRUD operations for ModeratorModel."""

    def __init__(self) -> None:
        super().__init__(ModeratorModel)

    async def get_by_member_id(
        self,
        session: AsyncSession,
        member_id: UUID,
    ) -> ModeratorModel | None:
        """Moderator record of a member in any state, including deleted."""
        return await self.find_first(
            session, ModeratorModel.member_id == member_id, include_deleted=True
        )

    async def get_active_by_member_id(
        self,
        session: AsyncSession,
        member_id: UUID,
    ) -> ModeratorModel | None:
        return await self.find_first(
            session,
            ModeratorModel.member_id == member_id,
            ModeratorModel.status == RoleStatus.ACTIVE,
            ModeratorModel.revoked_at.is_(None),
        )


class ConsentRecordCRUD(BaseCRUD[ConsentRecordModel]):
    """CRUD operations for ConsentRecordModel."""

    def __init__(self) -> None:
        super().__init__(ConsentRecordModel)

    async def list_by_account(
        self,
        session: AsyncSession,
        user_account_id: UUID,
    ) -> Sequence[ConsentRecordModel]:
        stmt = (
            select(ConsentRecordModel)
            .where(ConsentRecordModel.user_account_id == user_account_id)
            .order_by(ConsentRecordModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class JwtSessionCRUD(BaseCRUD[JwtSessionModel]):
    """CRUD operations for JwtSessionModel."""

    def __init__(self) -> None:
        super().__init__(JwtSessionModel)

    async def get_by_jwt_id(self, session: AsyncSession, jwt_id: str) -> JwtSessionModel | None:
        """Session by ``jti``, including revoked and deleted rows."""
        return await self.find_first(
            session, JwtSessionModel.jwt_id == jwt_id, include_deleted=True
        )

    async def revoke_all_for_account(self, session: AsyncSession, user_account_id: UUID) -> int:
        """
        Revoke every open session of an account.

        Returns:
            Number of sessions revoked
        """
        stmt = (
            update(JwtSessionModel)
            .where(
                JwtSessionModel.user_account_id == user_account_id,
                JwtSessionModel.revoked_at.is_(None),
            )
            .values(revoked_at=utc_now())
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount


user_account_crud = UserAccountCRUD()
member_crud = MemberCRUD()
guest_crud = GuestCRUD()
administrator_crud = AdministratorCRUD()
moderator_crud = ModeratorCRUD()
consent_record_crud = ConsentRecordCRUD()
jwt_session_crud = JwtSessionCRUD()
