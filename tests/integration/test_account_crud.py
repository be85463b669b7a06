"""
Test suite for account CRUD lookups.

Covers email/nickname lookups, role record queries and session revocation
against an in-memory database.

System role: Verification of identity persistence layer
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.account_crud import (
    administrator_crud,
    jwt_session_crud,
    member_crud,
    moderator_crud,
    user_account_crud,
)
from discuss_board.boundary.db.models.account_model import (
    AccountStatus,
    MemberModel,
    RoleStatus,
    UserAccountModel,
)
from discuss_board.core.timeutils import utcnow


class TestUserAccountCRUD:
    async def test_get_by_email_should_ignore_case_and_whitespace(
        self, test_async_db: AsyncSession, member_factory
    ) -> None:
        # Arrange
        actor = await member_factory("casey")

        # Act
        account = await user_account_crud.get_by_email(test_async_db, "  CASEY@Example.com ")

        # Assert
        assert account is not None
        assert account.id == actor.user_account_id

    async def test_get_by_email_should_skip_deleted_accounts(
        self, test_async_db: AsyncSession, member_factory
    ) -> None:
        actor = await member_factory("gone")
        account = await user_account_crud.get_by_id(test_async_db, actor.user_account_id)
        await user_account_crud.soft_delete(test_async_db, account)

        assert await user_account_crud.get_by_email(test_async_db, "gone@example.com") is None


class TestMemberCRUD:
    async def test_get_with_account_should_join_account(
        self, test_async_db: AsyncSession, member_factory
    ) -> None:
        actor = await member_factory("joined")

        member, account = await member_crud.get_with_account(test_async_db, actor.member_id)

        assert member.nickname == "joined"
        assert account.email == "joined@example.com"

    async def test_search_with_account_should_filter_on_account_columns(
        self, test_async_db: AsyncSession, member_factory
    ) -> None:
        await member_factory("active-one")
        await member_factory("banned-one", status=AccountStatus.BANNED)

        rows, total = await member_crud.search_with_account(
            test_async_db,
            [UserAccountModel.status == AccountStatus.BANNED],
            order_by=[MemberModel.nickname.asc()],
        )

        assert total == 1
        assert rows[0][0].nickname == "banned-one"


class TestRoleCRUD:
    async def test_active_administrator_lookup_should_skip_revoked(
        self, test_async_db: AsyncSession, admin_factory
    ) -> None:
        # Arrange
        actor = await admin_factory()
        administrator = await administrator_crud.get_by_id(test_async_db, actor.administrator_id)

        # Act
        await administrator_crud.update(
            test_async_db, administrator, status=RoleStatus.REVOKED, revoked_at=utcnow()
        )

        # Assert
        assert await administrator_crud.get_active_by_member_id(test_async_db, actor.member_id) is None
        assert await administrator_crud.count_active(test_async_db) == 0

    async def test_moderator_lookup_by_member_includes_deleted(
        self, test_async_db: AsyncSession, moderator_factory
    ) -> None:
        actor = await moderator_factory()
        moderator = await moderator_crud.get_by_id(test_async_db, actor.moderator_id)
        await moderator_crud.soft_delete(test_async_db, moderator)

        assert await moderator_crud.get_active_by_member_id(test_async_db, actor.member_id) is None
        found = await moderator_crud.get_by_member_id(test_async_db, actor.member_id)
        assert found.id == actor.moderator_id


class TestJwtSessionCRUD:
    async def test_revoke_all_for_account_should_close_open_sessions(
        self, test_async_db: AsyncSession, member_factory
    ) -> None:
        # Arrange
        actor = await member_factory()
        now = utcnow()
        for jwt_id in ("first", "second"):
            await jwt_session_crud.create(
                test_async_db,
                user_account_id=actor.user_account_id,
                jwt_id=jwt_id,
                refresh_token_hash="hash",
                issued_at=now,
                expires_at=now + timedelta(days=1),
            )

        # Act
        revoked = await jwt_session_crud.revoke_all_for_account(
            test_async_db, actor.user_account_id
        )

        # Assert
        assert revoked == 2
        session = await jwt_session_crud.get_by_jwt_id(test_async_db, "first")
        assert session.revoked_at is not None
        assert await jwt_session_crud.revoke_all_for_account(
            test_async_db, actor.user_account_id
        ) == 0
