"""
Test suite for AuthService.

Tests member registration with email verification, login, refresh token
rotation, logout, administrator bootstrap and login auditing, guest tokens
and access token resolution. Runs against an in-memory database.

System role: Verification of identity and session orchestration
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.auth_service import AuthService
from discuss_board.boundary.db.CRUD.account_crud import (
    consent_record_crud,
    jwt_session_crud,
    moderator_crud,
    user_account_crud,
)
from discuss_board.boundary.db.CRUD.log_crud import audit_log_crud
from discuss_board.boundary.db.CRUD.notification_crud import notification_crud
from discuss_board.boundary.db.models.account_model import AccountStatus
from discuss_board.boundary.db.models.log_model import AuditLogModel
from discuss_board.boundary.db.models.notification_model import NotificationModel
from discuss_board.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    ValidationError,
)
from discuss_board.core.timeutils import utcnow

PASSWORD = "member-password"
ADMIN_PASSWORD = "Adm1n!Password"

CONSENTS = [
    {"policy_type": "privacy_policy", "policy_version": "1.0", "consent_action": "granted"},
    {"policy_type": "terms_of_service", "policy_version": "1.0", "consent_action": "granted"},
    {"policy_type": "marketing", "policy_version": "1.0", "consent_action": "revoked"},
]


@pytest.fixture
def auth_service(test_async_db: AsyncSession) -> AuthService:
    """Provide AuthService bound to the test database."""
    return AuthService(test_async_db)


async def _verification_token(db: AsyncSession, user_account_id) -> str:
    rows, _ = await notification_crud.search(
        db,
        [
            NotificationModel.user_account_id == user_account_id,
            NotificationModel.event_type == "email_verification",
        ],
    )
    assert len(rows) == 1
    return rows[0].body.rsplit(" ", 1)[1]


async def _join(auth_service: AuthService, nickname: str = "alice") -> dict:
    return await auth_service.member_join(
        email=f"{nickname}@example.com",
        password=PASSWORD,
        nickname=nickname,
        consents=CONSENTS,
        user_agent="pytest",
        ip_address="127.0.0.1",
    )


async def _verified_member(auth_service: AuthService, db: AsyncSession, nickname: str = "alice") -> dict:
    joined = await _join(auth_service, nickname)
    await auth_service.verify_email(await _verification_token(db, joined["user_account_id"]))
    return joined


class TestMemberJoin:
    """Test suite for AuthService.member_join()."""

    async def test_join_should_create_pending_member_with_tokens(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        # Act
        result = await _join(auth_service)

        # Assert
        assert result["nickname"] == "alice"
        assert set(result["token"]) == {"access", "refresh", "expired_at", "refreshable_until"}
        account = await user_account_crud.get_by_id(test_async_db, result["user_account_id"])
        assert account.status == AccountStatus.PENDING
        assert not account.email_verified
        consents = await consent_record_crud.list_by_account(test_async_db, account.id)
        assert len(consents) == 3

    async def test_join_should_reject_short_password(self, auth_service: AuthService) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.member_join("a@example.com", "short", "a", CONSENTS)

        assert exc_info.value.field == "password"

    async def test_join_should_require_privacy_and_terms(self, auth_service: AuthService) -> None:
        with pytest.raises(ValidationError, match="terms_of_service"):
            await auth_service.member_join(
                "a@example.com", PASSWORD, "a", CONSENTS[:1]
            )

    async def test_join_should_require_any_consent(self, auth_service: AuthService) -> None:
        with pytest.raises(ValidationError, match="Consent is required"):
            await auth_service.member_join("a@example.com", PASSWORD, "a", [])

    async def test_join_should_reject_duplicate_email_and_nickname(
        self, auth_service: AuthService
    ) -> None:
        await _join(auth_service, "alice")

        with pytest.raises(ConflictError, match="Email"):
            await auth_service.member_join("ALICE@example.com", PASSWORD, "other", CONSENTS)
        with pytest.raises(ConflictError, match="Nickname"):
            await auth_service.member_join("other@example.com", PASSWORD, "alice", CONSENTS)

    async def test_join_without_verification_requirement_should_activate(
        self, auth_service: AuthService, test_async_db: AsyncSession, monkeypatch
    ) -> None:
        from discuss_board.configs import get_settings

        monkeypatch.setenv("AUTH_REQUIRE_EMAIL_VERIFICATION", "false")
        get_settings.cache_clear()

        result = await _join(auth_service)

        account = await user_account_crud.get_by_id(test_async_db, result["user_account_id"])
        assert account.status == AccountStatus.ACTIVE
        assert (await notification_crud.search(test_async_db, []))[1] == 0


class TestEmailVerificationAndLogin:
    async def test_login_should_require_verified_email(self, auth_service: AuthService) -> None:
        await _join(auth_service)

        with pytest.raises(ForbiddenError, match="Account is not active"):
            await auth_service.member_login("alice@example.com", PASSWORD)

    async def test_verify_email_should_activate_account(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        joined = await _join(auth_service)
        token = await _verification_token(test_async_db, joined["user_account_id"])

        # Act
        detail = await auth_service.verify_email(token)

        # Assert
        assert detail["email_verified"] is True
        assert detail["account_status"] == "active"

    async def test_verify_email_should_reject_access_tokens(self, auth_service: AuthService) -> None:
        joined = await _join(auth_service)

        with pytest.raises(AuthenticationError, match="Invalid token type"):
            await auth_service.verify_email(joined["token"]["access"])

    async def test_login_should_issue_tokens_and_stamp_last_login(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        joined = await _verified_member(auth_service, test_async_db)

        result = await auth_service.member_login("Alice@Example.com", PASSWORD)

        assert result["id"] == joined["id"]
        account = await user_account_crud.get_by_id(test_async_db, joined["user_account_id"])
        assert account.last_login_at is not None

    async def test_login_should_reject_bad_password(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        await _verified_member(auth_service, test_async_db)

        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            await auth_service.member_login("alice@example.com", "wrong-password")

    async def test_login_should_reject_unknown_email(self, auth_service: AuthService) -> None:
        with pytest.raises(AuthenticationError):
            await auth_service.member_login("nobody@example.com", PASSWORD)


class TestSessions:
    """Refresh rotation, logout and access token resolution."""

    async def test_refresh_should_rotate_session(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        joined = await _verified_member(auth_service, test_async_db)
        old_token = joined["token"]

        # Act
        refreshed = await auth_service.member_refresh(old_token["refresh"])

        # Assert
        assert refreshed["id"] == joined["id"]
        assert refreshed["token"]["refresh"] != old_token["refresh"]
        with pytest.raises(AuthenticationError):
            await auth_service.member_refresh(old_token["refresh"])
        with pytest.raises(AuthenticationError, match="revoked"):
            await auth_service.resolve_actor(old_token["access"])
        actor = await auth_service.resolve_actor(refreshed["token"]["access"])
        assert actor.member_id == joined["id"]

    async def test_refresh_should_reject_access_token(self, auth_service: AuthService) -> None:
        joined = await _join(auth_service)

        with pytest.raises(AuthenticationError, match="Invalid token type"):
            await auth_service.member_refresh(joined["token"]["access"])

    async def test_refresh_should_reject_suspended_account(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        joined = await _verified_member(auth_service, test_async_db)
        account = await user_account_crud.get_by_id(test_async_db, joined["user_account_id"])
        await user_account_crud.update(test_async_db, account, status=AccountStatus.SUSPENDED)

        with pytest.raises(ForbiddenError):
            await auth_service.member_refresh(joined["token"]["refresh"])

    async def test_logout_should_revoke_session(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        joined = await _join(auth_service)
        actor = await auth_service.resolve_actor(joined["token"]["access"])

        # Act
        await auth_service.logout(actor)

        # Assert
        session = await jwt_session_crud.get_by_jwt_id(test_async_db, actor.jwt_id)
        assert session.revoked_at is not None
        with pytest.raises(AuthenticationError, match="revoked"):
            await auth_service.resolve_actor(joined["token"]["access"])

    async def test_resolve_actor_should_include_moderator_role(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        joined = await _join(auth_service)
        moderator = await moderator_crud.create(
            test_async_db, member_id=joined["id"], assigned_at=utcnow()
        )

        actor = await auth_service.resolve_actor(joined["token"]["access"])

        assert actor.role == "member"
        assert actor.moderator_id == moderator.id
        assert actor.administrator_id is None

    async def test_resolve_actor_should_reject_banned_account(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        joined = await _join(auth_service)
        account = await user_account_crud.get_by_id(test_async_db, joined["user_account_id"])
        await user_account_crud.update(test_async_db, account, status=AccountStatus.BANNED)

        with pytest.raises(ForbiddenError):
            await auth_service.resolve_actor(joined["token"]["access"])

    async def test_resolve_actor_should_reject_refresh_token(self, auth_service: AuthService) -> None:
        joined = await _join(auth_service)

        with pytest.raises(AuthenticationError):
            await auth_service.resolve_actor(joined["token"]["refresh"])


class TestAdministrators:
    """Administrator bootstrap, creation and login auditing."""

    async def _bootstrap(self, auth_service: AuthService) -> dict:
        return await auth_service.administrator_join(
            "root@example.com", ADMIN_PASSWORD, "root"
        )

    async def test_first_administrator_should_escalate_itself(self, auth_service: AuthService) -> None:
        admin = await self._bootstrap(auth_service)

        assert admin["status"] == "active"
        actor = await auth_service.resolve_actor(admin["token"]["access"])
        assert actor.administrator_id == admin["id"]
        assert actor.is_administrator

    async def test_later_administrators_need_an_administrator(self, auth_service: AuthService) -> None:
        # Arrange
        admin = await self._bootstrap(auth_service)
        admin_actor = await auth_service.resolve_actor(admin["token"]["access"])

        # Act / Assert
        with pytest.raises(ForbiddenError):
            await auth_service.administrator_join("second@example.com", ADMIN_PASSWORD, "second")
        second = await auth_service.administrator_join(
            "second@example.com", ADMIN_PASSWORD, "second", actor=admin_actor
        )
        assert second["nickname"] == "second"

    @pytest.mark.parametrize("password", ["Sh0rt!", "alllowercase1!", "NoDigitsHere!", "NoSpecial123"])
    async def test_password_policy(self, auth_service: AuthService, password: str) -> None:
        with pytest.raises(ValidationError, match="Password policy violation"):
            await auth_service.administrator_join("root@example.com", password, "root")

    async def test_login_should_audit_success_and_failure(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        await self._bootstrap(auth_service)

        # Act
        with pytest.raises(AuthenticationError):
            await auth_service.administrator_login("root@example.com", "Wr0ng!Password")
        result = await auth_service.administrator_login("root@example.com", ADMIN_PASSWORD)

        # Assert
        assert result["nickname"] == "root"
        rows, total = await audit_log_crud.search(
            test_async_db,
            [AuditLogModel.action_category == "authentication"],
            order_by=[AuditLogModel.created_at.asc()],
        )
        assert total == 2
        assert [row.event_payload["outcome"] for row in rows] == ["failure", "success"]

    async def test_member_without_role_cannot_login_as_administrator(
        self, auth_service: AuthService, test_async_db: AsyncSession
    ) -> None:
        await _verified_member(auth_service, test_async_db)

        with pytest.raises(ForbiddenError, match="Administrator privileges not present"):
            await auth_service.administrator_login("alice@example.com", PASSWORD)

    async def test_refresh_should_rotate_administrator_session(self, auth_service: AuthService) -> None:
        admin = await self._bootstrap(auth_service)

        refreshed = await auth_service.administrator_refresh(admin["token"]["refresh"])

        assert refreshed["id"] == admin["id"]
        with pytest.raises(AuthenticationError):
            await auth_service.administrator_refresh(admin["token"]["refresh"])

    async def test_member_refresh_token_is_not_an_administrator_token(
        self, auth_service: AuthService
    ) -> None:
        joined = await _join(auth_service)

        with pytest.raises(AuthenticationError, match="Invalid token type"):
            await auth_service.administrator_refresh(joined["token"]["refresh"])


class TestGuests:
    async def test_guest_tokens_resolve_to_guest_actor(self, auth_service: AuthService) -> None:
        guest = await auth_service.guest_join(user_agent="pytest")

        actor = await auth_service.resolve_actor(guest["token"]["access"])

        assert actor.role == "guest"
        assert actor.guest_id == guest["id"]
        assert actor.member_id is None

    async def test_guest_refresh_should_issue_new_tokens(self, auth_service: AuthService) -> None:
        guest = await auth_service.guest_join()

        refreshed = await auth_service.guest_refresh(guest["token"]["refresh"])

        assert refreshed["id"] == guest["id"]
        actor = await auth_service.resolve_actor(refreshed["token"]["access"])
        assert actor.guest_id == guest["id"]

    async def test_guest_logout_is_a_no_op(self, auth_service: AuthService) -> None:
        guest = await auth_service.guest_join()
        actor = await auth_service.resolve_actor(guest["token"]["access"])

        await auth_service.logout(actor)
