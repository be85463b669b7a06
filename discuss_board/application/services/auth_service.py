"""
Authentication service orchestrator.

Registration, login, token refresh and logout for members, administrators
and guests, email verification, and resolution of access tokens into an
Actor for the API guards.

Dependencies: discuss_board.boundary.db.CRUD, discuss_board.core.security
System role: Identity and session use case orchestration
"""

import logging
import re
import secrets
from datetime import timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.audit_log_service import AuditLogService
from discuss_board.application.services.member_service import (
    member_detail_to_dict,
    member_to_dict,
)
from discuss_board.application.services.notification_service import NotificationService
from discuss_board.boundary.db.CRUD.account_crud import (
    administrator_crud,
    consent_record_crud,
    guest_crud,
    jwt_session_crud,
    member_crud,
    moderator_crud,
    user_account_crud,
)
from discuss_board.boundary.db.models.account_model import (
    AccountStatus,
    AdministratorModel,
    ConsentAction,
    JwtSessionModel,
    MemberModel,
    RoleStatus,
    UserAccountModel,
)
from discuss_board.configs import get_settings
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    ValidationError,
)
from discuss_board.core.security import (
    ACCESS,
    EMAIL_VERIFICATION,
    REFRESH,
    TokenPair,
    create_token,
    decode_token,
    hash_password,
    hash_token,
    issue_token_pair,
    verify_password,
    verify_token_hash,
)
from discuss_board.core.timeutils import ensure_utc, to_iso, utcnow

logger = logging.getLogger(__name__)

MEMBER = "member"
ADMINISTRATOR = "administrator"
GUEST = "guest"

REQUIRED_CONSENTS = ("privacy_policy", "terms_of_service")
INVALID_CREDENTIALS = "Invalid email or password"
INVALID_REFRESH = "Invalid refresh token"

_SPECIAL_CHARACTER = re.compile(r"[^A-Za-z0-9]")


def _parse_uuid(value: Any) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token")


def administrator_to_dict(
    administrator: AdministratorModel,
    member: MemberModel,
    token: TokenPair,
) -> dict:
    return {
        "id": administrator.id,
        "member_id": member.id,
        "user_account_id": member.user_account_id,
        "nickname": member.nickname,
        "status": RoleStatus(administrator.status).value,
        "escalated_at": to_iso(administrator.escalated_at),
        "created_at": to_iso(administrator.created_at),
        "updated_at": to_iso(administrator.updated_at),
        "token": token.to_dict(),
    }


def check_administrator_password(password: str) -> None:
    """
    Enforce the administrator password policy.

    At least the configured minimum length (10 by default) with upper case,
    lower case, digit and special characters.

    Raises:
        ValidationError: Policy not met
    """
    min_length = get_settings().auth.admin_password_min_length
    if (
        len(password) < min_length
        or not any(c.isupper() for c in password)
        or not any(c.islower() for c in password)
        or not any(c.isdigit() for c in password)
        or not _SPECIAL_CHARACTER.search(password)
    ):
        raise ValidationError("Password policy violation", field="password")


class AuthService:
    """Authentication service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize auth service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    # Shared helpers

    async def _ensure_unique_identity(self, email: str, nickname: str) -> None:
        if await user_account_crud.get_by_email(self.db, email):
            raise ConflictError("Email already registered", details={"email": email})
        if await member_crud.get_by_nickname(self.db, nickname):
            raise ConflictError("Nickname already taken", details={"nickname": nickname})

    async def _open_session(
        self,
        account: UserAccountModel,
        role: str,
        role_id: UUID,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> TokenPair:
        """Issue a token pair and persist its refresh session."""
        pair = issue_token_pair(str(account.id), role, str(role_id))
        await jwt_session_crud.create(
            self.db,
            user_account_id=account.id,
            jwt_id=pair.jwt_id,
            refresh_token_hash=hash_token(pair.refresh),
            user_agent=user_agent,
            ip_address=ip_address,
            issued_at=utcnow(),
            expires_at=pair.refreshable_until,
        )
        return pair

    async def _load_refresh_session(
        self,
        refresh_token: str,
        role: str,
    ) -> tuple[dict, JwtSessionModel]:
        """
        Validate a refresh token against its stored session.

        Returns:
            tuple: (claims, session)

        Raises:
            AuthenticationError: Token or session invalid, revoked or expired
        """
        claims = decode_token(refresh_token, expected_use=REFRESH)
        if claims.get("type") != role or not claims.get("jti"):
            raise AuthenticationError("Invalid token type")

        session = await jwt_session_crud.get_by_jwt_id(self.db, claims["jti"])
        if session is None or str(session.user_account_id) != claims.get("sub"):
            raise AuthenticationError(INVALID_REFRESH)
        if session.revoked_at is not None or session.deleted_at is not None:
            raise AuthenticationError("Session has been revoked")
        if ensure_utc(session.expires_at) <= utcnow():
            raise AuthenticationError("Session has expired")
        if not verify_token_hash(refresh_token, session.refresh_token_hash):
            raise AuthenticationError(INVALID_REFRESH)
        return claims, session

    async def _rotate_session(
        self,
        session: JwtSessionModel,
        role: str,
        role_id: UUID,
    ) -> TokenPair:
        pair = issue_token_pair(str(session.user_account_id), role, str(role_id))
        await jwt_session_crud.update(
            self.db,
            session,
            jwt_id=pair.jwt_id,
            refresh_token_hash=hash_token(pair.refresh),
            issued_at=utcnow(),
            expires_at=pair.refreshable_until,
        )
        return pair

    async def _load_active_account(self, user_account_id: UUID) -> UserAccountModel:
        account = await user_account_crud.get_active_by_id(self.db, user_account_id)
        if account is None:
            raise AuthenticationError(INVALID_REFRESH)
        if account.status != AccountStatus.ACTIVE:
            raise ForbiddenError("Account is not active")
        return account

    # Members

    async def member_join(
        self,
        email: str,
        password: str,
        nickname: str,
        consents: list[dict],
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Register a member.

        Creates the account, the member, one consent record per consent
        entry, a refresh session and an email verification notification.

        Args:
            email: Login email
            password: Plain password (minimum length from settings)
            nickname: Display name
            consents: Entries with policy_type, policy_version, consent_action
            user_agent: Client user agent for the session
            ip_address: Client address for the session

        Returns:
            dict: Member with token pair

        Raises:
            ValidationError: Weak password or missing required consent
            ConflictError: Email or nickname already used
        """
        auth_settings = get_settings().auth
        if len(password) < auth_settings.member_password_min_length:
            raise ValidationError(
                f"Password must be at least {auth_settings.member_password_min_length} characters",
                field="password",
            )
        if not consents:
            raise ValidationError("Consent is required", field="consent")
        granted = {
            c["policy_type"] for c in consents if c.get("consent_action") == ConsentAction.GRANTED.value
        }
        for policy in REQUIRED_CONSENTS:
            if policy not in granted:
                raise ValidationError(f"Missing consent for {policy}", field="consent")

        await self._ensure_unique_identity(email, nickname)

        try:
            verified_on_join = not auth_settings.require_email_verification
            account = await user_account_crud.create(
                self.db,
                email=email,
                password_hash=hash_password(password),
                email_verified=verified_on_join,
                status=AccountStatus.ACTIVE if verified_on_join else AccountStatus.PENDING,
            )
            member = await member_crud.create(
                self.db, user_account_id=account.id, nickname=nickname
            )
            for consent in consents:
                await consent_record_crud.create(
                    self.db,
                    user_account_id=account.id,
                    policy_type=consent["policy_type"],
                    policy_version=consent["policy_version"],
                    consent_action=ConsentAction(consent["consent_action"]),
                    description=consent.get("description"),
                )
            pair = await self._open_session(account, MEMBER, member.id, user_agent, ip_address)

            if not verified_on_join:
                await self._send_verification(account, member)
        except Exception as e:
            logger.error(
                "Failed to register member",
                extra={"nickname": nickname, "error": str(e)},
            )
            raise

        logger.info(
            "Member registered",
            extra={"member_id": str(member.id), "user_account_id": str(account.id)},
        )
        return {**member_to_dict(member), "token": pair.to_dict()}

    async def _send_verification(self, account: UserAccountModel, member: MemberModel) -> None:
        hours = get_settings().auth.email_verification_hours
        token, expires_at = create_token(
            str(account.id), MEMBER, str(member.id), EMAIL_VERIFICATION, timedelta(hours=hours)
        )
        await NotificationService(self.db).notify(
            account.id,
            event_type="email_verification",
            subject="Verify your email address",
            body=f"Use this token to verify your email before {to_iso(expires_at)}: {token}",
            delivery_channel="email",
        )

    async def verify_email(self, token: str) -> dict:
        """
        Consume an email verification token.

        Marks the account verified and activates it when still pending.

        Returns:
            dict: Member detail of the verified account

        Raises:
            AuthenticationError: Token invalid, expired or of the wrong use
        """
        claims = decode_token(token, expected_use=EMAIL_VERIFICATION)
        account = await user_account_crud.get_active_by_id(self.db, _parse_uuid(claims.get("sub")))
        if account is None:
            raise AuthenticationError("Invalid token")
        member = await member_crud.get_by_user_account_id(self.db, account.id)
        if member is None:
            raise AuthenticationError("Invalid token")

        changes: dict = {"email_verified": True}
        if account.status == AccountStatus.PENDING:
            changes["status"] = AccountStatus.ACTIVE
        account = await user_account_crud.update(self.db, account, **changes)
        logger.info("Email verified", extra={"user_account_id": str(account.id)})
        return member_detail_to_dict(member, account)

    async def member_login(
        self,
        email: str,
        password: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Authenticate a member.

        Raises:
            AuthenticationError: Unknown email, deleted account or bad password
            ForbiddenError: Account unverified or not active
        """
        account = await user_account_crud.get_by_email(self.db, email)
        if account is None or not verify_password(password, account.password_hash):
            logger.warning("Member login failed", extra={"reason": "bad_credentials"})
            raise AuthenticationError(INVALID_CREDENTIALS)
        self._check_account_can_login(account)

        member = await member_crud.get_by_user_account_id(self.db, account.id)
        if member is None:
            raise AuthenticationError(INVALID_CREDENTIALS)

        pair = await self._open_session(account, MEMBER, member.id, user_agent, ip_address)
        await user_account_crud.update(self.db, account, last_login_at=utcnow())

        logger.info("Member logged in", extra={"member_id": str(member.id)})
        return {**member_to_dict(member), "token": pair.to_dict()}

    @staticmethod
    def _check_account_can_login(account: UserAccountModel) -> None:
        needs_verification = get_settings().auth.require_email_verification
        if (needs_verification and not account.email_verified) or account.status != AccountStatus.ACTIVE:
            raise ForbiddenError("Account is not active")

    async def member_refresh(self, refresh_token: str) -> dict:
        """
        Rotate a member session.

        The session's jwt id and refresh hash are replaced, so the presented
        refresh token cannot be used again.

        Raises:
            AuthenticationError: Token or session invalid
            ForbiddenError: Account no longer active
        """
        claims, session = await self._load_refresh_session(refresh_token, MEMBER)
        await self._load_active_account(session.user_account_id)
        member = await member_crud.get_active_by_id(self.db, _parse_uuid(claims.get("id")))
        if member is None or member.user_account_id != session.user_account_id:
            raise AuthenticationError(INVALID_REFRESH)

        pair = await self._rotate_session(session, MEMBER, member.id)
        logger.info("Member session refreshed", extra={"member_id": str(member.id)})
        return {**member_to_dict(member), "token": pair.to_dict()}

    async def logout(self, actor: Actor) -> None:
        """Revoke the caller's session; guests have none and are a no-op."""
        if actor.jwt_id is None or actor.user_account_id is None:
            return
        session = await jwt_session_crud.get_by_jwt_id(self.db, actor.jwt_id)
        if session is not None and session.revoked_at is None:
            await jwt_session_crud.update(self.db, session, revoked_at=utcnow())
            logger.info("Session revoked", extra={"user_account_id": str(actor.user_account_id)})

    # Administrators

    async def administrator_join(
        self,
        email: str,
        password: str,
        nickname: str,
        actor: Actor | None = None,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Register an administrator.

        The first administrator may register without credentials and is
        recorded as escalated by itself. Afterwards only an administrator
        may create another.

        Args:
            email: Login email
            password: Plain password meeting the administrator policy
            nickname: Display name
            actor: Calling administrator, None for bootstrap
            user_agent: Client user agent for the session
            ip_address: Client address for the session

        Returns:
            dict: Administrator with token pair

        Raises:
            ForbiddenError: Administrators exist and caller is not one
            ValidationError: Password policy violation
            ConflictError: Email or nickname already used
        """
        existing_admins = await administrator_crud.count_active(self.db)
        if existing_admins > 0 and (actor is None or not actor.is_administrator):
            raise ForbiddenError("Administrator access required")

        check_administrator_password(password)
        await self._ensure_unique_identity(email, nickname)

        now = utcnow()
        account = await user_account_crud.create(
            self.db,
            email=email,
            password_hash=hash_password(password),
            email_verified=True,
            status=AccountStatus.ACTIVE,
        )
        member = await member_crud.create(self.db, user_account_id=account.id, nickname=nickname)
        administrator = await administrator_crud.create(
            self.db,
            member_id=member.id,
            escalated_by_administrator_id=actor.administrator_id if actor else None,
            escalated_at=now,
        )
        if administrator.escalated_by_administrator_id is None:
            administrator = await administrator_crud.update(
                self.db, administrator, escalated_by_administrator_id=administrator.id
            )

        pair = await self._open_session(
            account, ADMINISTRATOR, administrator.id, user_agent, ip_address
        )
        await AuditLogService(self.db).record(
            actor_user_account_id=actor.user_account_id if actor else account.id,
            actor_type=ADMINISTRATOR,
            action_category="administration",
            target_table="administrators",
            target_id=administrator.id,
            description="Administrator created",
            payload={"bootstrap": existing_admins == 0},
        )
        logger.info(
            "Administrator registered",
            extra={"administrator_id": str(administrator.id), "bootstrap": existing_admins == 0},
        )
        return administrator_to_dict(administrator, member, pair)

    async def administrator_login(
        self,
        email: str,
        password: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> dict:
        """
        Authenticate an administrator.

        Every attempt writes an ``authentication`` audit entry. Failed
        attempts commit their entry before the error propagates.

        Raises:
            AuthenticationError: Unknown email or bad password
            ForbiddenError: Account not active or administrator role missing/revoked
        """
        audit = AuditLogService(self.db)
        account = await user_account_crud.get_by_email(self.db, email)

        async def fail(error: Exception, reason: str) -> None:
            await audit.record(
                actor_user_account_id=account.id if account else None,
                actor_type=ADMINISTRATOR,
                action_category="authentication",
                target_table="user_accounts",
                target_id=account.id if account else None,
                description="Administrator login failed",
                payload={"outcome": "failure", "reason": reason},
            )
            await self.db.commit()
            logger.warning("Administrator login failed", extra={"reason": reason})
            raise error

        if account is None or not verify_password(password, account.password_hash):
            await fail(AuthenticationError(INVALID_CREDENTIALS), "bad_credentials")
        try:
            self._check_account_can_login(account)
        except ForbiddenError as e:
            await fail(e, "account_inactive")

        member = await member_crud.get_by_user_account_id(self.db, account.id)
        administrator = (
            await administrator_crud.get_active_by_member_id(self.db, member.id) if member else None
        )
        if administrator is None:
            await fail(ForbiddenError("Administrator privileges not present"), "not_administrator")

        pair = await self._open_session(
            account, ADMINISTRATOR, administrator.id, user_agent, ip_address
        )
        await user_account_crud.update(self.db, account, last_login_at=utcnow())
        await audit.record(
            actor_user_account_id=account.id,
            actor_type=ADMINISTRATOR,
            action_category="authentication",
            target_table="user_accounts",
            target_id=account.id,
            description="Administrator login succeeded",
            payload={"outcome": "success"},
        )
        logger.info("Administrator logged in", extra={"administrator_id": str(administrator.id)})
        return administrator_to_dict(administrator, member, pair)

    async def administrator_refresh(self, refresh_token: str) -> dict:
        """
        Rotate an administrator session.

        Raises:
            AuthenticationError: Token or session invalid
            ForbiddenError: Account inactive or administrator role revoked
        """
        claims, session = await self._load_refresh_session(refresh_token, ADMINISTRATOR)
        await self._load_active_account(session.user_account_id)

        administrator = await administrator_crud.get_active_by_id(
            self.db, _parse_uuid(claims.get("id"))
        )
        if (
            administrator is None
            or administrator.status != RoleStatus.ACTIVE
            or administrator.revoked_at is not None
        ):
            raise ForbiddenError("Administrator privileges have been revoked")
        member = await member_crud.get_active_by_id(self.db, administrator.member_id)
        if member is None or member.user_account_id != session.user_account_id:
            raise AuthenticationError(INVALID_REFRESH)

        pair = await self._rotate_session(session, ADMINISTRATOR, administrator.id)
        return administrator_to_dict(administrator, member, pair)

    # Guests

    async def guest_join(self, user_agent: str | None = None, ip_address: str | None = None) -> dict:
        """
        Register an anonymous guest and issue its tokens.

        Guest tokens are not backed by a stored session.
        """
        guest = await guest_crud.create(
            self.db,
            session_key=secrets.token_hex(32),
            user_agent=user_agent,
            ip_address=ip_address,
            last_seen_at=utcnow(),
        )
        pair = issue_token_pair(str(guest.id), GUEST, str(guest.id))
        logger.info("Guest registered", extra={"guest_id": str(guest.id)})
        return {"id": guest.id, "created_at": to_iso(guest.created_at), "token": pair.to_dict()}

    async def guest_refresh(self, refresh_token: str) -> dict:
        """
        Issue new guest tokens.

        Raises:
            AuthenticationError: Token invalid or guest missing/deleted
        """
        claims = decode_token(refresh_token, expected_use=REFRESH)
        if claims.get("type") != GUEST:
            raise AuthenticationError("Invalid token type")
        guest = await guest_crud.get_active_by_id(self.db, _parse_uuid(claims.get("id")))
        if guest is None:
            raise AuthenticationError(INVALID_REFRESH)

        guest = await guest_crud.update(self.db, guest, last_seen_at=utcnow())
        pair = issue_token_pair(str(guest.id), GUEST, str(guest.id))
        return {"id": guest.id, "created_at": to_iso(guest.created_at), "token": pair.to_dict()}

    # Access token resolution

    async def resolve_actor(self, access_token: str) -> Actor:
        """
        Turn an access token into the calling Actor.

        Member and administrator tokens must belong to an open session and
        an account that is not suspended, banned or deleted. Administrator
        powers only come with administrator tokens; moderator powers come
        from an active moderator record of the member.

        Raises:
            AuthenticationError: Token invalid, session revoked or identity gone
            ForbiddenError: Account suspended or banned
        """
        claims = decode_token(access_token, expected_use=ACCESS)
        role = claims.get("type")
        role_id = _parse_uuid(claims.get("id"))

        if role == GUEST:
            guest = await guest_crud.get_active_by_id(self.db, role_id)
            if guest is None:
                raise AuthenticationError("Invalid token")
            return Actor(role=GUEST, guest_id=guest.id, jwt_id=claims.get("jti"))

        if role not in (MEMBER, ADMINISTRATOR):
            raise AuthenticationError("Invalid token type")

        jwt_id = claims.get("jti")
        session = await jwt_session_crud.get_by_jwt_id(self.db, jwt_id) if jwt_id else None
        if session is None or session.revoked_at is not None or session.deleted_at is not None:
            raise AuthenticationError("Session has been revoked")

        account = await user_account_crud.get_active_by_id(self.db, _parse_uuid(claims.get("sub")))
        if account is None or account.id != session.user_account_id:
            raise AuthenticationError("Invalid token")
        if account.status in (AccountStatus.SUSPENDED, AccountStatus.BANNED):
            raise ForbiddenError("Account is not active")

        member = await member_crud.get_by_user_account_id(self.db, account.id)
        if member is None:
            raise AuthenticationError("Invalid token")

        administrator_id = None
        if role == ADMINISTRATOR:
            administrator = await administrator_crud.get_active_by_member_id(self.db, member.id)
            if administrator is None or administrator.id != role_id:
                raise ForbiddenError("Administrator privileges have been revoked")
            administrator_id = administrator.id
        elif member.id != role_id:
            raise AuthenticationError("Invalid token")

        moderator = await moderator_crud.get_active_by_member_id(self.db, member.id)
        return Actor(
            role=role,
            user_account_id=account.id,
            member_id=member.id,
            administrator_id=administrator_id,
            moderator_id=moderator.id if moderator else None,
            jwt_id=jwt_id,
        )
