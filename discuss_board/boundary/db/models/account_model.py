"""
Account ORM models.

User accounts hold credentials; members, administrators and moderators are
role records layered on top of an account. Guests are anonymous visitors
identified by a session key. JWT sessions and consent records hang off the
account.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Identity and authentication persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discuss_board.boundary.db.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
    enum_column,
)


class AccountStatus(str, enum.Enum):
    """
    Lifecycle of a user account.

    PENDING: Registered, email not yet verified
    ACTIVE: May log in
    SUSPENDED: Temporarily blocked by an administrator
    BANNED: Permanently blocked
    """

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"


class MemberStatus(str, enum.Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class RoleStatus(str, enum.Enum):
    """State of an administrator or moderator assignment."""

    ACTIVE = "active"
    REVOKED = "revoked"


class ConsentAction(str, enum.Enum):
    GRANTED = "granted"
    REVOKED = "revoked"


class UserAccountModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Credential-bearing account.

    Attributes:
        email: Login email, unique among non-deleted accounts
        password_hash: argon2 hash of the password
        email_verified: Whether the email verification flow completed
        status: AccountStatus
        last_login_at: Timestamp of the latest successful login
    """

    __tablename__ = "user_accounts"

    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[AccountStatus] = mapped_column(
        enum_column(AccountStatus),
        nullable=False,
        default=AccountStatus.PENDING,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    member = relationship("MemberModel", back_populates="user_account", uselist=False)


class MemberModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Forum identity of an account.

    Attributes:
        user_account_id: Owning account (one member per account)
        nickname: Display name, unique among non-deleted members
        status: MemberStatus
    """

    __tablename__ = "members"

    user_account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("user_accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    nickname: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    status: Mapped[MemberStatus] = mapped_column(
        enum_column(MemberStatus),
        nullable=False,
        default=MemberStatus.ACTIVE,
    )

    user_account = relationship("UserAccountModel", back_populates="member")


class GuestModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Anonymous visitor tracked by a random session key."""

    __tablename__ = "guests"

    session_key: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)
    last_seen_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )


class AdministratorModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Administrator role record.

    Attributes:
        member_id: Member holding the role (one record per member)
        escalated_by_administrator_id: Administrator who granted the role;
            the first administrator escalates itself
        escalated_at: When the role was granted
        revoked_at: Set when the role is withdrawn
    """

    __tablename__ = "administrators"

    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    escalated_by_administrator_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), nullable=True
    )
    escalated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    status: Mapped[RoleStatus] = mapped_column(
        enum_column(RoleStatus), nullable=False, default=RoleStatus.ACTIVE
    )

    member = relationship("MemberModel")


class ModeratorModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Moderator role record assigned to a member by an administrator."""

    __tablename__ = "moderators"

    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    assigned_by_administrator_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("administrators.id"), nullable=True
    )
    assigned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    status: Mapped[RoleStatus] = mapped_column(
        enum_column(RoleStatus), nullable=False, default=RoleStatus.ACTIVE
    )

    member = relationship("MemberModel")


class ConsentRecordModel(Base, UUIDMixin, TimestampMixin):
    """Append-only log of policy consents given or withdrawn by an account."""

    __tablename__ = "consent_records"

    user_account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("user_accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    policy_type: Mapped[str] = mapped_column(String(64), nullable=False)
    policy_version: Mapped[str] = mapped_column(String(32), nullable=False)
    consent_action: Mapped[ConsentAction] = mapped_column(
        enum_column(ConsentAction), nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class JwtSessionModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Refresh session backing a token pair.

    Attributes:
        user_account_id: Account the session belongs to
        jwt_id: ``jti`` claim shared by the current access/refresh pair;
            rotated on every refresh
        refresh_token_hash: argon2 hash of the current refresh token
        expires_at: End of the refresh window
        revoked_at: Set on logout or account deletion
    """

    __tablename__ = "jwt_sessions"

    user_account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("user_accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    jwt_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    refresh_token_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
