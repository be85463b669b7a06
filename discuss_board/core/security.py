"""
Password hashing and JWT helpers.

Passwords and refresh tokens are hashed with argon2; access, refresh and
email verification tokens are HMAC-signed JWTs.

Dependencies: argon2-cffi, python-jose, discuss_board.configs
System role: Credential primitives for the auth service and API guards
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from jose import ExpiredSignatureError, JWTError, jwt

from discuss_board.configs import get_settings
from discuss_board.core.exceptions import AuthenticationError
from discuss_board.core.timeutils import to_iso, utcnow

ph = PasswordHasher()

ACCESS = "access"
REFRESH = "refresh"
EMAIL_VERIFICATION = "email_verification"


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# Refresh tokens are stored hashed, the same way passwords are.
hash_token = hash_password
verify_token_hash = verify_password


def new_jwt_id() -> str:
    return str(uuid.uuid4())


def create_token(
    subject: str,
    role: str,
    role_id: str,
    token_use: str,
    expires_in: timedelta,
    jwt_id: str | None = None,
    now: datetime | None = None,
) -> tuple[str, datetime]:
    """
    Sign a JWT for the given subject.

    Args:
        subject: User account id (guest id for guests), stored in ``sub``
        role: Actor type ("member", "administrator", "guest")
        role_id: Id of the role record, stored in ``id``
        token_use: One of ``access``, ``refresh``, ``email_verification``
        expires_in: Token lifetime
        jwt_id: Session jwt id stored in ``jti``
        now: Issue time (defaults to the current UTC time)

    Returns:
        tuple[str, datetime]: Encoded token and its expiry
    """
    settings = get_settings().auth
    issued_at = now or utcnow()
    expires_at = issued_at + expires_in
    payload: dict[str, Any] = {
        "iss": settings.jwt_issuer,
        "sub": subject,
        "id": role_id,
        "type": role,
        "token_use": token_use,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    if jwt_id:
        payload["jti"] = jwt_id
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, expires_at


def decode_token(token: str, expected_use: str | None = None) -> dict[str, Any]:
    """
    Verify signature, issuer and expiry of a token.

    Args:
        token: Encoded JWT
        expected_use: Required ``token_use`` claim, if any

    Returns:
        dict: Decoded claims

    Raises:
        AuthenticationError: If the token is expired, malformed or of the wrong use
    """
    settings = get_settings().auth
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except JWTError:
        raise AuthenticationError("Invalid token")

    if expected_use is not None and claims.get("token_use") != expected_use:
        raise AuthenticationError("Invalid token type")
    return claims


@dataclass
class TokenPair:
    """Access and refresh tokens issued together for one session."""

    access: str
    refresh: str
    expired_at: datetime
    refreshable_until: datetime
    jwt_id: str

    def to_dict(self) -> dict[str, str | None]:
        return {
            "access": self.access,
            "refresh": self.refresh,
            "expired_at": to_iso(self.expired_at),
            "refreshable_until": to_iso(self.refreshable_until),
        }


def issue_token_pair(
    subject: str,
    role: str,
    role_id: str,
    jwt_id: str | None = None,
) -> TokenPair:
    """Issue an access/refresh pair sharing one ``jti``."""
    settings = get_settings().auth
    now = utcnow()
    jti = jwt_id or new_jwt_id()
    access, access_exp = create_token(
        subject, role, role_id, ACCESS,
        timedelta(minutes=settings.access_token_minutes), jti, now,
    )
    refresh, refresh_exp = create_token(
        subject, role, role_id, REFRESH,
        timedelta(days=settings.refresh_token_days), jti, now,
    )
    return TokenPair(
        access=access,
        refresh=refresh,
        expired_at=access_exp,
        refreshable_until=refresh_exp,
        jwt_id=jti,
    )
