"""
Test suite for password hashing and JWT helpers.

System role: Verification of credential primitives
"""

from datetime import timedelta

import pytest
from jose import jwt

from discuss_board.core.exceptions import AuthenticationError
from discuss_board.core.security import (
    ACCESS,
    REFRESH,
    create_token,
    decode_token,
    hash_password,
    issue_token_pair,
    verify_password,
)
from discuss_board.core.timeutils import utcnow


class TestPasswordHashing:
    def test_hash_verifies_original_password(self) -> None:
        password_hash = hash_password("s3cret-value")

        assert password_hash != "s3cret-value"
        assert verify_password("s3cret-value", password_hash)

    def test_wrong_password_is_rejected(self) -> None:
        assert not verify_password("other", hash_password("s3cret-value"))

    def test_malformed_hash_is_rejected(self) -> None:
        assert not verify_password("s3cret-value", "not-a-hash")


class TestTokens:
    """Test suite for create_token() and decode_token()."""

    def test_round_trip_claims(self) -> None:
        token, expires_at = create_token(
            "account-1", "member", "member-1", ACCESS, timedelta(minutes=5), jwt_id="jti-1"
        )

        claims = decode_token(token, expected_use=ACCESS)

        assert claims["sub"] == "account-1"
        assert claims["id"] == "member-1"
        assert claims["type"] == "member"
        assert claims["jti"] == "jti-1"
        assert claims["exp"] == int(expires_at.timestamp())

    def test_wrong_use_is_rejected(self) -> None:
        token, _ = create_token("a", "member", "m", REFRESH, timedelta(minutes=5))

        with pytest.raises(AuthenticationError, match="Invalid token type"):
            decode_token(token, expected_use=ACCESS)

    def test_expired_token_is_rejected(self) -> None:
        token, _ = create_token(
            "a", "member", "m", ACCESS, timedelta(minutes=5), now=utcnow() - timedelta(hours=1)
        )

        with pytest.raises(AuthenticationError, match="expired"):
            decode_token(token)

    def test_foreign_signature_is_rejected(self) -> None:
        forged = jwt.encode({"sub": "a", "iss": "discuss-board"}, "other-secret", algorithm="HS256")

        with pytest.raises(AuthenticationError, match="Invalid token"):
            decode_token(forged)

    def test_garbage_is_rejected(self) -> None:
        with pytest.raises(AuthenticationError):
            decode_token("not.a.jwt")


class TestIssueTokenPair:
    def test_pair_shares_jwt_id(self) -> None:
        pair = issue_token_pair("account-1", "member", "member-1")

        access = decode_token(pair.access, expected_use=ACCESS)
        refresh = decode_token(pair.refresh, expected_use=REFRESH)

        assert access["jti"] == refresh["jti"] == pair.jwt_id
        assert pair.refreshable_until > pair.expired_at

    def test_to_dict_serialises_utc(self) -> None:
        body = issue_token_pair("account-1", "member", "member-1").to_dict()

        assert set(body) == {"access", "refresh", "expired_at", "refreshable_until"}
        assert body["expired_at"].endswith("Z")
