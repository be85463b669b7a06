"""
Authentication schemas.

Join, login and refresh payloads for members, administrators and guests,
plus the authorized responses carrying a token pair.

Dependencies: pydantic
System role: Auth API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class ConsentInput(BaseModel):
    """One policy consent given at registration."""

    policy_type: str = Field(..., min_length=1, max_length=64, examples=["privacy_policy"])
    policy_version: str = Field(..., min_length=1, max_length=32, examples=["1.0"])
    consent_action: Literal["granted", "revoked"]


class MemberJoinRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    nickname: str = Field(..., min_length=1, max_length=80)
    consent: list[ConsentInput] = Field(default_factory=list)


class AdministratorJoinRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    nickname: str = Field(..., min_length=1, max_length=80)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Access/refresh token pair."""

    access: str
    refresh: str
    expired_at: datetime
    refreshable_until: datetime


class MemberAuthorizedResponse(BaseModel):
    """Member identity with freshly issued tokens."""

    id: uuid.UUID
    user_account_id: uuid.UUID
    nickname: str
    status: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    token: TokenResponse


class AdministratorAuthorizedResponse(BaseModel):
    """Administrator identity with freshly issued tokens."""

    id: uuid.UUID
    member_id: uuid.UUID
    user_account_id: uuid.UUID
    nickname: str
    status: str
    escalated_at: datetime
    created_at: datetime
    updated_at: datetime
    token: TokenResponse


class GuestAuthorizedResponse(BaseModel):
    id: uuid.UUID
    created_at: datetime
    token: TokenResponse
