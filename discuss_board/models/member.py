"""
Member domain schemas.

Dependencies: pydantic
System role: Member, account and consent API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from discuss_board.models.common import SearchRequest


class MemberResponse(BaseModel):
    """Public member profile."""

    id: uuid.UUID
    user_account_id: uuid.UUID
    nickname: str
    status: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class MemberDetailResponse(MemberResponse):
    """Member profile with account fields, for staff searches."""

    email: str
    email_verified: bool
    account_status: str
    last_login_at: datetime | None = None


class UpdateMemberRequest(BaseModel):
    nickname: str | None = Field(None, min_length=1, max_length=80)


class MemberSearchRequest(SearchRequest):
    """Filters for member searches by staff."""

    email: str | None = None
    nickname: str | None = Field(None, description="Substring match")
    status: Literal["active", "suspended"] | None = None
    account_status: Literal["pending", "active", "suspended", "banned"] | None = None
    email_verified: bool | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


class UpdateAccountStatusRequest(BaseModel):
    status: Literal["pending", "active", "suspended", "banned"] | None = None
    email_verified: bool | None = None


class ConsentRecordResponse(BaseModel):
    id: uuid.UUID
    user_account_id: uuid.UUID
    policy_type: str
    policy_version: str
    consent_action: str
    description: str | None = None
    created_at: datetime


class CreateConsentRequest(BaseModel):
    policy_type: str = Field(..., min_length=1, max_length=64)
    policy_version: str = Field(..., min_length=1, max_length=32)
    consent_action: Literal["granted", "revoked"]
    description: str | None = Field(None, max_length=1000)


class ModeratorResponse(BaseModel):
    id: uuid.UUID
    member_id: uuid.UUID
    assigned_by_administrator_id: uuid.UUID | None = None
    assigned_at: datetime
    revoked_at: datetime | None = None
    status: str
    created_at: datetime
    updated_at: datetime
