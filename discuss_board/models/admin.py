"""
Administration schemas.

Audit logs, integration logs, board settings and forbidden words.

Dependencies: pydantic
System role: Administrator API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from discuss_board.models.common import SearchRequest


class AuditLogResponse(BaseModel):
    id: uuid.UUID
    actor_user_account_id: uuid.UUID | None = None
    actor_type: str
    action_category: str
    target_table: str | None = None
    target_id: uuid.UUID | None = None
    event_payload: dict[str, Any]
    event_description: str | None = None
    created_at: datetime


class AuditLogSearchRequest(SearchRequest):
    actor_user_account_id: uuid.UUID | None = None
    actor_type: str | None = None
    action_category: str | None = None
    target_table: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


class CreateIntegrationLogRequest(BaseModel):
    user_account_id: uuid.UUID | None = None
    integration_type: str = Field(..., min_length=1, max_length=64)
    partner: str = Field(..., min_length=1, max_length=128)
    status: str = Field(..., min_length=1, max_length=32)
    external_reference_id: str | None = Field(None, max_length=255)
    payload: dict[str, Any] = Field(default_factory=dict)
    error_message: str | None = None


class IntegrationLogResponse(BaseModel):
    id: uuid.UUID
    user_account_id: uuid.UUID | None = None
    integration_type: str
    partner: str
    status: str
    external_reference_id: str | None = None
    payload: dict[str, Any]
    error_message: str | None = None
    created_at: datetime


class IntegrationLogSearchRequest(SearchRequest):
    integration_type: str | None = None
    partner: str | None = None
    status: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


class CreateSettingRequest(BaseModel):
    key: str = Field(..., min_length=1, max_length=128)
    value: str
    description: str | None = Field(None, max_length=500)


class UpdateSettingRequest(BaseModel):
    value: str | None = None
    description: str | None = Field(None, max_length=500)


class SettingResponse(BaseModel):
    id: uuid.UUID
    key: str
    value: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class SettingSearchRequest(SearchRequest):
    key: str | None = Field(None, description="Substring match")


class CreateForbiddenWordRequest(BaseModel):
    expression: str = Field(..., min_length=1, max_length=128)
    description: str | None = Field(None, max_length=500)


class UpdateForbiddenWordRequest(BaseModel):
    expression: str | None = Field(None, min_length=1, max_length=128)
    description: str | None = Field(None, max_length=500)


class ForbiddenWordResponse(BaseModel):
    id: uuid.UUID
    expression: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ForbiddenWordSearchRequest(SearchRequest):
    expression: str | None = Field(None, description="Substring match")
