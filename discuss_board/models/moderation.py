"""
Moderation schemas.

Content reports, moderation actions and appeals.

Dependencies: pydantic
System role: Moderation API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from discuss_board.models.common import SearchRequest

ReportStatusLiteral = Literal["pending", "under_review", "resolved", "rejected"]
ActionTypeLiteral = Literal["warn", "mute", "remove", "edit", "restrict", "restore", "escalate"]
ActionStatusLiteral = Literal["active", "completed", "reverted"]
AppealStatusLiteral = Literal["pending", "reviewing", "accepted", "rejected"]


class CreateContentReportRequest(BaseModel):
    content_type: Literal["post", "comment"]
    content_post_id: uuid.UUID | None = None
    content_comment_id: uuid.UUID | None = None
    reason: str = Field(..., min_length=1, max_length=2000)


class UpdateContentReportRequest(BaseModel):
    status: ReportStatusLiteral
    moderation_action_id: uuid.UUID | None = None


class ContentReportResponse(BaseModel):
    id: uuid.UUID
    reporter_member_id: uuid.UUID
    content_type: str
    content_post_id: uuid.UUID | None = None
    content_comment_id: uuid.UUID | None = None
    reason: str
    status: str
    moderation_action_id: uuid.UUID | None = None
    resolved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ContentReportSearchRequest(SearchRequest):
    status: ReportStatusLiteral | None = None
    content_type: Literal["post", "comment"] | None = None
    reporter_member_id: uuid.UUID | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


class CreateModerationActionRequest(BaseModel):
    target_member_id: uuid.UUID | None = None
    target_post_id: uuid.UUID | None = None
    target_comment_id: uuid.UUID | None = None
    action_type: ActionTypeLiteral
    action_reason: str = Field(..., min_length=1, max_length=500)
    decision_narrative: str | None = Field(None, max_length=5000)
    effective_from: datetime | None = None
    effective_until: datetime | None = None
    related_report_ids: list[uuid.UUID] = Field(default_factory=list)


class UpdateModerationActionRequest(BaseModel):
    status: ActionStatusLiteral


class ModerationActionResponse(BaseModel):
    id: uuid.UUID
    moderator_id: uuid.UUID
    target_member_id: uuid.UUID | None = None
    target_post_id: uuid.UUID | None = None
    target_comment_id: uuid.UUID | None = None
    action_type: str
    action_reason: str
    decision_narrative: str | None = None
    status: str
    effective_from: datetime
    effective_until: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ModerationActionSearchRequest(SearchRequest):
    moderator_id: uuid.UUID | None = None
    target_member_id: uuid.UUID | None = None
    action_type: ActionTypeLiteral | None = None
    status: ActionStatusLiteral | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


class CreateAppealRequest(BaseModel):
    moderation_action_id: uuid.UUID
    appeal_rationale: str = Field(..., min_length=1, max_length=5000)


class ResolveAppealRequest(BaseModel):
    status: Literal["reviewing", "accepted", "rejected"]
    resolution_notes: str | None = Field(None, max_length=5000)


class AppealResponse(BaseModel):
    id: uuid.UUID
    moderation_action_id: uuid.UUID
    appellant_member_id: uuid.UUID
    appeal_rationale: str
    status: str
    resolution_notes: str | None = None
    resolved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class AppealSearchRequest(SearchRequest):
    status: AppealStatusLiteral | None = None
    moderation_action_id: uuid.UUID | None = None
    appellant_member_id: uuid.UUID | None = None
