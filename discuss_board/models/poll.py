"""
Poll and attachment schemas.

Dependencies: pydantic
System role: Poll, ballot and attachment API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreatePollRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    options: list[str] = Field(..., min_length=2, max_length=20)
    multiple_choice: bool = False
    closed_at: datetime | None = None


class UpdatePollRequest(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=300)
    closed_at: datetime | None = None


class PollOptionResponse(BaseModel):
    id: uuid.UUID
    option_text: str
    sequence: int
    vote_count: int = 0


class PollResponse(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    title: str
    multiple_choice: bool
    opened_at: datetime
    closed_at: datetime | None = None
    is_open: bool
    options: list[PollOptionResponse]
    created_at: datetime
    updated_at: datetime


class CastVoteRequest(BaseModel):
    option_ids: list[uuid.UUID] = Field(..., min_length=1)


class PollVoteResponse(BaseModel):
    id: uuid.UUID
    poll_id: uuid.UUID
    poll_option_id: uuid.UUID
    member_id: uuid.UUID
    created_at: datetime


class CreateAttachmentRequest(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    file_url: str = Field(..., min_length=1, max_length=2048)
    content_type: str = Field(..., min_length=1, max_length=100)
    size_bytes: int = Field(..., ge=0)
    comment_id: uuid.UUID | None = None


class AttachmentResponse(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    comment_id: uuid.UUID | None = None
    uploader_member_id: uuid.UUID
    file_name: str
    file_url: str
    content_type: str
    size_bytes: int
    created_at: datetime
    updated_at: datetime
