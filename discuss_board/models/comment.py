"""
Comment and reaction schemas.

Dependencies: pydantic
System role: Comment and reaction API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ReactionTypeLiteral = Literal["like", "dislike"]


class CreateCommentRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)
    parent_id: uuid.UUID | None = None


class UpdateCommentRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)


class CommentResponse(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    author_member_id: uuid.UUID
    parent_id: uuid.UUID | None = None
    content: str
    is_locked: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class CommentEditHistoryResponse(BaseModel):
    id: uuid.UUID
    comment_id: uuid.UUID
    editor_member_id: uuid.UUID
    previous_content: str
    created_at: datetime


class CreateCommentReactionRequest(BaseModel):
    comment_id: uuid.UUID
    reaction_type: ReactionTypeLiteral


class CreatePostReactionRequest(BaseModel):
    post_id: uuid.UUID
    reaction_type: ReactionTypeLiteral


class UpdateReactionRequest(BaseModel):
    reaction_type: ReactionTypeLiteral


class ReactionResponse(BaseModel):
    """Reaction on a comment or a post; exactly one target id is set."""

    id: uuid.UUID
    member_id: uuid.UUID
    comment_id: uuid.UUID | None = None
    post_id: uuid.UUID | None = None
    reaction_type: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class ReactionSummaryResponse(BaseModel):
    like: int = 0
    dislike: int = 0
