"""
Post and tag domain schemas.

Dependencies: pydantic
System role: Post and tag API contracts
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from discuss_board.models.common import SearchRequest

PostStatusLiteral = Literal["public", "limited", "locked", "private"]


class CreatePostRequest(BaseModel):
    """Request schema for creating a post with optional tags."""

    title: str = Field(..., min_length=1, max_length=300)
    body: str = Field(..., min_length=1, max_length=50000)
    business_status: PostStatusLiteral = "public"
    tag_ids: list[uuid.UUID] = Field(default_factory=list)


class UpdatePostRequest(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=300)
    body: str | None = Field(None, min_length=1, max_length=50000)
    business_status: PostStatusLiteral | None = None


class PostResponse(BaseModel):
    """Full post."""

    id: uuid.UUID
    author_id: uuid.UUID
    title: str
    body: str
    business_status: str
    is_locked: bool
    tag_ids: list[uuid.UUID]
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class PostSummary(BaseModel):
    """Post row in search results."""

    id: uuid.UUID
    title: str
    business_status: str
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class PostSearchRequest(SearchRequest):
    """Filters for post searches."""

    author_id: uuid.UUID | None = None
    status: PostStatusLiteral | None = None
    tag_id: uuid.UUID | None = None
    keyword: str | None = Field(None, description="Matched against title and body")
    created_from: datetime | None = None
    created_to: datetime | None = None


class CreateTagRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    description: str | None = Field(None, max_length=500)


class UpdateTagRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=64)
    description: str | None = Field(None, max_length=500)


class TagResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class TagSearchRequest(SearchRequest):
    name: str | None = Field(None, description="Substring match")


class PostTagRequest(BaseModel):
    tag_id: uuid.UUID


class PostTagResponse(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    tag_id: uuid.UUID
    created_at: datetime
