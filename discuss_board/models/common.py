"""
Common response models and utilities.

Generic page wrapper, search request base and error schema.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationInfo(BaseModel):
    """Pagination block of a page response."""

    current: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    records: int = Field(description="Total matching rows")
    pages: int = Field(description="Total pages (0 when there are no rows)")


class Page(BaseModel, Generic[T]):
    """Generic paginated response wrapper."""

    pagination: PaginationInfo
    data: list[T]


class SearchRequest(BaseModel):
    """Paging and sorting fields shared by every search body."""

    page: int | None = Field(default=None, description="1-based page (default 1)")
    limit: int | None = Field(default=None, description="Page size (default 20)")
    sort_by: str | None = Field(default=None, description="Whitelisted sort column")
    sort_order: Literal["asc", "desc"] | None = Field(default=None, description="Sort direction")


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str = Field(description="Error message")


class MessageResponse(BaseModel):
    """Acknowledgement for operations without a body."""

    message: str
