"""
Page/limit normalisation and sort whitelisting shared by search providers.

Dependencies: None
System role: Pagination contract for every search endpoint
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class PageRequest:
    """Normalised page request."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def normalize_page(
    page: int | None,
    limit: int | None,
    default_limit: int = 20,
    max_limit: int = 100,
) -> PageRequest:
    """
    Apply defaults to page and limit.

    Page numbers below 1 become 1. A limit outside ``1..max_limit`` falls
    back to ``default_limit`` rather than being clamped.

    Args:
        page: Requested 1-based page
        limit: Requested page size
        default_limit: Size used when limit is missing or out of range
        max_limit: Largest accepted page size

    Returns:
        PageRequest: Normalised page and limit
    """
    safe_page = page if page is not None and page > 0 else 1
    safe_limit = limit if limit is not None and 0 < limit <= max_limit else default_limit
    return PageRequest(page=safe_page, limit=safe_limit)


def build_pagination(request: PageRequest, records: int) -> dict[str, int]:
    """Build the ``{current, limit, records, pages}`` block of a page response."""
    return {
        "current": request.page,
        "limit": request.limit,
        "records": records,
        "pages": math.ceil(records / request.limit) if records > 0 else 0,
    }


def build_page(request: PageRequest, records: int, data: list[Any]) -> dict[str, Any]:
    return {"pagination": build_pagination(request, records), "data": data}


def resolve_sort(
    sort_by: str | None,
    sort_order: str | None,
    allowed: Iterable[str],
    default: str = "created_at",
) -> tuple[str, bool]:
    """
    Pick a whitelisted sort column and direction.

    Accepts ``sort_by`` in three spellings: a bare field name, a ``-field``
    prefix meaning descending, or ``"field:dir"`` / ``"field dir"``.
    Unknown fields fall back to ``default``; any direction other than
    ``asc`` is descending.

    Returns:
        tuple[str, bool]: Column name and True when descending
    """
    field = (sort_by or "").strip()
    direction = (sort_order or "").strip().lower()

    if field.startswith("-"):
        field, direction = field[1:], "desc"
    else:
        for sep in (":", " "):
            if sep in field:
                field, _, embedded = field.partition(sep)
                direction = embedded.strip().lower() or direction
                break

    allowed_fields = set(allowed)
    if field not in allowed_fields:
        field = default
    return field, direction != "asc"
