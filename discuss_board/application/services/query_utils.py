"""
Query helpers shared by search providers.

Dependencies: sqlalchemy, discuss_board.core.pagination, discuss_board.configs
System role: Translate search request fields into SQLAlchemy clauses
"""

from datetime import datetime
from typing import Any, Iterable

from discuss_board.configs import get_settings
from discuss_board.core.pagination import PageRequest, normalize_page, resolve_sort
from discuss_board.core.timeutils import ensure_utc


def page_request(page: int | None, limit: int | None, max_limit: int | None = None) -> PageRequest:
    """Normalise page/limit against the configured board defaults."""
    board = get_settings().board
    return normalize_page(
        page,
        limit,
        default_limit=board.default_page_size,
        max_limit=max_limit or board.max_page_size,
    )


def order_clause(
    model: Any,
    sort_by: str | None,
    sort_order: str | None,
    allowed: Iterable[str],
    default: str = "created_at",
) -> list[Any]:
    """
    Build ORDER BY clauses for a whitelisted column.

    ``id`` is appended as a tie-breaker so pages are stable.
    """
    field, descending = resolve_sort(sort_by, sort_order, allowed, default)
    column = getattr(model, field)
    primary = column.desc() if descending else column.asc()
    return [primary, model.id.asc()]


def created_range(model: Any, created_from: datetime | None, created_to: datetime | None) -> list[Any]:
    criteria = []
    if created_from is not None:
        criteria.append(model.created_at >= ensure_utc(created_from))
    if created_to is not None:
        criteria.append(model.created_at <= ensure_utc(created_to))
    return criteria


def contains(column: Any, text: str | None) -> list[Any]:
    """Case-insensitive substring filter; blank text adds nothing."""
    if text is None or not text.strip():
        return []
    return [column.ilike(f"%{text.strip()}%")]
