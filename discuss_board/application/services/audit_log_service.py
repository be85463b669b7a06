"""
Audit log service.

Writes append-only audit entries for authentication and moderation events
and serves administrator searches over them.

Dependencies: discuss_board.boundary.db.CRUD, discuss_board.core
System role: Compliance trail orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.query_utils import (
    created_range,
    order_clause,
    page_request,
)
from discuss_board.boundary.db.CRUD.log_crud import audit_log_crud
from discuss_board.boundary.db.models.log_model import AuditLogModel
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso
from discuss_board.models.admin import AuditLogSearchRequest

logger = logging.getLogger(__name__)

AUDIT_SORT_FIELDS = ("created_at", "action_category")


def audit_log_to_dict(entry: AuditLogModel) -> dict:
    return {
        "id": entry.id,
        "actor_user_account_id": entry.actor_user_account_id,
        "actor_type": entry.actor_type,
        "action_category": entry.action_category,
        "target_table": entry.target_table,
        "target_id": entry.target_id,
        "event_payload": entry.event_payload or {},
        "event_description": entry.event_description,
        "created_at": to_iso(entry.created_at),
    }


class AuditLogService:
    """Audit log service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def record(
        self,
        actor_user_account_id: UUID | None,
        actor_type: str,
        action_category: str,
        target_table: str | None = None,
        target_id: UUID | None = None,
        description: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> dict:
        """
        Append an audit entry.

        Args:
            actor_user_account_id: Account that caused the event
            actor_type: "member", "moderator", "administrator" or "system"
            action_category: Event grouping, e.g. "authentication"
            target_table: Table of the affected row
            target_id: Id of the affected row
            description: Human-readable summary
            payload: Structured details (JSON-serialisable)

        Returns:
            dict: Created entry
        """
        entry = await audit_log_crud.create(
            self.db,
            actor_user_account_id=actor_user_account_id,
            actor_type=actor_type,
            action_category=action_category,
            target_table=target_table,
            target_id=target_id,
            event_payload=payload or {},
            event_description=description,
        )
        logger.info(
            "Audit entry recorded",
            extra={
                "audit_log_id": str(entry.id),
                "action_category": action_category,
                "actor_type": actor_type,
            },
        )
        return audit_log_to_dict(entry)

    async def search_audit_logs(self, request: AuditLogSearchRequest) -> dict:
        """
        Administrator search over audit entries.

        Args:
            request: Filters, paging and sorting

        Returns:
            dict: Page of audit entries
        """
        criteria = created_range(AuditLogModel, request.created_from, request.created_to)
        if request.actor_user_account_id is not None:
            criteria.append(AuditLogModel.actor_user_account_id == request.actor_user_account_id)
        if request.actor_type:
            criteria.append(AuditLogModel.actor_type == request.actor_type)
        if request.action_category:
            criteria.append(AuditLogModel.action_category == request.action_category)
        if request.target_table:
            criteria.append(AuditLogModel.target_table == request.target_table)

        paging = page_request(request.page, request.limit)
        rows, total = await audit_log_crud.search(
            self.db,
            criteria,
            order_by=order_clause(
                AuditLogModel, request.sort_by, request.sort_order, AUDIT_SORT_FIELDS
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [audit_log_to_dict(row) for row in rows])
