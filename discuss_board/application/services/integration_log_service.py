"""
Integration log service.

Dependencies: discuss_board.boundary.db.CRUD, discuss_board.configs
System role: External integration trace orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.query_utils import (
    created_range,
    order_clause,
    page_request,
)
from discuss_board.boundary.db.CRUD.log_crud import integration_log_crud
from discuss_board.boundary.db.models.log_model import IntegrationLogModel
from discuss_board.configs import get_settings
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso
from discuss_board.models.admin import CreateIntegrationLogRequest, IntegrationLogSearchRequest
from discuss_board.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

INTEGRATION_SORT_FIELDS = ("created_at", "integration_type", "partner", "status")


def integration_log_to_dict(entry: IntegrationLogModel) -> dict:
    return {
        "id": entry.id,
        "user_account_id": entry.user_account_id,
        "integration_type": entry.integration_type,
        "partner": entry.partner,
        "status": entry.status,
        "external_reference_id": entry.external_reference_id,
        "payload": entry.payload or {},
        "error_message": entry.error_message,
        "created_at": to_iso(entry.created_at),
    }


class IntegrationLogService:
    """Integration log service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_integration_log(self, request: CreateIntegrationLogRequest) -> dict:
        entry = await integration_log_crud.create(self.db, **request.model_dump())
        log_with_context(
            logger,
            logging.INFO,
            "Integration log created",
            integration_log_id=entry.id,
            integration_type=entry.integration_type,
            partner=entry.partner,
            payload=request.payload,
        )
        return integration_log_to_dict(entry)

    async def search_integration_logs(self, request: IntegrationLogSearchRequest) -> dict:
        """
        Search integration logs.

        Page size may go up to the log limit (1000 by default) instead of the
        regular search maximum.
        """
        criteria = created_range(IntegrationLogModel, request.created_from, request.created_to)
        if request.integration_type:
            criteria.append(IntegrationLogModel.integration_type == request.integration_type)
        if request.partner:
            criteria.append(IntegrationLogModel.partner == request.partner)
        if request.status:
            criteria.append(IntegrationLogModel.status == request.status)

        paging = page_request(
            request.page, request.limit, max_limit=get_settings().board.max_log_page_size
        )
        rows, total = await integration_log_crud.search(
            self.db,
            criteria,
            order_by=order_clause(
                IntegrationLogModel, request.sort_by, request.sort_order, INTEGRATION_SORT_FIELDS
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [integration_log_to_dict(row) for row in rows])
