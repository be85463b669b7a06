"""
Audit and integration log CRUD operations.

Dependencies: discuss_board.boundary.db.models
System role: Append-only log persistence operations
"""

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.log_model import AuditLogModel, IntegrationLogModel


class AuditLogCRUD(BaseCRUD[AuditLogModel]):
    """CRUD operations for AuditLogModel."""

    def __init__(self) -> None:
        super().__init__(AuditLogModel)


class IntegrationLogCRUD(BaseCRUD[IntegrationLogModel]):
    """CRUD operations for IntegrationLogModel."""

    def __init__(self) -> None:
        super().__init__(IntegrationLogModel)


audit_log_crud = AuditLogCRUD()
integration_log_crud = IntegrationLogCRUD()
