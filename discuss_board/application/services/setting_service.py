"""
Board setting service.

Key/value settings managed by administrators.

Dependencies: discuss_board.boundary.db.CRUD
System role: Runtime configuration orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.query_utils import contains, order_clause, page_request
from discuss_board.boundary.db.CRUD.setting_crud import setting_crud
from discuss_board.boundary.db.models.setting_model import SettingModel
from discuss_board.core.exceptions import ConflictError, NotFoundError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso
from discuss_board.models.admin import SettingSearchRequest

logger = logging.getLogger(__name__)

SETTING_SORT_FIELDS = ("key", "created_at", "updated_at")


def setting_to_dict(setting: SettingModel) -> dict:
    return {
        "id": setting.id,
        "key": setting.key,
        "value": setting.value,
        "description": setting.description,
        "created_at": to_iso(setting.created_at),
        "updated_at": to_iso(setting.updated_at),
    }


class SettingService:
    """Board setting service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_setting(self, key: str, value: str, description: str | None = None) -> dict:
        """
        Create a setting.

        Raises:
            ConflictError: A non-deleted setting already uses the key
        """
        if await setting_crud.get_by_key(self.db, key):
            raise ConflictError("Setting key already exists", details={"key": key})

        setting = await setting_crud.create(self.db, key=key, value=value, description=description)
        logger.info("Setting created", extra={"setting_id": str(setting.id), "key": key})
        return setting_to_dict(setting)

    async def _get(self, setting_id: UUID) -> SettingModel:
        setting = await setting_crud.get_active_by_id(self.db, setting_id)
        if setting is None:
            raise NotFoundError("Setting", setting_id)
        return setting

    async def get_setting(self, setting_id: UUID) -> dict:
        return setting_to_dict(await self._get(setting_id))

    async def get_setting_by_key(self, key: str) -> dict:
        setting = await setting_crud.get_by_key(self.db, key)
        if setting is None:
            raise NotFoundError("Setting", key)
        return setting_to_dict(setting)

    async def search_settings(self, request: SettingSearchRequest) -> dict:
        paging = page_request(request.page, request.limit)
        rows, total = await setting_crud.search(
            self.db,
            contains(SettingModel.key, request.key),
            order_by=order_clause(
                SettingModel, request.sort_by, request.sort_order, SETTING_SORT_FIELDS, default="key"
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [setting_to_dict(row) for row in rows])

    async def update_setting(
        self,
        setting_id: UUID,
        value: str | None = None,
        description: str | None = None,
    ) -> dict:
        setting = await self._get(setting_id)
        changes = {}
        if value is not None:
            changes["value"] = value
        if description is not None:
            changes["description"] = description
        if changes:
            setting = await setting_crud.update(self.db, setting, **changes)
        return setting_to_dict(setting)

    async def delete_setting(self, setting_id: UUID) -> None:
        setting = await self._get(setting_id)
        await setting_crud.soft_delete(self.db, setting)
        logger.info("Setting deleted", extra={"setting_id": str(setting_id)})
