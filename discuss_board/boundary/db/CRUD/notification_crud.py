"""
Notification CRUD operations.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Notification and preference persistence operations
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.notification_model import (
    NotificationModel,
    NotificationPreferenceModel,
)


class NotificationCRUD(BaseCRUD[NotificationModel]):
    """CRUD operations for NotificationModel."""

    def __init__(self) -> None:
        super().__init__(NotificationModel)


class NotificationPreferenceCRUD(BaseCRUD[NotificationPreferenceModel]):
    """CRUD operations for NotificationPreferenceModel."""

    def __init__(self) -> None:
        super().__init__(NotificationPreferenceModel)

    async def get_by_member_id(
        self,
        session: AsyncSession,
        member_id: UUID,
    ) -> NotificationPreferenceModel | None:
        return await self.find_first(
            session, NotificationPreferenceModel.member_id == member_id
        )


notification_crud = NotificationCRUD()
notification_preference_crud = NotificationPreferenceCRUD()
