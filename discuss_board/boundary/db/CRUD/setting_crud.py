"""
Setting and forbidden word CRUD operations.

Dependencies: sqlalchemy, discuss_board.boundary.db.models
System role: Board configuration persistence operations
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.setting_model import ForbiddenWordModel, SettingModel


class SettingCRUD(BaseCRUD[SettingModel]):
    """CRUD operations for SettingModel."""

    def __init__(self) -> None:
        super().__init__(SettingModel)

    async def get_by_key(self, session: AsyncSession, key: str) -> SettingModel | None:
        return await self.find_first(session, SettingModel.key == key)


class ForbiddenWordCRUD(BaseCRUD[ForbiddenWordModel]):
    """CRUD operations for ForbiddenWordModel."""

    def __init__(self) -> None:
        super().__init__(ForbiddenWordModel)

    async def get_by_expression(
        self,
        session: AsyncSession,
        expression: str,
    ) -> ForbiddenWordModel | None:
        return await self.find_first(
            session,
            func.lower(ForbiddenWordModel.expression) == expression.strip().lower(),
        )

    async def list_active_expressions(self, session: AsyncSession) -> list[str]:
        """Lower-cased expressions of every non-deleted forbidden word."""
        stmt = select(ForbiddenWordModel.expression).where(ForbiddenWordModel.deleted_at.is_(None))
        result = await session.execute(stmt)
        return [expression.lower() for expression in result.scalars().all()]


setting_crud = SettingCRUD()
forbidden_word_crud = ForbiddenWordCRUD()
