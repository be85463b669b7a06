"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by model-specific CRUD classes. Soft-delete aware
helpers apply to models carrying a ``deleted_at`` column.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.base import Base, utc_now

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Subclasses pass their model class to ``__init__`` and add model-specific
    queries.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    @property
    def soft_deletable(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def not_deleted(self) -> list[ColumnElement[bool]]:
        """Criteria excluding soft-deleted rows (empty for append-only models)."""
        if self.soft_deletable:
            return [self.model.deleted_at.is_(None)]
        return []

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """
        Retrieve a single record by primary key, including soft-deleted rows.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """
        Retrieve a record by primary key unless it is soft-deleted.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            Model instance if found and not deleted, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id, *self.not_deleted())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_first(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        include_deleted: bool = False,
    ) -> ModelT | None:
        """
        Return the first row matching all criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions
            include_deleted: Also match soft-deleted rows

        Returns:
            Model instance or None
        """
        filters = list(criteria)
        if not include_deleted:
            filters.extend(self.not_deleted())
        stmt = select(self.model).where(*filters).limit(1)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def search(
        self,
        session: AsyncSession,
        criteria: list[ColumnElement[bool]],
        order_by: list[Any] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[Sequence[ModelT], int]:
        """
        Page through rows matching ``criteria``.

        Soft-deleted rows are always excluded.

        Args:
            session: Async database session
            criteria: Filter expressions combined with AND
            order_by: ORDER BY clauses
            offset: Rows to skip
            limit: Page size (None for all)

        Returns:
            tuple: (rows for the page, total matching rows)
        """
        filters = [*criteria, *self.not_deleted()]

        count_stmt = select(func.count()).select_from(self.model).where(*filters)
        total = (await session.execute(count_stmt)).scalar_one()

        stmt = select(self.model).where(*filters)
        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all(), total

    async def update(self, session: AsyncSession, instance: ModelT, **kwargs) -> ModelT:
        """
        Apply field changes to a loaded instance and flush them.

        Args:
            session: Async database session
            instance: Persistent model instance
            **kwargs: Fields to change

        Returns:
            The refreshed instance
        """
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def soft_delete(self, session: AsyncSession, instance: ModelT) -> ModelT:
        """Stamp ``deleted_at`` on an instance."""
        return await self.update(session, instance, deleted_at=utc_now())

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Hard-delete a record by primary key.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        """
        Check if a non-deleted record exists by primary key.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            True if record exists, False otherwise
        """
        stmt = select(self.model.id).where(self.model.id == id, *self.not_deleted())
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
