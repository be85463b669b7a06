"""
Test suite for BaseCRUD generic database operations.

Tests create/read/update/soft-delete/search behaviour. Session-order checks
use SQLAlchemy mocking; query semantics run against in-memory SQLite.

System role: Verification of generic database layer foundation
"""

import uuid
from typing import Any
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.base_crud import BaseCRUD
from discuss_board.boundary.db.models.post_model import PostTagModel, TagModel


@pytest.fixture
def tag_crud() -> BaseCRUD[TagModel]:
    """Provide BaseCRUD over a soft-deletable model."""
    return BaseCRUD(TagModel)


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    async def test_create_should_flush_before_refresh(
        self, tag_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Flush runs before refresh so generated columns are loaded."""
        # Arrange
        call_order = []

        async def flush_effect() -> None:
            call_order.append("flush")

        async def refresh_effect(obj: Any) -> None:
            call_order.append("refresh")

        mock_session.flush = AsyncMock(side_effect=flush_effect)
        mock_session.refresh = AsyncMock(side_effect=refresh_effect)

        # Act
        await tag_crud.create(mock_session, name="python")

        # Assert
        mock_session.add.assert_called_once()
        assert call_order == ["flush", "refresh"]

    async def test_create_should_generate_id_and_timestamps(
        self, tag_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        # Act
        tag = await tag_crud.create(test_async_db, name="python")

        # Assert
        assert isinstance(tag.id, uuid.UUID)
        assert tag.created_at is not None
        assert tag.deleted_at is None


class TestBaseCRUDSoftDelete:
    """Test suite for soft-delete aware reads."""

    async def test_soft_deleted_rows_are_hidden_from_active_reads(
        self, tag_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        tag = await tag_crud.create(test_async_db, name="archived")

        # Act
        await tag_crud.soft_delete(test_async_db, tag)

        # Assert
        assert await tag_crud.get_active_by_id(test_async_db, tag.id) is None
        assert await tag_crud.get_by_id(test_async_db, tag.id) is not None
        assert not await tag_crud.exists(test_async_db, tag.id)
        assert (await tag_crud.search(test_async_db, []))[1] == 0

    async def test_find_first_can_include_deleted(
        self, tag_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        tag = await tag_crud.create(test_async_db, name="gone")
        await tag_crud.soft_delete(test_async_db, tag)

        assert await tag_crud.find_first(test_async_db, TagModel.name == "gone") is None
        found = await tag_crud.find_first(
            test_async_db, TagModel.name == "gone", include_deleted=True
        )
        assert found.id == tag.id

    def test_append_only_models_have_no_deleted_filter(self) -> None:
        crud = BaseCRUD(PostTagModel)

        assert not crud.soft_deletable
        assert crud.not_deleted() == []


class TestBaseCRUDSearch:
    """Test suite for BaseCRUD.search() method."""

    async def test_search_should_page_and_count(
        self, tag_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        for name in ("alpha", "beta", "gamma", "delta"):
            await tag_crud.create(test_async_db, name=name)
        deleted = await tag_crud.create(test_async_db, name="epsilon")
        await tag_crud.soft_delete(test_async_db, deleted)

        # Act
        rows, total = await tag_crud.search(
            test_async_db, [], order_by=[TagModel.name.asc()], offset=1, limit=2
        )

        # Assert
        assert total == 4
        assert [row.name for row in rows] == ["beta", "delta"]

    async def test_search_should_apply_criteria(
        self, tag_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        await tag_crud.create(test_async_db, name="python")
        await tag_crud.create(test_async_db, name="rust")

        rows, total = await tag_crud.search(test_async_db, [TagModel.name == "rust"])

        assert total == 1
        assert rows[0].name == "rust"


class TestBaseCRUDUpdate:
    """Test suite for update helpers."""

    async def test_update_should_apply_changes(
        self, tag_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        tag = await tag_crud.create(test_async_db, name="old")

        updated = await tag_crud.update(test_async_db, tag, name="new", description="renamed")

        assert updated.name == "new"
        assert updated.description == "renamed"

    async def test_delete_by_id_should_remove_row(
        self, tag_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        tag = await tag_crud.create(test_async_db, name="temp")

        assert await tag_crud.delete_by_id(test_async_db, tag.id)
        assert await tag_crud.get_by_id(test_async_db, tag.id) is None
        assert not await tag_crud.delete_by_id(test_async_db, tag.id)
