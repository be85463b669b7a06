"""
Forbidden word service.

Maintains the forbidden expression list and screens post and comment text
against it.

Dependencies: discuss_board.boundary.db.CRUD
System role: Content filtering orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services.query_utils import contains, order_clause, page_request
from discuss_board.boundary.db.CRUD.setting_crud import forbidden_word_crud
from discuss_board.boundary.db.models.setting_model import ForbiddenWordModel
from discuss_board.core.exceptions import ConflictError, NotFoundError, ValidationError
from discuss_board.core.pagination import build_page
from discuss_board.core.timeutils import to_iso
from discuss_board.models.admin import ForbiddenWordSearchRequest

logger = logging.getLogger(__name__)

FORBIDDEN_WORD_SORT_FIELDS = ("expression", "created_at")


def forbidden_word_to_dict(word: ForbiddenWordModel) -> dict:
    return {
        "id": word.id,
        "expression": word.expression,
        "description": word.description,
        "created_at": to_iso(word.created_at),
        "updated_at": to_iso(word.updated_at),
    }


class ForbiddenWordService:
    """Forbidden word service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def contains_forbidden_word(self, *texts: str | None) -> str | None:
        """
        Find the first forbidden expression occurring in any of the texts.

        Matching is a case-insensitive substring test.

        Args:
            *texts: Text fragments to screen (None entries are skipped)

        Returns:
            str | None: The matched expression, or None when the text is clean
        """
        expressions = await forbidden_word_crud.list_active_expressions(self.db)
        if not expressions:
            return None
        for text in texts:
            if not text:
                continue
            lowered = text.lower()
            for expression in expressions:
                if expression and expression in lowered:
                    return expression
        return None

    async def ensure_clean(self, *texts: str | None) -> None:
        """
        Raise when any text contains a forbidden expression.

        Raises:
            ValidationError: A forbidden expression was found
        """
        match = await self.contains_forbidden_word(*texts)
        if match is not None:
            raise ValidationError(
                "Content contains a forbidden word", details={"expression": match}
            )

    async def create_forbidden_word(self, expression: str, description: str | None = None) -> dict:
        """
        Add a forbidden expression.

        Raises:
            ConflictError: Expression already listed (case-insensitive)
        """
        expression = expression.strip()
        if await forbidden_word_crud.get_by_expression(self.db, expression):
            raise ConflictError("Forbidden word already exists", details={"expression": expression})

        word = await forbidden_word_crud.create(
            self.db, expression=expression, description=description
        )
        logger.info("Forbidden word created", extra={"forbidden_word_id": str(word.id)})
        return forbidden_word_to_dict(word)

    async def _get(self, word_id: UUID) -> ForbiddenWordModel:
        word = await forbidden_word_crud.get_active_by_id(self.db, word_id)
        if word is None:
            raise NotFoundError("Forbidden word", word_id)
        return word

    async def get_forbidden_word(self, word_id: UUID) -> dict:
        return forbidden_word_to_dict(await self._get(word_id))

    async def search_forbidden_words(self, request: ForbiddenWordSearchRequest) -> dict:
        paging = page_request(request.page, request.limit)
        rows, total = await forbidden_word_crud.search(
            self.db,
            contains(ForbiddenWordModel.expression, request.expression),
            order_by=order_clause(
                ForbiddenWordModel,
                request.sort_by,
                request.sort_order,
                FORBIDDEN_WORD_SORT_FIELDS,
                default="expression",
            ),
            offset=paging.offset,
            limit=paging.limit,
        )
        return build_page(paging, total, [forbidden_word_to_dict(row) for row in rows])

    async def update_forbidden_word(
        self,
        word_id: UUID,
        expression: str | None = None,
        description: str | None = None,
    ) -> dict:
        word = await self._get(word_id)
        changes = {}
        if expression is not None:
            expression = expression.strip()
            existing = await forbidden_word_crud.get_by_expression(self.db, expression)
            if existing is not None and existing.id != word.id:
                raise ConflictError(
                    "Forbidden word already exists", details={"expression": expression}
                )
            changes["expression"] = expression
        if description is not None:
            changes["description"] = description
        if changes:
            word = await forbidden_word_crud.update(self.db, word, **changes)
        return forbidden_word_to_dict(word)

    async def delete_forbidden_word(self, word_id: UUID) -> None:
        word = await self._get(word_id)
        await forbidden_word_crud.soft_delete(self.db, word)
