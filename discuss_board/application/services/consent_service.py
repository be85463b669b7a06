"""
Consent record service.

Dependencies: discuss_board.boundary.db.CRUD
System role: Policy consent history orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.boundary.db.CRUD.account_crud import consent_record_crud
from discuss_board.boundary.db.models.account_model import ConsentAction, ConsentRecordModel
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import ForbiddenError
from discuss_board.core.timeutils import to_iso

logger = logging.getLogger(__name__)


def consent_to_dict(record: ConsentRecordModel) -> dict:
    return {
        "id": record.id,
        "user_account_id": record.user_account_id,
        "policy_type": record.policy_type,
        "policy_version": record.policy_version,
        "consent_action": ConsentAction(record.consent_action).value,
        "description": record.description,
        "created_at": to_iso(record.created_at),
    }


class ConsentService:
    """Consent record service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def _account_id(actor: Actor):
        if actor.user_account_id is None:
            raise ForbiddenError("Consents require a signed-in account")
        return actor.user_account_id

    async def list_my_consents(self, actor: Actor) -> list[dict]:
        """Consent history of the caller, newest first."""
        records = await consent_record_crud.list_by_account(self.db, self._account_id(actor))
        return [consent_to_dict(record) for record in records]

    async def record_consent(
        self,
        actor: Actor,
        policy_type: str,
        policy_version: str,
        consent_action: str,
        description: str | None = None,
    ) -> dict:
        """
        Append a consent decision for the caller.

        Args:
            actor: Authenticated caller
            policy_type: Policy identifier, e.g. "privacy_policy"
            policy_version: Version of the policy text
            consent_action: "granted" or "revoked"
            description: Optional note

        Returns:
            dict: Created consent record
        """
        record = await consent_record_crud.create(
            self.db,
            user_account_id=self._account_id(actor),
            policy_type=policy_type,
            policy_version=policy_version,
            consent_action=ConsentAction(consent_action),
            description=description,
        )
        logger.info(
            "Consent recorded",
            extra={"policy_type": policy_type, "consent_action": consent_action},
        )
        return consent_to_dict(record)
