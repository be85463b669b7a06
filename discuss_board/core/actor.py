"""
Authenticated caller.

Resolved from the bearer token by the API layer and handed to services,
which use it for ownership and role checks.
"""

from dataclasses import dataclass
from uuid import UUID

from discuss_board.core.exceptions import ForbiddenError


@dataclass(frozen=True)
class Actor:
    """
    Identity and roles of the caller.

    Attributes:
        user_account_id: Account behind the token (None for guests)
        role: Token type ("member", "administrator", "guest")
        member_id: Member record of the account
        administrator_id: Active administrator record, only for administrator tokens
        moderator_id: Active moderator record of the member, if any
        guest_id: Guest record for guest tokens
        jwt_id: Session ``jti`` of the token
    """

    role: str
    user_account_id: UUID | None = None
    member_id: UUID | None = None
    administrator_id: UUID | None = None
    moderator_id: UUID | None = None
    guest_id: UUID | None = None
    jwt_id: str | None = None

    @property
    def is_administrator(self) -> bool:
        return self.administrator_id is not None

    @property
    def is_moderator(self) -> bool:
        return self.moderator_id is not None

    @property
    def is_staff(self) -> bool:
        return self.is_administrator or self.is_moderator

    def owns(self, member_id: UUID | None) -> bool:
        return self.member_id is not None and self.member_id == member_id

    def require_member(self) -> UUID:
        if self.member_id is None:
            raise ForbiddenError("Member access required")
        return self.member_id

    def require_moderator(self) -> UUID:
        if self.moderator_id is None:
            raise ForbiddenError("Moderator access required")
        return self.moderator_id

    def require_administrator(self) -> UUID:
        if self.administrator_id is None:
            raise ForbiddenError("Administrator access required")
        return self.administrator_id

    def require_staff(self) -> None:
        if not self.is_staff:
            raise ForbiddenError("Moderator or administrator access required")
