"""
Member API endpoints.

Routes:
- PATCH /members - Search members (staff)
- GET /members/me - Caller's profile
- GET /members/me/consents - Caller's consent history
- POST /members/me/consents - Record a consent decision
- GET /members/{id} - Get member
- PUT /members/{id} - Update member (owner or administrator)
- DELETE /members/{id} - Withdraw member (owner or administrator)
- PUT /members/accounts/{user_account_id}/status - Change account status (administrator)

Dependencies: discuss_board.application.services, discuss_board.models
System role: Member management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from discuss_board.api.deps import (
    get_consent_service,
    get_current_actor,
    get_current_administrator,
    get_current_member,
    get_current_staff,
    get_member_service,
)
from discuss_board.api.routers.router_utils import handle_service_errors
from discuss_board.application.services import ConsentService, MemberService
from discuss_board.core.actor import Actor
from discuss_board.models.common import Page
from discuss_board.models.member import (
    ConsentRecordResponse,
    CreateConsentRequest,
    MemberDetailResponse,
    MemberResponse,
    MemberSearchRequest,
    UpdateAccountStatusRequest,
    UpdateMemberRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["members"])


@router.patch("", response_model=Page[MemberDetailResponse])
@handle_service_errors
async def search_members(
    request: MemberSearchRequest,
    actor: Actor = Depends(get_current_staff),
    member_service: MemberService = Depends(get_member_service),
) -> dict:
    """
    Search members with account details.

    Args:
        request: Filters, paging and sort
        actor: Moderator or administrator
        member_service: Injected MemberService

    Returns:
        Page[MemberDetailResponse]: Matching members
    """
    return await member_service.search_members(request)


@router.get("/me", response_model=MemberResponse)
@handle_service_errors
async def get_me(
    actor: Actor = Depends(get_current_member),
    member_service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    return MemberResponse(**await member_service.get_member(actor.member_id))


@router.get("/me/consents", response_model=list[ConsentRecordResponse])
@handle_service_errors
async def list_my_consents(
    actor: Actor = Depends(get_current_actor),
    consent_service: ConsentService = Depends(get_consent_service),
) -> list[ConsentRecordResponse]:
    records = await consent_service.list_my_consents(actor)
    return [ConsentRecordResponse(**record) for record in records]


@router.post("/me/consents", response_model=ConsentRecordResponse, status_code=201)
@handle_service_errors
async def record_consent(
    request: CreateConsentRequest,
    actor: Actor = Depends(get_current_actor),
    consent_service: ConsentService = Depends(get_consent_service),
) -> ConsentRecordResponse:
    record = await consent_service.record_consent(
        actor,
        policy_type=request.policy_type,
        policy_version=request.policy_version,
        consent_action=request.consent_action,
        description=request.description,
    )
    return ConsentRecordResponse(**record)


@router.put(
    "/accounts/{user_account_id}/status", response_model=MemberDetailResponse
)
@handle_service_errors
async def update_account_status(
    user_account_id: UUID,
    request: UpdateAccountStatusRequest,
    actor: Actor = Depends(get_current_administrator),
    member_service: MemberService = Depends(get_member_service),
) -> MemberDetailResponse:
    """
    Change an account's status or email verification flag.

    Suspending or banning revokes every open session of the account.

    Raises:
        HTTPException(403): Caller is not an administrator
        HTTPException(404): Account not found
    """
    logger.info(
        "Updating account status",
        extra={"user_account_id": str(user_account_id), "account_status": request.status},
    )
    result = await member_service.update_account_status(
        user_account_id,
        actor,
        status=request.status,
        email_verified=request.email_verified,
    )
    return MemberDetailResponse(**result)


@router.get("/{member_id}", response_model=MemberResponse)
@handle_service_errors
async def get_member(
    member_id: UUID,
    member_service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    return MemberResponse(**await member_service.get_member(member_id))


@router.put("/{member_id}", response_model=MemberResponse)
@handle_service_errors
async def update_member(
    member_id: UUID,
    request: UpdateMemberRequest,
    actor: Actor = Depends(get_current_member),
    member_service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    result = await member_service.update_member(member_id, actor, nickname=request.nickname)
    return MemberResponse(**result)


@router.delete("/{member_id}", status_code=204)
@handle_service_errors
async def delete_member(
    member_id: UUID,
    actor: Actor = Depends(get_current_member),
    member_service: MemberService = Depends(get_member_service),
) -> None:
    """
    Soft-delete a member and its account, revoking open sessions.

    Raises:
        HTTPException(403): Caller is neither the member nor an administrator
        HTTPException(404): Member not found
    """
    await member_service.delete_member(member_id, actor)
    logger.info("Member deleted", extra={"member_id": str(member_id)})
