"""
Authentication API endpoints.

Routes:
- POST /auth/member/join - Register a member (returns tokens)
- POST /auth/member/login - Member login
- POST /auth/member/refresh - Rotate member tokens
- POST /auth/member/verify-email - Confirm an email verification token
- POST /auth/administrator/join - Register an administrator
- POST /auth/administrator/login - Administrator login
- POST /auth/administrator/refresh - Rotate administrator tokens
- POST /auth/guest/join - Issue guest tokens
- POST /auth/guest/refresh - Rotate guest tokens
- POST /auth/logout - Revoke the caller's sessions

Dependencies: discuss_board.application.services, discuss_board.models
System role: Identity HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Request

from discuss_board.api.deps import get_auth_service, get_current_actor, get_optional_actor
from discuss_board.api.routers.router_utils import client_info, handle_service_errors
from discuss_board.application.services import AuthService
from discuss_board.core.actor import Actor
from discuss_board.models.auth import (
    AdministratorAuthorizedResponse,
    AdministratorJoinRequest,
    GuestAuthorizedResponse,
    LoginRequest,
    MemberAuthorizedResponse,
    MemberJoinRequest,
    RefreshRequest,
    VerifyEmailRequest,
)
from discuss_board.models.common import MessageResponse
from discuss_board.models.member import MemberDetailResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/member/join", response_model=MemberAuthorizedResponse, status_code=201)
@handle_service_errors
async def member_join(
    request: MemberJoinRequest,
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> MemberAuthorizedResponse:
    """
    Register a new member account.

    Args:
        request: Email, password, nickname and policy consents
        http_request: Raw request (user agent and client IP)
        auth_service: Injected AuthService

    Returns:
        MemberAuthorizedResponse: Created member with a token pair

    Raises:
        HTTPException(400): Weak password or missing consent
        HTTPException(409): Email or nickname taken
    """
    user_agent, ip_address = client_info(http_request)
    logger.info("Member join requested", extra={"consent_count": len(request.consent)})

    result = await auth_service.member_join(
        email=request.email,
        password=request.password,
        nickname=request.nickname,
        consents=[consent.model_dump() for consent in request.consent],
        user_agent=user_agent,
        ip_address=ip_address,
    )

    logger.info("Member joined", extra={"member_id": str(result["id"])})
    return MemberAuthorizedResponse(**result)


@router.post("/member/login", response_model=MemberAuthorizedResponse)
@handle_service_errors
async def member_login(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> MemberAuthorizedResponse:
    """
    Authenticate a member by email and password.

    Raises:
        HTTPException(401): Wrong credentials
        HTTPException(403): Account unverified, suspended or banned
    """
    user_agent, ip_address = client_info(http_request)
    result = await auth_service.member_login(
        email=request.email,
        password=request.password,
        user_agent=user_agent,
        ip_address=ip_address,
    )
    return MemberAuthorizedResponse(**result)


@router.post("/member/refresh", response_model=MemberAuthorizedResponse)
@handle_service_errors
async def member_refresh(
    request: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MemberAuthorizedResponse:
    result = await auth_service.member_refresh(request.refresh_token)
    return MemberAuthorizedResponse(**result)


@router.post("/member/verify-email", response_model=MemberDetailResponse)
@handle_service_errors
async def verify_email(
    request: VerifyEmailRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MemberDetailResponse:
    result = await auth_service.verify_email(request.token)
    return MemberDetailResponse(**result)


@router.post(
    "/administrator/join", response_model=AdministratorAuthorizedResponse, status_code=201
)
@handle_service_errors
async def administrator_join(
    request: AdministratorJoinRequest,
    http_request: Request,
    actor: Actor | None = Depends(get_optional_actor),
    auth_service: AuthService = Depends(get_auth_service),
) -> AdministratorAuthorizedResponse:
    """
    Register an administrator.

    The first administrator bootstraps without a token; afterwards an
    existing administrator must call this endpoint.

    Raises:
        HTTPException(400): Password policy violation
        HTTPException(403): Caller is not an administrator
        HTTPException(409): Email or nickname taken
    """
    user_agent, ip_address = client_info(http_request)
    result = await auth_service.administrator_join(
        email=request.email,
        password=request.password,
        nickname=request.nickname,
        actor=actor,
        user_agent=user_agent,
        ip_address=ip_address,
    )
    logger.info("Administrator joined", extra={"administrator_id": str(result["id"])})
    return AdministratorAuthorizedResponse(**result)


@router.post("/administrator/login", response_model=AdministratorAuthorizedResponse)
@handle_service_errors
async def administrator_login(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> AdministratorAuthorizedResponse:
    user_agent, ip_address = client_info(http_request)
    result = await auth_service.administrator_login(
        email=request.email,
        password=request.password,
        user_agent=user_agent,
        ip_address=ip_address,
    )
    return AdministratorAuthorizedResponse(**result)


@router.post("/administrator/refresh", response_model=AdministratorAuthorizedResponse)
@handle_service_errors
async def administrator_refresh(
    request: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AdministratorAuthorizedResponse:
    result = await auth_service.administrator_refresh(request.refresh_token)
    return AdministratorAuthorizedResponse(**result)


@router.post("/guest/join", response_model=GuestAuthorizedResponse, status_code=201)
@handle_service_errors
async def guest_join(
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> GuestAuthorizedResponse:
    """Issue anonymous read-only tokens."""
    user_agent, ip_address = client_info(http_request)
    result = await auth_service.guest_join(user_agent=user_agent, ip_address=ip_address)
    return GuestAuthorizedResponse(**result)


@router.post("/guest/refresh", response_model=GuestAuthorizedResponse)
@handle_service_errors
async def guest_refresh(
    request: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> GuestAuthorizedResponse:
    result = await auth_service.guest_refresh(request.refresh_token)
    return GuestAuthorizedResponse(**result)


@router.post("/logout", response_model=MessageResponse)
@handle_service_errors
async def logout(
    actor: Actor = Depends(get_current_actor),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.logout(actor)
    return MessageResponse(message="Logged out")
