"""
Authentication dependencies.

Resolve the bearer token on each request into an ``Actor`` and gate routes
by role.

Dependencies: fastapi, discuss_board.application.services
System role: Request authentication
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from discuss_board.api.deps.dependencies import get_auth_service
from discuss_board.application.services import AuthService
from discuss_board.core.actor import Actor
from discuss_board.core.exceptions import AuthenticationError, ForbiddenError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Actor | None:
    """
    Resolve the caller when a bearer token is present.

    Returns:
        Actor | None: Caller, or None for anonymous requests

    Raises:
        HTTPException: 401 for invalid tokens, 403 for inactive accounts
    """
    if credentials is None:
        return None
    try:
        return await auth_service.resolve_actor(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("Token rejected", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


async def get_current_actor(actor: Actor | None = Depends(get_optional_actor)) -> Actor:
    """Require any valid token (member, administrator or guest)."""
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor


def _require(actor: Actor, allowed: bool, detail: str) -> Actor:
    if not allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
    return actor


async def get_current_member(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Require a member (administrators are members too)."""
    return _require(actor, actor.member_id is not None, "Member access required")


async def get_current_moderator(actor: Actor = Depends(get_current_actor)) -> Actor:
    return _require(actor, actor.is_moderator, "Moderator access required")


async def get_current_staff(actor: Actor = Depends(get_current_actor)) -> Actor:
    return _require(actor, actor.is_staff, "Moderator or administrator access required")


async def get_current_administrator(actor: Actor = Depends(get_current_actor)) -> Actor:
    return _require(actor, actor.is_administrator, "Administrator access required")
