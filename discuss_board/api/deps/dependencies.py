"""
Dependency injection container.

Factory functions for FastAPI dependencies. Every service is built around
the request-scoped session from ``get_async_db``.

Dependencies: discuss_board.configs, discuss_board.application, discuss_board.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.application.services import (
    AppealService,
    AttachmentService,
    AuditLogService,
    AuthService,
    CommentService,
    ConsentService,
    ForbiddenWordService,
    IntegrationLogService,
    MemberService,
    ModerationService,
    ModeratorService,
    NotificationService,
    PollService,
    PostService,
    ReactionService,
    ReportService,
    SettingService,
    TagService,
)
from discuss_board.boundary.db import get_async_db
from discuss_board.configs import Settings, get_settings


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_auth_service(db: AsyncSession = Depends(get_async_db)) -> AuthService:
    """
    Get auth service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        AuthService: Auth service instance
    """
    return AuthService(db=db)


def get_member_service(db: AsyncSession = Depends(get_async_db)) -> MemberService:
    """
    Get member service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        MemberService: Member service instance
    """
    return MemberService(db=db)


def get_consent_service(db: AsyncSession = Depends(get_async_db)) -> ConsentService:
    return ConsentService(db=db)


def get_post_service(db: AsyncSession = Depends(get_async_db)) -> PostService:
    """
    Get post service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        PostService: Post service instance
    """
    return PostService(db=db)


def get_tag_service(db: AsyncSession = Depends(get_async_db)) -> TagService:
    return TagService(db=db)


def get_comment_service(db: AsyncSession = Depends(get_async_db)) -> CommentService:
    return CommentService(db=db)


def get_reaction_service(db: AsyncSession = Depends(get_async_db)) -> ReactionService:
    return ReactionService(db=db)


def get_poll_service(db: AsyncSession = Depends(get_async_db)) -> PollService:
    return PollService(db=db)


def get_attachment_service(db: AsyncSession = Depends(get_async_db)) -> AttachmentService:
    return AttachmentService(db=db)


def get_report_service(db: AsyncSession = Depends(get_async_db)) -> ReportService:
    return ReportService(db=db)


def get_moderation_service(db: AsyncSession = Depends(get_async_db)) -> ModerationService:
    """
    Get moderation service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ModerationService: Moderation service instance
    """
    return ModerationService(db=db)


def get_appeal_service(db: AsyncSession = Depends(get_async_db)) -> AppealService:
    return AppealService(db=db)


def get_moderator_service(db: AsyncSession = Depends(get_async_db)) -> ModeratorService:
    return ModeratorService(db=db)


def get_notification_service(db: AsyncSession = Depends(get_async_db)) -> NotificationService:
    return NotificationService(db=db)


def get_audit_log_service(db: AsyncSession = Depends(get_async_db)) -> AuditLogService:
    return AuditLogService(db=db)


def get_integration_log_service(
    db: AsyncSession = Depends(get_async_db),
) -> IntegrationLogService:
    return IntegrationLogService(db=db)


def get_setting_service(db: AsyncSession = Depends(get_async_db)) -> SettingService:
    return SettingService(db=db)


def get_forbidden_word_service(
    db: AsyncSession = Depends(get_async_db),
) -> ForbiddenWordService:
    return ForbiddenWordService(db=db)
