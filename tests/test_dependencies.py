"""
Test suite for dependency injection container.

Tests factory functions for service creation and configuration.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from discuss_board.api.deps import (
    get_appeal_service,
    get_auth_service,
    get_comment_service,
    get_forbidden_word_service,
    get_integration_log_service,
    get_member_service,
    get_moderation_service,
    get_notification_service,
    get_post_service,
    get_settings_dependency,
)
from discuss_board.application.services import (
    AppealService,
    AuthService,
    CommentService,
    ForbiddenWordService,
    IntegrationLogService,
    MemberService,
    ModerationService,
    NotificationService,
    PostService,
)
from discuss_board.configs import Settings


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.mark.parametrize(
    ("factory", "service_class"),
    [
        (get_auth_service, AuthService),
        (get_member_service, MemberService),
        (get_post_service, PostService),
        (get_comment_service, CommentService),
        (get_moderation_service, ModerationService),
        (get_appeal_service, AppealService),
        (get_notification_service, NotificationService),
        (get_integration_log_service, IntegrationLogService),
        (get_forbidden_word_service, ForbiddenWordService),
    ],
)
def test_factory_should_bind_request_session(factory, service_class, mock_db_session) -> None:
    """Each factory wraps the request-scoped session in its service."""
    # Act
    service = factory(db=mock_db_session)

    # Assert
    assert isinstance(service, service_class)
    assert service.db is mock_db_session


def test_post_service_should_share_session_with_word_filter(mock_db_session) -> None:
    service = get_post_service(db=mock_db_session)

    assert service.forbidden_words.db is mock_db_session


class TestGetSettingsDependency:
    def test_should_return_settings(self) -> None:
        get_settings_dependency.cache_clear()

        settings = get_settings_dependency()

        assert isinstance(settings, Settings)
        assert settings.auth.jwt_secret == "test-secret"

    def test_should_cache_instance(self) -> None:
        get_settings_dependency.cache_clear()

        assert get_settings_dependency() is get_settings_dependency()
