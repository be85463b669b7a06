"""
FastAPI dependency injection.

Service factories and bearer-token authentication dependencies.
"""

from discuss_board.api.deps.auth import (
    get_current_actor,
    get_current_administrator,
    get_current_member,
    get_current_moderator,
    get_current_staff,
    get_optional_actor,
)
from discuss_board.api.deps.dependencies import (
    get_appeal_service,
    get_attachment_service,
    get_audit_log_service,
    get_auth_service,
    get_comment_service,
    get_consent_service,
    get_forbidden_word_service,
    get_integration_log_service,
    get_member_service,
    get_moderation_service,
    get_moderator_service,
    get_notification_service,
    get_poll_service,
    get_post_service,
    get_reaction_service,
    get_report_service,
    get_setting_service,
    get_settings_dependency,
    get_tag_service,
)

__all__ = [
    "get_appeal_service",
    "get_attachment_service",
    "get_audit_log_service",
    "get_auth_service",
    "get_comment_service",
    "get_consent_service",
    "get_current_actor",
    "get_current_administrator",
    "get_current_member",
    "get_current_moderator",
    "get_current_staff",
    "get_forbidden_word_service",
    "get_integration_log_service",
    "get_member_service",
    "get_moderation_service",
    "get_moderator_service",
    "get_notification_service",
    "get_optional_actor",
    "get_poll_service",
    "get_post_service",
    "get_reaction_service",
    "get_report_service",
    "get_setting_service",
    "get_settings_dependency",
    "get_tag_service",
]
