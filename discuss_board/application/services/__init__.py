"""Service orchestrators."""

from .appeal_service import AppealService
from .attachment_service import AttachmentService
from .audit_log_service import AuditLogService
from .auth_service import AuthService
from .comment_service import CommentService
from .consent_service import ConsentService
from .forbidden_word_service import ForbiddenWordService
from .integration_log_service import IntegrationLogService
from .member_service import MemberService
from .moderation_service import ModerationService
from .moderator_service import ModeratorService
from .notification_service import NotificationService
from .poll_service import PollService
from .post_service import PostService
from .reaction_service import ReactionService
from .report_service import ReportService
from .setting_service import SettingService
from .tag_service import TagService

__all__ = [
    "AppealService",
    "AttachmentService",
    "AuditLogService",
    "AuthService",
    "CommentService",
    "ConsentService",
    "ForbiddenWordService",
    "IntegrationLogService",
    "MemberService",
    "ModerationService",
    "ModeratorService",
    "NotificationService",
    "PollService",
    "PostService",
    "ReactionService",
    "ReportService",
    "SettingService",
    "TagService",
]
