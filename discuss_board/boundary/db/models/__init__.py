"""
Database models package.

Importing this package registers every board table with Base.metadata.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Database model definitions for domain entities
"""

from discuss_board.boundary.db.models.account_model import (
    AccountStatus,
    AdministratorModel,
    ConsentAction,
    ConsentRecordModel,
    GuestModel,
    JwtSessionModel,
    MemberModel,
    MemberStatus,
    ModeratorModel,
    RoleStatus,
    UserAccountModel,
)
from discuss_board.boundary.db.models.attachment_model import AttachmentModel
from discuss_board.boundary.db.models.comment_model import CommentEditHistoryModel, CommentModel
from discuss_board.boundary.db.models.log_model import AuditLogModel, IntegrationLogModel
from discuss_board.boundary.db.models.moderation_model import (
    AppealModel,
    AppealStatus,
    ContentReportModel,
    ContentType,
    ModerationActionModel,
    ModerationActionStatus,
    ModerationActionType,
    ReportStatus,
)
from discuss_board.boundary.db.models.notification_model import (
    DeliveryStatus,
    NotificationFrequency,
    NotificationModel,
    NotificationPreferenceModel,
)
from discuss_board.boundary.db.models.poll_model import PollModel, PollOptionModel, PollVoteModel
from discuss_board.boundary.db.models.post_model import PostModel, PostStatus, PostTagModel, TagModel
from discuss_board.boundary.db.models.reaction_model import (
    CommentReactionModel,
    PostReactionModel,
    ReactionType,
)
from discuss_board.boundary.db.models.setting_model import ForbiddenWordModel, SettingModel

__all__ = [
    # Accounts
    "AccountStatus",
    "AdministratorModel",
    "ConsentAction",
    "ConsentRecordModel",
    "GuestModel",
    "JwtSessionModel",
    "MemberModel",
    "MemberStatus",
    "ModeratorModel",
    "RoleStatus",
    "UserAccountModel",
    # Content
    "AttachmentModel",
    "CommentEditHistoryModel",
    "CommentModel",
    "CommentReactionModel",
    "PollModel",
    "PollOptionModel",
    "PollVoteModel",
    "PostModel",
    "PostReactionModel",
    "PostStatus",
    "PostTagModel",
    "ReactionType",
    "TagModel",
    # Moderation
    "AppealModel",
    "AppealStatus",
    "ContentReportModel",
    "ContentType",
    "ModerationActionModel",
    "ModerationActionStatus",
    "ModerationActionType",
    "ReportStatus",
    # Notifications
    "DeliveryStatus",
    "NotificationFrequency",
    "NotificationModel",
    "NotificationPreferenceModel",
    # Logs and configuration
    "AuditLogModel",
    "ForbiddenWordModel",
    "IntegrationLogModel",
    "SettingModel",
]
