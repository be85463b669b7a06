"""
Moderation ORM models.

Members file content reports against posts or comments; moderators record
moderation actions (optionally resolving reports); affected members may
appeal an action.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Moderation workflow persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
    enum_column,
)


class ContentType(str, enum.Enum):
    POST = "post"
    COMMENT = "comment"


class ReportStatus(str, enum.Enum):
    """
    Content report lifecycle.

    PENDING: Filed, not yet looked at
    UNDER_REVIEW: A moderator is investigating
    RESOLVED: Acted upon, usually via a moderation action
    REJECTED: Dismissed without action
    """

    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class ModerationActionType(str, enum.Enum):
    WARN = "warn"
    MUTE = "mute"
    REMOVE = "remove"
    EDIT = "edit"
    RESTRICT = "restrict"
    RESTORE = "restore"
    ESCALATE = "escalate"


class ModerationActionStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    REVERTED = "reverted"


class AppealStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ContentReportModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Report filed by a member against exactly one post or comment.

    Attributes:
        reporter_member_id: Reporting member
        content_type: ContentType of the target
        content_post_id: Reported post (content_type == post)
        content_comment_id: Reported comment (content_type == comment)
        reason: Free-text reason
        status: ReportStatus
        moderation_action_id: Action that resolved the report
        resolved_at: When the report was resolved or rejected
    """

    __tablename__ = "content_reports"

    reporter_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True
    )
    content_type: Mapped[ContentType] = mapped_column(enum_column(ContentType), nullable=False)
    content_post_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("posts.id"), nullable=True, index=True
    )
    content_comment_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("comments.id"), nullable=True, index=True
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ReportStatus] = mapped_column(
        enum_column(ReportStatus), nullable=False, default=ReportStatus.PENDING
    )
    moderation_action_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("moderation_actions.id"), nullable=True
    )
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )


class ModerationActionModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Decision taken by a moderator against a member, post or comment.

    Attributes:
        moderator_id: Acting moderator record
        target_member_id: Member the action applies to
        target_post_id: Post the action applies to
        target_comment_id: Comment the action applies to
        action_type: ModerationActionType
        action_reason: Short reason shown to the target
        decision_narrative: Internal notes
        status: ModerationActionStatus
        effective_from: Start of the action (mutes, restrictions)
        effective_until: End of the action, None for open-ended
    """

    __tablename__ = "moderation_actions"

    moderator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("moderators.id"), nullable=False, index=True
    )
    target_member_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("members.id"), nullable=True, index=True
    )
    target_post_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("posts.id"), nullable=True
    )
    target_comment_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("comments.id"), nullable=True
    )
    action_type: Mapped[ModerationActionType] = mapped_column(
        enum_column(ModerationActionType), nullable=False
    )
    action_reason: Mapped[str] = mapped_column(String(500), nullable=False)
    decision_narrative: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ModerationActionStatus] = mapped_column(
        enum_column(ModerationActionStatus),
        nullable=False,
        default=ModerationActionStatus.ACTIVE,
    )
    effective_from: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    effective_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )


class AppealModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Request by an affected member to review a moderation action."""

    __tablename__ = "appeals"

    moderation_action_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("moderation_actions.id"),
        nullable=False,
        index=True,
    )
    appellant_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True
    )
    appeal_rationale: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[AppealStatus] = mapped_column(
        enum_column(AppealStatus), nullable=False, default=AppealStatus.PENDING
    )
    resolution_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
