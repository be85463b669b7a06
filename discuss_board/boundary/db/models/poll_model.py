"""
Poll ORM models.

A poll is attached to a post and offers ordered options. Members vote once
per poll; multiple-choice polls store one vote row per chosen option.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Poll and ballot persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class PollModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Poll on a post.

    Attributes:
        post_id: Host post
        title: Poll question
        multiple_choice: Whether more than one option may be chosen
        opened_at: Voting start
        closed_at: Voting end; None keeps the poll open indefinitely
    """

    __tablename__ = "polls"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    multiple_choice: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    opened_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )


class PollOptionModel(Base, UUIDMixin, TimestampMixin):
    """Selectable answer of a poll, ordered by sequence."""

    __tablename__ = "poll_options"

    poll_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("polls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_text: Mapped[str] = mapped_column(String(200), nullable=False)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)


class PollVoteModel(Base, UUIDMixin, TimestampMixin):
    """One chosen option of a member's ballot."""

    __tablename__ = "poll_votes"
    __table_args__ = (
        UniqueConstraint("poll_id", "poll_option_id", "member_id", name="uq_poll_votes_ballot"),
    )

    poll_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("polls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    poll_option_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("poll_options.id", ondelete="CASCADE"),
        nullable=False,
    )
    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True
    )
