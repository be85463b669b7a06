"""
Reaction ORM models.

A member holds at most one reaction per comment and per post. Removing a
reaction soft-deletes it; reacting again revives the same row.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Like/dislike persistence
"""

import enum
import uuid

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
    enum_column,
)


class ReactionType(str, enum.Enum):
    LIKE = "like"
    DISLIKE = "dislike"


class CommentReactionModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Reaction of a member to a comment."""

    __tablename__ = "comment_reactions"
    __table_args__ = (
        UniqueConstraint("member_id", "comment_id", name="uq_comment_reactions_member_comment"),
    )

    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True
    )
    comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reaction_type: Mapped[ReactionType] = mapped_column(
        enum_column(ReactionType), nullable=False
    )


class PostReactionModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Reaction of a member to a post."""

    __tablename__ = "post_reactions"
    __table_args__ = (
        UniqueConstraint("member_id", "post_id", name="uq_post_reactions_member_post"),
    )

    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True
    )
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reaction_type: Mapped[ReactionType] = mapped_column(
        enum_column(ReactionType), nullable=False
    )
