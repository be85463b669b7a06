"""
Comment ORM models.

Comments belong to a post and may reply to another comment of the same
post. Edits keep the previous content in comment_edit_history.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Threaded reply persistence
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from discuss_board.boundary.db.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin


class CommentModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Comment on a post.

    Attributes:
        post_id: Parent post
        author_member_id: Authoring member
        parent_id: Comment being replied to, if any
        content: Comment text
        is_locked: Locked comments cannot be edited or reacted to
    """

    __tablename__ = "comments"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("members.id"),
        nullable=False,
        index=True,
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class CommentEditHistoryModel(Base, UUIDMixin, TimestampMixin):
    """Snapshot of a comment's content taken before each edit."""

    __tablename__ = "comment_edit_histories"

    comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    editor_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("members.id"),
        nullable=False,
    )
    previous_content: Mapped[str] = mapped_column(Text, nullable=False)
