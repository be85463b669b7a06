"""
Post and tag ORM models.

Posts are authored by members and may carry any number of tags through the
post_tags association table.

Dependencies: sqlalchemy, discuss_board.boundary.db.base
System role: Discussion content persistence
"""

import enum
import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discuss_board.boundary.db.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
    enum_column,
)


class PostStatus(str, enum.Enum):
    """
    Visibility of a post.

    PUBLIC: Listed for everyone
    LIMITED: Listed for signed-in members
    LOCKED: Readable, closed to new comments
    PRIVATE: Visible to the author and staff only
    """

    PUBLIC = "public"
    LIMITED = "limited"
    LOCKED = "locked"
    PRIVATE = "private"


class PostModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """
    Discussion post.

    Attributes:
        author_id: Authoring member
        title: Headline (max 300 chars)
        body: Markdown body
        business_status: PostStatus
        is_locked: Set by moderation; blocks comments, polls and author edits
        tag_links: PostTagModel rows for this post
    """

    __tablename__ = "posts"

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("members.id"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    business_status: Mapped[PostStatus] = mapped_column(
        enum_column(PostStatus),
        nullable=False,
        default=PostStatus.PUBLIC,
    )
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    tag_links = relationship(
        "PostTagModel",
        back_populates="post",
        cascade="all, delete-orphan",
    )


class TagModel(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Topic label; name is unique among non-deleted tags."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)


class PostTagModel(Base, UUIDMixin, TimestampMixin):
    """Association of a tag to a post; each tag appears once per post."""

    __tablename__ = "post_tags"
    __table_args__ = (UniqueConstraint("post_id", "tag_id", name="uq_post_tags_post_tag"),)

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    post = relationship("PostModel", back_populates="tag_links")
